from __future__ import annotations

from typing import Any, Mapping

from voo.tools.base import PathTool
from voo.types.tool import ToolErrorKind, ToolResult


class ListFilesTool(PathTool):
    """List the entries of a directory, sorted by name.

    Directories are suffixed with ``/`` so the model can tell them apart
    from files without a second call.
    """

    name = "list_files"
    description = (
        "List files and directories at a given path. If no path is provided, "
        "lists files in the current directory."
    )
    parameters = {
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "The path to list files from",
            }
        },
        "required": [],
    }

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        raw = arguments.get("path") or "."
        path = self.resolve_path(raw)
        if isinstance(path, ToolResult):
            return path

        self._log(f"listing {path}")
        try:
            entries = sorted(path.iterdir(), key=lambda entry: entry.name)
            names = [
                f"{entry.name}/" if entry.is_dir() else entry.name for entry in entries
            ]
        except FileNotFoundError:
            return ToolResult.fail(ToolErrorKind.NOT_FOUND, f"{raw}: no such directory")
        except NotADirectoryError:
            return ToolResult.fail(ToolErrorKind.INVALID_ARGUMENT, f"{raw}: not a directory")
        except PermissionError:
            return ToolResult.fail(ToolErrorKind.PERMISSION_DENIED, f"{raw}: permission denied")
        except OSError as exc:
            return ToolResult.fail(ToolErrorKind.INTERNAL, f"{raw}: {exc.strerror or exc}")
        return ToolResult.ok(names)
