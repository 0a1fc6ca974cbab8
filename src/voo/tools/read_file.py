from __future__ import annotations

from typing import Any, Mapping

from voo.tools.base import PathTool
from voo.types.tool import ToolErrorKind, ToolResult


class ReadFileTool(PathTool):
    """Return the text content of a file."""

    name = "read_file"
    description = (
        "Read the contents of a given relative file path. Use this when you "
        "want to see what's inside a file. Do not use this with directory names."
    )
    parameters = {
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "The path to read the file from",
            }
        },
        "required": ["path"],
    }

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        raw = arguments["path"]
        path = self.resolve_path(raw)
        if isinstance(path, ToolResult):
            return path

        self._log(f"reading {path}")
        try:
            return ToolResult.ok(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return ToolResult.fail(ToolErrorKind.NOT_FOUND, f"{raw}: no such file")
        except IsADirectoryError:
            return ToolResult.fail(
                ToolErrorKind.INVALID_ARGUMENT, f"{raw}: is a directory, not a file"
            )
        except PermissionError:
            return ToolResult.fail(ToolErrorKind.PERMISSION_DENIED, f"{raw}: permission denied")
        except UnicodeDecodeError:
            return ToolResult.fail(
                ToolErrorKind.INVALID_ARGUMENT, f"{raw}: not a UTF-8 text file"
            )
        except OSError as exc:
            return ToolResult.fail(ToolErrorKind.INTERNAL, f"{raw}: {exc.strerror or exc}")
