"""
Base class for local tools.

A tool advertises itself through ``describe()`` and does its work in
``execute()``. Expected failures (missing file, bad argument, ...) come back
as failure ``ToolResult`` values so the model can read them and adapt; a tool
only raises for genuine bugs.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Awaitable, ClassVar, Mapping, Optional, Union

from voo.types.tool import ToolDescriptor, ToolErrorKind, ToolResult

__all__ = ["Tool", "PathTool", "validate_arguments"]

_JSON_TYPES: dict[str, tuple[type, ...]] = {
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
    "boolean": (bool,),
    "array": (list, tuple),
    "object": (dict,),
    "null": (type(None),),
}


def _matches(value: Any, declared: Union[str, list[str], None]) -> bool:
    if declared is None:
        return True
    names = [declared] if isinstance(declared, str) else list(declared)
    for name in names:
        types = _JSON_TYPES.get(name)
        if types is None:
            return True  # unknown type keyword, don't second-guess it
        # bool is an int subclass; keep it out of integer/number
        if isinstance(value, bool) and name in ("integer", "number"):
            continue
        if isinstance(value, types):
            return True
    return False


def validate_arguments(
    arguments: Mapping[str, Any], descriptor: ToolDescriptor
) -> Optional[str]:
    """Check arguments against the descriptor's schema.

    Returns an error message, or None when the arguments are acceptable.
    Only ``required``, ``type`` and ``additionalProperties: false`` are
    enforced.
    """
    if not isinstance(arguments, Mapping):
        return f"arguments must be an object, got {type(arguments).__name__}"

    missing = [name for name in descriptor.required if name not in arguments]
    if missing:
        return f"missing required argument(s): {', '.join(missing)}"

    properties = descriptor.properties
    for name, value in arguments.items():
        prop = properties.get(name)
        if prop is None:
            if descriptor.parameters.get("additionalProperties") is False:
                return f"unexpected argument: {name}"
            continue
        if not isinstance(prop, Mapping):
            continue  # boolean schemas (true / false) carry no type
        if not _matches(value, prop.get("type")):
            return f"argument '{name}' must be of type {prop.get('type')}"
    return None


class Tool(ABC):
    """A named capability the model may call.

    Subclasses set ``name``, ``description`` and ``parameters`` and implement
    ``execute``, which may be a plain or an ``async`` method.
    """

    name: ClassVar[str]
    description: ClassVar[str]
    parameters: ClassVar[dict[str, Any]] = {
        "type": "object",
        "properties": {},
        "required": [],
    }

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def describe(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name, description=self.description, parameters=self.parameters
        )

    def validate(self, arguments: Mapping[str, Any]) -> Optional[str]:
        return validate_arguments(arguments, self.describe())

    @abstractmethod
    def execute(
        self, arguments: Mapping[str, Any]
    ) -> Union[ToolResult, Awaitable[ToolResult]]:
        """Run the tool with already validated arguments."""
        ...

    def _log(self, message: str, level: int = logging.DEBUG) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class PathTool(Tool):
    """Shared path handling for the filesystem tools.

    When ``root`` is set, every path is resolved relative to it and must not
    escape it. Without a root, paths resolve against the working directory
    and are not restricted.
    """

    def __init__(
        self,
        root: Union[str, os.PathLike[str], None] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger=logger)
        self.root = Path(root).resolve() if root is not None else None

    def resolve_path(self, raw: str) -> Union[Path, ToolResult]:
        """Resolve ``raw``, or return a failure result if it is out of scope."""
        if not raw or "\x00" in raw:
            return ToolResult.fail(ToolErrorKind.INVALID_ARGUMENT, f"invalid path: {raw!r}")

        path = Path(raw).expanduser()
        if self.root is None:
            return path

        if not path.is_absolute():
            path = self.root / path
        resolved = path.resolve()
        if resolved != self.root and self.root not in resolved.parents:
            self._log(f"refusing path outside root: {raw}", logging.WARNING)
            return ToolResult.fail(
                ToolErrorKind.PERMISSION_DENIED,
                f"{raw}: outside of the allowed directory",
            )
        return resolved
