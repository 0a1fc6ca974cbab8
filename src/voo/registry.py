"""Tool registry: maps tool names to the tools the agent can dispatch to."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator, Optional, Union

from voo._exceptions import DuplicateToolError
from voo.tools.base import Tool
from voo.tools.list_files import ListFilesTool
from voo.tools.read_file import ReadFileTool
from voo.types.tool import ToolDescriptor

__all__ = ["ToolRegistry", "default_registry"]

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Holds every registered tool, keyed by its unique name.

    Populated at startup and only read afterwards; lookups need no locking.
    Descriptors are returned in registration order.
    """

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        self._descriptors: tuple[ToolDescriptor, ...] = ()
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        descriptor = tool.describe()
        if descriptor.name in self._tools:
            raise DuplicateToolError(descriptor.name)
        self._tools[descriptor.name] = tool
        self._descriptors = self._descriptors + (descriptor,)
        logger.debug("Registered tool %s", descriptor.name)

    def resolve(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def all_descriptors(self) -> tuple[ToolDescriptor, ...]:
        return self._descriptors

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(list(self._tools.values()))

    def __len__(self) -> int:
        return len(self._tools)


def default_registry(
    root: Union[str, os.PathLike[str], None] = None,
) -> ToolRegistry:
    """Registry with the built-in ``read_file`` and ``list_files`` tools."""
    return ToolRegistry([ReadFileTool(root), ListFilesTool(root)])
