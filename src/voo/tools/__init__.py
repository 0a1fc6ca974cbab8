"""Built-in local tools."""

from .base import PathTool, Tool, validate_arguments
from .list_files import ListFilesTool
from .read_file import ReadFileTool

__all__ = [
    "Tool",
    "PathTool",
    "validate_arguments",
    "ListFilesTool",
    "ReadFileTool",
]
