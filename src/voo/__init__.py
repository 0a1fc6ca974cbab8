"""
voo - a terminal chat agent that lets an LLM call local tools.
"""

__version__ = "0.1.0"

from .agent import Agent, DEFAULT_SYSTEM_PROMPT
from .config import Provider, Settings, get_api_key
from .factory import create_client
from .providers import AnthropicClient, BaseModelClient, GeminiClient, OpenAIClient
from .registry import ToolRegistry, default_registry
from .retry import RetryPolicy
from .tools import ListFilesTool, ReadFileTool, Tool
from .types import (
    AgentErrorKind,
    AgentReply,
    ErrorReply,
    ModelErrorKind,
    TextReply,
    ToolCallReply,
    ToolCallRequest,
    ToolCallResult,
    ToolDescriptor,
    ToolErrorKind,
    ToolResult,
    Transcript,
    Turn,
)
from ._exceptions import (
    AgentError,
    ConfigError,
    DuplicateToolError,
    ModelClientError,
    VooError,
)

__all__ = [
    "Agent",
    "DEFAULT_SYSTEM_PROMPT",
    "Provider",
    "Settings",
    "get_api_key",
    "create_client",
    "BaseModelClient",
    "OpenAIClient",
    "AnthropicClient",
    "GeminiClient",
    "ToolRegistry",
    "default_registry",
    "RetryPolicy",
    "Tool",
    "ReadFileTool",
    "ListFilesTool",
    "AgentErrorKind",
    "AgentReply",
    "ErrorReply",
    "ModelErrorKind",
    "TextReply",
    "ToolCallReply",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolDescriptor",
    "ToolErrorKind",
    "ToolResult",
    "Transcript",
    "Turn",
    "AgentError",
    "ConfigError",
    "DuplicateToolError",
    "ModelClientError",
    "VooError",
]
