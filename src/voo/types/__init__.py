from .chat import (
    AgentErrorKind,
    AgentReply,
    ErrorReply,
    ModelErrorKind,
    ModelReply,
    Role,
    TextReply,
    ToolCallReply,
    Transcript,
    Turn,
)
from .tool import (
    ToolCallRequest,
    ToolCallResult,
    ToolDescriptor,
    ToolErrorKind,
    ToolResult,
)

__all__ = [
    "AgentErrorKind",
    "AgentReply",
    "ErrorReply",
    "ModelErrorKind",
    "ModelReply",
    "Role",
    "TextReply",
    "ToolCallReply",
    "Transcript",
    "Turn",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolDescriptor",
    "ToolErrorKind",
    "ToolResult",
]
