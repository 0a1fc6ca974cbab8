"""
Provider‑neutral tool types: the descriptor advertised to the model (with its
OpenAI and Anthropic renderings), the call the model makes, and the result a
tool hands back.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Mapping

__all__ = [
    "ToolErrorKind",
    "ToolDescriptor",
    "ToolCallRequest",
    "ToolResult",
    "ToolCallResult",
]


class ToolErrorKind(StrEnum):
    """Machine‑readable reason a tool call did not succeed."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    INVALID_ARGUMENT = "invalid_argument"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL = "internal"


def _freeze(value: Any) -> Any:
    """Read-only copy of a JSON-like value, nested levels included."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True, slots=True)
class ToolDescriptor:
    """Static metadata advertised to the model for one tool."""

    name: str
    description: str
    parameters: Mapping[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}, "required": []}
    )

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ToolDescriptor.name must be non-empty")
        object.__setattr__(self, "parameters", _freeze(self.parameters))

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.parameters.get("required", ()))

    @property
    def properties(self) -> Mapping[str, Any]:
        return self.parameters.get("properties", {})

    def schema(self) -> dict[str, Any]:
        """Plain JSON-schema dict, safe to hand to an SDK."""
        return _thaw(self.parameters)

    def to_openai(self) -> dict[str, Any]:
        """OpenAI / Gemini function-calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.schema(),
            },
        }

    def to_anthropic(self) -> dict[str, Any]:
        """Anthropic tool-use format."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.schema(),
        }


@dataclass(slots=True)
class ToolCallRequest:
    """A model‑agnostic request emitted by the LLM to call a local tool."""

    id: str
    name: str
    arguments: dict[str, Any]


@dataclass(slots=True)
class ToolResult:
    """Outcome of running a tool: a payload, or a failure with a kind."""

    content: str | list[Any] | dict[str, Any] = ""
    error_kind: ToolErrorKind | None = None

    @property
    def is_error(self) -> bool:
        return self.error_kind is not None

    @classmethod
    def ok(cls, content: str | list[Any] | dict[str, Any]) -> "ToolResult":
        return cls(content=content)

    @classmethod
    def fail(cls, kind: ToolErrorKind, message: str) -> "ToolResult":
        return cls(content=message, error_kind=ToolErrorKind(kind))

    def render(self) -> str:
        """Text form sent back to the model."""
        if self.is_error:
            return f"error ({self.error_kind}): {self.content}"
        if isinstance(self.content, str):
            return self.content
        return json.dumps(self.content, ensure_ascii=False)


@dataclass(slots=True)
class ToolCallResult:
    """Payload to send back to the LLM after the tool finished running."""

    id: str  # must match the request id
    name: str
    result: ToolResult

    @property
    def is_error(self) -> bool:
        return self.result.is_error

    @property
    def content(self) -> str:
        return self.result.render()
