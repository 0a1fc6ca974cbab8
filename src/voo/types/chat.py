"""Conversation types: transcript turns, model replies and agent replies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterable, Iterator, Optional, Union, overload

from voo.types.tool import ToolCallRequest, ToolCallResult


class Role(StrEnum):
    USER = "user"
    AGENT = "agent"
    TOOL_RESULT = "tool_result"


@dataclass(frozen=True, slots=True)
class Turn:
    """One transcript entry.

    An agent turn carries either text or the tool calls the model asked for
    (sometimes both); a tool-result turn carries exactly one result.
    """

    role: Role
    content: str = ""
    tool_calls: tuple[ToolCallRequest, ...] = ()
    tool_result: Optional[ToolCallResult] = None

    @classmethod
    def user(cls, text: str) -> "Turn":
        return cls(role=Role.USER, content=text)

    @classmethod
    def agent(
        cls, text: str = "", tool_calls: Iterable[ToolCallRequest] = ()
    ) -> "Turn":
        return cls(role=Role.AGENT, content=text, tool_calls=tuple(tool_calls))

    @classmethod
    def result(cls, result: ToolCallResult) -> "Turn":
        return cls(role=Role.TOOL_RESULT, content=result.content, tool_result=result)


class Transcript:
    """Append-only conversation history plus the system prompt.

    Turns are never edited or removed. ``extend`` appends a whole round in a
    single step so a round is either fully recorded or not at all.
    """

    def __init__(self, system_prompt: str = "") -> None:
        self.system_prompt = system_prompt
        self._turns: list[Turn] = []

    def append(self, turn: Turn) -> None:
        if not isinstance(turn, Turn):
            raise TypeError(f"expected Turn, got {type(turn).__name__}")
        self._turns.append(turn)

    def extend(self, turns: Iterable[Turn]) -> None:
        batch = list(turns)
        for turn in batch:
            if not isinstance(turn, Turn):
                raise TypeError(f"expected Turn, got {type(turn).__name__}")
        self._turns.extend(batch)

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @overload
    def __getitem__(self, index: int) -> Turn: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Turn, ...]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._turns[index])
        return self._turns[index]

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    def __len__(self) -> int:
        return len(self._turns)

    def __repr__(self) -> str:
        return f"Transcript(turns={len(self._turns)})"


class ModelErrorKind(StrEnum):
    AUTH_EXPIRED = "auth_expired"
    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    MALFORMED_RESPONSE = "malformed_response"
    PROVIDER = "provider"

    @property
    def retryable(self) -> bool:
        return self in (ModelErrorKind.RATE_LIMITED, ModelErrorKind.TRANSIENT)


@dataclass(frozen=True, slots=True)
class TextReply:
    content: str


@dataclass(frozen=True, slots=True)
class ToolCallReply:
    tool_calls: tuple[ToolCallRequest, ...]
    content: str = ""  # text the model emitted alongside the calls, if any


@dataclass(frozen=True, slots=True)
class ErrorReply:
    kind: ModelErrorKind
    message: str = ""

    @property
    def retryable(self) -> bool:
        return self.kind.retryable


ModelReply = Union[TextReply, ToolCallReply, ErrorReply]


class AgentErrorKind(StrEnum):
    AUTH_EXPIRED = "auth_expired"
    RATE_LIMITED = "rate_limited"
    TRANSIENT = "transient"
    MALFORMED_RESPONSE = "malformed_response"
    PROVIDER = "provider"
    TOO_MANY_ROUNDS = "too_many_rounds"


@dataclass
class AgentReply:
    """Result of one ``Agent.turn()`` call."""

    content: str = ""
    error: Optional[str] = None
    error_kind: Optional[AgentErrorKind] = None
    rounds: int = 0
    tool_results: list[ToolCallResult] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def raise_for_error(self) -> None:
        if self.is_error:
            from voo._exceptions import AgentError

            raise AgentError(self.error or "", kind=self.error_kind)

    def __bool__(self) -> bool:
        return not self.is_error

    def __str__(self) -> str:
        return self.error if self.is_error else self.content
