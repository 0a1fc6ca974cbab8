"""Shared fakes for agent tests."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping, Sequence, Union

import pytest

from voo.registry import ToolRegistry
from voo.tools.base import Tool
from voo.types.chat import ModelReply, ToolCallReply, Transcript, Turn
from voo.types.tool import ToolCallRequest, ToolDescriptor, ToolErrorKind, ToolResult

Scripted = Union[ModelReply, BaseException, Callable[[Transcript], ModelReply]]


class ScriptedClient:
    """Model client that plays back a fixed list of replies.

    Every call records a snapshot of the transcript it was given, so tests
    can check exactly what the model saw on each round.
    """

    def __init__(self, replies: Sequence[Scripted]) -> None:
        self.replies = list(replies)
        self.seen: list[tuple[Turn, ...]] = []
        self.descriptors: list[tuple[ToolDescriptor, ...]] = []

    @property
    def calls(self) -> int:
        return len(self.seen)

    async def complete(
        self, transcript: Transcript, descriptors: Sequence[ToolDescriptor]
    ) -> ModelReply:
        self.seen.append(transcript.turns)
        self.descriptors.append(tuple(descriptors))
        if not self.replies:
            raise AssertionError("model called more often than scripted")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply(transcript)
        return reply


class AlwaysToolClient:
    """Pathological model that never stops asking for a tool."""

    def __init__(self, tool_name: str = "echo") -> None:
        self.tool_name = tool_name
        self.calls = 0

    async def complete(self, transcript, descriptors) -> ModelReply:
        self.calls += 1
        return ToolCallReply(
            tool_calls=(
                ToolCallRequest(id=f"call_{self.calls}", name=self.tool_name, arguments={"text": "again"}),
            )
        )


class EchoTool(Tool):
    name = "echo"
    description = "Echo the given text back."
    parameters = {
        "type": "object",
        "properties": {"text": {"type": "string"}},
        "required": ["text"],
    }

    def __init__(self) -> None:
        super().__init__()
        self.received: list[Mapping[str, Any]] = []

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        self.received.append(dict(arguments))
        return ToolResult.ok(arguments["text"])


class SlowTool(Tool):
    """Async tool that sleeps for ``delay`` seconds, then echoes its label."""

    name = "slow"
    description = "Wait, then answer."
    parameters = {
        "type": "object",
        "properties": {
            "label": {"type": "string"},
            "delay": {"type": "number"},
        },
        "required": ["label", "delay"],
    }

    def __init__(self) -> None:
        super().__init__()
        self.finished: list[str] = []

    async def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        await asyncio.sleep(arguments["delay"])
        self.finished.append(arguments["label"])
        return ToolResult.ok(arguments["label"])


class BrokenTool(Tool):
    name = "broken"
    description = "Always blows up."

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        raise RuntimeError("kaboom")


class MissingTool(Tool):
    name = "missing"
    description = "Reports that nothing was found."

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        return ToolResult.fail(ToolErrorKind.NOT_FOUND, "nothing here")


def call(name: str, call_id: str = "call_1", **arguments: Any) -> ToolCallRequest:
    return ToolCallRequest(id=call_id, name=name, arguments=arguments)


@pytest.fixture
def echo_tool() -> EchoTool:
    return EchoTool()


@pytest.fixture
def registry(echo_tool: EchoTool) -> ToolRegistry:
    return ToolRegistry([echo_tool, SlowTool(), BrokenTool(), MissingTool()])
