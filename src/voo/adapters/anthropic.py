"""Anthropic adapter for pure request/response transformations."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from anthropic.types import Message

from voo._exceptions import MalformedResponseError
from voo.types.chat import ModelReply, Role, TextReply, ToolCallReply, Transcript, Turn
from voo.types.tool import ToolCallRequest, ToolDescriptor

DEFAULT_MAX_TOKENS = 4096


def ephemeral(text: str) -> dict[str, Any]:
    """Return a text block marked for Anthropic's 5‑minute *ephemeral* prompt cache."""
    return {
        "type": "text",
        "text": text,
        "cache_control": {"type": "ephemeral"},
    }


class AnthropicRequestAdapter:
    """Adapter for converting between the transcript and Anthropic messages."""

    def __init__(self, *, cache_system_prompt: bool = False) -> None:
        self.cache_system_prompt = cache_system_prompt

    def _blocks(self, turn: Turn) -> tuple[str, list[dict[str, Any]]]:
        if turn.role is Role.USER:
            return "user", [{"type": "text", "text": turn.content}]

        if turn.role is Role.AGENT:
            blocks: list[dict[str, Any]] = []
            if turn.content:
                blocks.append({"type": "text", "text": turn.content})
            for call in turn.tool_calls:
                blocks.append(
                    {
                        "type": "tool_use",
                        "id": call.id,
                        "name": call.name,
                        "input": call.arguments,
                    }
                )
            return "assistant", blocks

        result = turn.tool_result
        block: dict[str, Any] = {
            "type": "tool_result",
            "tool_use_id": result.id if result else "",
            "content": turn.content,
        }
        if result is not None and result.is_error:
            block["is_error"] = True
        return "user", [block]

    def build_messages(self, transcript: Transcript) -> list[dict[str, Any]]:
        """Replay the transcript as Anthropic messages.

        Tool results travel in user messages, and consecutive turns with the
        same role are folded into one message so roles keep alternating.
        """
        messages: list[dict[str, Any]] = []
        for turn in transcript:
            role, blocks = self._blocks(turn)
            if not blocks:
                continue
            if messages and messages[-1]["role"] == role:
                messages[-1]["content"].extend(blocks)
            else:
                messages.append({"role": role, "content": blocks})
        return messages

    def to_provider(
        self,
        transcript: Transcript,
        descriptors: Sequence[ToolDescriptor],
        params: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """Build the keyword arguments for ``messages.create``."""
        request: dict[str, Any] = {"messages": self.build_messages(transcript)}

        if transcript.system_prompt:
            request["system"] = (
                [ephemeral(transcript.system_prompt)]
                if self.cache_system_prompt
                else transcript.system_prompt
            )
        if descriptors:
            request["tools"] = [descriptor.to_anthropic() for descriptor in descriptors]

        extra = dict(params or {})
        # Handle stop sequences
        if "stop" in extra:
            stop = extra.pop("stop")
            extra["stop_sequences"] = stop if isinstance(stop, list) else [stop]
        for key, value in extra.items():
            if value is not None:
                request.setdefault(key, value)

        # Anthropic requires max_tokens
        request.setdefault("max_tokens", DEFAULT_MAX_TOKENS)
        return request

    def from_provider(self, raw: Message) -> ModelReply:
        """Convert an Anthropic message into a model reply."""
        text_parts: list[str] = []
        calls: list[ToolCallRequest] = []

        for block in raw.content or []:
            if block.type == "text":
                text_parts.append(block.text)
            elif block.type == "tool_use":
                if not hasattr(block.input, "items"):
                    raise MalformedResponseError(
                        f"tool_use {block.name!r} input is not an object"
                    )
                calls.append(
                    ToolCallRequest(id=block.id, name=block.name, arguments=dict(block.input))
                )

        content = "".join(text_parts)
        if calls:
            return ToolCallReply(tool_calls=tuple(calls), content=content)
        if not content:
            raise MalformedResponseError("message has neither text nor tool_use blocks")
        return TextReply(content=content)
