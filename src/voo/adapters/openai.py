"""OpenAI adapter for pure request/response transformations."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Sequence
from uuid import uuid4

from openai.types.chat import ChatCompletion

from voo._exceptions import MalformedResponseError
from voo.types.chat import ModelReply, Role, TextReply, ToolCallReply, Transcript
from voo.types.tool import ToolCallRequest, ToolDescriptor


def _call_id(raw_id: Optional[str]) -> str:
    # the Gemini compatibility endpoint may leave ids empty
    return raw_id or f"call_{uuid4().hex[:12]}"


class OpenAIRequestAdapter:
    """Adapter for converting between the transcript and OpenAI chat completions."""

    def build_messages(self, transcript: Transcript) -> list[dict[str, Any]]:
        """Replay the transcript as OpenAI messages."""
        messages: list[dict[str, Any]] = []
        if transcript.system_prompt:
            messages.append({"role": "system", "content": transcript.system_prompt})

        for turn in transcript:
            if turn.role is Role.USER:
                messages.append({"role": "user", "content": turn.content})
            elif turn.role is Role.AGENT:
                msg: dict[str, Any] = {"role": "assistant"}
                if turn.tool_calls:
                    msg["tool_calls"] = [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.name,
                                "arguments": json.dumps(call.arguments),
                            },
                        }
                        for call in turn.tool_calls
                    ]
                    # content must be null when tool_calls is present
                    msg["content"] = turn.content or None
                else:
                    msg["content"] = turn.content
                messages.append(msg)
            elif turn.role is Role.TOOL_RESULT and turn.tool_result is not None:
                messages.append(
                    {
                        "role": "tool",
                        "tool_call_id": turn.tool_result.id,
                        "content": turn.tool_result.content,
                    }
                )
        return messages

    def to_provider(
        self,
        transcript: Transcript,
        descriptors: Sequence[ToolDescriptor],
        params: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """Build the keyword arguments for ``chat.completions.create``."""
        request: dict[str, Any] = {"messages": self.build_messages(transcript)}
        if descriptors:
            request["tools"] = [descriptor.to_openai() for descriptor in descriptors]
        for key, value in (params or {}).items():
            if value is not None:
                request.setdefault(key, value)
        return request

    def from_provider(self, raw: ChatCompletion) -> ModelReply:
        """Convert an OpenAI completion into a model reply."""
        if not raw.choices or raw.choices[0].message is None:
            raise MalformedResponseError("completion has no choices")

        message = raw.choices[0].message
        content = message.content or ""

        if message.tool_calls:
            calls: list[ToolCallRequest] = []
            for tc in message.tool_calls:
                raw_args = tc.function.arguments
                if isinstance(raw_args, dict):
                    arguments = raw_args
                elif isinstance(raw_args, str) and raw_args.strip():
                    try:
                        arguments = json.loads(raw_args)
                    except json.JSONDecodeError as exc:
                        raise MalformedResponseError(
                            f"bad JSON arguments for tool call {tc.function.name!r}: {raw_args!r}"
                        ) from exc
                else:
                    arguments = {}
                if not isinstance(arguments, dict):
                    raise MalformedResponseError(
                        f"tool call {tc.function.name!r} arguments are not an object"
                    )
                calls.append(
                    ToolCallRequest(
                        id=_call_id(tc.id), name=tc.function.name, arguments=arguments
                    )
                )
            return ToolCallReply(tool_calls=tuple(calls), content=content)

        if not content:
            raise MalformedResponseError("completion has neither content nor tool calls")
        return TextReply(content=content)
