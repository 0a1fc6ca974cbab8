"""Tests for the Anthropic request adapter."""

import pytest
from anthropic.types import Message, TextBlock, ToolUseBlock, Usage

from voo._exceptions import MalformedResponseError
from voo.adapters.anthropic import DEFAULT_MAX_TOKENS, AnthropicRequestAdapter
from voo.registry import default_registry
from voo.types.chat import TextReply, ToolCallReply, Transcript, Turn
from voo.types.tool import ToolCallRequest, ToolCallResult, ToolErrorKind, ToolResult


def message(*blocks):
    return Message(
        id="msg_1",
        type="message",
        role="assistant",
        model="claude-3-5-haiku-latest",
        content=list(blocks),
        stop_reason="end_turn",
        stop_sequence=None,
        usage=Usage(input_tokens=1, output_tokens=1),
    )


@pytest.fixture
def adapter():
    return AnthropicRequestAdapter()


@pytest.fixture
def transcript():
    calls = [
        ToolCallRequest(id="tu_1", name="read_file", arguments={"path": "a.txt"}),
        ToolCallRequest(id="tu_2", name="read_file", arguments={"path": "b.txt"}),
    ]
    t = Transcript("Be brief")
    t.append(Turn.user("read both"))
    t.extend(
        [
            Turn.agent("Reading.", calls),
            Turn.result(ToolCallResult("tu_1", "read_file", ToolResult.ok("A"))),
            Turn.result(
                ToolCallResult("tu_2", "read_file", ToolResult.fail(ToolErrorKind.NOT_FOUND, "b.txt"))
            ),
        ]
    )
    return t


class TestToProvider:
    def test_system_prompt_is_separate(self, adapter, transcript):
        request = adapter.to_provider(transcript, ())

        assert request["system"] == "Be brief"
        assert all(m["role"] != "system" for m in request["messages"])

    def test_tool_results_are_folded_into_one_user_message(self, adapter, transcript):
        messages = adapter.to_provider(transcript, ())["messages"]

        assert [m["role"] for m in messages] == ["user", "assistant", "user"]
        results = messages[2]["content"]
        assert [block["tool_use_id"] for block in results] == ["tu_1", "tu_2"]
        assert "is_error" not in results[0]
        assert results[1]["is_error"] is True

    def test_assistant_tool_use_blocks(self, adapter, transcript):
        assistant = adapter.to_provider(transcript, ())["messages"][1]

        assert assistant["content"][0] == {"type": "text", "text": "Reading."}
        assert assistant["content"][1]["type"] == "tool_use"
        assert assistant["content"][1]["input"] == {"path": "a.txt"}

    def test_consecutive_user_turns_are_merged(self, adapter):
        t = Transcript()
        t.append(Turn.user("first"))
        t.append(Turn.user("second"))

        messages = adapter.to_provider(t, ())["messages"]

        assert len(messages) == 1
        assert [b["text"] for b in messages[0]["content"]] == ["first", "second"]

    def test_max_tokens_default_and_stop(self, adapter, transcript):
        request = adapter.to_provider(transcript, (), {"stop": "END"})

        assert request["max_tokens"] == DEFAULT_MAX_TOKENS
        assert request["stop_sequences"] == ["END"]

    def test_tools_use_anthropic_format(self, adapter, transcript):
        request = adapter.to_provider(transcript, default_registry().all_descriptors())

        assert request["tools"][0]["name"] == "read_file"
        assert "input_schema" in request["tools"][0]

    def test_cached_system_prompt(self, transcript):
        request = AnthropicRequestAdapter(cache_system_prompt=True).to_provider(transcript, ())

        assert request["system"][0]["cache_control"] == {"type": "ephemeral"}


class TestFromProvider:
    def test_text(self, adapter):
        reply = adapter.from_provider(message(TextBlock(type="text", text="Hello")))

        assert reply == TextReply("Hello")

    def test_tool_use(self, adapter):
        raw = message(
            TextBlock(type="text", text="Let me look."),
            ToolUseBlock(type="tool_use", id="tu_9", name="list_files", input={"path": "."}),
        )

        reply = adapter.from_provider(raw)

        assert isinstance(reply, ToolCallReply)
        assert reply.content == "Let me look."
        assert reply.tool_calls == (
            ToolCallRequest(id="tu_9", name="list_files", arguments={"path": "."}),
        )

    def test_empty_is_malformed(self, adapter):
        with pytest.raises(MalformedResponseError):
            adapter.from_provider(message())
