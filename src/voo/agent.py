"""
The agent: owns the transcript and the tool registry and runs the
request → tool dispatch → resubmit loop behind ``turn()``.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Optional, Sequence

from voo._exceptions import classify_error
from voo.providers.base import ModelClient
from voo.registry import ToolRegistry
from voo.retry import RetryPolicy
from voo.tools.base import Tool
from voo.types.chat import (
    AgentErrorKind,
    AgentReply,
    ErrorReply,
    ModelErrorKind,
    ModelReply,
    TextReply,
    ToolCallReply,
    Transcript,
    Turn,
)
from voo.types.tool import ToolCallRequest, ToolCallResult, ToolErrorKind, ToolResult

__all__ = ["Agent", "DEFAULT_SYSTEM_PROMPT", "DEFAULT_MAX_ROUNDS"]

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())

DEFAULT_MAX_ROUNDS = 10

DEFAULT_SYSTEM_PROMPT = """\
You are an expert LLM agent named VOO, with access to a variety of tools.
When you are asked a normal question, answer normally. When you need
information from the local machine, call one of the available tools instead
of guessing. If a tool reports an error, read it and try again with
corrected arguments, or explain the problem to the user.
When showing the output of a tool, show the user what they asked for as a
list, for example:
- Item 1
- Item 2
"""


class Agent:
    """
    Drives one conversation with a model client and a set of local tools.

    Turns run one at a time; within a turn the tool calls of a single round
    may run concurrently, and their results are appended in request order.
    A round is recorded in the transcript only once all its tool results
    are in, so a cancelled or failed round leaves no partial entries.
    """

    def __init__(
        self,
        client: ModelClient,
        registry: Optional[ToolRegistry] = None,
        *,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        retry: Optional[RetryPolicy] = None,
        concurrent_tools: bool = True,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        self.client = client
        self.max_rounds = max_rounds
        self.retry = retry or RetryPolicy()
        self.concurrent_tools = concurrent_tools
        self.logger = logger or _logger
        self.name = name if name is not None else self.__class__.__name__
        self._registry = registry if registry is not None else ToolRegistry()
        self._transcript = Transcript(system_prompt)
        self._lock = asyncio.Lock()
        self.rounds = 0  # model submissions used by the last turn

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def add_tool(self, tool: Tool) -> None:
        self._registry.register(tool)

    def add_system_prompt(self, prompt: str) -> None:
        """Append extra context to the system prompt."""
        prompt = prompt.strip()
        if not prompt:
            return
        current = self._transcript.system_prompt
        self._transcript.system_prompt = f"{current.rstrip()}\n\n{prompt}" if current else prompt

    async def turn(self, user_input: str) -> AgentReply:
        """
        Handle one piece of user input until the model produces a final answer.

        Raises:
            ValueError: if ``user_input`` is empty or only whitespace.

        Returns:
            An AgentReply holding either the answer text or a surfaced error.
        """
        if not isinstance(user_input, str) or not user_input.strip():
            raise ValueError("user input must be non-empty text")

        async with self._lock:
            self._transcript.append(Turn.user(user_input))
            reply = await self._run()
            self.rounds = reply.rounds
            return reply

    async def _run(self) -> AgentReply:
        collected: list[ToolCallResult] = []

        for round_no in range(1, self.max_rounds + 1):
            reply = await self._submit()

            if isinstance(reply, ErrorReply):
                self._log(f"Round {round_no} failed: {reply.kind}", logging.WARNING)
                return AgentReply(
                    error=reply.message or str(reply.kind),
                    error_kind=AgentErrorKind(reply.kind.value),
                    rounds=round_no,
                    tool_results=collected,
                )

            if isinstance(reply, TextReply):
                self._transcript.append(Turn.agent(reply.content))
                return AgentReply(
                    content=reply.content, rounds=round_no, tool_results=collected
                )

            results = await self._dispatch(reply.tool_calls)
            self._transcript.extend(
                [Turn.agent(reply.content, reply.tool_calls)]
                + [Turn.result(result) for result in results]
            )
            collected.extend(results)
            self._log(
                f"Round {round_no}: ran {len(results)} tool call(s) "
                f"({sum(r.is_error for r in results)} failed)",
                logging.DEBUG,
            )

        self._log(f"Gave up after {self.max_rounds} rounds", logging.WARNING)
        return AgentReply(
            error=f"Too many tool rounds: no final answer after {self.max_rounds} rounds",
            error_kind=AgentErrorKind.TOO_MANY_ROUNDS,
            rounds=self.max_rounds,
            tool_results=collected,
        )

    async def _submit(self) -> ModelReply:
        """One round's model call, retrying retryable errors per the policy."""
        descriptors = self._registry.all_descriptors()
        attempt = 0
        while True:
            reply = await self._complete_once(descriptors)
            attempt += 1
            if not isinstance(reply, ErrorReply) or not reply.retryable:
                return reply
            if attempt >= self.retry.max_attempts:
                return reply
            delay = self.retry.get_delay(attempt - 1)
            self._log(
                f"{reply.kind} (attempt {attempt}/{self.retry.max_attempts}), "
                f"retrying in {delay:.2f}s",
                logging.WARNING,
            )
            await asyncio.sleep(delay)

    async def _complete_once(self, descriptors: Sequence) -> ModelReply:
        try:
            reply = await self.client.complete(self._transcript, descriptors)
        except Exception as exc:
            err = classify_error(exc, self.logger)
            return ErrorReply(err.kind, str(err))

        if isinstance(reply, ToolCallReply) and not reply.tool_calls:
            return ErrorReply(
                ModelErrorKind.MALFORMED_RESPONSE, "tool call reply without any tool calls"
            )
        if not isinstance(reply, (TextReply, ToolCallReply, ErrorReply)):
            return ErrorReply(
                ModelErrorKind.MALFORMED_RESPONSE,
                f"unexpected reply type from model client: {type(reply).__name__}",
            )
        return reply

    async def _dispatch(
        self, calls: Sequence[ToolCallRequest]
    ) -> list[ToolCallResult]:
        if self.concurrent_tools and len(calls) > 1:
            return list(await asyncio.gather(*(self._run_tool(call) for call in calls)))
        return [await self._run_tool(call) for call in calls]

    async def _run_tool(self, call: ToolCallRequest) -> ToolCallResult:
        tool = self._registry.resolve(call.name)
        if tool is None:
            self._log(f"Model asked for unknown tool {call.name!r}", logging.WARNING)
            available = ", ".join(self._registry.names()) or "none"
            return ToolCallResult(
                call.id,
                call.name,
                ToolResult.fail(
                    ToolErrorKind.UNKNOWN_TOOL,
                    f"Unknown tool: {call.name}. Available tools: {available}",
                ),
            )

        try:
            problem = tool.validate(call.arguments)
            if problem is not None:
                return ToolCallResult(
                    call.id, call.name, ToolResult.fail(ToolErrorKind.INVALID_ARGUMENT, problem)
                )

            self._log(f"Running {call.name} {call.arguments}", logging.INFO)
            if inspect.iscoroutinefunction(tool.execute):
                result = await tool.execute(call.arguments)
            else:
                result = await asyncio.to_thread(tool.execute, call.arguments)
                if inspect.isawaitable(result):
                    result = await result
        except Exception as exc:
            self.logger.exception("Tool %s raised", call.name)
            result = ToolResult.fail(ToolErrorKind.INTERNAL, f"{type(exc).__name__}: {exc}")

        if not isinstance(result, ToolResult):
            result = ToolResult.fail(
                ToolErrorKind.INTERNAL,
                f"tool returned {type(result).__name__} instead of a result",
            )
        return ToolCallResult(call.id, call.name, result)

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
