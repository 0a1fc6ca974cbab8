"""Base class for model clients."""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Protocol, Sequence

from voo._exceptions import classify_error
from voo.types.chat import ErrorReply, ModelErrorKind, ModelReply, Transcript
from voo.types.tool import ToolDescriptor

__all__ = ["BaseModelClient", "ModelClient", "RequestAdapter", "DEFAULT_TIMEOUT"]

DEFAULT_TIMEOUT = 60.0

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())


class ModelClient(Protocol):
    """What the agent needs from a model: one tri-state completion call."""

    async def complete(
        self,
        transcript: Transcript,
        descriptors: Sequence[ToolDescriptor],
    ) -> ModelReply: ...


class RequestAdapter(Protocol):
    """Protocol for adapting between the transcript and a provider-specific format."""

    def to_provider(
        self,
        transcript: Transcript,
        descriptors: Sequence[ToolDescriptor],
        params: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        """Build provider request arguments from the transcript and tool descriptors."""
        ...

    def from_provider(self, raw: Any) -> ModelReply:
        """Convert a provider response to a model reply."""
        ...


class BaseModelClient(ABC):
    """
    Base class for all model clients. All implementations are async-first.

    ``complete`` never raises for provider trouble: every failure is
    classified and returned as an ``ErrorReply``.
    """

    def __init__(
        self,
        model: str,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        params: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        """
        Initializes the base model client.

        Args:
            model: The identifier of the LLM model to be used.
            timeout: Seconds to wait for one completion before giving up with
                     a transient error. None disables the limit.
            params: Extra request parameters (temperature, max_tokens, ...)
                    sent with every completion.
            logger: Optional logger instance. If None, a logger named after
                    this module will be used.
            name: Optional name for this component, used in logging.
                  If None, defaults to the concrete class's name.
        """
        self.model = model
        self.timeout = timeout
        self.params = dict(params or {})
        self.logger = logger or _logger
        self.name = name if name is not None else self.__class__.__name__

    @property
    @abstractmethod
    def adapter(self) -> RequestAdapter:
        """Request adapter for this provider."""
        ...

    @abstractmethod
    async def _complete_impl(self, request: dict[str, Any]) -> Any:
        """
        Send one provider request and return the raw provider response.
        This method must be implemented by subclasses.
        """
        ...

    async def complete(
        self,
        transcript: Transcript,
        descriptors: Sequence[ToolDescriptor],
    ) -> ModelReply:
        """
        Submit the full transcript plus the tool descriptors.

        Returns a TextReply, a ToolCallReply or an ErrorReply.
        """
        try:
            request = self.adapter.to_provider(transcript, descriptors, self.params)
            self._log(
                f"Sending {len(transcript)} turns and {len(descriptors)} tools to {self.model}",
                logging.DEBUG,
            )
            if self.timeout is None:
                raw = await self._complete_impl(request)
            else:
                raw = await asyncio.wait_for(self._complete_impl(request), self.timeout)
            return self.adapter.from_provider(raw)
        except asyncio.CancelledError:
            raise
        except asyncio.TimeoutError:
            self._log(f"No answer within {self.timeout}s", logging.WARNING)
            return ErrorReply(
                ModelErrorKind.TRANSIENT,
                f"Timed out after {self.timeout}s waiting for {self.model}",
            )
        except Exception as exc:
            return self._wrap_error(exc)

    def _wrap_error(self, exc: Exception) -> ErrorReply:
        """Wrap exception into an error reply."""
        err = classify_error(exc, self.logger)
        return ErrorReply(err.kind, str(err))

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    # --- lifecycle ---------------------------------------------------------
    async def aclose(self) -> None:
        """
        Close underlying async HTTP clients to avoid cleanup after the loop closes.
        Safe to call multiple times.
        """
        client = getattr(self, "_client", None)
        close = getattr(client, "close", None)
        if close:
            await close()

    async def __aenter__(self) -> "BaseModelClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
