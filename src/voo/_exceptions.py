"""
Exception hierarchy for voo, and translation of noisy provider tracebacks
into a `ModelClientError` carrying a machine‑readable `ModelErrorKind`,
while preserving the original exception for full tracebacks.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Final, Optional, Type

import anthropic
import openai

from voo.types.chat import AgentErrorKind, ModelErrorKind

__all__: tuple[str, ...] = (
    "VooError",
    "ConfigError",
    "DuplicateToolError",
    "MalformedResponseError",
    "ModelClientError",
    "AgentError",
    "classify_error",
)


class VooError(RuntimeError):
    """Base class for every error raised by voo."""


class ConfigError(VooError):
    """Missing or invalid configuration (e.g. no API key)."""


class DuplicateToolError(VooError, ValueError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool already registered: {name}")
        self.name = name


class MalformedResponseError(VooError, ValueError):
    """The provider answered with something we cannot interpret."""


class ModelClientError(VooError):
    """Provider failure, classified.

    Attributes:
        kind: What went wrong, as far as the agent loop cares.
        original_exc: The underlying provider exception.
    """

    kind: ModelErrorKind
    original_exc: Exception

    def __init__(
        self, message: str, kind: ModelErrorKind, original_exc: Exception
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.original_exc = original_exc
        self.__cause__ = original_exc


class AgentError(VooError):
    """Raised by ``AgentReply.raise_for_error``."""

    def __init__(
        self, message: str, kind: Optional[AgentErrorKind] = None
    ) -> None:
        super().__init__(message)
        self.kind = kind


AUTH_ERRORS: Final[tuple[Type[Exception], ...]] = (
    openai.AuthenticationError,
    openai.PermissionDeniedError,
    anthropic.AuthenticationError,
    anthropic.PermissionDeniedError,
)

RATE_LIMIT_ERRORS: Final[tuple[Type[Exception], ...]] = (
    openai.RateLimitError,
    anthropic.RateLimitError,
)

# APITimeoutError subclasses APIConnectionError in both SDKs.
TRANSIENT_ERRORS: Final[tuple[Type[Exception], ...]] = (
    openai.APIConnectionError,
    anthropic.APIConnectionError,
    openai.InternalServerError,
    anthropic.InternalServerError,
    asyncio.TimeoutError,
    TimeoutError,
    ConnectionError,
)

MALFORMED_ERRORS: Final[tuple[Type[Exception], ...]] = (
    MalformedResponseError,
    openai.APIResponseValidationError,
    anthropic.APIResponseValidationError,
    json.JSONDecodeError,
)

API_ERRORS: Final[tuple[Type[Exception], ...]] = (
    openai.APIError,
    anthropic.APIError,
)

# Gemini reports a stale key as a plain 400, not a 401.
_EXPIRED_KEY_MARKERS: Final[tuple[str, ...]] = (
    "api key expired",
    "api_key_invalid",
    "api key not valid",
)

_MESSAGES: Final[dict[ModelErrorKind, str]] = {
    ModelErrorKind.AUTH_EXPIRED: "API key expired or rejected – please refresh your credentials",
    ModelErrorKind.RATE_LIMITED: "Rate‑limit exceeded – please retry later",
    ModelErrorKind.TRANSIENT: "Connection problem – unable to reach the LLM provider",
    ModelErrorKind.MALFORMED_RESPONSE: "Provider returned a malformed response",
    ModelErrorKind.PROVIDER: "Provider reported an error",
}


def _kind_of(exc: Exception) -> ModelErrorKind:
    if isinstance(exc, AUTH_ERRORS):
        return ModelErrorKind.AUTH_EXPIRED
    if isinstance(exc, RATE_LIMIT_ERRORS):
        return ModelErrorKind.RATE_LIMITED
    if isinstance(exc, MALFORMED_ERRORS):
        return ModelErrorKind.MALFORMED_RESPONSE
    if isinstance(exc, TRANSIENT_ERRORS):
        return ModelErrorKind.TRANSIENT
    if isinstance(exc, API_ERRORS):
        text = str(exc).lower()
        if any(marker in text for marker in _EXPIRED_KEY_MARKERS):
            return ModelErrorKind.AUTH_EXPIRED
    return ModelErrorKind.PROVIDER


def classify_error(
    exc: Exception,
    logger: Optional[logging.Logger] = None,
) -> ModelClientError:
    """Wrap an SDK exception in ModelClientError with a friendly, concise message."""
    log = logger or logging.getLogger("voo.exceptions")

    if isinstance(exc, ModelClientError):
        return exc

    kind = _kind_of(exc)
    detail = str(exc) or exc.__class__.__name__
    msg = f"{_MESSAGES[kind]}: {detail}"

    if kind is ModelErrorKind.PROVIDER and not isinstance(exc, API_ERRORS):
        log.error("Unexpected error from model client", exc_info=exc)
    else:
        log.warning("Wrapping provider exception (%s)", kind, extra={"exc": exc})
    return ModelClientError(msg, kind, exc)
