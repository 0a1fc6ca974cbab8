from __future__ import annotations

import logging
from typing import Any, Optional, Type

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from voo.config import DEFAULT_MODELS, Provider, get_api_key
from voo.providers.anthropic import AnthropicClient
from voo.providers.base import BaseModelClient
from voo.providers.gemini import GeminiClient
from voo.providers.openai import OpenAIClient

# map Provider enum to its client implementation
_CLIENT_REGISTRY: dict[Provider, Type[BaseModelClient]] = {
    Provider.OPENAI: OpenAIClient,
    Provider.ANTHROPIC: AnthropicClient,
    Provider.GEMINI: GeminiClient,
}


def create_client(
    provider: Provider | str,
    model: Optional[str] = None,
    *,
    api_key: Optional[str] = None,
    client: AsyncOpenAI | AsyncAnthropic | None = None,
    logger: Optional[logging.Logger] = None,
    **provider_kwargs: Any,
) -> BaseModelClient:
    """
    Factory for creating any supported model client.

    Args:
        provider: Which provider to use (OPENAI, ANTHROPIC, GEMINI).
        model: Model identifier; defaults to the provider's entry in DEFAULT_MODELS.
        api_key: Overrides automatic lookup; if omitted, pulled from env.
        client: Optional pre-configured SDK client to use.
            - For Provider.OPENAI: an AsyncOpenAI instance
            - For Provider.ANTHROPIC: an AsyncAnthropic instance
            - For Provider.GEMINI: an AsyncOpenAI instance pointed at the
              OpenAI-compatible endpoint
        logger: Optional custom logger.
        **provider_kwargs: Any extra args to pass through (timeout, params, ...).
    """
    try:
        provider = Provider(provider)
        client_cls = _CLIENT_REGISTRY[provider]
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unsupported provider: {provider}") from exc

    model = model or DEFAULT_MODELS[provider]

    if client is not None:  # use caller‑supplied client verbatim
        return client_cls.from_client(model, client, logger=logger, **provider_kwargs)

    key = api_key or get_api_key(provider)
    return client_cls(model, api_key=key, logger=logger, **provider_kwargs)
