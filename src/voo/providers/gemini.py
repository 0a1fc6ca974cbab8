from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .base import DEFAULT_TIMEOUT
from .openai import OpenAIClient

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


class GeminiClient(OpenAIClient):
    """
    Gemini client via the OpenAI-compatible endpoint.

    ``from_client`` expects an ``AsyncOpenAI`` instance already pointed at
    Gemini's base URL.
    """

    def __init__(
        self,
        model: str = DEFAULT_GEMINI_MODEL,
        *,
        api_key: str,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        params: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        base_url: str = DEFAULT_GEMINI_BASE_URL,
    ) -> None:
        super().__init__(
            model,
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
            params=params,
            logger=logger,
            name=name,
            base_url=base_url,
        )
