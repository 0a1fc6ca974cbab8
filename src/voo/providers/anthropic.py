from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Self

from anthropic import AsyncAnthropic
from anthropic.types import Message

from voo.adapters.anthropic import AnthropicRequestAdapter

from .base import DEFAULT_TIMEOUT, BaseModelClient, RequestAdapter


class AnthropicClient(BaseModelClient):
    """
    Anthropic messages client (async‑only).

    Use ``AnthropicClient.from_client`` when you already have an ``AsyncAnthropic`` instance.
    """

    def __init__(
        self,
        model: str,
        *,
        api_key: str,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        params: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        base_url: Optional[str] = None,
        cache_system_prompt: bool = False,
    ) -> None:
        super().__init__(model, timeout=timeout, params=params, logger=logger, name=name)
        self.api_key = api_key
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            max_retries=max_retries,
        )
        self._adapter = AnthropicRequestAdapter(cache_system_prompt=cache_system_prompt)

    @classmethod
    def from_client(
        cls,
        model: str,
        client: AsyncAnthropic,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        params: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
        cache_system_prompt: bool = False,
    ) -> Self:
        """
        Wrap an existing ``AsyncAnthropic`` client.
        """
        if not isinstance(client, AsyncAnthropic):
            raise TypeError(
                f"{cls.__name__}.from_client expects AsyncAnthropic; got {type(client).__name__}"
            )

        self = cls.__new__(cls)  # bypass __init__
        BaseModelClient.__init__(
            self, model, timeout=timeout, params=params, logger=logger, name=name
        )
        self.api_key = client.api_key or ""
        self._client = client
        self._adapter = AnthropicRequestAdapter(cache_system_prompt=cache_system_prompt)
        return self

    @property
    def adapter(self) -> RequestAdapter:
        return self._adapter

    async def _complete_impl(self, request: dict[str, Any]) -> Message:
        self._log(f"Sending request to {self.model}", logging.DEBUG)
        return await self._client.messages.create(model=self.model, **request)
