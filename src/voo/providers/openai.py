from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Self

from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from voo.adapters.openai import OpenAIRequestAdapter

from .base import DEFAULT_TIMEOUT, BaseModelClient, RequestAdapter


class OpenAIClient(BaseModelClient):
    """
    OpenAI chat-completions client (async‑only).

    Use ``OpenAIClient.from_client`` when you already have an ``AsyncOpenAI`` instance.
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
    ) -> None:
        super().__init__(model, timeout=timeout, params=params, logger=logger, name=name)
        self.api_key = api_key
        # retries are owned by the agent loop, keep the SDK from doubling them
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=max_retries,
        )
        self._adapter = OpenAIRequestAdapter()

    @classmethod
    def from_client(
        cls,
        model: str,
        client: AsyncOpenAI,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        params: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> Self:
        """
        Build an ``OpenAIClient`` around an already‑configured ``AsyncOpenAI`` client.
        """
        if not isinstance(client, AsyncOpenAI):
            raise TypeError(
                f"{cls.__name__}.from_client expects AsyncOpenAI; got {type(client).__name__}"
            )

        self = cls.__new__(cls)  # bypass __init__
        BaseModelClient.__init__(
            self, model, timeout=timeout, params=params, logger=logger, name=name
        )
        self.api_key = client.api_key or ""
        self._client = client
        self._adapter = OpenAIRequestAdapter()
        return self

    @property
    def adapter(self) -> RequestAdapter:
        return self._adapter

    async def _complete_impl(self, request: dict[str, Any]) -> ChatCompletion:
        self._log(f"Sending request to {self.model}", logging.DEBUG)
        return await self._client.chat.completions.create(model=self.model, **request)
