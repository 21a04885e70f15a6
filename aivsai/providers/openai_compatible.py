from typing import Any, Dict, Optional, Sequence, cast

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI
from pydantic import ValidationError

from aivsai.config.models import ProviderConfig
from aivsai.utils.errors import ApiErrorKind, ProviderError
from aivsai.utils.logging import get_logger

from .base import DEFAULT_TEMPERATURE, BaseChatClient, ChatMessage, ChatRequest, ChatResponse

logger = get_logger(__name__)


class OpenAICompatibleClient(BaseChatClient):
    """Chat client for any OpenAI-compatible chat-completions endpoint.

    Every call is a single attempt: the SDK's retries are disabled and no
    timeout is applied.
    """

    def __init__(
        self,
        temperature: float = DEFAULT_TEMPERATURE,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.temperature = temperature
        self._http_client = http_client
        self._clients: Dict[str, AsyncOpenAI] = {}

    def _client_for(self, config: ProviderConfig) -> AsyncOpenAI:
        client = self._clients.get(config.name)
        if client is None:
            client = AsyncOpenAI(
                api_key=config.api_key.get_secret_value(),
                base_url=config.base_url,
                max_retries=0,
                timeout=None,
                http_client=self._http_client,
            )
            self._clients[config.name] = client
        return client

    async def complete(self, config: ProviderConfig, messages: Sequence[ChatMessage]) -> str:
        """Non-streaming completion"""
        request = ChatRequest(
            model=config.model_identifier,
            messages=list(messages),
            temperature=self.temperature,
        )
        payload = request.model_dump()
        logger.debug(
            f"POST {config.endpoint} model={request.model} messages={len(request.messages)}"
        )

        client = self._client_for(config)
        try:
            raw = await client.chat.completions.with_raw_response.create(
                model=payload["model"],
                messages=cast(Any, payload["messages"]),
                temperature=payload["temperature"],
            )
        except APIStatusError as e:
            raise ProviderError(
                config.display_name,
                ApiErrorKind.HTTP_STATUS,
                "Non-success status",
                status_code=e.status_code,
                body=e.response.text,
            ) from e
        except APIConnectionError as e:
            raise ProviderError(
                config.display_name,
                ApiErrorKind.TRANSPORT,
                f"Failed to send request: {e}",
            ) from e

        return self.extract_content(config.display_name, raw.http_response.text)

    @staticmethod
    def extract_content(provider: str, body: str) -> str:
        """Return the first choice's content from a raw response body."""
        try:
            response = ChatResponse.model_validate_json(body)
        except ValidationError as e:
            raise ProviderError(
                provider,
                ApiErrorKind.MALFORMED_RESPONSE,
                f"Failed to parse response: {e.error_count()} problem(s) in body",
            ) from e

        if not response.choices:
            raise ProviderError(provider, ApiErrorKind.EMPTY_CHOICES, "No choices returned")
        return response.choices[0].message.content

    async def aclose(self) -> None:
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
