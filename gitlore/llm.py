"""
Language model clients.

Every provider exposes the same coroutine, `chat(messages, config)`, which
returns a single `Completion`. Provider SDK errors are re-raised as
`ModelClientError`; streaming responses are joined into one completion.
"""

import logging
from typing import Any, List, Optional, Tuple, Type

from anthropic import AsyncAnthropic
from anthropic import APIError as AnthropicAPIError
from google import genai
from google.genai.errors import APIError as GeminiAPIError
from openai import AsyncOpenAI
from openai import APIError as OpenAIAPIError

from gitlore.config import Settings
from gitlore.errors import ModelClientError
from gitlore.schemas import ChatConfig, ChatMessage, Completion


class ModelClient:
    """Base class for provider adapters."""

    provider = ""
    api_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(self, api_key: str):
        self._api_key = api_key
        self._client: Optional[Any] = None

    def _build_client(self) -> Any:
        raise NotImplementedError

    def _get_client(self) -> Any:
        if not self._api_key:
            raise ModelClientError(f"No API key configured for provider '{self.provider}'")
        if self._client is None:
            self._client = self._build_client()
        return self._client

    async def _complete(self, messages: List[ChatMessage], config: ChatConfig) -> str:
        raise NotImplementedError

    async def _stream(self, messages: List[ChatMessage], config: ChatConfig) -> str:
        raise NotImplementedError

    async def chat(self, messages: List[ChatMessage], config: ChatConfig) -> Completion:
        try:
            if config.streaming:
                content = await self._stream(messages, config)
            else:
                content = await self._complete(messages, config)
        except self.api_errors as e:
            logging.error(f"{self.provider} API error: {e}")
            raise ModelClientError(str(e)) from e

        return Completion(content=content or "")

    async def _close_client(self, client: Any) -> None:
        await client.close()

    async def aclose(self) -> None:
        """Release the SDK client's connection pool, if one was opened."""
        if self._client is not None:
            client, self._client = self._client, None
            await self._close_client(client)


class GeminiClient(ModelClient):
    provider = "gemini"
    api_errors = (GeminiAPIError,)

    def _build_client(self):
        return genai.Client(api_key=self._api_key)

    async def _close_client(self, client):
        await client.aio.aclose()

    def _request(self, messages: List[ChatMessage], config: ChatConfig) -> dict:
        return {
            "model": config.model,
            "contents": [m.content for m in messages],
            "config": genai.types.GenerateContentConfig(max_output_tokens=config.maxTokens),
        }

    async def _complete(self, messages, config):
        response = await self._get_client().aio.models.generate_content(**self._request(messages, config))
        return response.text

    async def _stream(self, messages, config):
        chunks = []
        stream = await self._get_client().aio.models.generate_content_stream(**self._request(messages, config))
        async for chunk in stream:
            if chunk.text:
                chunks.append(chunk.text)
        return "".join(chunks)


class OpenAIClient(ModelClient):
    provider = "openai"
    api_errors = (OpenAIAPIError,)

    def _build_client(self):
        return AsyncOpenAI(api_key=self._api_key)

    async def _complete(self, messages, config):
        response = await self._get_client().chat.completions.create(
            model=config.model,
            messages=[{"role": m.role, "content": m.content} for m in messages],
            max_tokens=config.maxTokens,
        )
        return response.choices[0].message.content

    async def _stream(self, messages, config):
        chunks = []
        stream = await self._get_client().chat.completions.create(
            model=config.model,
            messages=[{"role": m.role, "content": m.content} for m in messages],
            max_tokens=config.maxTokens,
            stream=True,
        )
        async for chunk in stream:
            if chunk.choices and chunk.choices[0].delta.content:
                chunks.append(chunk.choices[0].delta.content)
        return "".join(chunks)


class AnthropicClient(ModelClient):
    provider = "anthropic"
    api_errors = (AnthropicAPIError,)

    def _build_client(self):
        return AsyncAnthropic(api_key=self._api_key)

    async def _complete(self, messages, config):
        response = await self._get_client().messages.create(
            model=config.model,
            max_tokens=config.maxTokens,
            messages=[{"role": m.role, "content": m.content} for m in messages],
        )
        return "".join(block.text for block in response.content if block.type == "text")

    async def _stream(self, messages, config):
        chunks = []
        async with self._get_client().messages.stream(
            model=config.model,
            max_tokens=config.maxTokens,
            messages=[{"role": m.role, "content": m.content} for m in messages],
        ) as stream:
            async for text in stream.text_stream:
                chunks.append(text)
        return "".join(chunks)


PROVIDERS = {
    "gemini": lambda s: GeminiClient(s.GEMINI_API_KEY),
    "openai": lambda s: OpenAIClient(s.OPENAI_API_KEY),
    "anthropic": lambda s: AnthropicClient(s.ANTHROPIC_API_KEY),
}


def build_model_client(settings: Settings) -> ModelClient:
    return PROVIDERS[settings.LLM_PROVIDER](settings)
