from contextlib import aclosing
from typing import Any, AsyncGenerator, AsyncIterator, Optional

from openai import AsyncOpenAI

from ..base import ProviderAdapter, ProviderError
from ..errors import ErrorMapper
from ...config.settings import OpenAISettings
from ...models.generation import (
    ChatResult,
    EmbeddingRequest,
    EmbeddingResult,
    ModelInfo,
    StreamFragment,
)
from ...models.messages import ChatRequest
from ...observability.logging import ProviderLogger
from ...streaming import StreamAdapter
from .parsers import parse_chat_completion, parse_embeddings
from .payloads import build_chat_payload, build_embeddings_payload
from .streaming import stream_chat_completions

logger = ProviderLogger("openai")


class OpenAIProvider(ProviderAdapter):
    """OpenAI Chat Completions and Embeddings provider.

    Works against any OpenAI-compatible endpoint via ``base_url``.
    """

    name = "openai"

    def __init__(self, client: Optional[AsyncOpenAI] = None, **options: Any):
        self._client = client
        self._settings = OpenAISettings.from_env(**options)

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            if not self._settings.api_key:
                raise ProviderError(
                    "OpenAI API key not found in options or environment variables",
                    provider=self.name,
                )
            self._client = AsyncOpenAI(
                api_key=self._settings.api_key,
                base_url=self._settings.base_url,
                organization=self._settings.organization,
                timeout=self._settings.timeout,
            )
        return self._client

    async def list_models(self) -> AsyncIterator[ModelInfo]:
        with logger.track_request("list_models", None):
            try:
                async for model in self.client.models.list():
                    yield ModelInfo(name=model.id)
            except ProviderError:
                raise
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e

    async def embeddings(self, request: EmbeddingRequest) -> EmbeddingResult:
        with logger.track_request("embeddings", request.model):
            try:
                response = await self.client.embeddings.create(**build_embeddings_payload(request))
            except ProviderError:
                raise
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e
            return parse_embeddings(response)

    async def chat(self, request: ChatRequest) -> ChatResult:
        with logger.track_request("chat", request.model) as request_info:
            try:
                response = await self.client.chat.completions.create(**build_chat_payload(request))
            except ProviderError:
                raise
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e

            result = parse_chat_completion(response)
            logger.log_usage(result.usage, request.model, request_info['request_id'])
            return result

    async def chat_stream(self, request: ChatRequest) -> AsyncGenerator[StreamFragment, None]:
        with logger.track_request("chat_stream", request.model) as request_info:
            payload = build_chat_payload(request)
            payload["stream"] = True
            payload["stream_options"] = {"include_usage": True}

            adapter = StreamAdapter(self.name, request.model)
            try:
                async with aclosing(stream_chat_completions(self.client, payload, adapter)) as fragments:
                    async for fragment in fragments:
                        if fragment.usage is not None:
                            logger.log_usage(fragment.usage, request.model, request_info['request_id'])
                        yield fragment
            except ProviderError:
                raise
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e
            finally:
                logger.log_streaming_metrics(adapter.get_metrics(), request.model, request_info['request_id'])

    def is_available(self) -> bool:
        """Check if OpenAI API is configured."""
        return bool(self._client is not None or self._settings.api_key)
