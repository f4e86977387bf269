from contextlib import aclosing
from typing import Any, AsyncGenerator, AsyncIterator, Optional

from ollama import AsyncClient

from ..base import ProviderAdapter, ProviderError
from ..errors import ErrorMapper
from ...config.settings import OllamaSettings
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
from .parsers import parse_chat_response, parse_embed_response
from .payloads import build_chat_payload, build_embed_payload
from .streaming import stream_chat

logger = ProviderLogger("ollama")


class OllamaProvider(ProviderAdapter):
    """Ollama provider for locally served models."""

    name = "ollama"

    def __init__(self, client: Optional[AsyncClient] = None, **options: Any):
        self._client = client
        self._settings = OllamaSettings.from_env(**options)

    @property
    def client(self) -> AsyncClient:
        """Lazy initialization of Ollama client."""
        if self._client is None:
            self._client = AsyncClient(host=self._settings.host, timeout=self._settings.timeout)
        return self._client

    async def list_models(self) -> AsyncIterator[ModelInfo]:
        with logger.track_request("list_models", None):
            try:
                response = await self.client.list()
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e
            for model in response.models:
                yield ModelInfo(name=model.model)

    async def embeddings(self, request: EmbeddingRequest) -> EmbeddingResult:
        with logger.track_request("embeddings", request.model):
            try:
                response = await self.client.embed(**build_embed_payload(request))
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e
            return parse_embed_response(response)

    async def chat(self, request: ChatRequest) -> ChatResult:
        with logger.track_request("chat", request.model) as request_info:
            try:
                response = await self.client.chat(**build_chat_payload(request))
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e

            result = parse_chat_response(response)
            logger.log_usage(result.usage, request.model, request_info['request_id'])
            return result

    async def chat_stream(self, request: ChatRequest) -> AsyncGenerator[StreamFragment, None]:
        with logger.track_request("chat_stream", request.model) as request_info:
            payload = build_chat_payload(request)
            payload["stream"] = True

            adapter = StreamAdapter(self.name, request.model)
            try:
                async with aclosing(stream_chat(self.client, payload, adapter)) as fragments:
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
        """Ollama needs no credentials; reachability is only known on first call."""
        return True
