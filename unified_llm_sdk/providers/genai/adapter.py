from contextlib import aclosing
from typing import Any, AsyncGenerator, AsyncIterator, Optional

from google import genai

from ..base import ProviderAdapter, ProviderError
from ..errors import ErrorMapper
from ...config.settings import GenAISettings
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
from .parsers import parse_embed_response, parse_generate_response
from .payloads import build_embed_payload, build_generate_payload
from .streaming import stream_generate_content

logger = ProviderLogger("genai")


class GenAIProvider(ProviderAdapter):
    """Google GenAI provider (Gemini API or Vertex AI)."""

    name = "genai"

    def __init__(self, client: Optional[genai.Client] = None, **options: Any):
        self._client = client
        self._settings = GenAISettings.from_env(**options)

    @property
    def client(self) -> genai.Client:
        """Lazy initialization of the google-genai client."""
        if self._client is None:
            if not self._settings.configured:
                raise ProviderError(
                    "Google GenAI requires GEMINI_API_KEY/GOOGLE_API_KEY, "
                    "or GOOGLE_CLOUD_PROJECT with Vertex AI enabled",
                    provider=self.name,
                )
            if self._settings.vertexai:
                self._client = genai.Client(
                    vertexai=True,
                    project=self._settings.project,
                    location=self._settings.location,
                )
            else:
                self._client = genai.Client(api_key=self._settings.api_key)
        return self._client

    async def list_models(self) -> AsyncIterator[ModelInfo]:
        with logger.track_request("list_models", None):
            try:
                async for model in await self.client.aio.models.list():
                    if not model.name:
                        continue
                    yield ModelInfo(name=model.name)
            except ProviderError:
                raise
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e

    async def embeddings(self, request: EmbeddingRequest) -> EmbeddingResult:
        with logger.track_request("embeddings", request.model):
            payload = build_embed_payload(request, vertexai=self._settings.vertexai)
            try:
                response = await self.client.aio.models.embed_content(**payload)
            except ProviderError:
                raise
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e
            return parse_embed_response(response)

    async def chat(self, request: ChatRequest) -> ChatResult:
        with logger.track_request("chat", request.model) as request_info:
            payload = build_generate_payload(request)
            try:
                response = await self.client.aio.models.generate_content(**payload)
            except ProviderError:
                raise
            except Exception as e:
                raise ErrorMapper.map_error(e, self.name) from e

            result = parse_generate_response(response)
            logger.log_usage(result.usage, request.model, request_info['request_id'])
            return result

    async def chat_stream(self, request: ChatRequest) -> AsyncGenerator[StreamFragment, None]:
        with logger.track_request("chat_stream", request.model) as request_info:
            payload = build_generate_payload(request)

            adapter = StreamAdapter(self.name, request.model)
            try:
                async with aclosing(stream_generate_content(self.client, payload, adapter)) as fragments:
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
        """Check if Gemini API or Vertex AI credentials are configured."""
        return self._client is not None or self._settings.configured
