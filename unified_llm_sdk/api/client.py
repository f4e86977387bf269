"""Main client interface for Unified LLM SDK."""

from typing import Any, AsyncIterator, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..models.generation import (
    ChatResult,
    EmbeddingRequest,
    EmbeddingResult,
    ModelInfo,
    StreamFragment,
)
from ..models.messages import ChatRequest
from ..providers.base import ProviderAdapter, ProviderError
from ..providers.registry import create_provider, resolve_provider_name

RequestT = TypeVar("RequestT", bound=BaseModel)


class LLMClient:
    """Provider-blind client over one registered provider."""

    def __init__(self, provider: str, **options: Any):
        """
        Initialize the client.

        Args:
            provider: Registered provider name ("openai", "ollama", "genai" or "gemini")
            **options: Provider options, e.g. ``client=`` to inject a vendor
                SDK client, or settings overrides such as ``api_key``,
                ``base_url``, ``host`` and ``timeout``

        Raises:
            UnsupportedProvider: If no provider is registered under ``provider``
        """
        self.provider_name = resolve_provider_name(provider)
        self.provider: ProviderAdapter = create_provider(provider, **options)

    def _build_request(
        self,
        request_class: Type[RequestT],
        request: Union[RequestT, Dict[str, Any], None],
        overrides: Dict[str, Any],
    ) -> RequestT:
        if isinstance(request, request_class) and not overrides:
            return request
        if isinstance(request, BaseModel):
            data = request.model_dump()
        else:
            data = dict(request or {})
        data.update(overrides)
        try:
            return request_class.model_validate(data)
        except ValidationError as e:
            raise ProviderError(
                f"Invalid {request_class.__name__}: {e}",
                provider=self.provider_name,
            ) from e

    def models(self) -> AsyncIterator[ModelInfo]:
        """List the provider's models lazily."""
        return self.provider.list_models()

    list_models = models

    async def embeddings(
        self,
        request: Union[EmbeddingRequest, Dict[str, Any], None] = None,
        **kwargs: Any,
    ) -> EmbeddingResult:
        """Embed one or many strings.

        Args:
            request: EmbeddingRequest or dict; keyword arguments override its fields

        Returns:
            EmbeddingResult with one embedding per input string, in input order
        """
        return await self.provider.embeddings(self._build_request(EmbeddingRequest, request, kwargs))

    async def chat(
        self,
        request: Union[ChatRequest, Dict[str, Any], None] = None,
        **kwargs: Any,
    ) -> ChatResult:
        """Run a non-streaming chat completion."""
        return await self.provider.chat(self._build_request(ChatRequest, request, kwargs))

    def chat_stream(
        self,
        request: Union[ChatRequest, Dict[str, Any], None] = None,
        **kwargs: Any,
    ) -> AsyncIterator[StreamFragment]:
        """Run a streaming chat completion.

        The request is validated immediately; the vendor call starts on the
        first iteration. Close the iterator (``aclose()``) to abandon the
        stream early.
        """
        return self.provider.chat_stream(self._build_request(ChatRequest, request, kwargs))

    def is_available(self) -> bool:
        return self.provider.is_available()


def create_client(provider: str, **options: Any) -> LLMClient:
    return LLMClient(provider, **options)
