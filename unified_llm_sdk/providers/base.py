"""
Base Provider Adapter Interface

This module defines the abstract base class for all LLM provider adapters
and the error taxonomy they raise. Every vendor implementation exposes the
same four operations so the facade can stay provider-blind.
"""

from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Optional

from ..models.generation import (
    ChatResult,
    EmbeddingRequest,
    EmbeddingResult,
    ModelInfo,
    StreamFragment,
)
from ..models.messages import ChatRequest


class ProviderAdapter(ABC):
    """
    Abstract base class for LLM provider adapters.

    The adapter is responsible for:
    - Translating the canonical request to the vendor request shape
    - Making API calls through the vendor SDK client
    - Normalizing responses, stream deltas and usage to SDK models
    - Mapping vendor errors to ProviderError subclasses

    Implementations hold only their vendor client handle. Any per-call
    state (stream accumulators, usage snapshots) is created inside the call.
    """

    name: str = ""

    @abstractmethod
    def list_models(self) -> AsyncIterator[ModelInfo]:
        """
        List the models the vendor exposes.

        Returns a lazy, finite async iterator. Each call starts a fresh
        listing; an iteration cannot be resumed once abandoned.
        """

    @abstractmethod
    async def embeddings(self, request: EmbeddingRequest) -> EmbeddingResult:
        """
        Embed one or many input strings.

        The n-th embedding in the result corresponds to the n-th input
        string regardless of the order the vendor returned them in.

        Raises:
            TransportError: When the vendor request fails
        """

    @abstractmethod
    async def chat(self, request: ChatRequest) -> ChatResult:
        """
        Run a non-streaming chat completion.

        Raises:
            TransportError: When the vendor request fails
            MalformedToolArguments: When a tool call's arguments cannot be parsed
        """

    @abstractmethod
    def chat_stream(self, request: ChatRequest) -> AsyncIterator[StreamFragment]:
        """
        Run a streaming chat completion.

        Yields content and reasoning fragments as they arrive, then at most
        one tool-call batch and at most one usage fragment once the vendor
        stream is exhausted. Abandoning the iterator releases the vendor
        stream without emitting the final fragments.

        Raises:
            TransportError: When the vendor request or stream fails
            MalformedToolArguments: When accumulated tool arguments are not valid JSON
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is configured well enough to make calls."""

    def get_provider_name(self) -> str:
        """
        Get the name of this provider.

        Returns the registered ``name`` when set, otherwise the class name
        without the 'Provider' suffix.
        """
        if self.name:
            return self.name
        class_name = self.__class__.__name__
        if class_name.endswith("Provider"):
            return class_name[:-8].lower()
        return class_name.lower()


class ProviderError(Exception):
    """
    Base exception for provider-related errors.

    Attributes:
        provider: Provider name
        status_code: HTTP status code if applicable
        retry_after: Seconds to wait before retry if applicable
        is_retryable: Whether the caller may retry (this SDK never retries)
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.retry_after = retry_after
        self.is_retryable = False
        self.original_error: Optional[BaseException] = None


class TransportError(ProviderError):
    """The vendor request or connection failed. Aborts any in-flight stream."""


class MalformedToolArguments(ProviderError):
    """Accumulated tool-call argument text is not a valid JSON document."""

    def __init__(self, provider: str, tool_name: str, arguments: Any):
        super().__init__(
            f"Tool call '{tool_name}' has malformed arguments: {arguments!r}",
            provider=provider,
        )
        self.tool_name = tool_name
        self.arguments = arguments


class UnsupportedProvider(ProviderError):
    """No provider implementation is registered under the requested name."""

    def __init__(self, provider: str):
        super().__init__(f"Unsupported provider: {provider!r}", provider=provider)
