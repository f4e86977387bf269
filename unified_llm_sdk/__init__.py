"""
Unified LLM SDK - one async interface over OpenAI, Ollama and Google GenAI.

This package provides a provider-blind client for:
- OpenAI (and OpenAI-compatible endpoints)
- Ollama (local models)
- Google GenAI (Gemini API and Vertex AI)

Features:
- Model listing, embeddings, chat and streaming chat
- Canonical messages, tool calls and token usage across vendors
- Tool-call fragment accumulation for streamed responses
- Vendor stream release on completion, error or early exit
"""

__version__ = "0.1.0"

from .api.client import LLMClient, create_client
from .models.generation import (
    ChatResult,
    Embedding,
    EmbeddingRequest,
    EmbeddingResult,
    EmbeddingUsage,
    ModelInfo,
    StreamFragment,
    Usage,
)
from .models.messages import (
    AssistantMessage,
    ChatRequest,
    SystemMessage,
    ToolCall,
    ToolDeclaration,
    ToolMessage,
    UserMessage,
)
from .providers.base import (
    MalformedToolArguments,
    ProviderAdapter,
    ProviderError,
    TransportError,
    UnsupportedProvider,
)
from .providers.registry import get_available_providers, register_provider
from .streaming.helpers import collect_stream

__all__ = [
    # Main client
    "LLMClient",
    "create_client",

    # Registry
    "register_provider",
    "get_available_providers",

    # Models
    "AssistantMessage",
    "ChatRequest",
    "ChatResult",
    "Embedding",
    "EmbeddingRequest",
    "EmbeddingResult",
    "EmbeddingUsage",
    "ModelInfo",
    "StreamFragment",
    "SystemMessage",
    "ToolCall",
    "ToolDeclaration",
    "ToolMessage",
    "Usage",
    "UserMessage",

    # Errors
    "MalformedToolArguments",
    "ProviderAdapter",
    "ProviderError",
    "TransportError",
    "UnsupportedProvider",

    # Streaming
    "collect_stream",
]
