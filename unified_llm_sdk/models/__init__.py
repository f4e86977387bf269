from .generation import (
    ChatResult,
    Embedding,
    EmbeddingRequest,
    EmbeddingResult,
    EmbeddingUsage,
    ModelInfo,
    StreamFragment,
    Usage,
)
from .messages import (
    AssistantMessage,
    ChatRequest,
    Message,
    SystemMessage,
    ToolCall,
    ToolDeclaration,
    ToolMessage,
    UserMessage,
)

__all__ = [
    "AssistantMessage",
    "ChatRequest",
    "ChatResult",
    "Embedding",
    "EmbeddingRequest",
    "EmbeddingResult",
    "EmbeddingUsage",
    "Message",
    "ModelInfo",
    "StreamFragment",
    "SystemMessage",
    "ToolCall",
    "ToolDeclaration",
    "ToolMessage",
    "Usage",
    "UserMessage",
]
