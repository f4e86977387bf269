from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .messages import ToolCall


class Usage(BaseModel):
    """
    Canonical token accounting for one request/response exchange.

    Every field is optional because vendors disclose different subsets.
    An absent field means the vendor did not report it, never zero.
    """
    completion_tokens: Optional[int] = Field(None, ge=0)
    prompt_tokens: Optional[int] = Field(None, ge=0)
    total_tokens: Optional[int] = Field(None, ge=0)
    reasoning_tokens: Optional[int] = Field(None, ge=0)
    cached_tokens: Optional[int] = Field(None, ge=0)

    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


class ChatResult(BaseModel):
    """Non-streaming chat response."""
    content: str = ""
    reasoning: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    usage: Optional[Usage] = None


class StreamFragment(BaseModel):
    """
    One partial projection of a streamed chat response.

    Exactly one field is populated per fragment. Serialize with
    ``model_dump(exclude_none=True)`` to get the partial shape.
    """
    content: Optional[str] = None
    reasoning: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    usage: Optional[Usage] = None


class EmbeddingRequest(BaseModel):
    model: str
    input: Union[str, List[str]]
    dimensions: Optional[int] = Field(None, ge=1)

    def inputs(self) -> List[str]:
        return [self.input] if isinstance(self.input, str) else list(self.input)


class Embedding(BaseModel):
    values: List[float]
    truncated: Optional[bool] = None


class EmbeddingUsage(BaseModel):
    prompt_tokens: Optional[int] = Field(None, ge=0)
    total_tokens: Optional[int] = Field(None, ge=0)


class EmbeddingResult(BaseModel):
    """Embeddings in the same order as the request's input strings."""
    embeddings: List[Embedding]
    usage: Optional[EmbeddingUsage] = None


class ModelInfo(BaseModel):
    name: str
