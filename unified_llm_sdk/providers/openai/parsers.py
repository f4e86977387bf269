from __future__ import annotations

from typing import Any, List, Optional

from ...core.normalization.embeddings import normalize_embeddings
from ...core.normalization.usage import normalize_usage
from ...models.generation import ChatResult, EmbeddingResult, EmbeddingUsage
from ...models.messages import ToolCall
from ...streaming.accumulator import parse_tool_arguments


def reasoning_text(message: Any) -> Optional[str]:
    """Reasoning text from an OpenAI-compatible message or delta.

    The official API does not return reasoning in Chat Completions, but
    compatible servers (vLLM, DeepSeek, Ollama's /v1) send it as
    ``reasoning_content`` or ``reasoning``.
    """
    for attr in ("reasoning_content", "reasoning"):
        value = getattr(message, attr, None)
        if isinstance(value, str) and value:
            return value
    return None


def parse_tool_calls(message: Any) -> Optional[List[ToolCall]]:
    """Parse the function tool calls of a Chat Completions message."""
    raw_calls = getattr(message, "tool_calls", None)
    if not raw_calls:
        return None

    calls = []
    for call in raw_calls:
        if getattr(call, "type", "function") != "function":
            continue
        name = call.function.name
        calls.append(ToolCall(
            id=call.id or name,
            name=name,
            arguments=parse_tool_arguments("openai", name, call.function.arguments),
        ))
    return calls


def parse_chat_completion(response: Any) -> ChatResult:
    """Normalize a ChatCompletion into a ChatResult."""
    choices = getattr(response, "choices", None) or []
    message = choices[0].message if choices else None

    return ChatResult(
        content=(message.content or "") if message is not None else "",
        reasoning=reasoning_text(message) if message is not None else None,
        tool_calls=parse_tool_calls(message) if message is not None else None,
        usage=normalize_usage(getattr(response, "usage", None), "openai"),
    )


def parse_embeddings(response: Any) -> EmbeddingResult:
    """Normalize a CreateEmbeddingResponse; items are index-tagged and may arrive unordered."""
    usage = None
    if getattr(response, "usage", None) is not None:
        usage = EmbeddingUsage(
            prompt_tokens=response.usage.prompt_tokens,
            total_tokens=response.usage.total_tokens,
        )
    return normalize_embeddings(
        ((item.index, item.embedding, None) for item in response.data),
        usage,
    )
