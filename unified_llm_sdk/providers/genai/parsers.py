from typing import Any, List, Optional, Tuple

from ...core.normalization.embeddings import normalize_embeddings, sum_token_counts
from ...core.normalization.usage import normalize_usage
from ...models.generation import ChatResult, EmbeddingResult
from ...models.messages import ToolCall


def response_parts(response: Any) -> List[Any]:
    """Parts of the first candidate, or an empty list."""
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return []
    content = candidates[0].content
    if content is None or not content.parts:
        return []
    return list(content.parts)


def split_text(parts: List[Any]) -> Tuple[str, str]:
    """Split text parts into (content, reasoning); thought parts are reasoning."""
    content = []
    reasoning = []
    for part in parts:
        if not part.text:
            continue
        if part.thought:
            reasoning.append(part.text)
        else:
            content.append(part.text)
    return "".join(content), "".join(reasoning)


def parse_function_calls(parts: List[Any]) -> Optional[List[ToolCall]]:
    calls = [
        ToolCall(
            id=part.function_call.id or part.function_call.name,
            name=part.function_call.name,
            arguments=dict(part.function_call.args or {}),
        )
        for part in parts
        if part.function_call is not None
    ]
    return calls or None


def parse_generate_response(response: Any) -> ChatResult:
    parts = response_parts(response)
    content, reasoning = split_text(parts)
    return ChatResult(
        content=content,
        reasoning=reasoning or None,
        tool_calls=parse_function_calls(parts),
        usage=normalize_usage(getattr(response, "usage_metadata", None), "genai"),
    )


def parse_embed_response(response: Any) -> EmbeddingResult:
    """Embeddings are positional; per-item statistics carry truncation and token counts."""
    items = []
    counts = []
    for index, embedding in enumerate(response.embeddings or []):
        statistics = embedding.statistics
        items.append((
            index,
            embedding.values or [],
            statistics.truncated if statistics is not None else None,
        ))
        if statistics is not None and statistics.token_count is not None:
            counts.append(int(statistics.token_count))
    return normalize_embeddings(items, sum_token_counts(counts))
