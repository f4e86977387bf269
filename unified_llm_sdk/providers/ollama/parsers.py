from typing import Any, Dict, List, Optional

from ...core.normalization.embeddings import normalize_embeddings
from ...core.normalization.usage import normalize_usage
from ...models.generation import ChatResult, EmbeddingResult, EmbeddingUsage
from ...models.messages import ToolCall


def usage_counters(response: Any) -> Dict[str, Optional[int]]:
    return {
        "prompt_eval_count": getattr(response, "prompt_eval_count", None),
        "eval_count": getattr(response, "eval_count", None),
    }


def parse_tool_calls(message: Any) -> Optional[List[ToolCall]]:
    """Ollama returns arguments already decoded; the name doubles as the id."""
    raw_calls = getattr(message, "tool_calls", None)
    if raw_calls is None:
        return None
    return [
        ToolCall(
            id=call.function.name,
            name=call.function.name,
            arguments=dict(call.function.arguments or {}),
        )
        for call in raw_calls
    ]


def parse_chat_response(response: Any) -> ChatResult:
    message = response.message
    return ChatResult(
        content=message.content or "",
        reasoning=getattr(message, "thinking", None) or None,
        tool_calls=parse_tool_calls(message),
        usage=normalize_usage(usage_counters(response), "ollama"),
    )


def parse_embed_response(response: Any) -> EmbeddingResult:
    """Embeddings come back in input order; ``prompt_eval_count`` is the only counter."""
    usage = None
    if getattr(response, "prompt_eval_count", None) is not None:
        usage = EmbeddingUsage(
            prompt_tokens=response.prompt_eval_count,
            total_tokens=response.prompt_eval_count,
        )
    return normalize_embeddings(
        ((index, values, None) for index, values in enumerate(response.embeddings)),
        usage,
    )
