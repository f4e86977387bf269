"""Helper utilities for common streaming patterns."""

from __future__ import annotations

import inspect
from contextlib import asynccontextmanager
from typing import Any, AsyncIterable, AsyncIterator, List, Optional

from ..models.generation import ChatResult, StreamFragment, Usage
from ..models.messages import ToolCall


async def release_stream(stream: Any) -> None:
    """Release a vendor stream's connection.

    Async generators (ollama, google-genai) expose ``aclose()``; the
    openai ``AsyncStream`` exposes an awaitable ``close()``.
    """
    for method in ("aclose", "close"):
        closer = getattr(stream, method, None)
        if closer is None:
            continue
        result = closer()
        if inspect.isawaitable(result):
            await result
        return


@asynccontextmanager
async def closing_stream(stream: Any) -> AsyncIterator[Any]:
    """Scope a vendor stream so it is released on completion, error or abandonment."""
    try:
        yield stream
    finally:
        await release_stream(stream)


async def collect_stream(fragments: AsyncIterable[StreamFragment]) -> ChatResult:
    """Collect a fragment stream into a single ChatResult.

    Args:
        fragments: Fragments from ``chat_stream``

    Returns:
        ChatResult with concatenated content and reasoning
    """
    content: List[str] = []
    reasoning: List[str] = []
    tool_calls: List[ToolCall] = []
    usage: Optional[Usage] = None
    saw_tool_calls = False

    async for fragment in fragments:
        if fragment.content:
            content.append(fragment.content)
        if fragment.reasoning:
            reasoning.append(fragment.reasoning)
        if fragment.tool_calls is not None:
            saw_tool_calls = True
            tool_calls.extend(fragment.tool_calls)
        if fragment.usage is not None:
            usage = fragment.usage

    return ChatResult(
        content="".join(content),
        reasoning="".join(reasoning) if reasoning else None,
        tool_calls=tool_calls if saw_tool_calls else None,
        usage=usage,
    )
