from __future__ import annotations

import json
from contextlib import aclosing
from typing import Any, AsyncGenerator, Dict

from ...models.generation import StreamFragment
from ...streaming import StreamAdapter, StreamDelta, ToolCallDelta, closing_stream
from .parsers import usage_counters


class ChunkNormalizer:
    """Projects Ollama ChatResponse chunks onto StreamDeltas for one stream.

    Ollama sends every tool call whole and without an index, so each call
    gets the next free slot. Argument mappings are serialized to JSON text
    so they share the concatenation path of the other vendors.
    """

    def __init__(self):
        self._calls_seen = 0

    def __call__(self, chunk: Any) -> StreamDelta:
        message = chunk.message
        tool_calls = []
        for call in getattr(message, "tool_calls", None) or []:
            function = call.function
            arguments = None
            if function is not None and function.arguments is not None:
                arguments = json.dumps(dict(function.arguments))
            tool_calls.append(ToolCallDelta(
                index=self._calls_seen,
                name=function.name if function is not None else None,
                arguments=arguments,
            ))
            self._calls_seen += 1

        counters = usage_counters(chunk)
        usage = counters if any(value is not None for value in counters.values()) else None

        return StreamDelta(
            provider="ollama",
            content=message.content,
            reasoning=getattr(message, "thinking", None),
            tool_calls=tool_calls,
            usage=usage,
            raw_event=chunk,
        )


async def stream_chat(
    client: Any,
    payload: Dict[str, Any],
    adapter: StreamAdapter,
) -> AsyncGenerator[StreamFragment, None]:
    """Stream ``AsyncClient.chat`` and yield normalized fragments."""
    stream = await client.chat(**payload)
    async with closing_stream(stream), aclosing(adapter.accumulate(stream, ChunkNormalizer())) as fragments:
        async for fragment in fragments:
            yield fragment
