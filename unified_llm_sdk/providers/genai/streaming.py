from __future__ import annotations

import json
from contextlib import aclosing
from typing import Any, AsyncGenerator, Dict

from ...models.generation import StreamFragment
from ...streaming import StreamAdapter, StreamDelta, ToolCallDelta, closing_stream
from .parsers import response_parts, split_text


class ChunkNormalizer:
    """Projects GenerateContentResponse chunks onto StreamDeltas for one stream.

    Gemini sends every function call whole, so each call gets the next free
    slot instead of a vendor index.
    """

    def __init__(self):
        self._calls_seen = 0

    def __call__(self, chunk: Any) -> StreamDelta:
        parts = response_parts(chunk)
        content, reasoning = split_text(parts)

        tool_calls = []
        for part in parts:
            call = part.function_call
            if call is None:
                continue
            tool_calls.append(ToolCallDelta(
                index=self._calls_seen,
                id=call.id,
                name=call.name,
                arguments=json.dumps(dict(call.args or {})),
            ))
            self._calls_seen += 1

        return StreamDelta(
            provider="genai",
            content=content or None,
            reasoning=reasoning or None,
            tool_calls=tool_calls,
            usage=getattr(chunk, "usage_metadata", None),
            raw_event=chunk,
        )


async def stream_generate_content(
    client: Any,
    payload: Dict[str, Any],
    adapter: StreamAdapter,
) -> AsyncGenerator[StreamFragment, None]:
    """Stream ``aio.models.generate_content_stream`` and yield normalized fragments."""
    stream = await client.aio.models.generate_content_stream(**payload)
    async with closing_stream(stream), aclosing(adapter.accumulate(stream, ChunkNormalizer())) as fragments:
        async for fragment in fragments:
            yield fragment
