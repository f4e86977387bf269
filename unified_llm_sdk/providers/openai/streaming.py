from __future__ import annotations

from contextlib import aclosing
from typing import Any, AsyncGenerator, Dict

from ...models.generation import StreamFragment
from ...streaming import StreamAdapter, StreamDelta, ToolCallDelta, closing_stream
from .parsers import reasoning_text


def normalize_chunk(chunk: Any) -> StreamDelta:
    """Project a ChatCompletionChunk onto a StreamDelta.

    Tool-call fragments are keyed by ``index``; the id and function name
    usually arrive on the first fragment of a slot, the argument text is
    spread over the following ones. With ``include_usage`` the final chunk
    has no choices and carries the usage.
    """
    content = None
    reasoning = None
    tool_calls = []

    choices = getattr(chunk, "choices", None) or []
    if choices and choices[0].delta is not None:
        delta = choices[0].delta
        content = delta.content
        reasoning = reasoning_text(delta)
        for call in delta.tool_calls or []:
            # continuation fragments omit the type
            if getattr(call, "type", None) not in (None, "function"):
                continue
            function = call.function
            tool_calls.append(ToolCallDelta(
                index=call.index,
                id=call.id,
                name=function.name if function is not None else None,
                arguments=function.arguments if function is not None else None,
            ))

    return StreamDelta(
        provider="openai",
        content=content,
        reasoning=reasoning,
        tool_calls=tool_calls,
        usage=getattr(chunk, "usage", None),
        raw_event=chunk,
    )


async def stream_chat_completions(
    client: Any,
    payload: Dict[str, Any],
    adapter: StreamAdapter,
) -> AsyncGenerator[StreamFragment, None]:
    """Stream chat.completions.create and yield normalized fragments.

    The vendor stream is closed whether the stream finishes, fails or is
    abandoned by the consumer.
    """
    stream = await client.chat.completions.create(**payload)
    async with closing_stream(stream), aclosing(adapter.accumulate(stream, normalize_chunk)) as fragments:
        async for fragment in fragments:
            yield fragment
