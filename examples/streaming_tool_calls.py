"""
Example: Streaming Chat with Tool Calls

This example streams a chat completion that may call a tool, prints
fragments as they arrive, then answers the tool call and streams the
follow-up. Set PROVIDER/MODEL to try another vendor, e.g.
PROVIDER=ollama MODEL=qwen3.
"""

import asyncio
import json
import os

from unified_llm_sdk import (
    AssistantMessage,
    ChatRequest,
    LLMClient,
    ToolDeclaration,
    ToolMessage,
    UserMessage,
    collect_stream,
)

PROVIDER = os.getenv("PROVIDER", "openai")
MODEL = os.getenv("MODEL", "gpt-4o-mini")

WEATHER_TOOL = ToolDeclaration(
    name="get_weather",
    description="Current weather for a city",
    parameters={
        "type": "object",
        "properties": {"city": {"type": "string"}},
        "required": ["city"],
    },
)


def get_weather(city: str) -> dict:
    return {"city": city, "temp_f": 71, "conditions": "sunny"}


async def example_stream_fragments():
    """Print each fragment as it arrives."""
    print("=== Streaming Fragments ===\n")

    client = LLMClient(PROVIDER)
    request = ChatRequest(
        model=MODEL,
        messages=[UserMessage(content="What's the weather in New York?")],
        tools=[WEATHER_TOOL],
    )

    async for fragment in client.chat_stream(request):
        if fragment.content:
            print(fragment.content, end="", flush=True)
        elif fragment.reasoning:
            print(f"[thinking] {fragment.reasoning}")
        elif fragment.tool_calls:
            for call in fragment.tool_calls:
                print(f"\nTool call: {call.name}({json.dumps(call.arguments)})")
        elif fragment.usage:
            print(f"\nUsage: {fragment.usage.model_dump(exclude_none=True)}")


async def example_tool_round_trip():
    """Answer the tool call and stream the final reply."""
    print("\n=== Tool Round Trip ===\n")

    client = LLMClient(PROVIDER)
    messages = [UserMessage(content="What's the weather in New York?")]

    first = await collect_stream(client.chat_stream(model=MODEL, messages=messages, tools=[WEATHER_TOOL]))
    if not first.tool_calls:
        print(first.content)
        return

    messages.append(AssistantMessage(content=first.content, tool_calls=first.tool_calls))
    for call in first.tool_calls:
        result = get_weather(**call.arguments)
        messages.append(ToolMessage(content=json.dumps(result), tool_call_id=call.id))

    final = await collect_stream(client.chat_stream(model=MODEL, messages=messages, tools=[WEATHER_TOOL]))
    print(final.content)


async def example_early_exit():
    """Stop after the first fragment; the vendor stream is released."""
    print("\n=== Early Exit ===\n")

    client = LLMClient(PROVIDER)
    stream = client.chat_stream(model=MODEL, messages=[UserMessage(content="Count to one hundred.")])
    try:
        async for fragment in stream:
            print(f"First fragment: {fragment.model_dump(exclude_none=True)}")
            break
    finally:
        await stream.aclose()


async def main():
    await example_stream_fragments()
    await example_tool_round_trip()
    await example_early_exit()


if __name__ == "__main__":
    asyncio.run(main())
