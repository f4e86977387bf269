"""Unit tests for the Ollama provider."""

from types import SimpleNamespace

import pytest
from ollama import AsyncClient, ResponseError

from unified_llm_sdk.models.generation import EmbeddingRequest, StreamFragment, Usage
from unified_llm_sdk.models.messages import AssistantMessage, ChatRequest, ToolCall, UserMessage
from unified_llm_sdk.providers.base import TransportError
from unified_llm_sdk.providers.ollama import OllamaProvider
from unified_llm_sdk.providers.ollama.payloads import build_chat_payload
from unified_llm_sdk.providers.ollama.streaming import ChunkNormalizer
from tests.helpers.streaming_mocks import (
    MockAsyncGeneratorStream,
    ollama_chunk,
    ollama_tool_call,
)


class TestOllamaPayloads:

    def test_tool_result_named_after_call(self, tool_round_trip_request):
        messages = build_chat_payload(tool_round_trip_request)["messages"]

        assert messages[2] == {
            "role": "assistant",
            "content": "",
            "tool_calls": [{"function": {"name": "get_weather", "arguments": {"city": "nyc"}}}],
        }
        assert messages[3] == {
            "role": "tool",
            "content": '{"temp_f": 71}',
            "tool_name": "get_weather",
        }

    def test_assistant_reasoning_sent_as_thinking(self):
        request = ChatRequest(
            model="qwen3",
            messages=[
                UserMessage(content="2+2?"),
                AssistantMessage(content="4", reasoning="simple sum"),
            ],
        )

        assert build_chat_payload(request)["messages"][1] == {
            "role": "assistant",
            "content": "4",
            "thinking": "simple sum",
        }

    def test_options_pass_through(self):
        request = ChatRequest(
            model="qwen3",
            messages=[UserMessage(content="hi")],
            options={"think": True, "options": {"temperature": 0}},
        )

        payload = build_chat_payload(request)

        assert payload["think"] is True
        assert payload["options"] == {"temperature": 0}
        assert "tools" not in payload


class TestOllamaChunkNormalization:

    def test_tool_calls_get_running_slots(self):
        normalize_chunk = ChunkNormalizer()
        first = normalize_chunk(ollama_chunk(tool_calls=[
            ollama_tool_call("get_weather", {"city": "nyc"}),
            ollama_tool_call("get_time", {"tz": "EST"}),
        ]))
        second = normalize_chunk(ollama_chunk(tool_calls=[ollama_tool_call("get_news", {})]))

        assert [(call.index, call.name) for call in first.tool_calls] == [(0, "get_weather"), (1, "get_time")]
        assert first.tool_calls[0].arguments == '{"city": "nyc"}'
        assert [(call.index, call.name) for call in second.tool_calls] == [(2, "get_news")]

    def test_slots_are_per_stream(self):
        chunk = ollama_chunk(tool_calls=[ollama_tool_call("get_weather", {"city": "nyc"})])
        ChunkNormalizer()(chunk)

        assert ChunkNormalizer()(chunk).tool_calls[0].index == 0

    def test_usage_only_when_counters_present(self):
        normalize_chunk = ChunkNormalizer()
        assert normalize_chunk(ollama_chunk(content="hi")).usage is None
        assert normalize_chunk(ollama_chunk(prompt_eval_count=5)).usage == {
            "prompt_eval_count": 5,
            "eval_count": None,
        }


class TestOllamaProvider:

    @pytest.fixture
    def provider(self, mock_ollama_client):
        return OllamaProvider(client=mock_ollama_client)

    @pytest.mark.asyncio
    async def test_chat(self, provider, mock_ollama_client, simple_chat_request):
        mock_ollama_client.chat.return_value = SimpleNamespace(
            message=SimpleNamespace(
                content="",
                thinking="The user wants weather",
                tool_calls=[ollama_tool_call("get_weather", {"city": "nyc"})],
            ),
            prompt_eval_count=7,
            eval_count=3,
        )

        result = await provider.chat(simple_chat_request)

        assert result.content == ""
        assert result.reasoning == "The user wants weather"
        assert result.tool_calls == [ToolCall(id="get_weather", name="get_weather", arguments={"city": "nyc"})]
        assert result.usage == Usage(prompt_tokens=7, completion_tokens=3, total_tokens=10)

    @pytest.mark.asyncio
    async def test_chat_without_counters_has_no_usage(self, provider, mock_ollama_client, simple_chat_request):
        mock_ollama_client.chat.return_value = SimpleNamespace(
            message=SimpleNamespace(content="hi", thinking=None, tool_calls=None),
            prompt_eval_count=None,
            eval_count=None,
        )

        result = await provider.chat(simple_chat_request)

        assert result.content == "hi"
        assert result.usage is None

    @pytest.mark.asyncio
    async def test_chat_stream(self, provider, mock_ollama_client, simple_chat_request):
        stream = MockAsyncGeneratorStream([
            ollama_chunk(thinking="Checking the weather"),
            ollama_chunk(content="Let me look.", thinking="tool needed"),
            ollama_chunk(tool_calls=[ollama_tool_call("get_weather", {"city": "nyc"})]),
            ollama_chunk(prompt_eval_count=7, eval_count=3),
        ])
        mock_ollama_client.chat.return_value = stream

        fragments = [fragment async for fragment in provider.chat_stream(simple_chat_request)]

        assert mock_ollama_client.chat.call_args.kwargs["stream"] is True
        assert fragments == [
            StreamFragment(reasoning="Checking the weather"),
            StreamFragment(content="Let me look."),
            StreamFragment(reasoning="tool needed"),
            StreamFragment(tool_calls=[ToolCall(id="get_weather", name="get_weather", arguments={"city": "nyc"})]),
            StreamFragment(usage=Usage(prompt_tokens=7, completion_tokens=3, total_tokens=10)),
        ]
        assert stream.closed is True

    @pytest.mark.asyncio
    async def test_chat_stream_without_tools_or_usage(self, provider, mock_ollama_client, simple_chat_request):
        mock_ollama_client.chat.return_value = MockAsyncGeneratorStream([
            ollama_chunk(content="a"),
            ollama_chunk(content="b"),
        ])

        fragments = [fragment async for fragment in provider.chat_stream(simple_chat_request)]

        assert fragments == [StreamFragment(content="a"), StreamFragment(content="b")]

    @pytest.mark.asyncio
    async def test_chat_stream_tool_calls_in_separate_chunks(self, provider, mock_ollama_client, simple_chat_request):
        mock_ollama_client.chat.return_value = MockAsyncGeneratorStream([
            ollama_chunk(tool_calls=[ollama_tool_call("get_weather", {"city": "nyc"})]),
            ollama_chunk(tool_calls=[ollama_tool_call("get_time", {"tz": "EST"})]),
            ollama_chunk(prompt_eval_count=12, eval_count=8),
        ])

        fragments = [fragment async for fragment in provider.chat_stream(simple_chat_request)]

        assert fragments == [
            StreamFragment(tool_calls=[
                ToolCall(id="get_weather", name="get_weather", arguments={"city": "nyc"}),
                ToolCall(id="get_time", name="get_time", arguments={"tz": "EST"}),
            ]),
            StreamFragment(usage=Usage(prompt_tokens=12, completion_tokens=8, total_tokens=20)),
        ]

    @pytest.mark.asyncio
    async def test_chat_stream_abandoned_releases_stream(self, provider, mock_ollama_client, simple_chat_request):
        stream = MockAsyncGeneratorStream([
            ollama_chunk(content="Hello"),
            ollama_chunk(content=" world", prompt_eval_count=1, eval_count=2),
        ])
        mock_ollama_client.chat.return_value = stream

        fragments = provider.chat_stream(simple_chat_request)
        await fragments.__anext__()
        await fragments.aclose()

        assert stream.closed is True

    @pytest.mark.asyncio
    async def test_chat_error(self, provider, mock_ollama_client, simple_chat_request):
        mock_ollama_client.chat.side_effect = ResponseError("model 'missing' not found", 404)

        with pytest.raises(TransportError) as exc_info:
            await provider.chat(simple_chat_request)

        assert exc_info.value.status_code == 404
        assert exc_info.value.is_retryable is False
        assert "Ollama API error" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_embeddings(self, provider, mock_ollama_client):
        mock_ollama_client.embed.return_value = SimpleNamespace(
            embeddings=[[0.1, 0.2], [0.3, 0.4]],
            prompt_eval_count=6,
        )

        result = await provider.embeddings(EmbeddingRequest(model="nomic-embed-text", input=["a", "b"]))

        assert [embedding.values for embedding in result.embeddings] == [[0.1, 0.2], [0.3, 0.4]]
        assert result.usage.prompt_tokens == 6
        assert result.usage.total_tokens == 6
        assert mock_ollama_client.embed.call_args.kwargs == {"model": "nomic-embed-text", "input": ["a", "b"]}

    @pytest.mark.asyncio
    async def test_list_models(self, provider, mock_ollama_client):
        mock_ollama_client.list.return_value = SimpleNamespace(models=[
            SimpleNamespace(model="llama3.2:latest"),
            SimpleNamespace(model="nomic-embed-text:latest"),
        ])

        names = [model.name async for model in provider.list_models()]

        assert names == ["llama3.2:latest", "nomic-embed-text:latest"]


class TestOllamaConfiguration:

    def test_always_available(self):
        assert OllamaProvider().is_available() is True

    def test_lazy_client(self, monkeypatch):
        monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")
        provider = OllamaProvider()

        assert provider._client is None
        assert isinstance(provider.client, AsyncClient)
        assert provider._settings.host == "http://gpu-box:11434"
