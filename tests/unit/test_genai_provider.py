"""Unit tests for the Google GenAI provider."""

from types import SimpleNamespace

import pytest
from google import genai

from unified_llm_sdk.models.generation import EmbeddingRequest, StreamFragment, Usage
from unified_llm_sdk.models.messages import ChatRequest, ToolCall, UserMessage
from unified_llm_sdk.providers.base import ProviderError, TransportError
from unified_llm_sdk.providers.genai import GenAIProvider
from unified_llm_sdk.providers.genai.payloads import (
    build_embed_payload,
    build_generate_payload,
    function_response_payload,
)
from unified_llm_sdk.providers.genai.streaming import ChunkNormalizer
from tests.helpers.mock_exceptions import MockGenAIAPIError
from tests.helpers.streaming_mocks import (
    MockAsyncGeneratorStream,
    async_iter,
    genai_embedding,
    genai_function_call,
    genai_part,
    genai_response,
    genai_usage,
)


class TestGenAIPayloads:

    def test_contents_and_roles(self, tool_round_trip_request):
        contents = build_generate_payload(tool_round_trip_request)["contents"]

        assert [content.role for content in contents] == ["user", "model", "user"]
        assert contents[0].parts[0].text == "Weather in NYC?"

        function_call = contents[1].parts[0].function_call
        assert function_call.name == "get_weather"
        assert function_call.args == {"city": "nyc"}

        function_response = contents[2].parts[0].function_response
        assert function_response.name == "get_weather"
        assert function_response.response == {"temp_f": 71}

    def test_system_messages_become_system_instruction(self, tool_round_trip_request):
        config = build_generate_payload(tool_round_trip_request)["config"]

        assert config.system_instruction is not None
        assert "You are terse." in str(config.system_instruction)

    def test_tools_become_function_declarations(self, tool_round_trip_request):
        config = build_generate_payload(tool_round_trip_request)["config"]

        assert len(config.tools) == 1
        assert [d.name for d in config.tools[0].function_declarations] == ["get_weather"]

    def test_options_merged_into_config(self):
        request = ChatRequest(
            model="gemini-2.5-flash",
            messages=[UserMessage(content="hi")],
            options={"temperature": 0.2, "max_output_tokens": 64},
        )

        payload = build_generate_payload(request)

        assert payload["model"] == "gemini-2.5-flash"
        assert payload["config"].temperature == 0.2
        assert payload["config"].max_output_tokens == 64
        assert payload["config"].tools is None
        assert payload["config"].system_instruction is None

    def test_function_response_payload(self):
        assert function_response_payload('{"temp_f": 71}') == {"temp_f": 71}
        assert function_response_payload("sunny") == {"result": "sunny"}
        assert function_response_payload("[1, 2]") == {"result": [1, 2]}

    def test_embed_payload_on_vertex(self):
        request = EmbeddingRequest(model="text-embedding-005", input=["a"], dimensions=256)

        payload = build_embed_payload(request, vertexai=True)

        assert payload["contents"] == ["a"]
        assert payload["config"].auto_truncate is True
        assert payload["config"].output_dimensionality == 256

    def test_embed_payload_on_gemini_api(self):
        payload = build_embed_payload(EmbeddingRequest(model="gemini-embedding-001", input="a"))

        assert payload["config"].auto_truncate is None
        assert payload["config"].output_dimensionality is None


class TestGenAIChunkNormalization:

    def test_function_calls_take_consecutive_slots_across_chunks(self):
        normalize = ChunkNormalizer()

        first = normalize(genai_response([
            genai_part(function_call=genai_function_call("a", {"x": 1}, id="fc_a")),
            genai_part(function_call=genai_function_call("b")),
        ]))
        second = normalize(genai_response([
            genai_part(function_call=genai_function_call("c", {"y": 2})),
        ]))

        assert [(call.index, call.name) for call in first.tool_calls] == [(0, "a"), (1, "b")]
        assert [(call.index, call.name) for call in second.tool_calls] == [(2, "c")]
        assert first.tool_calls[0].arguments == '{"x": 1}'
        assert first.tool_calls[1].arguments == "{}"

    def test_thought_parts_are_reasoning(self):
        delta = ChunkNormalizer()(genai_response([
            genai_part(text="pondering", thought=True),
            genai_part(text="answer"),
        ]))

        assert delta.content == "answer"
        assert delta.reasoning == "pondering"

    def test_usage_only_chunk(self):
        delta = ChunkNormalizer()(genai_response(None, usage_metadata=genai_usage(3, 9)))

        assert delta.content is None
        assert delta.tool_calls == []
        assert delta.usage.total_token_count == 9


class TestGenAIProvider:

    @pytest.fixture
    def provider(self, mock_genai_client):
        return GenAIProvider(client=mock_genai_client)

    @pytest.mark.asyncio
    async def test_chat(self, provider, mock_genai_client, simple_chat_request):
        mock_genai_client.aio.models.generate_content.return_value = genai_response(
            [
                genai_part(text="User wants weather", thought=True),
                genai_part(text="Looking it up."),
                genai_part(function_call=genai_function_call("get_weather", {"city": "nyc"})),
            ],
            usage_metadata=genai_usage(prompt_token_count=10, total_token_count=15, thoughts_token_count=2),
        )

        result = await provider.chat(simple_chat_request)

        assert result.content == "Looking it up."
        assert result.reasoning == "User wants weather"
        assert result.tool_calls == [ToolCall(id="get_weather", name="get_weather", arguments={"city": "nyc"})]
        assert result.usage == Usage(prompt_tokens=10, completion_tokens=5, total_tokens=15, reasoning_tokens=2)

    @pytest.mark.asyncio
    async def test_chat_stream(self, provider, mock_genai_client, simple_chat_request):
        stream = MockAsyncGeneratorStream([
            genai_response([genai_part(text="Checking")]),
            genai_response([genai_part(function_call=genai_function_call("get_weather", {"city": "nyc"}, id="fc_1"))]),
            genai_response(
                [genai_part(function_call=genai_function_call("get_time", {"tz": "EST"}))],
                usage_metadata=genai_usage(prompt_token_count=10, total_token_count=10),
            ),
        ])
        mock_genai_client.aio.models.generate_content_stream.return_value = stream

        fragments = [fragment async for fragment in provider.chat_stream(simple_chat_request)]

        assert fragments == [
            StreamFragment(content="Checking"),
            StreamFragment(tool_calls=[
                ToolCall(id="fc_1", name="get_weather", arguments={"city": "nyc"}),
                ToolCall(id="get_time", name="get_time", arguments={"tz": "EST"}),
            ]),
            StreamFragment(usage=Usage(prompt_tokens=10, total_tokens=10)),
        ]
        assert stream.closed is True

    @pytest.mark.asyncio
    async def test_chat_stream_abandoned_releases_stream(self, provider, mock_genai_client, simple_chat_request):
        stream = MockAsyncGeneratorStream([
            genai_response([genai_part(text="Hello")]),
            genai_response([genai_part(text=" world")], usage_metadata=genai_usage(1, 3)),
        ])
        mock_genai_client.aio.models.generate_content_stream.return_value = stream

        fragments = provider.chat_stream(simple_chat_request)
        assert await fragments.__anext__() == StreamFragment(content="Hello")
        await fragments.aclose()

        assert stream.closed is True
        assert stream.yielded == 1

    @pytest.mark.asyncio
    async def test_chat_error(self, provider, mock_genai_client, simple_chat_request):
        mock_genai_client.aio.models.generate_content.side_effect = MockGenAIAPIError(503, "UNAVAILABLE")

        with pytest.raises(TransportError) as exc_info:
            await provider.chat(simple_chat_request)

        assert exc_info.value.status_code == 503
        assert exc_info.value.is_retryable is True
        assert str(exc_info.value) == "Google GenAI API error: UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_embeddings(self, provider, mock_genai_client):
        mock_genai_client.aio.models.embed_content.return_value = SimpleNamespace(embeddings=[
            genai_embedding([0.1], truncated=False, token_count=3),
            genai_embedding([0.2], truncated=True, token_count=4.0),
        ])

        result = await provider.embeddings(EmbeddingRequest(model="gemini-embedding-001", input=["a", "b"]))

        assert [embedding.values for embedding in result.embeddings] == [[0.1], [0.2]]
        assert [embedding.truncated for embedding in result.embeddings] == [False, True]
        assert result.usage.prompt_tokens == 7
        assert result.usage.total_tokens == 7

    @pytest.mark.asyncio
    async def test_embeddings_without_statistics(self, provider, mock_genai_client):
        mock_genai_client.aio.models.embed_content.return_value = SimpleNamespace(embeddings=[
            genai_embedding([0.1]),
        ])

        result = await provider.embeddings(EmbeddingRequest(model="gemini-embedding-001", input="a"))

        assert result.embeddings[0].truncated is None
        assert result.usage is None

    @pytest.mark.asyncio
    async def test_list_models_skips_unnamed(self, provider, mock_genai_client):
        mock_genai_client.aio.models.list.return_value = async_iter([
            SimpleNamespace(name="models/gemini-2.5-flash"),
            SimpleNamespace(name=None),
            SimpleNamespace(name="models/gemini-embedding-001"),
        ])

        names = [model.name async for model in provider.list_models()]

        assert names == ["models/gemini-2.5-flash", "models/gemini-embedding-001"]


class TestGenAIConfiguration:

    def test_missing_credentials(self):
        provider = GenAIProvider()

        assert provider.is_available() is False
        with pytest.raises(ProviderError):
            provider.client

    def test_api_key_from_environment(self, mock_env_vars):
        provider = GenAIProvider()

        assert provider.is_available() is True
        assert isinstance(provider.client, genai.Client)

    def test_google_api_key_fallback(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "test-google-key")

        assert GenAIProvider()._settings.api_key == "test-google-key"

    def test_vertex_requires_project(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_GENAI_USE_VERTEXAI", "true")
        assert GenAIProvider().is_available() is False

        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "my-project")
        assert GenAIProvider().is_available() is True
