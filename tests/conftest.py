"""Shared pytest fixtures for Unified LLM SDK tests."""

import pytest
from unittest.mock import AsyncMock, Mock

from unified_llm_sdk.config.constants import (
    GENAI_API_KEY_ENV_VARS,
    GENAI_LOCATION_ENV_VAR,
    GENAI_PROJECT_ENV_VAR,
    GENAI_VERTEXAI_ENV_VAR,
    OLLAMA_HOST_ENV_VAR,
    OLLAMA_TIMEOUT_ENV_VAR,
    OPENAI_API_KEY_ENV_VAR,
    OPENAI_BASE_URL_ENV_VAR,
    OPENAI_ORG_ENV_VAR,
    OPENAI_TIMEOUT_ENV_VAR,
)
from unified_llm_sdk.models.messages import (
    AssistantMessage,
    ChatRequest,
    SystemMessage,
    ToolCall,
    ToolDeclaration,
    ToolMessage,
    UserMessage,
)

ALL_ENV_VARS = (
    OPENAI_API_KEY_ENV_VAR,
    OPENAI_BASE_URL_ENV_VAR,
    OPENAI_ORG_ENV_VAR,
    OPENAI_TIMEOUT_ENV_VAR,
    OLLAMA_HOST_ENV_VAR,
    OLLAMA_TIMEOUT_ENV_VAR,
    GENAI_VERTEXAI_ENV_VAR,
    GENAI_PROJECT_ENV_VAR,
    GENAI_LOCATION_ENV_VAR,
    *GENAI_API_KEY_ENV_VARS,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: facade-level tests across providers")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from provider variables in the shell and any .env file."""
    for name in ALL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("unified_llm_sdk.config.settings.load_dotenv", lambda *args, **kwargs: False)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    env_vars = {
        "OPENAI_API_KEY": "test-openai-key",
        "GEMINI_API_KEY": "test-gemini-key",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def weather_tool():
    return ToolDeclaration(
        name="get_weather",
        description="Current weather for a city",
        parameters={
            "type": "object",
            "properties": {"city": {"type": "string"}},
            "required": ["city"],
        },
    )


@pytest.fixture
def simple_chat_request():
    return ChatRequest(
        model="test-model",
        messages=[
            SystemMessage(content="You are terse."),
            UserMessage(content="Hello"),
        ],
    )


@pytest.fixture
def tool_round_trip_request(weather_tool):
    """A conversation where the assistant already called a tool and got the result."""
    return ChatRequest(
        model="test-model",
        messages=[
            SystemMessage(content="You are terse."),
            UserMessage(content="Weather in NYC?"),
            AssistantMessage(
                content="",
                tool_calls=[ToolCall(id="call_1", name="get_weather", arguments={"city": "nyc"})],
            ),
            ToolMessage(content='{"temp_f": 71}', tool_call_id="call_1"),
        ],
        tools=[weather_tool],
    )


@pytest.fixture
def mock_openai_client():
    """Mock openai.AsyncOpenAI."""
    client = Mock()
    client.chat.completions.create = AsyncMock()
    client.embeddings.create = AsyncMock()
    client.models.list = Mock()
    return client


@pytest.fixture
def mock_ollama_client():
    """Mock ollama.AsyncClient."""
    client = Mock()
    client.list = AsyncMock()
    client.embed = AsyncMock()
    client.chat = AsyncMock()
    return client


@pytest.fixture
def mock_genai_client():
    """Mock google.genai.Client; only the ``aio`` surface is used."""
    client = Mock()
    client.aio.models.list = AsyncMock()
    client.aio.models.embed_content = AsyncMock()
    client.aio.models.generate_content = AsyncMock()
    client.aio.models.generate_content_stream = AsyncMock()
    return client
