"""
Provider settings resolved from keyword overrides and the environment.

Environment variables (optionally from a .env file via python-dotenv) are
the fallback for anything not passed explicitly to a provider constructor.
"""

import os
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .constants import (
    DEFAULT_OLLAMA_HOST,
    DEFAULT_OLLAMA_TIMEOUT,
    DEFAULT_OPENAI_TIMEOUT,
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


def env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to ``default`` when unset or invalid."""
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _overrides(overrides: dict) -> dict:
    return {k: v for k, v in overrides.items() if v is not None}


class OpenAISettings(BaseModel):
    """Settings for openai.AsyncOpenAI."""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    organization: Optional[str] = None
    timeout: float = Field(default=DEFAULT_OPENAI_TIMEOUT, gt=0)

    @classmethod
    def from_env(cls, **overrides: Any) -> "OpenAISettings":
        load_dotenv()
        values = {
            "api_key": os.getenv(OPENAI_API_KEY_ENV_VAR),
            "base_url": os.getenv(OPENAI_BASE_URL_ENV_VAR),
            "organization": os.getenv(OPENAI_ORG_ENV_VAR),
            "timeout": env_float(OPENAI_TIMEOUT_ENV_VAR, DEFAULT_OPENAI_TIMEOUT),
        }
        values.update(_overrides(overrides))
        return cls(**values)


class OllamaSettings(BaseModel):
    """Settings for ollama.AsyncClient."""
    host: str = DEFAULT_OLLAMA_HOST
    timeout: float = Field(default=DEFAULT_OLLAMA_TIMEOUT, gt=0)

    @classmethod
    def from_env(cls, **overrides: Any) -> "OllamaSettings":
        load_dotenv()
        values = {
            "host": os.getenv(OLLAMA_HOST_ENV_VAR) or DEFAULT_OLLAMA_HOST,
            "timeout": env_float(OLLAMA_TIMEOUT_ENV_VAR, DEFAULT_OLLAMA_TIMEOUT),
        }
        values.update(_overrides(overrides))
        return cls(**values)


class GenAISettings(BaseModel):
    """Settings for google.genai.Client (Gemini API or Vertex AI)."""
    api_key: Optional[str] = None
    vertexai: bool = False
    project: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_env(cls, **overrides: Any) -> "GenAISettings":
        load_dotenv()
        api_key = None
        for name in GENAI_API_KEY_ENV_VARS:
            api_key = os.getenv(name)
            if api_key:
                break
        values = {
            "api_key": api_key,
            "vertexai": env_bool(GENAI_VERTEXAI_ENV_VAR),
            "project": os.getenv(GENAI_PROJECT_ENV_VAR),
            "location": os.getenv(GENAI_LOCATION_ENV_VAR),
        }
        values.update(_overrides(overrides))
        return cls(**values)

    @property
    def configured(self) -> bool:
        if self.vertexai:
            return bool(self.project)
        return bool(self.api_key)
