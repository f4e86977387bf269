"""Configuration for provider clients."""

from .settings import GenAISettings, OllamaSettings, OpenAISettings

__all__ = [
    "GenAISettings",
    "OllamaSettings",
    "OpenAISettings",
]
