"""
Provider registry.

Maps provider names to ProviderAdapter implementations. Lookup happens
before any client is constructed, so an unknown name fails without network
activity.
"""

from typing import Any, Dict, List, Type

from ..config.constants import GENAI, OLLAMA, OPENAI, PROVIDER_ALIASES
from .base import ProviderAdapter, UnsupportedProvider
from .genai.adapter import GenAIProvider
from .ollama.adapter import OllamaProvider
from .openai.adapter import OpenAIProvider

PROVIDERS: Dict[str, Type[ProviderAdapter]] = {
    OPENAI: OpenAIProvider,
    OLLAMA: OllamaProvider,
    GENAI: GenAIProvider,
}


def resolve_provider_name(name: str) -> str:
    """Normalize a provider name and resolve aliases (``gemini`` -> ``genai``)."""
    key = name.strip().lower()
    return PROVIDER_ALIASES.get(key, key)


def get_provider_class(name: str) -> Type[ProviderAdapter]:
    """
    Look up the adapter class registered under ``name``.

    Raises:
        UnsupportedProvider: If no provider is registered under that name
    """
    provider_class = PROVIDERS.get(resolve_provider_name(name))
    if provider_class is None:
        raise UnsupportedProvider(name)
    return provider_class


def create_provider(name: str, **options: Any) -> ProviderAdapter:
    """Instantiate the provider registered under ``name`` with ``options``."""
    return get_provider_class(name)(**options)


def register_provider(name: str, provider_class: Type[ProviderAdapter]) -> None:
    """Register a custom provider, replacing any existing one with that name."""
    if not (isinstance(provider_class, type) and issubclass(provider_class, ProviderAdapter)):
        raise TypeError(f"{provider_class!r} is not a ProviderAdapter subclass")
    PROVIDERS[resolve_provider_name(name)] = provider_class


def get_available_providers() -> List[str]:
    return sorted(PROVIDERS)
