"""
Provider Adapters Layer

This layer contains all LLM provider-specific implementations.
Each provider adapter translates between the SDK's normalized interface
and the vendor SDK's request, response and stream shapes.

Vendor packages are imported through ``providers.registry`` so that the
streaming layer can depend on ``providers.base`` without pulling in every
vendor SDK.
"""

from .base import (
    MalformedToolArguments,
    ProviderAdapter,
    ProviderError,
    TransportError,
    UnsupportedProvider,
)

__all__ = [
    "MalformedToolArguments",
    "ProviderAdapter",
    "ProviderError",
    "TransportError",
    "UnsupportedProvider",
]
