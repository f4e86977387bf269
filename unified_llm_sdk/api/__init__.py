"""
Public API Layer

This layer contains the public-facing API of the Unified LLM SDK.
All user-facing classes and functions should be exposed through this layer.
"""

from .client import LLMClient, create_client

__all__ = ["LLMClient", "create_client"]
