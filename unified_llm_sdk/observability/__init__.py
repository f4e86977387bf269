"""Logging for provider adapters."""

from .logging import ProviderLogger

__all__ = ["ProviderLogger"]
