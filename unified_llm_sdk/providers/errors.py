"""
Error mapping utilities for provider adapters.

This module provides consistent error mapping across all providers,
converting vendor SDK and transport errors to TransportError instances.
"""

from typing import Optional

import httpx

from .base import ProviderError, TransportError


PROVIDER_LABELS = {
    "openai": "OpenAI",
    "ollama": "Ollama",
    "genai": "Google GenAI",
}


class ErrorMapper:
    """Maps provider-specific errors to standardized ProviderError."""

    # Common HTTP status codes that indicate retryable errors
    RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

    RATE_LIMIT_PHRASES = ('rate limit', 'too many requests', 'quota exceeded',
                          'too_many_requests', 'resource_exhausted')

    @staticmethod
    def get_status_code(error: Exception) -> Optional[int]:
        """
        Extract an HTTP status code from a vendor error.

        OpenAI and Ollama errors expose ``status_code``; google-genai
        errors expose ``code``.
        """
        for attr in ('status_code', 'code'):
            value = getattr(error, attr, None)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        response = getattr(error, 'response', None)
        value = getattr(response, 'status_code', None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Determine if an error is retryable.

        Args:
            error: The exception to check

        Returns:
            bool: True if the error is retryable
        """
        status_code = ErrorMapper.get_status_code(error)
        if status_code is not None and status_code in ErrorMapper.RETRYABLE_STATUS_CODES:
            return True

        if isinstance(error, (httpx.TimeoutException, httpx.ConnectError)):
            return True

        error_msg = str(error).lower()
        if any(phrase in error_msg for phrase in ErrorMapper.RATE_LIMIT_PHRASES):
            return True

        return False

    @staticmethod
    def get_retry_after(error: Exception) -> Optional[float]:
        """
        Extract retry-after value from error if available.

        Args:
            error: The exception to check

        Returns:
            Optional[float]: Seconds to wait before retry, or None
        """
        response = getattr(error, 'response', None)
        headers = getattr(response, 'headers', None)
        if headers is not None:
            retry_after = headers.get('Retry-After') or headers.get('retry-after')
            if retry_after:
                try:
                    return float(retry_after)
                except (TypeError, ValueError):
                    pass

        retry_after = getattr(error, 'retry_after', None)
        if isinstance(retry_after, (int, float)) and not isinstance(retry_after, bool):
            return float(retry_after)

        return None

    @staticmethod
    def map_error(error: Exception, provider: str) -> ProviderError:
        """
        Map a vendor or transport error to TransportError.

        ProviderError instances (including MalformedToolArguments) are
        returned unchanged so they are never double-wrapped.

        Args:
            error: The vendor exception
            provider: Provider name

        Returns:
            ProviderError with retry metadata and the original error attached
        """
        if isinstance(error, ProviderError):
            return error

        label = PROVIDER_LABELS.get(provider, provider)
        detail = getattr(error, 'message', None) or str(error) or type(error).__name__

        transport_error = TransportError(
            message=f"{label} API error: {detail}",
            provider=provider,
            status_code=ErrorMapper.get_status_code(error),
            retry_after=ErrorMapper.get_retry_after(error),
        )
        transport_error.is_retryable = ErrorMapper.is_retryable(error)
        transport_error.original_error = error
        return transport_error

