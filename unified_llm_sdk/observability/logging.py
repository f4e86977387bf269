"""
Structured logging utility for provider adapters.

This module provides a consistent logging interface for all provider adapters,
ensuring structured logging with standard fields like provider, model, and request_id.
"""

import logging
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Optional

from ..models.generation import Usage


class ProviderLogger:
    """Structured logger for provider adapters."""

    def __init__(self, provider_name: str):
        """
        Initialize logger for a specific provider.

        Args:
            provider_name: Name of the provider (e.g., "openai", "ollama")
        """
        self.provider = provider_name
        self.logger = logging.getLogger(f"unified_llm_sdk.providers.{provider_name}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"provider={self.provider}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, **kwargs):
        """Log debug message with structured fields."""
        self.logger.debug(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def info(self, message: str, model: Optional[str] = None,
             request_id: Optional[str] = None, **kwargs):
        """Log info message with structured fields."""
        self.logger.info(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def warning(self, message: str, model: Optional[str] = None,
                request_id: Optional[str] = None, **kwargs):
        """Log warning message with structured fields."""
        self.logger.warning(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    def error(self, message: str, model: Optional[str] = None,
              request_id: Optional[str] = None, error: Optional[BaseException] = None, **kwargs):
        """Log error message with structured fields."""
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_msg'] = str(error)
            kwargs['status_code'] = getattr(error, 'status_code', None)
            kwargs['retryable'] = getattr(error, 'is_retryable', None)

        self.logger.error(
            self._format_message(message, model=model, request_id=request_id, **kwargs)
        )

    @contextmanager
    def track_request(self, method: str, model: str, request_id: Optional[str] = None):
        """
        Context manager to track request timing and log key events.

        Args:
            method: The method being called (e.g., "chat", "chat_stream")
            model: The model being used
            request_id: Optional request ID (generated if not provided)

        Yields:
            Dict with request metadata including request_id
        """
        if request_id is None:
            request_id = str(uuid.uuid4())[:8]

        start_time = time.time()

        self.debug(
            f"Starting {method} request",
            model=model,
            request_id=request_id,
            method=method
        )

        metadata = {
            'request_id': request_id,
            'model': model,
            'method': method,
            'start_time': start_time
        }

        try:
            yield metadata

            duration = time.time() - start_time
            self.info(
                f"Completed {method} request",
                model=model,
                request_id=request_id,
                method=method,
                duration_ms=int(duration * 1000)
            )

        except GeneratorExit:
            # Stream abandoned by the consumer
            duration = time.time() - start_time
            self.debug(
                f"Abandoned {method} request",
                model=model,
                request_id=request_id,
                method=method,
                duration_ms=int(duration * 1000)
            )
            raise

        except Exception as e:
            duration = time.time() - start_time
            self.error(
                f"Failed {method} request",
                model=model,
                request_id=request_id,
                method=method,
                duration_ms=int(duration * 1000),
                error=e
            )
            raise

    def log_usage(self, usage: Optional[Usage], model: str, request_id: str):
        """Log token usage information."""
        if usage is None:
            return
        self.info(
            "Token usage",
            model=model,
            request_id=request_id,
            prompt_tokens=usage.prompt_tokens,
            completion_tokens=usage.completion_tokens,
            total_tokens=usage.total_tokens,
            reasoning_tokens=usage.reasoning_tokens,
            cached_tokens=usage.cached_tokens
        )

    def log_streaming_metrics(self, metrics: Dict[str, Any], model: str, request_id: str):
        """Log streaming performance metrics."""
        duration = metrics.get("duration_seconds", 0)
        chars_per_second = metrics.get("total_chars", 0) / duration if duration > 0 else 0

        self.debug(
            "Streaming metrics",
            model=model,
            request_id=request_id,
            chunks=metrics.get("chunks"),
            fragments=metrics.get("fragments"),
            total_chars=metrics.get("total_chars"),
            duration_ms=int(duration * 1000),
            chars_per_second=int(chars_per_second),
            completed=metrics.get("completed")
        )
