from __future__ import annotations

import time
from typing import Any, AsyncGenerator, AsyncIterable, Callable, Dict, Optional

from ..models.generation import StreamFragment
from .accumulator import DeltaAccumulator
from .types import StreamDelta


class StreamAdapter:
    """Drives one streaming call from vendor chunks to StreamFragments.

    Pairs a per-call DeltaAccumulator with streaming metrics tracking.
    Vendor-specific chunk parsing is supplied by the provider as a
    ``normalize`` callable.
    """

    def __init__(self, provider: str, model: Optional[str] = None):
        """Initialize StreamAdapter with provider name.

        Args:
            provider: Name of the provider (openai, ollama, genai)
            model: Model name, for metrics and logging
        """
        self.provider = provider.lower()
        self.model = model
        self.accumulator = DeltaAccumulator(self.provider)
        self._chunk_count = 0
        self._fragment_count = 0
        self._total_chars = 0
        self._start_time: Optional[float] = None
        self._stream_completed: bool = False
        self._error: Optional[BaseException] = None

    def start_stream(self) -> None:
        """Mark the start of streaming."""
        self._start_time = time.time()
        self._chunk_count = 0
        self._fragment_count = 0
        self._total_chars = 0

    def track_chunk(self, delta: StreamDelta) -> None:
        """Track a vendor chunk for metrics."""
        self._chunk_count += 1
        self._total_chars += len(delta.get_text())

    def track_fragment(self, fragment: StreamFragment) -> None:
        self._fragment_count += 1

    def complete_stream(self, error: Optional[BaseException] = None) -> None:
        """Mark the stream as finished, successfully or with an error."""
        if self._stream_completed:
            return
        self._stream_completed = True
        self._error = error

    @property
    def completed(self) -> bool:
        return self._stream_completed

    async def accumulate(
        self,
        chunks: AsyncIterable[Any],
        normalize: Callable[[Any], StreamDelta],
    ) -> AsyncGenerator[StreamFragment, None]:
        """Fold vendor chunks into the canonical fragment sequence.

        Content and reasoning fragments are yielded as their chunk arrives.
        Tool-call and usage fragments are yielded after ``chunks`` is
        exhausted. Nothing is finalized if the consumer stops early.

        Args:
            chunks: Vendor stream events
            normalize: Projects one vendor event onto a StreamDelta
        """
        self.start_stream()
        try:
            async for chunk in chunks:
                delta = normalize(chunk)
                self.track_chunk(delta)
                for fragment in self.accumulator.feed(delta):
                    self.track_fragment(fragment)
                    yield fragment

            for fragment in self.accumulator.finalize():
                self.track_fragment(fragment)
                yield fragment
        except Exception as e:
            self.complete_stream(error=e)
            raise
        self.complete_stream()

    def get_metrics(self) -> Dict[str, Any]:
        """Get streaming metrics.

        Returns:
            Dictionary with streaming metrics
        """
        duration = time.time() - self._start_time if self._start_time else 0
        return {
            "chunks": self._chunk_count,
            "fragments": self._fragment_count,
            "total_chars": self._total_chars,
            "duration_seconds": duration,
            "chunks_per_second": self._chunk_count / duration if duration > 0 else 0,
            "completed": self._stream_completed,
            "failed": self._error is not None,
        }
