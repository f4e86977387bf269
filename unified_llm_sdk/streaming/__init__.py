"""Streaming layer for real-time LLM responses.

This layer handles:
- Projection of vendor stream events onto StreamDelta
- Accumulation of indexed tool-call fragments and usage snapshots
- Emission of the canonical StreamFragment sequence
- Release of vendor stream resources
"""

from .accumulator import DeltaAccumulator, ToolCallAccumulator, parse_tool_arguments
from .adapter import StreamAdapter
from .helpers import closing_stream, collect_stream, release_stream
from .types import StreamDelta, ToolCallDelta

__all__ = [
    "DeltaAccumulator",
    "StreamAdapter",
    "StreamDelta",
    "ToolCallAccumulator",
    "ToolCallDelta",
    "closing_stream",
    "collect_stream",
    "parse_tool_arguments",
    "release_stream",
]
