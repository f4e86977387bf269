"""
Delta accumulation for streamed chat responses.

Vendors stream three kinds of information at different points:

- text and reasoning fragments, forwarded as soon as they arrive;
- tool calls, delivered as indexed fragments whose name and argument text
  must be concatenated per slot and parsed once the stream ends;
- usage snapshots, reported once at the end or progressively, where the
  latest snapshot wins.

The accumulator folds these into the canonical StreamFragment sequence:
content/reasoning fragments in vendor order, then at most one tool-call
batch, then at most one usage fragment.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional

from ..core.normalization.usage import normalize_usage
from ..models.generation import StreamFragment
from ..models.messages import ToolCall
from ..providers.base import MalformedToolArguments
from .types import StreamDelta, ToolCallDelta


def parse_tool_arguments(provider: str, tool_name: str, arguments: Optional[str]) -> Any:
    """
    Parse tool-call argument text into a structured value.

    Empty argument text means the vendor sent no arguments and yields an
    empty object. Anything else must be a valid JSON document.

    Raises:
        MalformedToolArguments: If the text is not valid JSON
    """
    if arguments is None or not arguments.strip():
        return {}
    try:
        return json.loads(arguments)
    except json.JSONDecodeError as e:
        raise MalformedToolArguments(provider, tool_name, arguments) from e


@dataclass
class ToolCallSlot:
    """In-progress tool call for one stream slot."""
    id: str = ""
    name: str = ""
    arguments: str = ""

    def is_empty(self) -> bool:
        return not self.name and not self.arguments


class ToolCallAccumulator:
    """Indexed arena of in-progress tool calls.

    Slots are created on first touch (including any gap below the touched
    index) and are never removed before finalization.
    """

    def __init__(self, provider: str):
        self.provider = provider
        self._slots: List[ToolCallSlot] = []

    def __len__(self) -> int:
        return len(self._slots)

    def add(self, delta: ToolCallDelta) -> None:
        if delta.index < 0:
            raise ValueError(f"Tool call index must be non-negative, got {delta.index}")
        while len(self._slots) <= delta.index:
            self._slots.append(ToolCallSlot())

        slot = self._slots[delta.index]
        if delta.id and not slot.id:
            slot.id = delta.id
        slot.name += delta.name or ""
        slot.arguments += delta.arguments or ""

    def has_calls(self) -> bool:
        return any(not slot.is_empty() for slot in self._slots)

    def finalize(self) -> List[ToolCall]:
        """
        Build the completed tool calls in slot order.

        Slots without an id use the accumulated name as a synthetic id.
        """
        calls = []
        for slot in self._slots:
            if slot.is_empty():
                continue
            calls.append(ToolCall(
                id=slot.id or slot.name,
                name=slot.name,
                arguments=parse_tool_arguments(self.provider, slot.name, slot.arguments),
            ))
        return calls


class DeltaAccumulator:
    """Per-stream state machine turning StreamDeltas into StreamFragments.

    One instance serves exactly one streaming call.
    """

    def __init__(self, provider: str):
        self.provider = provider
        self.tool_calls = ToolCallAccumulator(provider)
        self.usage_snapshot: Optional[Any] = None

    def feed(self, delta: StreamDelta) -> List[StreamFragment]:
        """
        Consume one vendor event.

        Returns the fragments to emit immediately: one for non-empty content
        and one for non-empty reasoning, in that order.
        """
        fragments = []
        if delta.content:
            fragments.append(StreamFragment(content=delta.content))
        if delta.reasoning:
            fragments.append(StreamFragment(reasoning=delta.reasoning))

        for tool_delta in delta.tool_calls:
            self.tool_calls.add(tool_delta)

        if delta.usage is not None:
            self.usage_snapshot = delta.usage

        return fragments

    def finalize(self) -> List[StreamFragment]:
        """
        Build the end-of-stream fragments once the vendor stream is exhausted.

        Raises:
            MalformedToolArguments: If any accumulated arguments fail to parse
        """
        fragments = []
        if self.tool_calls.has_calls():
            fragments.append(StreamFragment(tool_calls=self.tool_calls.finalize()))

        usage = normalize_usage(self.usage_snapshot, self.provider)
        if usage is not None:
            fragments.append(StreamFragment(usage=usage))

        return fragments
