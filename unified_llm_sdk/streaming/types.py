from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class ToolCallDelta:
    """One indexed tool-call fragment from a vendor stream event.

    Attributes:
        index: Slot correlating fragments of the same eventual call
        id: Vendor call id, when the vendor supplies one
        name: Name fragment, concatenated with earlier fragments of the slot
        arguments: Argument JSON text fragment, concatenated likewise
    """
    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None


@dataclass
class StreamDelta:
    """Vendor stream event projected onto the fields the accumulator consumes.

    Attributes:
        provider: Name of the provider that generated this event
        content: Text fragment
        reasoning: Reasoning/thinking fragment
        tool_calls: Indexed tool-call fragments carried by the event
        usage: Raw vendor usage snapshot; later snapshots supersede earlier ones
        raw_event: Original provider event for debugging
    """
    provider: str
    content: Optional[str] = None
    reasoning: Optional[str] = None
    tool_calls: List[ToolCallDelta] = field(default_factory=list)
    usage: Optional[Any] = None
    raw_event: Optional[Any] = None

    def get_text(self) -> str:
        return (self.content or "") + (self.reasoning or "")
