"""
Discrete-event simulation event types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto


class EventType(IntEnum):
    INJECT = auto()
    TICK = auto()
    SIMULATION_END = auto()


@dataclass(order=True)
class Event:
    """A simulation event, ordered by timestamp then by priority."""

    timestamp: int  # milliseconds
    priority: int = field(compare=True, default=0)  # lower = higher priority
    event_type: EventType = field(compare=False, default=EventType.SIMULATION_END)
    stream_index: int = field(compare=False, default=-1)
    _seq: int = field(compare=True, default=0)

    def __repr__(self) -> str:
        return f"Event({self.event_type.name}, t={self.timestamp}, stream={self.stream_index})"


# Injections land before a tick scheduled for the same millisecond.
EVENT_PRIORITY = {
    EventType.INJECT: 0,
    EventType.TICK: 1,
    EventType.SIMULATION_END: 99,
}
