"""
Messages and the records emitted when cores process them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .clients import ClientId


class MessageKind(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    PING = "PING"

    @classmethod
    def from_value(cls, value: "MessageKind | str") -> "MessageKind":
        if isinstance(value, MessageKind):
            return value
        return cls(str(value).strip().upper())


@dataclass(frozen=True, slots=True)
class Message:
    """A queued unit of work. Never mutated after creation."""

    message_id: str
    client_id: ClientId
    content: str
    created_at_ms: int
    kind: MessageKind


@dataclass(frozen=True, slots=True)
class ProcessedRecord:
    """A message after a core has dequeued it."""

    message: Message
    processed_at_ms: int
    latency_ms: int
    core_id: int

    @property
    def client_id(self) -> ClientId:
        return self.message.client_id


@dataclass(frozen=True, slots=True)
class ExecutionInterval:
    """One core's occupied time slice for a tick in which it served a message."""

    interval_id: str
    client_id: ClientId
    start_ms: int
    end_ms: int
    core_id: int

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms


@dataclass(frozen=True, slots=True)
class TickResult:
    """Everything one scheduler tick produced."""

    tick_number: int
    timestamp_ms: int
    processed: tuple[ProcessedRecord, ...] = ()
    intervals: tuple[ExecutionInterval, ...] = ()
    idle_core_ids: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.processed
