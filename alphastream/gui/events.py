"""In-process event hub feeding GUI adapters and stream clients."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass
from datetime import datetime, timezone
from queue import Empty, Full, Queue
from threading import RLock
from typing import Any, Iterable


@dataclass(frozen=True, slots=True)
class SimulationEvent:
    """One entry of the simulation event feed."""

    event_id: int
    event_type: str
    message: str
    timestamp: datetime
    source: str = "runtime"

    def to_payload(self) -> dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
        }


class _Subscription:
    """Bounded delivery queue, optionally restricted to some event types."""

    __slots__ = ("queue", "event_types")

    def __init__(self, size: int, event_types: frozenset[str]) -> None:
        self.queue: Queue[SimulationEvent] = Queue(maxsize=size)
        self.event_types = event_types

    def wants(self, event: SimulationEvent) -> bool:
        return not self.event_types or event.event_type in self.event_types


class EventHub:
    """Thread-safe pub/sub hub.

    Keeps the last ``history_limit`` events for late subscribers and fans
    each new event out to per-subscriber queues. A subscriber that falls
    more than ``subscriber_queue_size`` events behind loses the overflow;
    the loss is counted, never raised.
    """

    __slots__ = (
        "_history",
        "_subscriptions",
        "_queue_size",
        "_last_event_id",
        "_last_subscriber_id",
        "_dropped",
        "_type_counts",
        "_lock",
    )

    def __init__(self, *, history_limit: int = 512, subscriber_queue_size: int = 256) -> None:
        self._history: deque[SimulationEvent] = deque(maxlen=history_limit)
        self._subscriptions: dict[int, _Subscription] = {}
        self._queue_size = subscriber_queue_size
        self._last_event_id = 0
        self._last_subscriber_id = 0
        self._dropped = 0
        self._type_counts: Counter[str] = Counter()
        self._lock = RLock()

    def publish(self, *, event_type: str, message: str, source: str = "runtime") -> SimulationEvent:
        with self._lock:
            self._last_event_id += 1
            event = SimulationEvent(
                event_id=self._last_event_id,
                event_type=event_type,
                message=message,
                timestamp=datetime.now(timezone.utc),
                source=source,
            )
            self._history.append(event)
            self._type_counts[event_type] += 1
            for subscription in self._subscriptions.values():
                self._offer(subscription, event)
            return event

    def list_recent(self, *, limit: int = 200) -> list[SimulationEvent]:
        with self._lock:
            if limit <= 0:
                return []
            return list(self._history)[-limit:]

    def subscribe(
        self,
        *,
        after_event_id: int | None = None,
        event_types: Iterable[str] = (),
    ) -> int:
        """Register a subscriber; replay retained events newer than the cursor.

        Without a cursor only events published from now on are delivered.
        """
        with self._lock:
            self._last_subscriber_id += 1
            subscription = _Subscription(self._queue_size, frozenset(event_types))
            if after_event_id is not None:
                for event in self._history:
                    if event.event_id > after_event_id and not self._offer(subscription, event):
                        break
            self._subscriptions[self._last_subscriber_id] = subscription
            return self._last_subscriber_id

    def unsubscribe(self, subscriber_id: int) -> None:
        with self._lock:
            self._subscriptions.pop(subscriber_id, None)

    def next_event(
        self,
        subscriber_id: int,
        *,
        timeout_seconds: float | None = None,
    ) -> SimulationEvent | None:
        with self._lock:
            subscription = self._subscriptions.get(subscriber_id)
        if subscription is None:
            return None
        # Block outside the lock so publishers are never held up.
        try:
            return subscription.queue.get(timeout=timeout_seconds)
        except Empty:
            return None

    def type_counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._type_counts)

    @property
    def dropped_event_count(self) -> int:
        with self._lock:
            return self._dropped

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    @property
    def last_event(self) -> SimulationEvent | None:
        with self._lock:
            return self._history[-1] if self._history else None

    def _offer(self, subscription: _Subscription, event: SimulationEvent) -> bool:
        if not subscription.wants(event):
            return True
        try:
            subscription.queue.put_nowait(event)
        except Full:
            self._dropped += 1
            return False
        return True
