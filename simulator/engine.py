"""
Discrete-event simulation engine for the round-robin message scheduler.

Drives rr_sched on a virtual millisecond clock: injection streams push
messages into client queues and a fixed-rate tick event runs one
scheduler tick across all cores.
"""

from __future__ import annotations

import heapq
import random

from rr_sched.clients import ClientRegistry
from rr_sched.constants import DEFAULT_TICK_INTERVAL_MS
from rr_sched.injector import Injector
from rr_sched.state import SimulationState

from .events import Event, EventType, EVENT_PRIORITY
from .stats import StatsCollector
from .workload import InjectionStream


class SimulationEngine:
    """Discrete-event simulation engine.

    Processes events in chronological order. Injections due at the same
    millisecond as a tick are applied first, so the tick sees them.
    """

    __slots__ = (
        "clock",
        "event_queue",
        "event_seq",
        "state",
        "stats",
        "streams",
        "rng",
        "trace",
    )

    def __init__(
        self,
        num_cores: int = 1,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        trace: bool = False,
        seed: int | None = None,
        registry: ClientRegistry | None = None,
    ) -> None:
        self.clock: int = 0
        self.event_queue: list[Event] = []
        self.event_seq: int = 0

        # Separate streams of randomness for arrival jitter and message content.
        self.rng = random.Random(seed)
        self.state = SimulationState(
            registry,
            injector=Injector(random.Random(self.rng.getrandbits(64))),
            tick_interval_ms=tick_interval_ms,
            trace=trace,
        )
        self.state.configure(num_cores)
        self.stats = StatsCollector(self.state.registry, num_cores)
        self.streams: list[InjectionStream] = []
        self.trace = trace

    @property
    def scheduler(self):
        return self.state.scheduler

    def schedule_event(self, event: Event) -> None:
        """Add an event to the event queue."""
        event.priority = EVENT_PRIORITY.get(event.event_type, 50)
        event._seq = self.event_seq
        self.event_seq += 1
        heapq.heappush(self.event_queue, event)

    def add_stream(self, stream: InjectionStream) -> None:
        """Register an injection stream and schedule its first injection."""
        if stream.client_id is not None:
            self.state.registry.require(stream.client_id)
        self.streams.append(stream)
        self.schedule_event(Event(
            timestamp=stream.start_ms,
            event_type=EventType.INJECT,
            stream_index=len(self.streams) - 1,
        ))

    def run(self, duration_ms: int) -> None:
        """Run the simulation for the specified duration."""
        self.schedule_event(Event(
            timestamp=duration_ms,
            event_type=EventType.SIMULATION_END,
        ))

        # Ticks fire every interval starting one interval in, like a wall-clock timer.
        tick_interval = self.state.tick_interval_ms
        tick_time = tick_interval
        while tick_time <= duration_ms:
            self.schedule_event(Event(
                timestamp=tick_time,
                event_type=EventType.TICK,
            ))
            tick_time += tick_interval

        while self.event_queue:
            event = heapq.heappop(self.event_queue)
            if event.timestamp > duration_ms:
                break
            if event.event_type == EventType.SIMULATION_END:
                self.clock = event.timestamp
                break

            self.clock = event.timestamp
            self._handle_event(event)

        self.stats.finalize(self.state, self.clock)

    def _handle_event(self, event: Event) -> None:
        handler = self._handlers.get(event.event_type)
        if handler:
            handler(self, event)

    def _handle_inject(self, event: Event) -> None:
        stream = self.streams[event.stream_index]
        if stream.client_id is None:
            message = self.state.inject_random(self.clock)
        else:
            message = self.state.inject(stream.client_id, self.clock)
        self.stats.record_injection(message)

        self.schedule_event(Event(
            timestamp=self.clock + stream.sample_interval(self.rng),
            event_type=EventType.INJECT,
            stream_index=event.stream_index,
        ))

    def _handle_tick(self, event: Event) -> None:
        result = self.state.tick(self.clock)
        self.stats.record_tick(result)

    _handlers = {
        EventType.INJECT: _handle_inject,
        EventType.TICK: _handle_tick,
    }
