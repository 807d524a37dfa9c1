"""
Core scheduler: advances every core by one round-robin step per tick.

Tick algorithm:
  1. clone the queue store and core set into a working view
  2. for each core in ascending core_id order:
       - target = registry[core.rotation_index]
       - dequeue the head of the target queue; on a hit emit a
         ProcessedRecord and an ExecutionInterval
       - advance the rotation index by one, hit or miss
  3. commit the working view
  4. return the batch

Cores are not truly parallel. The ascending order is what decides
collisions: when two cores target the same client in one tick, the lower
core_id dequeues first and the higher one sees what is left.
"""

from __future__ import annotations

from collections import deque

from .clients import ClientId, ClientRegistry
from .constants import (
    DEFAULT_TICK_INTERVAL_MS,
    MAX_TICK_INTERVAL_MS,
    MIN_TICK_INTERVAL_MS,
    is_valid_tick_interval,
)
from .core import CoreSet
from .message import ExecutionInterval, ProcessedRecord, TickResult
from .queue_store import QueueStore


class Scheduler:
    """Fixed-rate round-robin scheduler over a shared queue store."""

    __slots__ = (
        "registry",
        "queues",
        "cores",
        "tick_interval_ms",
        "current_tick",
        "trace_enabled",
        "trace_log",
    )

    def __init__(
        self,
        queues: QueueStore,
        cores: CoreSet,
        *,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        trace: bool = False,
        trace_limit: int | None = None,
    ) -> None:
        if cores.client_count != len(queues.registry):
            raise ValueError(
                f"Core set rotates over {cores.client_count} clients but the "
                f"registry has {len(queues.registry)}"
            )
        self.registry: ClientRegistry = queues.registry
        self.queues = queues
        self.cores = cores
        self.tick_interval_ms = DEFAULT_TICK_INTERVAL_MS
        self.set_tick_interval(tick_interval_ms)
        self.current_tick: int = 0
        self.trace_enabled = trace
        self.trace_log: deque[str] = deque(maxlen=trace_limit)

    def _trace(self, timestamp: int, msg: str) -> None:
        self.trace_log.append(f"[{timestamp:>10}ms] {msg}")

    def set_tick_interval(self, interval_ms: int) -> None:
        if not is_valid_tick_interval(interval_ms):
            raise ValueError(
                f"tick_interval_ms must be within [{MIN_TICK_INTERVAL_MS}, "
                f"{MAX_TICK_INTERVAL_MS}], got {interval_ms}"
            )
        self.tick_interval_ms = interval_ms

    def target_client(self, core_id: int) -> ClientId:
        """Client the given core will serve on the next tick."""
        return self.registry[self.cores[core_id].rotation_index]

    def tick(self, now_ms: int) -> TickResult:
        """Advance every core by one step and return what was processed."""
        self.current_tick += 1
        tick_number = self.current_tick

        # 1. Working view
        queues = self.queues.clone()
        cores = self.cores.clone()
        client_count = len(self.registry)

        processed: list[ProcessedRecord] = []
        intervals: list[ExecutionInterval] = []
        idle: list[int] = []

        # 2. One service attempt per core, lowest core_id first
        for core in cores:
            client = self.registry[core.rotation_index]
            message = queues.dequeue_front(client)

            if message is not None:
                latency = now_ms - message.created_at_ms
                processed.append(ProcessedRecord(
                    message=message,
                    processed_at_ms=now_ms,
                    latency_ms=latency,
                    core_id=core.core_id,
                ))
                intervals.append(ExecutionInterval(
                    interval_id=f"T{tick_number}C{core.core_id}",
                    client_id=client,
                    start_ms=now_ms - self.tick_interval_ms,
                    end_ms=now_ms,
                    core_id=core.core_id,
                ))
                core.served_count += 1
                core.last_client_id = client
                if self.trace_enabled:
                    self._trace(
                        now_ms,
                        f"CORE{core.core_id}: {client.value} -> {message.message_id} "
                        f"({message.content}) latency={latency}ms",
                    )
            else:
                idle.append(core.core_id)
                core.idle_ticks += 1
                if self.trace_enabled:
                    self._trace(now_ms, f"CORE{core.core_id}: {client.value} queue empty, idle")

            # Rotation advances whether or not work was found
            core.advance(client_count)

        # 3. Commit
        self.queues.replace_with(queues)
        self.cores.replace_with(cores)

        return TickResult(
            tick_number=tick_number,
            timestamp_ms=now_ms,
            processed=tuple(processed),
            intervals=tuple(intervals),
            idle_core_ids=tuple(idle),
        )
