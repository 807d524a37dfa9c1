"""
Owned simulation state: queues, cores, metrics and history in one place.

Everything the scheduler mutates lives on a single SimulationState so a
reset or a fresh test fixture is just a new (or cleared) instance.
"""

from __future__ import annotations

from .clients import ClientId, ClientRegistry
from .constants import (
    DEFAULT_TICK_INTERVAL_MS,
    INTERVAL_HISTORY_LIMIT,
    MAX_TICK_INTERVAL_MS,
    MIN_TICK_INTERVAL_MS,
    PROCESSED_HISTORY_LIMIT,
    is_valid_tick_interval,
)
from .core import CoreSet, CoreState
from .history import HistoryLog
from .injector import Injector
from .message import Message, MessageKind, TickResult
from .metrics import MetricsAggregator
from .queue_store import QueueStore
from .scheduler import Scheduler


class SimulationState:
    """Scheduler state plus the bookkeeping derived from its output."""

    __slots__ = (
        "registry",
        "queues",
        "metrics",
        "history",
        "injector",
        "scheduler",
        "injected_count",
        "tick_interval_ms",
        "trace",
        "trace_limit",
    )

    def __init__(
        self,
        registry: ClientRegistry | None = None,
        *,
        injector: Injector | None = None,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        processed_limit: int = PROCESSED_HISTORY_LIMIT,
        interval_limit: int = INTERVAL_HISTORY_LIMIT,
        trace: bool = False,
        trace_limit: int | None = None,
    ) -> None:
        self.registry = registry or ClientRegistry()
        self.queues = QueueStore(self.registry)
        self.metrics = MetricsAggregator(active_nodes=len(self.registry))
        self.history = HistoryLog(processed_limit, interval_limit)
        self.injector = injector or Injector()
        self.scheduler: Scheduler | None = None
        self.injected_count: int = 0
        self.tick_interval_ms = tick_interval_ms
        self.trace = trace
        self.trace_limit = trace_limit

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def is_configured(self) -> bool:
        return self.scheduler is not None

    @property
    def has_ticked(self) -> bool:
        return self.scheduler is not None and self.scheduler.current_tick > 0

    def configure(self, core_count: int) -> None:
        """Create the core set. Allowed until the first tick."""
        if isinstance(core_count, bool) or not isinstance(core_count, int):
            raise ValueError(f"core_count must be an integer, got {core_count!r}")
        if core_count <= 0:
            raise ValueError(f"core_count must be a positive integer, got {core_count}")
        if self.has_ticked:
            raise RuntimeError("Cannot configure cores after the scheduler has started ticking; reset first")

        cores = CoreSet(core_count, len(self.registry))
        self.scheduler = Scheduler(
            self.queues,
            cores,
            tick_interval_ms=self.tick_interval_ms,
            trace=self.trace,
            trace_limit=self.trace_limit,
        )

    def reset(self) -> None:
        """Back to the initial, unconfigured state."""
        self.queues.clear()
        self.metrics.reset()
        self.history.clear()
        self.scheduler = None
        self.injected_count = 0

    def set_tick_interval(self, interval_ms: int) -> None:
        if not is_valid_tick_interval(interval_ms):
            raise ValueError(
                f"tick_interval_ms must be within [{MIN_TICK_INTERVAL_MS}, "
                f"{MAX_TICK_INTERVAL_MS}], got {interval_ms}"
            )
        if self.scheduler is not None:
            self.scheduler.set_tick_interval(interval_ms)
        self.tick_interval_ms = interval_ms

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def inject(
        self,
        client_id: ClientId | str,
        now_ms: int,
        *,
        kind: MessageKind | str | None = None,
        content: str | None = None,
    ) -> Message:
        self.require_configured("inject a message")
        client = self.registry.require(client_id)
        message = self.injector.build(client, now_ms, kind=kind, content=content)
        self.queues.enqueue(client, message)
        self.injected_count += 1
        return message

    def inject_random(self, now_ms: int) -> Message:
        self.require_configured("inject a message")
        return self.inject(self.injector.pick_client(self.registry), now_ms)

    def tick(self, now_ms: int) -> TickResult:
        scheduler = self.require_configured("tick")
        result = scheduler.tick(now_ms)
        if result.processed:
            self.history.record(result.processed, result.intervals)
            self.metrics.apply_batch(result.processed)
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def core_states(self) -> tuple[CoreState, ...]:
        if self.scheduler is None:
            return ()
        return tuple(core.copy() for core in self.scheduler.cores)

    @property
    def tick_count(self) -> int:
        return self.scheduler.current_tick if self.scheduler is not None else 0

    def check_conservation(self) -> bool:
        """Queued + processed must equal everything ever injected."""
        return self.queues.total_length() + self.metrics.total_processed == self.injected_count

    def require_configured(self, action: str) -> Scheduler:
        if self.scheduler is None:
            raise RuntimeError(f"Cannot {action} before configure() has been called")
        return self.scheduler
