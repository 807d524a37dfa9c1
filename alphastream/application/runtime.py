"""Application runtime serializing injection and ticks on top of rr_sched."""

from __future__ import annotations

import random
from datetime import datetime
from threading import RLock, Timer
from typing import Callable

from rr_sched.clients import ClientId, ClientRegistry
from rr_sched.constants import MAX_TICK_INTERVAL_MS, MIN_TICK_INTERVAL_MS, TRACE_LOG_LIMIT
from rr_sched.core import CoreState
from rr_sched.injector import Injector
from rr_sched.message import ExecutionInterval, Message, MessageKind, ProcessedRecord, TickResult
from rr_sched.metrics import Metrics
from rr_sched.state import SimulationState

from alphastream.adapters.terminal_notifier import TerminalNotifier
from alphastream.adapters.timing import SimulationClock, TimingConfig, load_timing_config
from alphastream.ports.notifications import NotificationEventType, NotificationPort


class MessageScheduler:
    """Multi-core round-robin message scheduler with optional timer drivers.

    Every mutation (configure, inject, tick, reset and both timer
    callbacks) runs under one lock, so a tick never observes a partially
    applied injection and ticks never overlap.
    """

    __slots__ = (
        "state",
        "clock",
        "notifier",
        "config",
        "injection_interval_ms",
        "_lock",
        "_enable_timers",
        "_processing",
        "_injecting",
        "_tick_timer",
        "_inject_timer",
        "_tick_generation",
        "_inject_generation",
    )

    def __init__(
        self,
        *,
        env_file: str = ".env",
        config: TimingConfig | None = None,
        notifier: NotificationPort | None = None,
        clock: SimulationClock | None = None,
        enable_timers: bool = True,
        now_provider: Callable[[], datetime] | None = None,
        rng: random.Random | None = None,
        registry: ClientRegistry | None = None,
    ) -> None:
        if config is None:
            config = load_timing_config(env_file)
        self.config = config

        self.clock = clock or SimulationClock(now_provider)
        self.notifier: NotificationPort = notifier or TerminalNotifier()

        if rng is None:
            rng = random.Random(config.seed)
        self.state = SimulationState(
            registry,
            injector=Injector(rng),
            tick_interval_ms=config.tick_interval_ms,
            processed_limit=config.processed_history_limit,
            interval_limit=config.interval_history_limit,
            trace=True,
            trace_limit=TRACE_LOG_LIMIT,
        )
        self.injection_interval_ms = config.injection_interval_ms

        self._lock = RLock()
        self._enable_timers = enable_timers
        self._processing = False
        self._injecting = False
        self._tick_timer: Timer | None = None
        self._inject_timer: Timer | None = None
        self._tick_generation = 0
        self._inject_generation = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        """Stop any background timers."""
        with self._lock:
            self._processing = False
            self._injecting = False
            self._cancel_tick_timer()
            self._cancel_inject_timer()

    def configure(self, core_count: int) -> tuple[CoreState, ...]:
        with self._lock:
            self.state.configure(core_count)
            word = "core" if core_count == 1 else "cores"
            self.notifier.notify_immediately(
                f"Configured {core_count} {word} over {len(self.state.registry)} clients.",
                NotificationEventType.CONFIGURED,
            )
            return self.state.core_states

    def reset(self) -> int:
        """Clear queues, cores, history and metrics; back to unconfigured.

        Returns how many queued messages were discarded.
        """
        with self._lock:
            discarded = self.state.queues.total_length()
            word = "message" if discarded == 1 else "messages"
            self._processing = False
            self._injecting = False
            self._cancel_tick_timer()
            self._cancel_inject_timer()
            self.state.reset()
            self.notifier.notify_immediately(
                f"Simulation reset. Discarded {discarded} queued {word}.",
                NotificationEventType.RESET,
            )
            return discarded

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def inject_message(
        self,
        client_id: ClientId | str,
        *,
        kind: MessageKind | str | None = None,
        content: str | None = None,
    ) -> Message:
        with self._lock:
            message = self.state.inject(
                client_id,
                self.clock.now_ms(),
                kind=kind,
                content=content,
            )
            self._notify_injected(message)
            return message

    def inject_random(self) -> Message:
        with self._lock:
            message = self.state.inject_random(self.clock.now_ms())
            self._notify_injected(message)
            return message

    def tick(self) -> TickResult:
        with self._lock:
            result = self.state.tick(self.clock.now_ms())
            if result.processed:
                served = ", ".join(
                    f"CORE{r.core_id}<-{r.client_id.value} ({r.latency_ms}ms)"
                    for r in result.processed
                )
                self.notifier.notify_immediately(
                    f"Tick {result.tick_number}: {served}",
                    NotificationEventType.TICK,
                )
            return result

    def set_tick_interval(self, interval_ms: int) -> None:
        with self._lock:
            self.state.set_tick_interval(interval_ms)
            if self._processing:
                self._arm_tick_timer()

    def set_injection_interval(self, interval_ms: int) -> None:
        with self._lock:
            if interval_ms <= 0:
                raise ValueError(f"injection_interval_ms must be > 0, got {interval_ms}")
            self.injection_interval_ms = interval_ms
            if self._injecting:
                self._arm_inject_timer()

    def start_processing(self) -> None:
        with self._lock:
            self.state.require_configured("start processing")
            self._processing = True
            self._arm_tick_timer()

    def stop_processing(self) -> None:
        with self._lock:
            self._processing = False
            self._cancel_tick_timer()

    def start_injecting(self) -> None:
        with self._lock:
            self.state.require_configured("start injecting")
            self._injecting = True
            self._arm_inject_timer()

    def stop_injecting(self) -> None:
        with self._lock:
            self._injecting = False
            self._cancel_inject_timer()

    # ------------------------------------------------------------------
    # Read-only snapshots
    # ------------------------------------------------------------------
    @property
    def registry(self) -> ClientRegistry:
        return self.state.registry

    @property
    def is_configured(self) -> bool:
        with self._lock:
            return self.state.is_configured

    @property
    def is_processing(self) -> bool:
        with self._lock:
            return self._processing

    @property
    def is_injecting(self) -> bool:
        with self._lock:
            return self._injecting

    @property
    def tick_interval_ms(self) -> int:
        with self._lock:
            return self.state.tick_interval_ms

    @property
    def tick_count(self) -> int:
        with self._lock:
            return self.state.tick_count

    @property
    def injected_count(self) -> int:
        with self._lock:
            return self.state.injected_count

    def queue_snapshot(self) -> dict[ClientId, tuple[Message, ...]]:
        with self._lock:
            return self.state.queues.snapshot()

    def core_states(self) -> tuple[CoreState, ...]:
        with self._lock:
            return self.state.core_states

    def target_clients(self) -> dict[int, ClientId]:
        """Client each core will serve on its next tick."""
        with self._lock:
            scheduler = self.state.scheduler
            if scheduler is None:
                return {}
            return {core.core_id: scheduler.target_client(core.core_id) for core in scheduler.cores}

    def metrics(self) -> Metrics:
        with self._lock:
            return self.state.metrics.snapshot()

    def processed_log(self) -> tuple[ProcessedRecord, ...]:
        with self._lock:
            return self.state.history.processed_records()

    def execution_intervals(self) -> tuple[ExecutionInterval, ...]:
        with self._lock:
            return self.state.history.execution_intervals()

    def trace_log(self, limit: int = 200) -> list[str]:
        with self._lock:
            scheduler = self.state.scheduler
            if scheduler is None or limit <= 0:
                return []
            return list(scheduler.trace_log)[-limit:]

    def check_conservation(self) -> bool:
        with self._lock:
            return self.state.check_conservation()

    @staticmethod
    def tick_interval_bounds() -> tuple[int, int]:
        return MIN_TICK_INTERVAL_MS, MAX_TICK_INTERVAL_MS

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------
    def _arm_tick_timer(self) -> None:
        if not self._enable_timers:
            return

        self._cancel_tick_timer()
        self._tick_generation += 1
        delay_seconds = self.state.tick_interval_ms / 1000.0
        self._tick_timer = Timer(delay_seconds, self._on_tick_timer, args=(self._tick_generation,))
        self._tick_timer.daemon = True
        self._tick_timer.start()

    def _on_tick_timer(self, generation: int) -> None:
        with self._lock:
            # Stale firing from a cancelled or re-armed timer.
            if not self._processing or generation != self._tick_generation:
                return
            if not self.state.is_configured:
                self._processing = False
                return
            self.tick()
            self._arm_tick_timer()

    def _arm_inject_timer(self) -> None:
        if not self._enable_timers:
            return

        self._cancel_inject_timer()
        self._inject_generation += 1
        delay_seconds = self.injection_interval_ms / 1000.0
        self._inject_timer = Timer(delay_seconds, self._on_inject_timer, args=(self._inject_generation,))
        self._inject_timer.daemon = True
        self._inject_timer.start()

    def _on_inject_timer(self, generation: int) -> None:
        with self._lock:
            if not self._injecting or generation != self._inject_generation:
                return
            if not self.state.is_configured:
                self._injecting = False
                return
            self.inject_random()
            self._arm_inject_timer()

    def _cancel_tick_timer(self) -> None:
        if self._tick_timer is not None:
            self._tick_timer.cancel()
            self._tick_timer = None

    def _cancel_inject_timer(self) -> None:
        if self._inject_timer is not None:
            self._inject_timer.cancel()
            self._inject_timer = None

    def _notify_injected(self, message: Message) -> None:
        depth = self.state.queues.length(message.client_id)
        self.notifier.notify_immediately(
            f"{message.client_id.value} queued {message.message_id} ({message.content}); depth={depth}",
            NotificationEventType.MESSAGE_INJECTED,
        )
