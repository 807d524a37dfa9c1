"""Use case: advance the scheduler by one or more ticks."""

from __future__ import annotations

from alphastream.application.runtime import MessageScheduler
from rr_sched.message import TickResult


class RunTick:
    """Application use case for manual stepping."""

    def __init__(self, scheduler: MessageScheduler) -> None:
        self._scheduler = scheduler

    def execute(self, count: int = 1) -> list[TickResult]:
        if count <= 0:
            raise ValueError(f"count must be > 0, got {count}")
        return [self._scheduler.tick() for _ in range(count)]
