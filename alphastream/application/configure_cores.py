"""Use case: configure processing cores."""

from __future__ import annotations

from alphastream.application.runtime import MessageScheduler
from rr_sched.core import CoreState


class ConfigureCores:
    """Application use case for one-time core initialization."""

    def __init__(self, scheduler: MessageScheduler) -> None:
        self._scheduler = scheduler

    def execute(self, core_count: int) -> tuple[CoreState, ...]:
        return self._scheduler.configure(core_count)
