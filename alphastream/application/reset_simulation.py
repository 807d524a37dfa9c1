"""Use case: reset the simulation."""

from __future__ import annotations

from alphastream.application.runtime import MessageScheduler


class ResetSimulation:
    def __init__(self, scheduler: MessageScheduler) -> None:
        self._scheduler = scheduler

    def execute(self) -> int:
        return self._scheduler.reset()
