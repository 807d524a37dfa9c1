"""Use case: inject a message into a client queue."""

from __future__ import annotations

from alphastream.application.runtime import MessageScheduler
from rr_sched.clients import ClientId
from rr_sched.message import Message, MessageKind


class InjectMessage:
    """Application use case for user-directed or random injection."""

    def __init__(self, scheduler: MessageScheduler) -> None:
        self._scheduler = scheduler

    def execute(
        self,
        client_id: ClientId | str | None = None,
        *,
        kind: MessageKind | str | None = None,
        content: str | None = None,
    ) -> Message:
        if client_id is None:
            return self._scheduler.inject_random()
        return self._scheduler.inject_message(client_id, kind=kind, content=content)
