"""Event stream adapter that writes simulation events as JSON lines."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from alphastream.gui.contract import AdapterCapability, GuiAdapterMetadata
from alphastream.gui.facade import SimulationGuiFacade


class EventStreamGuiAdapter:
    """Headless adapter for piping the event feed into other tools.

    Each event becomes one JSON object per line on ``output``. With a
    positive ``limit`` the adapter returns after that many events,
    otherwise it follows the feed until stopped. ``event_types``
    narrows the feed, e.g. to ``("tick",)``.
    """

    metadata = GuiAdapterMetadata(
        name="stream",
        version="1.0.0",
        capabilities=(AdapterCapability.EVENTS, AdapterCapability.LIFECYCLE),
    )

    __slots__ = (
        "_facade",
        "_limit",
        "_event_types",
        "_output",
        "_poll_seconds",
        "_running",
        "_subscriber_id",
    )

    def __init__(
        self,
        facade: SimulationGuiFacade,
        *,
        limit: int = 0,
        event_types: tuple[str, ...] = (),
        output: TextIO | None = None,
        poll_seconds: float = 0.25,
    ) -> None:
        self._facade = facade
        self._limit = max(0, limit)
        self._event_types = event_types
        self._output = output
        self._poll_seconds = poll_seconds
        self._running = False
        self._subscriber_id: int | None = None

    def start(self) -> None:
        self._running = True
        self._subscriber_id = self._facade.subscribe_events(
            after_event_id=0,
            event_types=self._event_types,
        )
        output = self._output or sys.stdout
        emitted = 0

        while self._running:
            event = self._facade.next_event(self._subscriber_id, timeout_seconds=self._poll_seconds)
            if event is None:
                continue
            output.write(json.dumps(event) + "\n")
            output.flush()
            emitted += 1
            if self._limit and emitted >= self._limit:
                break

        self.stop()

    def stop(self) -> None:
        self._running = False
        if self._subscriber_id is not None:
            self._facade.unsubscribe_events(self._subscriber_id)
            self._subscriber_id = None

