"""Terminal notification adapter writing to stdout."""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock

from alphastream.ports.notifications import NotificationEventType, NotificationPort


class TerminalNotifier(NotificationPort):
    """Simple notification adapter for local terminal usage."""

    __slots__ = ("_enable_bell", "_quiet_types", "_lock")

    def __init__(
        self,
        enable_bell: bool = False,
        quiet_types: frozenset[NotificationEventType] = frozenset(),
    ) -> None:
        self._enable_bell = enable_bell
        self._quiet_types = quiet_types
        self._lock = Lock()

    def notify_immediately(self, message: str, event_type: NotificationEventType) -> None:
        if event_type in self._quiet_types:
            return
        now = datetime.now(timezone.utc).isoformat(timespec="seconds")
        # Timer threads share stdout with the caller.
        with self._lock:
            print(f"[{now}] [{event_type.value}] {message}")
            if self._enable_bell:
                print("\a", end="")
