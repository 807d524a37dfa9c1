"""Notification port abstractions for message scheduler adapters."""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class NotificationEventType(str, Enum):
    """High-level simulation events exposed to notification adapters."""

    CONFIGURED = "configured"
    MESSAGE_INJECTED = "message_injected"
    TICK = "tick"
    RESET = "reset"
    INFO = "info"


class NotificationPort(Protocol):
    """Port for delivering simulation notifications."""

    def notify_immediately(self, message: str, event_type: NotificationEventType) -> None:
        """Push an immediate notification for a simulation event."""
