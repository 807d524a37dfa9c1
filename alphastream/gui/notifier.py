"""Notification adapter that forwards runtime notifications into the GUI event hub."""

from __future__ import annotations

from alphastream.gui.events import EventHub
from alphastream.ports.notifications import NotificationEventType, NotificationPort


class EventingNotifier(NotificationPort):
    """Bridges runtime notifications to in-process GUI events."""

    __slots__ = ("_event_hub",)

    def __init__(self, event_hub: EventHub) -> None:
        self._event_hub = event_hub

    def notify_immediately(self, message: str, event_type: NotificationEventType) -> None:
        self._event_hub.publish(
            event_type=event_type.value,
            message=message,
            source="runtime",
        )
