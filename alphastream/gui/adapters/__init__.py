"""Adapter registry for GUI host runtime selection."""

from __future__ import annotations

from alphastream.gui.config import GuiConfig
from alphastream.gui.contract import GuiAdapter
from alphastream.gui.facade import SimulationGuiFacade

from .stream import EventStreamGuiAdapter
from .terminal import TerminalGuiAdapter


def available_adapters() -> tuple[str, ...]:
    return ("stream", "terminal")


def create_adapter(name: str, *, facade: SimulationGuiFacade, config: GuiConfig) -> GuiAdapter:
    normalized = name.strip().lower()

    if normalized == "stream":
        return EventStreamGuiAdapter(
            facade=facade,
            limit=config.stream_limit,
            event_types=config.stream_event_types,
        )
    if normalized == "terminal":
        return TerminalGuiAdapter(facade=facade)

    options = ", ".join(available_adapters())
    raise ValueError(f"Unknown GUI_ADAPTER={name!r}. Supported adapters: {options}")
