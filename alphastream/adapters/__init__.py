"""Infrastructure adapters for the message scheduler layer."""

from alphastream.adapters.terminal_notifier import TerminalNotifier
from alphastream.adapters.timing import (
    SimulationClock,
    TimingConfig,
    load_timing_config,
)

__all__ = [
    "SimulationClock",
    "TerminalNotifier",
    "TimingConfig",
    "load_timing_config",
]
