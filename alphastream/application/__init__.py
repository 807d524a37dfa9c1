"""Application use cases for the message scheduler layer."""

from alphastream.application.configure_cores import ConfigureCores
from alphastream.application.inject_message import InjectMessage
from alphastream.application.reset_simulation import ResetSimulation
from alphastream.application.run_tick import RunTick
from alphastream.application.runtime import MessageScheduler

__all__ = [
    "ConfigureCores",
    "InjectMessage",
    "MessageScheduler",
    "ResetSimulation",
    "RunTick",
]
