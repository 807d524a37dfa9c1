"""AlphaStream: multi-core round-robin message scheduling powered by rr_sched."""

from alphastream.application.configure_cores import ConfigureCores
from alphastream.application.inject_message import InjectMessage
from alphastream.application.reset_simulation import ResetSimulation
from alphastream.application.run_tick import RunTick
from alphastream.application.runtime import MessageScheduler
from rr_sched.clients import ClientId
from rr_sched.message import MessageKind

__all__ = [
    "ClientId",
    "ConfigureCores",
    "InjectMessage",
    "MessageKind",
    "MessageScheduler",
    "ResetSimulation",
    "RunTick",
]
