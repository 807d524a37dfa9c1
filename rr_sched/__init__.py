"""Round-robin message scheduling core."""

from .clients import ClientId, ClientRegistry
from .core import CoreSet, CoreState
from .history import HistoryLog
from .injector import Injector
from .message import ExecutionInterval, Message, MessageKind, ProcessedRecord, TickResult
from .metrics import Metrics, MetricsAggregator
from .queue_store import QueueStore
from .scheduler import Scheduler
from .state import SimulationState

__all__ = [
    "ClientId",
    "ClientRegistry",
    "CoreSet",
    "CoreState",
    "ExecutionInterval",
    "HistoryLog",
    "Injector",
    "Message",
    "MessageKind",
    "Metrics",
    "MetricsAggregator",
    "ProcessedRecord",
    "QueueStore",
    "Scheduler",
    "SimulationState",
    "TickResult",
]
