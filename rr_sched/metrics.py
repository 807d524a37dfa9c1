"""
Running totals over every record the scheduler has produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .message import ProcessedRecord


@dataclass(frozen=True, slots=True)
class Metrics:
    total_processed: int = 0
    average_latency_ms: int = 0
    active_nodes: int = 0


class MetricsAggregator:
    """Exact incremental running mean of processing latency.

    The average is recomputed per batch with floor division:

        new_avg = (avg * total + sum(batch latencies)) // (total + len(batch))

    This is not a windowed average; it covers every record ever applied.
    Because the stored average is already floored, the result can differ
    from ``sum(all latencies) // n`` after several batches. Callers that
    compare against a reference must replay the same batch boundaries.
    """

    __slots__ = ("total_processed", "average_latency_ms", "active_nodes")

    def __init__(self, active_nodes: int = 0) -> None:
        self.total_processed: int = 0
        self.average_latency_ms: int = 0
        self.active_nodes = active_nodes

    def apply_batch(self, records: Iterable[ProcessedRecord]) -> None:
        batch = list(records)
        if not batch:
            return

        new_total = self.total_processed + len(batch)
        batch_latency = sum(r.latency_ms for r in batch)
        new_avg = (self.average_latency_ms * self.total_processed + batch_latency) // new_total

        self.total_processed = new_total
        self.average_latency_ms = new_avg

    def reset(self) -> None:
        self.total_processed = 0
        self.average_latency_ms = 0

    def snapshot(self) -> Metrics:
        return Metrics(
            total_processed=self.total_processed,
            average_latency_ms=self.average_latency_ms,
            active_nodes=self.active_nodes,
        )
