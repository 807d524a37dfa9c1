"""
Bounded display history of processed records and execution intervals.
"""

from __future__ import annotations

from typing import Sequence

from .constants import INTERVAL_HISTORY_LIMIT, PROCESSED_HISTORY_LIMIT
from .message import ExecutionInterval, ProcessedRecord


class HistoryLog:
    """Two independent sliding windows.

    Processed records are kept newest-first: each batch is prepended (in
    its own order) and the oldest entries fall off the tail. Execution
    intervals are kept oldest-first: each batch is appended and the
    window is trimmed from the head.
    """

    __slots__ = ("processed_limit", "interval_limit", "_processed", "_intervals")

    def __init__(
        self,
        processed_limit: int = PROCESSED_HISTORY_LIMIT,
        interval_limit: int = INTERVAL_HISTORY_LIMIT,
    ) -> None:
        if processed_limit <= 0:
            raise ValueError(f"processed_limit must be > 0, got {processed_limit}")
        if interval_limit <= 0:
            raise ValueError(f"interval_limit must be > 0, got {interval_limit}")
        self.processed_limit = processed_limit
        self.interval_limit = interval_limit
        self._processed: list[ProcessedRecord] = []
        self._intervals: list[ExecutionInterval] = []

    def record(
        self,
        processed: Sequence[ProcessedRecord],
        intervals: Sequence[ExecutionInterval],
    ) -> None:
        if processed:
            self._processed = [*processed, *self._processed][: self.processed_limit]
        if intervals:
            self._intervals = [*self._intervals, *intervals][-self.interval_limit:]

    def processed_records(self) -> tuple[ProcessedRecord, ...]:
        return tuple(self._processed)

    def execution_intervals(self) -> tuple[ExecutionInterval, ...]:
        return tuple(self._intervals)

    def clear(self) -> None:
        self._processed = []
        self._intervals = []

    def __repr__(self) -> str:
        return (
            f"HistoryLog(processed={len(self._processed)}/{self.processed_limit}, "
            f"intervals={len(self._intervals)}/{self.interval_limit})"
        )
