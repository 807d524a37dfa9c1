"""
CoreState and CoreSet, modeling the simulated processing cores.

Each core owns only its own rotation index. Cores start offset from each
other (``core_id mod client_count``) so that with enough cores every
client is targeted in the first tick.
"""

from __future__ import annotations

from .clients import ClientId


class CoreState:
    """Rotation pointer of a single core, plus display counters."""

    __slots__ = (
        "core_id",
        "rotation_index",
        # Stats
        "served_count",
        "idle_ticks",
        "last_client_id",
    )

    def __init__(self, core_id: int, rotation_index: int) -> None:
        self.core_id = core_id
        self.rotation_index = rotation_index

        # Stats
        self.served_count: int = 0
        self.idle_ticks: int = 0
        self.last_client_id: ClientId | None = None

    def advance(self, client_count: int) -> None:
        self.rotation_index = (self.rotation_index + 1) % client_count

    def copy(self) -> CoreState:
        clone = CoreState(self.core_id, self.rotation_index)
        clone.served_count = self.served_count
        clone.idle_ticks = self.idle_ticks
        clone.last_client_id = self.last_client_id
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoreState):
            return NotImplemented
        return (
            self.core_id == other.core_id
            and self.rotation_index == other.rotation_index
            and self.served_count == other.served_count
            and self.idle_ticks == other.idle_ticks
            and self.last_client_id == other.last_client_id
        )

    def __repr__(self) -> str:
        return f"CORE{self.core_id}(index={self.rotation_index}, served={self.served_count})"


class CoreSet:
    """Fixed-size, ordered set of cores."""

    __slots__ = ("cores", "client_count")

    def __init__(self, core_count: int, client_count: int) -> None:
        if core_count <= 0:
            raise ValueError(f"core_count must be a positive integer, got {core_count}")
        if client_count <= 0:
            raise ValueError(f"client_count must be a positive integer, got {client_count}")
        self.client_count = client_count
        self.cores = [CoreState(i, i % client_count) for i in range(core_count)]

    @property
    def core_count(self) -> int:
        return len(self.cores)

    def __len__(self) -> int:
        return len(self.cores)

    def __getitem__(self, core_id: int) -> CoreState:
        return self.cores[core_id]

    def __iter__(self):
        return iter(self.cores)

    def rotation_indices(self) -> tuple[int, ...]:
        return tuple(core.rotation_index for core in self.cores)

    def clone(self) -> CoreSet:
        copy = CoreSet.__new__(CoreSet)
        copy.client_count = self.client_count
        copy.cores = [core.copy() for core in self.cores]
        return copy

    def replace_with(self, other: CoreSet) -> None:
        if other.core_count != self.core_count:
            raise ValueError(
                f"Cannot commit {other.core_count} cores onto a set of {self.core_count}"
            )
        self.cores = other.cores

    def __repr__(self) -> str:
        return f"CoreSet(cores={self.core_count}, indices={list(self.rotation_indices())})"
