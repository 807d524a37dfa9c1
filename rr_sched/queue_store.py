"""
Per-client FIFO message queues.

Insertion order is arrival order is service order. An empty queue is a
normal steady state, so ``dequeue_front`` returns ``None`` instead of
raising.
"""

from __future__ import annotations

from collections import deque

from .clients import ClientId, ClientRegistry
from .message import Message


class QueueStore:
    """One FIFO queue per registered client."""

    __slots__ = ("registry", "_queues")

    def __init__(self, registry: ClientRegistry) -> None:
        self.registry = registry
        self._queues: dict[ClientId, deque[Message]] = {
            client: deque() for client in registry
        }

    def enqueue(self, client_id: ClientId | str, message: Message) -> None:
        client = self.registry.require(client_id)
        if message.client_id is not client:
            raise ValueError(
                f"Message {message.message_id} belongs to {message.client_id.value}, "
                f"not {client.value}"
            )
        self._queues[client].append(message)

    def dequeue_front(self, client_id: ClientId | str) -> Message | None:
        queue = self._queues[self.registry.require(client_id)]
        if not queue:
            return None
        return queue.popleft()

    def length(self, client_id: ClientId | str) -> int:
        return len(self._queues[self.registry.require(client_id)])

    def total_length(self) -> int:
        return sum(len(q) for q in self._queues.values())

    def snapshot(self) -> dict[ClientId, tuple[Message, ...]]:
        """Read-only view of every queue, in registry order."""
        return {client: tuple(self._queues[client]) for client in self.registry}

    def clone(self) -> QueueStore:
        """Independent copy sharing the (immutable) messages."""
        copy = QueueStore(self.registry)
        for client, queue in self._queues.items():
            copy._queues[client] = deque(queue)
        return copy

    def replace_with(self, other: QueueStore) -> None:
        """Adopt another store's contents as this store's state."""
        if other.registry is not self.registry:
            raise ValueError("Cannot commit a queue store built on another registry")
        self._queues = other._queues

    def clear(self) -> None:
        for queue in self._queues.values():
            queue.clear()

    def __repr__(self) -> str:
        sizes = ", ".join(f"{c.value}={len(q)}" for c, q in self._queues.items())
        return f"QueueStore({sizes})"
