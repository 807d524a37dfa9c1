"""
Client identifiers and the fixed rotation order.

The registry order is the round-robin order every core walks through.
It is fixed for the lifetime of a simulation.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Sequence


class ClientId(str, Enum):
    """Named message producers."""

    APEX = "APEX"
    NOVA = "NOVA"
    ZEUS = "ZEUS"
    FLUX = "FLUX"

    @classmethod
    def from_value(cls, value: "ClientId | str") -> "ClientId":
        if isinstance(value, ClientId):
            return value

        normalized = str(value).strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            raise KeyError(f"Unknown client id: {value!r}") from None


class ClientRegistry:
    """Ordered, immutable set of clients used for rotation."""

    __slots__ = ("_clients", "_index_by_client")

    def __init__(self, clients: Sequence[ClientId | str] | None = None) -> None:
        if clients is None:
            clients = tuple(ClientId)
        resolved = tuple(ClientId.from_value(c) for c in clients)
        if not resolved:
            raise ValueError("Client registry must contain at least one client")
        if len(set(resolved)) != len(resolved):
            raise ValueError(f"Duplicate client in registry: {resolved}")

        self._clients: tuple[ClientId, ...] = resolved
        self._index_by_client: dict[ClientId, int] = {
            client: idx for idx, client in enumerate(resolved)
        }

    @property
    def clients(self) -> tuple[ClientId, ...]:
        return self._clients

    def __len__(self) -> int:
        return len(self._clients)

    def __iter__(self) -> Iterator[ClientId]:
        return iter(self._clients)

    def __getitem__(self, index: int) -> ClientId:
        return self._clients[index]

    def __contains__(self, value: object) -> bool:
        return value in self._index_by_client

    def require(self, client: ClientId | str) -> ClientId:
        """Resolve a client, failing fast for anything outside the registry."""
        resolved = ClientId.from_value(client)
        if resolved not in self._index_by_client:
            raise KeyError(f"Client {resolved.value} is not registered")
        return resolved

    def index_of(self, client: ClientId | str) -> int:
        return self._index_by_client[self.require(client)]

    def __repr__(self) -> str:
        return f"ClientRegistry({', '.join(c.value for c in self._clients)})"
