"""
Message construction for injection.

The injector only builds messages and picks clients; enqueueing is left
to the caller so that injection stays decoupled from scheduling.
"""

from __future__ import annotations

import random

from .clients import ClientId, ClientRegistry
from .constants import ID_ALPHABET, MESSAGE_ID_LENGTH, PRICE_FLOOR, PRICE_SPAN
from .message import Message, MessageKind


class Injector:
    """Builds randomized order-flow messages."""

    __slots__ = ("rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def pick_client(self, registry: ClientRegistry) -> ClientId:
        return registry[self.rng.randrange(len(registry))]

    def new_message_id(self) -> str:
        return "".join(self.rng.choice(ID_ALPHABET) for _ in range(MESSAGE_ID_LENGTH))

    def build(
        self,
        client_id: ClientId,
        created_at_ms: int,
        *,
        kind: MessageKind | str | None = None,
        content: str | None = None,
    ) -> Message:
        if kind is None:
            kind = self.rng.choice(tuple(MessageKind))
        else:
            kind = MessageKind.from_value(kind)

        if content is None:
            price = self.rng.random() * PRICE_SPAN + PRICE_FLOOR
            content = f"{kind.value} @ {price:.2f}"

        return Message(
            message_id=self.new_message_id(),
            client_id=client_id,
            content=content,
            created_at_ms=created_at_ms,
            kind=kind,
        )
