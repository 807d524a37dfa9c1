"""Adapter-facing contract of the AlphaStream GUI platform.

An adapter is anything with ``metadata``, a blocking ``start`` and a
``stop``. The facade reports the metadata back through ``metadata()``
and ``diagnostics()`` so a client can tell which adapter it talks to.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


CONTRACT_VERSION = "1.1.0"


class AdapterCapability(str, Enum):
    COMMANDS = "commands"
    EVENTS = "events"
    LIFECYCLE = "lifecycle"

    @classmethod
    def from_value(cls, value: str) -> "AdapterCapability":
        normalized = value.strip().lower()
        for capability in cls:
            if capability.value == normalized:
                return capability
        raise ValueError(f"Unsupported adapter capability: {value}")


@dataclass(frozen=True, slots=True)
class GuiAdapterMetadata:
    name: str
    version: str
    capabilities: tuple[AdapterCapability, ...] = ()

    def supports(self, capability: AdapterCapability | str) -> bool:
        if isinstance(capability, str):
            capability = AdapterCapability.from_value(capability)
        return capability in self.capabilities


class GuiAdapter(Protocol):
    metadata: GuiAdapterMetadata

    def start(self) -> None:
        """Run until stopped or, for bounded adapters, until done."""

    def stop(self) -> None:
        ...
