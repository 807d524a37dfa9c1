"""
Injection workloads for simulation scenarios.

A workload is a list of injection streams. Each stream feeds one client
(or a randomly chosen client) at a roughly fixed interval, which is
enough to model the order flow the dashboard generates plus a few
stress shapes.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable

from rr_sched.clients import ClientId
from rr_sched.constants import DEFAULT_INJECTION_INTERVAL_MS


@dataclass
class InjectionStream:
    """A periodic source of messages."""

    # None picks a random registered client per injection
    client_id: ClientId | None = None
    interval_ms: int = DEFAULT_INJECTION_INTERVAL_MS
    variance: float = 0.0  # interval variance as fraction of interval_ms
    start_ms: int = 0

    def sample_interval(self, rng: random.Random) -> int:
        """Sample the gap until this stream's next injection."""
        if self.variance <= 0:
            return self.interval_ms
        lo = max(1, int(self.interval_ms * (1 - self.variance)))
        hi = max(lo + 1, int(self.interval_ms * (1 + self.variance)))
        return rng.randint(lo, hi)


# ---------------------------------------------------------------------------
# Built-in scenario workloads
# ---------------------------------------------------------------------------

def uniform_workload() -> list[InjectionStream]:
    """Dashboard default: one message for a random client every 2s."""
    return [
        InjectionStream(interval_ms=DEFAULT_INJECTION_INTERVAL_MS, start_ms=DEFAULT_INJECTION_INTERVAL_MS),
    ]


def steady_workload() -> list[InjectionStream]:
    """Every client injects at the same steady pace."""
    return [
        InjectionStream(client_id=client, interval_ms=4800, start_ms=i * 100)
        for i, client in enumerate(ClientId)
    ]


def burst_workload() -> list[InjectionStream]:
    """APEX floods while the other clients trickle in."""
    return [
        InjectionStream(client_id=ClientId.APEX, interval_ms=300, variance=0.3),
        InjectionStream(client_id=ClientId.NOVA, interval_ms=6000, variance=0.2, start_ms=100),
        InjectionStream(client_id=ClientId.ZEUS, interval_ms=6000, variance=0.2, start_ms=200),
        InjectionStream(client_id=ClientId.FLUX, interval_ms=6000, variance=0.2, start_ms=300),
    ]


def saturated_workload() -> list[InjectionStream]:
    """Injection outpaces total service capacity; backlogs grow."""
    return [
        InjectionStream(client_id=client, interval_ms=600, variance=0.1, start_ms=i * 50)
        for i, client in enumerate(ClientId)
    ]


def idle_workload() -> list[InjectionStream]:
    """No traffic: cores only rotate."""
    return []


SCENARIOS: dict[str, Callable[[], list[InjectionStream]]] = {
    "uniform": uniform_workload,
    "steady": steady_workload,
    "burst": burst_workload,
    "saturated": saturated_workload,
    "idle": idle_workload,
}
