"""
Statistics collection and reporting for the simulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rr_sched.clients import ClientRegistry
    from rr_sched.message import Message, TickResult
    from rr_sched.state import SimulationState


@dataclass
class ClientStats:
    """Per-client statistics."""

    client_id: str = ""
    injected: int = 0
    processed: int = 0
    backlog: int = 0

    latencies: list[int] = field(default_factory=list)

    @property
    def avg_latency_ms(self) -> float:
        if not self.latencies:
            return 0.0
        return sum(self.latencies) / len(self.latencies)

    @property
    def max_latency_ms(self) -> int:
        return max(self.latencies) if self.latencies else 0

    @property
    def p99_latency_ms(self) -> int:
        if not self.latencies:
            return 0
        sorted_lat = sorted(self.latencies)
        idx = int(len(sorted_lat) * 0.99)
        return sorted_lat[min(idx, len(sorted_lat) - 1)]


@dataclass
class CoreStats:
    """Per-core tick accounting."""

    core_id: int = 0
    served: int = 0
    idle: int = 0

    @property
    def utilization(self) -> float:
        ticks = self.served + self.idle
        return self.served / ticks if ticks else 0.0


class StatsCollector:
    """Collects and reports simulation statistics."""

    __slots__ = (
        "client_stats",
        "core_stats",
        "simulation_duration",
        "tick_count",
        "injection_count",
        "total_processed",
        "average_latency_ms",
        "conservation_ok",
    )

    def __init__(self, registry: ClientRegistry, core_count: int) -> None:
        self.client_stats: dict[str, ClientStats] = {
            client.value: ClientStats(client_id=client.value) for client in registry
        }
        self.core_stats: list[CoreStats] = [CoreStats(core_id=i) for i in range(core_count)]
        self.simulation_duration: int = 0
        self.tick_count: int = 0
        self.injection_count: int = 0
        self.total_processed: int = 0
        self.average_latency_ms: int = 0
        self.conservation_ok: bool = True

    def record_injection(self, message: Message) -> None:
        self.injection_count += 1
        self.client_stats[message.client_id.value].injected += 1

    def record_tick(self, result: TickResult) -> None:
        self.tick_count += 1
        for record in result.processed:
            cs = self.client_stats[record.client_id.value]
            cs.processed += 1
            cs.latencies.append(record.latency_ms)
            self.core_stats[record.core_id].served += 1
        for core_id in result.idle_core_ids:
            self.core_stats[core_id].idle += 1

    def finalize(self, state: SimulationState, duration: int) -> None:
        """Collect final backlog and metrics from the simulation state."""
        self.simulation_duration = duration
        for client, messages in state.queues.snapshot().items():
            self.client_stats[client.value].backlog = len(messages)
        snapshot = state.metrics.snapshot()
        self.total_processed = snapshot.total_processed
        self.average_latency_ms = snapshot.average_latency_ms
        self.conservation_ok = state.check_conservation()

    @property
    def utilization(self) -> float:
        served = sum(cs.served for cs in self.core_stats)
        ticks = sum(cs.served + cs.idle for cs in self.core_stats)
        return served / ticks if ticks else 0.0

    def print_summary(self) -> None:
        """Print a formatted summary of simulation results."""
        print("\n" + "=" * 72)
        print("AlphaStream Round-Robin Scheduler Simulation Results")
        print("=" * 72)
        print(
            f"Duration: {self.simulation_duration}ms | "
            f"Cores: {len(self.core_stats)} | "
            f"Ticks: {self.tick_count} | "
            f"Injected: {self.injection_count} | "
            f"Processed: {self.total_processed}"
        )
        print(
            f"Avg latency (running): {self.average_latency_ms}ms | "
            f"Utilization: {self.utilization * 100:.1f}% | "
            f"Conservation: {'ok' if self.conservation_ok else 'VIOLATED'}"
        )
        print()

        print("Per-Client Summary:")
        print(
            f"  {'Client':<8} {'Inj':>6} {'Done':>6} {'Backlog':>8} "
            f"{'AvgLat':>9} {'MaxLat':>8} {'P99Lat':>8}"
        )
        print("  " + "-" * 58)
        for cs in self.client_stats.values():
            print(
                f"  {cs.client_id:<8} {cs.injected:>6} {cs.processed:>6} {cs.backlog:>8} "
                f"{cs.avg_latency_ms:>9.0f} {cs.max_latency_ms:>8} {cs.p99_latency_ms:>8}"
            )
        print()

        print("Per-Core Summary:")
        print(f"  {'Core':<8} {'Served':>7} {'Idle':>6} {'Util%':>7}")
        print("  " + "-" * 31)
        for core in self.core_stats:
            print(
                f"  {'CORE' + str(core.core_id):<8} {core.served:>7} {core.idle:>6} "
                f"{core.utilization * 100:>7.1f}"
            )

        print("=" * 72)
