"""JSON-ready command and query surface over the message scheduler runtime."""

from __future__ import annotations

from datetime import datetime, timezone
from threading import RLock
from typing import Any, Callable, TypeVar

from alphastream.adapters.timing import SimulationClock
from alphastream.application.runtime import MessageScheduler
from alphastream.gui.contract import CONTRACT_VERSION, GuiAdapterMetadata
from alphastream.gui.events import EventHub
from alphastream.gui.scenarios import available_seed_scenarios
from rr_sched.clients import ClientId
from rr_sched.core import CoreState
from rr_sched.message import ExecutionInterval, Message, MessageKind, ProcessedRecord, TickResult
from rr_sched.constants import TICK_INTERVAL_STEP_MS


T = TypeVar("T")


class SimulationGuiFacade:
    """Everything an adapter may do to a running simulation.

    Commands go through ``_run_command`` so diagnostics can report the last
    failure; queries return plain dicts and lists that serialize to JSON.
    """

    __slots__ = (
        "_scheduler",
        "_event_hub",
        "_lock",
        "_last_successful_command_at",
        "_last_command_error",
    )

    def __init__(self, scheduler: MessageScheduler, event_hub: EventHub) -> None:
        self._scheduler = scheduler
        self._event_hub = event_hub
        self._lock = RLock()
        self._last_successful_command_at: datetime | None = None
        self._last_command_error: str | None = None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def configure(self, *, core_count: int) -> dict[str, Any]:
        def _configure() -> dict[str, Any]:
            cores = self._scheduler.configure(int(core_count))
            return {
                "core_count": len(cores),
                "cores": [self._serialize_core(core) for core in cores],
            }

        return self._run_command(_configure)

    def inject_message(
        self,
        *,
        client_id: str,
        kind: str | None = None,
        content: str | None = None,
    ) -> dict[str, Any]:
        def _inject() -> dict[str, Any]:
            message = self._scheduler.inject_message(client_id, kind=kind, content=content)
            return self._serialize_message(message)

        return self._run_command(_inject)

    def inject_random(self) -> dict[str, Any]:
        def _inject() -> dict[str, Any]:
            return self._serialize_message(self._scheduler.inject_random())

        return self._run_command(_inject)

    def tick(self, *, count: int = 1) -> list[dict[str, Any]]:
        def _tick() -> list[dict[str, Any]]:
            if count <= 0:
                raise ValueError(f"Tick count must be > 0, got {count}")
            return [self._serialize_tick(self._scheduler.tick()) for _ in range(count)]

        return self._run_command(_tick)

    def reset_simulation(self) -> dict[str, Any]:
        def _reset() -> dict[str, Any]:
            discarded = self._scheduler.reset()
            return {
                "status": "ok",
                "discarded_message_count": discarded,
            }

        return self._run_command(_reset)

    def set_processing(self, *, enabled: bool) -> dict[str, Any]:
        def _set() -> dict[str, Any]:
            if enabled:
                self._scheduler.start_processing()
            else:
                self._scheduler.stop_processing()
            self.publish_info("Processing started." if enabled else "Processing paused.")
            return {"is_processing": self._scheduler.is_processing}

        return self._run_command(_set)

    def set_injecting(self, *, enabled: bool) -> dict[str, Any]:
        def _set() -> dict[str, Any]:
            if enabled:
                self._scheduler.start_injecting()
            else:
                self._scheduler.stop_injecting()
            self.publish_info("Auto-injection started." if enabled else "Auto-injection stopped.")
            return {"is_injecting": self._scheduler.is_injecting}

        return self._run_command(_set)

    def set_tick_interval(self, *, interval_ms: int) -> dict[str, Any]:
        def _set() -> dict[str, Any]:
            self._scheduler.set_tick_interval(int(interval_ms))
            self.publish_info(f"Tick interval set to {interval_ms}ms.")
            return {"tick_interval_ms": self._scheduler.tick_interval_ms}

        return self._run_command(_set)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_queues(self) -> list[dict[str, Any]]:
        with self._lock:
            targeted_by = self._targeted_by()
            return [
                {
                    "client_id": client.value,
                    "depth": len(messages),
                    "targeted_by": targeted_by.get(client, []),
                    "messages": [self._serialize_message(m) for m in messages],
                }
                for client, messages in self._scheduler.queue_snapshot().items()
            ]

    def list_cores(self) -> list[dict[str, Any]]:
        with self._lock:
            return [self._serialize_core(core) for core in self._scheduler.core_states()]

    def metrics(self) -> dict[str, Any]:
        with self._lock:
            snapshot = self._scheduler.metrics()
            return {
                "total_processed": snapshot.total_processed,
                "average_latency_ms": snapshot.average_latency_ms,
                "active_nodes": snapshot.active_nodes,
                "injected": self._scheduler.injected_count,
                "ticks": self._scheduler.tick_count,
            }

    def processed_log(self, *, limit: int | None = None) -> list[dict[str, Any]]:
        with self._lock:
            records = self._scheduler.processed_log()
            if limit is not None:
                records = records[: max(0, limit)]
            return [self._serialize_record(r) for r in records]

    def gantt(self) -> list[dict[str, Any]]:
        with self._lock:
            return [self._serialize_interval(i) for i in self._scheduler.execution_intervals()]

    def simulation_state(self) -> dict[str, Any]:
        """Composite snapshot for renderers, taken under one lock."""
        with self._lock:
            return {
                "configured": self._scheduler.is_configured,
                "is_processing": self._scheduler.is_processing,
                "is_injecting": self._scheduler.is_injecting,
                "tick_interval_ms": self._scheduler.tick_interval_ms,
                "queues": self.list_queues(),
                "cores": self.list_cores(),
                "metrics": self.metrics(),
                "logs": self.processed_log(),
                "gantt": self.gantt(),
                "recent_trace": self._scheduler.trace_log(30)[::-1],
            }

    def list_events(self, *, limit: int = 200) -> list[dict[str, Any]]:
        events = self._event_hub.list_recent(limit=limit)
        return [event.to_payload() for event in events]

    def subscribe_events(
        self,
        *,
        after_event_id: int | None = None,
        event_types: tuple[str, ...] = (),
    ) -> int:
        return self._event_hub.subscribe(after_event_id=after_event_id, event_types=event_types)

    def unsubscribe_events(self, subscriber_id: int) -> None:
        self._event_hub.unsubscribe(subscriber_id)

    def next_event(self, subscriber_id: int, *, timeout_seconds: float | None = None) -> dict[str, Any] | None:
        event = self._event_hub.next_event(subscriber_id, timeout_seconds=timeout_seconds)
        if event is None:
            return None
        return event.to_payload()

    def app_settings(self) -> dict[str, Any]:
        low, high = self._scheduler.tick_interval_bounds()
        return {
            "clients": [client.value for client in self._scheduler.registry],
            "message_kinds": [kind.value for kind in MessageKind],
            "tick_interval_ms": {
                "min": low,
                "max": high,
                "step": TICK_INTERVAL_STEP_MS,
                "current": self._scheduler.tick_interval_ms,
            },
            "injection_interval_ms": self._scheduler.injection_interval_ms,
            "seed_scenarios": available_seed_scenarios(),
        }

    def diagnostics(self, *, adapter_metadata: GuiAdapterMetadata) -> dict[str, Any]:
        with self._lock:
            last_event = self._event_hub.last_event
            last_event_timestamp = self._iso(last_event.timestamp) if last_event else None
            lag_ms = None
            if last_event is not None:
                lag_ms = int((self._wall_now() - last_event.timestamp).total_seconds() * 1000)

            return {
                "adapter_name": adapter_metadata.name,
                "adapter_version": adapter_metadata.version,
                "contract_version": CONTRACT_VERSION,
                "scheduler_connection_status": "connected",
                "conservation_ok": self._scheduler.check_conservation(),
                "last_event_timestamp": last_event_timestamp,
                "event_lag_ms": lag_ms,
                "event_subscribers": self._event_hub.subscriber_count,
                "last_successful_command_time": self._iso(self._last_successful_command_at),
                "last_command_error": self._last_command_error,
                "dropped_event_count": self._event_hub.dropped_event_count,
                "event_counts": self._event_hub.type_counts(),
            }

    def metadata(self, *, adapter_metadata: GuiAdapterMetadata) -> dict[str, Any]:
        return {
            "adapter": {
                "name": adapter_metadata.name,
                "version": adapter_metadata.version,
                "capabilities": [c.value for c in adapter_metadata.capabilities],
            },
            "contract_version": CONTRACT_VERSION,
        }

    def publish_info(self, message: str) -> None:
        self._event_hub.publish(event_type="info", message=message, source="facade")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _run_command(self, callback: Callable[[], T]) -> T:
        with self._lock:
            try:
                result = callback()
            except Exception as exc:
                self._last_command_error = str(exc)
                raise
            self._last_successful_command_at = self._wall_now()
            self._last_command_error = None
            return result

    def _targeted_by(self) -> dict[ClientId, list[int]]:
        targeted: dict[ClientId, list[int]] = {}
        for core_id, client in sorted(self._scheduler.target_clients().items()):
            targeted.setdefault(client, []).append(core_id)
        return targeted

    def _serialize_core(self, core: CoreState) -> dict[str, Any]:
        registry = self._scheduler.registry
        return {
            "core_id": core.core_id,
            "rotation_index": core.rotation_index,
            "target_client_id": registry[core.rotation_index].value,
            "served_count": core.served_count,
            "idle_ticks": core.idle_ticks,
            "last_client_id": core.last_client_id.value if core.last_client_id else None,
        }

    @staticmethod
    def _serialize_message(message: Message) -> dict[str, Any]:
        return {
            "id": message.message_id,
            "client_id": message.client_id.value,
            "content": message.content,
            "kind": message.kind.value,
            "created_at_ms": message.created_at_ms,
            "created_at": SimulationClock.ms_to_wall(message.created_at_ms).isoformat(),
        }

    def _serialize_record(self, record: ProcessedRecord) -> dict[str, Any]:
        payload = self._serialize_message(record.message)
        payload.update({
            "processed_at_ms": record.processed_at_ms,
            "processed_at": SimulationClock.ms_to_wall(record.processed_at_ms).isoformat(),
            "latency_ms": record.latency_ms,
            "core_id": record.core_id,
        })
        return payload

    @staticmethod
    def _serialize_interval(interval: ExecutionInterval) -> dict[str, Any]:
        return {
            "id": interval.interval_id,
            "client_id": interval.client_id.value,
            "start_ms": interval.start_ms,
            "end_ms": interval.end_ms,
            "duration_ms": interval.duration_ms,
            "core_id": interval.core_id,
        }

    def _serialize_tick(self, result: TickResult) -> dict[str, Any]:
        return {
            "tick": result.tick_number,
            "timestamp_ms": result.timestamp_ms,
            "processed": [self._serialize_record(r) for r in result.processed],
            "intervals": [self._serialize_interval(i) for i in result.intervals],
            "idle_core_ids": list(result.idle_core_ids),
        }

    @staticmethod
    def _iso(value: datetime | None) -> str | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()

    @staticmethod
    def _wall_now() -> datetime:
        return datetime.now(timezone.utc)
