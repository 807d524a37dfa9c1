"""Named starting states for the GUI: pre-filled queues and rotation demos."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ScenarioInjection:
    client_id: str
    kind: str | None = None
    content: str | None = None


@dataclass(frozen=True, slots=True)
class ScenarioDefinition:
    key: str
    label: str
    description: str
    injections: tuple[ScenarioInjection, ...]


class ScenarioFacade(Protocol):
    def inject_message(
        self,
        *,
        client_id: str,
        kind: str | None = None,
        content: str | None = None,
    ) -> dict:
        ...

    def publish_info(self, message: str) -> None:
        ...


def _each(client_ids: tuple[str, ...], count: int) -> tuple[ScenarioInjection, ...]:
    return tuple(
        ScenarioInjection(client_id)
        for _ in range(count)
        for client_id in client_ids
    )


_ALL_CLIENTS = ("APEX", "NOVA", "ZEUS", "FLUX")

_SCENARIOS: dict[str, ScenarioDefinition] = {
    "empty": ScenarioDefinition(
        key="empty",
        label="Empty",
        description="Start with every client queue empty.",
        injections=(),
    ),
    "warm_queues": ScenarioDefinition(
        key="warm_queues",
        label="Warm Queues",
        description="Two messages waiting in every client queue.",
        injections=_each(_ALL_CLIENTS, 2),
    ),
    "hot_client": ScenarioDefinition(
        key="hot_client",
        label="Hot Client",
        description="APEX floods its queue while the others trickle in; round robin still serves each in turn.",
        injections=(
            *(ScenarioInjection("APEX", "BUY") for _ in range(6)),
            ScenarioInjection("NOVA", "SELL"),
            ScenarioInjection("ZEUS", "PING"),
            ScenarioInjection("FLUX", "SELL"),
        ),
    ),
    "idle_rotation": ScenarioDefinition(
        key="idle_rotation",
        label="Idle Rotation",
        description="Only FLUX has work, so cores spin past three empty queues before serving it.",
        injections=(
            ScenarioInjection("FLUX", "PING", "PING @ heartbeat"),
            ScenarioInjection("FLUX", "PING", "PING @ heartbeat"),
        ),
    ),
}


def available_seed_scenarios() -> list[dict[str, str]]:
    return [
        {
            "key": scenario.key,
            "label": scenario.label,
            "description": scenario.description,
        }
        for scenario in _SCENARIOS.values()
    ]


def apply_seed_scenario(facade: ScenarioFacade, scenario_name: str) -> str:
    """Populate client queues from a named scenario and return the key used."""

    key = (scenario_name or "empty").strip().lower()
    if key not in _SCENARIOS:
        raise KeyError(f"Unknown GUI scenario: {scenario_name!r}")

    scenario = _SCENARIOS[key]
    if not scenario.injections:
        facade.publish_info("Started with an empty scenario.")
        return key

    for injection in scenario.injections:
        facade.inject_message(
            client_id=injection.client_id,
            kind=injection.kind,
            content=injection.content,
        )

    facade.publish_info(f"Loaded scenario '{scenario.label}'.")
    return key
