"""GUI host runtime that wires the message scheduler to one selected GUI adapter."""

from __future__ import annotations

from alphastream.application.runtime import MessageScheduler
from alphastream.gui.adapters import create_adapter
from alphastream.gui.config import GuiConfig
from alphastream.gui.contract import AdapterCapability, GuiAdapter
from alphastream.gui.events import EventHub
from alphastream.gui.facade import SimulationGuiFacade
from alphastream.gui.notifier import EventingNotifier
from alphastream.gui.scenarios import apply_seed_scenario, available_seed_scenarios


class GuiHost:
    """Bootstraps scheduler runtime, facade, and one GUI adapter."""

    __slots__ = (
        "config",
        "event_hub",
        "notifier",
        "scheduler",
        "facade",
        "adapter",
    )

    def __init__(self, config: GuiConfig) -> None:
        self.config = config
        self.event_hub = EventHub()
        self.notifier = EventingNotifier(self.event_hub)
        self.scheduler = MessageScheduler(
            env_file=config.env_file,
            notifier=self.notifier,
            enable_timers=config.enable_timers,
        )
        self.facade = SimulationGuiFacade(scheduler=self.scheduler, event_hub=self.event_hub)
        try:
            core_count = config.cores or self.scheduler.config.cores
            self.facade.configure(core_count=core_count)
            try:
                apply_seed_scenario(self.facade, config.seed_scenario)
            except KeyError as exc:
                options = ", ".join(item["key"] for item in available_seed_scenarios())
                raise ValueError(
                    f"Unknown GUI_SCENARIO={config.seed_scenario!r}. Supported scenarios: {options}"
                ) from exc

            if config.auto_process:
                self.facade.set_processing(enabled=True)
            if config.auto_inject:
                self.facade.set_injecting(enabled=True)

            self.adapter: GuiAdapter = create_adapter(
                config.adapter_name,
                facade=self.facade,
                config=config,
            )
            if config.stream_event_types and not self.adapter.metadata.supports(AdapterCapability.EVENTS):
                raise ValueError(
                    f"GUI_STREAM_EVENTS needs an adapter with the events capability, "
                    f"{self.adapter.metadata.name!r} has none"
                )
        except Exception:
            self.scheduler.close()
            raise

    def start(self) -> None:
        self.adapter.start()

    def stop(self) -> None:
        try:
            self.adapter.stop()
        finally:
            self.scheduler.close()
