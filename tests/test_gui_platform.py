from __future__ import annotations

import io
import json
import random
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from alphastream.adapters.timing import TimingConfig
from alphastream.application.runtime import MessageScheduler
from alphastream.gui.adapters import available_adapters, create_adapter
from alphastream.gui.adapters.stream import EventStreamGuiAdapter
from alphastream.gui.config import GuiConfig, load_gui_config
from alphastream.gui.contract import AdapterCapability, GuiAdapterMetadata
from alphastream.gui.events import EventHub
from alphastream.gui.facade import SimulationGuiFacade
from alphastream.gui.host import GuiHost
from alphastream.gui.notifier import EventingNotifier
from alphastream.gui.scenarios import apply_seed_scenario, available_seed_scenarios


class GuiPlatformTests(unittest.TestCase):
    def setUp(self) -> None:
        self.event_hub = EventHub()
        self.scheduler = MessageScheduler(
            config=TimingConfig(),
            notifier=EventingNotifier(self.event_hub),
            rng=random.Random(2),
            enable_timers=False,
        )
        self.facade = SimulationGuiFacade(self.scheduler, self.event_hub)

    def tearDown(self) -> None:
        self.scheduler.close()

    def test_unknown_adapter_fails_fast(self) -> None:
        config = GuiConfig(adapter_name="unknown")
        with self.assertRaises(ValueError):
            create_adapter("unknown", facade=self.facade, config=config)
        self.assertEqual(set(available_adapters()), {"stream", "terminal"})

    def test_facade_inject_and_tick_payloads(self) -> None:
        self.facade.configure(core_count=2)
        injected = self.facade.inject_message(client_id="apex", kind="buy")
        self.assertEqual(injected["client_id"], "APEX")
        self.assertEqual(injected["kind"], "BUY")
        created = datetime.fromisoformat(injected["created_at"])
        self.assertEqual(created.tzinfo, timezone.utc)
        self.assertEqual(round(created.timestamp() * 1000), injected["created_at_ms"])
        self.facade.inject_message(client_id="NOVA")

        ticks = self.facade.tick(count=1)
        self.assertEqual(len(ticks), 1)
        self.assertEqual(
            [(r["core_id"], r["client_id"]) for r in ticks[0]["processed"]],
            [(0, "APEX"), (1, "NOVA")],
        )
        self.assertEqual(ticks[0]["idle_core_ids"], [])

        metrics = self.facade.metrics()
        self.assertEqual(metrics["total_processed"], 2)
        self.assertEqual(metrics["injected"], 2)
        self.assertEqual(metrics["ticks"], 1)
        self.assertEqual(len(self.facade.gantt()), 2)
        self.assertEqual(self.facade.processed_log(limit=1)[0]["client_id"], "APEX")

    def test_queues_show_which_cores_target_them(self) -> None:
        self.facade.configure(core_count=5)
        queues = {q["client_id"]: q for q in self.facade.list_queues()}
        self.assertEqual(queues["APEX"]["targeted_by"], [0, 4])
        self.assertEqual(queues["FLUX"]["targeted_by"], [3])

        cores = self.facade.list_cores()
        self.assertEqual([c["target_client_id"] for c in cores], ["APEX", "NOVA", "ZEUS", "FLUX", "APEX"])

    def test_simulation_state_is_json_serializable(self) -> None:
        self.facade.configure(core_count=1)
        self.facade.inject_random()
        self.facade.tick(count=4)

        state = self.facade.simulation_state()
        for key in ("configured", "queues", "cores", "metrics", "logs", "gantt", "recent_trace"):
            self.assertIn(key, state)
        self.assertTrue(state["configured"])
        self.assertEqual(len(state["recent_trace"]), 4)
        json.dumps(state)

    def test_failed_command_is_reported_in_diagnostics(self) -> None:
        with self.assertRaises(RuntimeError):
            self.facade.tick()

        metadata = GuiAdapterMetadata(name="terminal", version="1.0.0")
        diagnostics = self.facade.diagnostics(adapter_metadata=metadata)
        self.assertEqual(diagnostics["scheduler_connection_status"], "connected")
        self.assertIn("configure", diagnostics["last_command_error"])
        self.assertTrue(diagnostics["conservation_ok"])

        self.facade.configure(core_count=1)
        diagnostics = self.facade.diagnostics(adapter_metadata=metadata)
        self.assertIsNone(diagnostics["last_command_error"])
        self.assertIsNotNone(diagnostics["last_successful_command_time"])
        self.assertEqual(diagnostics["event_counts"], {"configured": 1})

    def test_facade_can_reset_simulation(self) -> None:
        self.facade.configure(core_count=2)
        for _ in range(3):
            self.facade.inject_random()

        result = self.facade.reset_simulation()
        self.assertEqual(result["discarded_message_count"], 3)
        self.assertFalse(self.facade.simulation_state()["configured"])
        self.assertEqual(self.facade.list_cores(), [])
        events = self.facade.list_events(limit=2)
        self.assertEqual([e["event_type"] for e in events], ["message_injected", "reset"])
        self.assertEqual(events[-1]["message"], "Simulation reset. Discarded 3 queued messages.")

    def test_tick_interval_and_timer_toggles(self) -> None:
        self.facade.configure(core_count=1)
        self.assertEqual(self.facade.set_tick_interval(interval_ms=400)["tick_interval_ms"], 400)
        with self.assertRaises(ValueError):
            self.facade.set_tick_interval(interval_ms=10)

        self.assertTrue(self.facade.set_processing(enabled=True)["is_processing"])
        self.assertFalse(self.facade.set_processing(enabled=False)["is_processing"])
        self.assertTrue(self.facade.set_injecting(enabled=True)["is_injecting"])

        settings = self.facade.app_settings()
        self.assertEqual(settings["clients"], ["APEX", "NOVA", "ZEUS", "FLUX"])
        self.assertEqual(settings["tick_interval_ms"]["min"], 100)
        self.assertEqual(settings["tick_interval_ms"]["max"], 3000)
        self.assertEqual(settings["tick_interval_ms"]["current"], 400)

    def test_seed_scenarios(self) -> None:
        keys = [item["key"] for item in available_seed_scenarios()]
        self.assertIn("empty", keys)
        self.assertIn("hot_client", keys)

        self.facade.configure(core_count=1)
        self.assertEqual(apply_seed_scenario(self.facade, "Hot_Client"), "hot_client")
        depths = {q["client_id"]: q["depth"] for q in self.facade.list_queues()}
        self.assertEqual(depths, {"APEX": 6, "NOVA": 1, "ZEUS": 1, "FLUX": 1})

        with self.assertRaises(KeyError):
            apply_seed_scenario(self.facade, "missing")

    def test_stream_adapter_writes_json_lines(self) -> None:
        self.facade.configure(core_count=1)
        self.facade.inject_message(client_id="ZEUS")
        output = io.StringIO()
        adapter = EventStreamGuiAdapter(self.facade, limit=2, output=output, poll_seconds=0.01)

        adapter.start()

        lines = output.getvalue().splitlines()
        self.assertEqual(len(lines), 2)
        events = [json.loads(line) for line in lines]
        self.assertEqual([e["event_type"] for e in events], ["configured", "message_injected"])
        self.assertEqual(self.event_hub.subscriber_count, 0)

    def test_stream_adapter_filters_event_types(self) -> None:
        self.facade.configure(core_count=1)
        self.facade.inject_message(client_id="APEX")
        self.facade.tick()
        output = io.StringIO()
        adapter = EventStreamGuiAdapter(
            self.facade,
            limit=1,
            event_types=("tick",),
            output=output,
            poll_seconds=0.01,
        )

        adapter.start()

        event = json.loads(output.getvalue())
        self.assertEqual(event["event_type"], "tick")
        self.assertTrue(event["message"].startswith("Tick 1: CORE0<-APEX"))


class EventHubTests(unittest.TestCase):
    def test_subscriber_receives_backlog_after_cursor(self) -> None:
        hub = EventHub()
        first = hub.publish(event_type="info", message="one")
        hub.publish(event_type="info", message="two")

        subscriber = hub.subscribe(after_event_id=first.event_id)
        event = hub.next_event(subscriber, timeout_seconds=0.01)
        self.assertIsNotNone(event)
        assert event is not None
        self.assertEqual(event.message, "two")
        self.assertIsNone(hub.next_event(subscriber, timeout_seconds=0.01))

    def test_full_subscriber_queue_counts_drops(self) -> None:
        hub = EventHub(history_limit=10, subscriber_queue_size=1)
        hub.subscribe()
        hub.publish(event_type="info", message="kept")
        hub.publish(event_type="info", message="dropped")
        self.assertEqual(hub.dropped_event_count, 1)
        self.assertEqual(len(hub.list_recent(limit=5)), 2)

    def test_subscribe_without_cursor_skips_history(self) -> None:
        hub = EventHub()
        hub.publish(event_type="info", message="before")
        subscriber = hub.subscribe()
        self.assertIsNone(hub.next_event(subscriber, timeout_seconds=0.01))

        hub.publish(event_type="tick", message="after")
        event = hub.next_event(subscriber, timeout_seconds=0.01)
        assert event is not None
        self.assertEqual(event.message, "after")
        self.assertEqual(hub.type_counts(), {"info": 1, "tick": 1})

    def test_filtered_subscriber_skips_other_types(self) -> None:
        hub = EventHub(subscriber_queue_size=1)
        subscriber = hub.subscribe(event_types=("tick",))
        hub.publish(event_type="info", message="ignored")
        hub.publish(event_type="tick", message="wanted")
        hub.publish(event_type="info", message="ignored too")

        self.assertEqual(hub.dropped_event_count, 0)
        event = hub.next_event(subscriber, timeout_seconds=0.01)
        assert event is not None
        self.assertEqual(event.message, "wanted")

    def test_history_is_bounded(self) -> None:
        hub = EventHub(history_limit=3)
        for n in range(5):
            hub.publish(event_type="info", message=str(n))
        self.assertEqual([e.message for e in hub.list_recent()], ["2", "3", "4"])
        self.assertEqual(hub.last_event.message, "4")


class GuiHostTests(unittest.TestCase):
    def test_gui_host_configures_and_seeds(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = GuiConfig(
                adapter_name="terminal",
                env_file=str(Path(tmpdir) / ".env"),
                seed_scenario="warm_queues",
                cores=3,
                enable_timers=False,
            )
            host = GuiHost(config)
            try:
                self.assertEqual(len(host.facade.list_cores()), 3)
                depths = [q["depth"] for q in host.facade.list_queues()]
                self.assertEqual(depths, [2, 2, 2, 2])
                self.assertEqual(host.adapter.metadata.name, "terminal")
                metadata = host.facade.metadata(adapter_metadata=host.adapter.metadata)
                self.assertEqual(metadata["adapter"]["capabilities"], ["commands", "lifecycle"])
                self.assertTrue(host.adapter.metadata.supports("Commands"))
                self.assertFalse(host.adapter.metadata.supports(AdapterCapability.EVENTS))
            finally:
                host.stop()

    def test_gui_host_rejects_unknown_scenario(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = GuiConfig(
                env_file=str(Path(tmpdir) / ".env"),
                seed_scenario="nope",
                enable_timers=False,
            )
            with self.assertRaises(ValueError):
                GuiHost(config)

    def test_gui_host_rejects_event_filter_for_terminal(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = GuiConfig(
                adapter_name="terminal",
                env_file=str(Path(tmpdir) / ".env"),
                enable_timers=False,
                stream_event_types=("tick",),
            )
            with self.assertRaisesRegex(ValueError, "events capability"):
                GuiHost(config)

    def test_gui_config_loading(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            env_path = Path(tmpdir) / ".env"
            env_path.write_text(
                "GUI_ADAPTER=stream\n"
                "GUI_SCENARIO=idle_rotation\n"
                "GUI_CORES=2\n"
                "GUI_AUTO_PROCESS=yes\n"
                "GUI_ENABLE_TIMERS=off\n"
                "GUI_STREAM_LIMIT=bogus\n"
                "GUI_STREAM_EVENTS=Tick, reset,\n",
                encoding="utf-8",
            )
            config = load_gui_config(str(env_path))

        self.assertEqual(config.adapter_name, "stream")
        self.assertEqual(config.seed_scenario, "idle_rotation")
        self.assertEqual(config.cores, 2)
        self.assertTrue(config.auto_process)
        self.assertFalse(config.auto_inject)
        self.assertFalse(config.enable_timers)
        self.assertEqual(config.stream_limit, 0)
        self.assertEqual(config.stream_event_types, ("tick", "reset"))


if __name__ == "__main__":
    unittest.main()
