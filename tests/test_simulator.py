from __future__ import annotations

import io
import random
import unittest
from contextlib import redirect_stderr, redirect_stdout

import main
from rr_sched.clients import ClientId
from simulator.engine import SimulationEngine
from simulator.events import Event, EventType
from simulator.workload import SCENARIOS, InjectionStream


def _run(scenario: str, *, cores: int = 1, duration_ms: int = 30000, seed: int | None = 7) -> SimulationEngine:
    engine = SimulationEngine(num_cores=cores, tick_interval_ms=1200, seed=seed)
    for stream in SCENARIOS[scenario]():
        engine.add_stream(stream)
    engine.run(duration_ms)
    return engine


class SimulationEngineTests(unittest.TestCase):
    def test_same_seed_reproduces_run(self) -> None:
        first = _run("burst", cores=2)
        second = _run("burst", cores=2)

        self.assertEqual(first.state.history.processed_records(), second.state.history.processed_records())
        self.assertEqual(first.state.queues.snapshot(), second.state.queues.snapshot())
        self.assertEqual(first.state.metrics.snapshot(), second.state.metrics.snapshot())

    def test_every_scenario_conserves_messages(self) -> None:
        for name in SCENARIOS:
            with self.subTest(scenario=name):
                engine = _run(name, cores=2)
                self.assertTrue(engine.stats.conservation_ok)
                injected = sum(cs.injected for cs in engine.stats.client_stats.values())
                processed = sum(cs.processed for cs in engine.stats.client_stats.values())
                backlog = sum(cs.backlog for cs in engine.stats.client_stats.values())
                self.assertEqual(injected, engine.state.injected_count)
                self.assertEqual(processed + backlog, injected)

    def test_ticks_fire_at_fixed_interval(self) -> None:
        engine = _run("idle", duration_ms=6000)
        self.assertEqual(engine.stats.tick_count, 5)
        self.assertEqual(engine.stats.core_stats[0].idle, 5)
        self.assertEqual(engine.stats.utilization, 0.0)

    def test_injection_lands_before_tick_at_same_timestamp(self) -> None:
        engine = SimulationEngine(num_cores=1, tick_interval_ms=1200, seed=1)
        engine.add_stream(InjectionStream(client_id=ClientId.APEX, interval_ms=100000, start_ms=1200))
        engine.run(1200)

        records = engine.state.history.processed_records()
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].latency_ms, 0)

    def test_saturated_workload_builds_backlog(self) -> None:
        engine = _run("saturated", cores=1)
        backlog = sum(cs.backlog for cs in engine.stats.client_stats.values())
        self.assertGreater(backlog, 0)
        self.assertEqual(engine.stats.core_stats[0].idle, 0)

    def test_unregistered_stream_client_is_rejected(self) -> None:
        engine = SimulationEngine(seed=1)
        with self.assertRaises(KeyError):
            engine.add_stream(InjectionStream(client_id="ORION"))


class EventOrderingTests(unittest.TestCase):
    def test_events_order_by_timestamp_then_priority(self) -> None:
        engine = SimulationEngine(seed=1)
        engine.schedule_event(Event(timestamp=10, event_type=EventType.TICK))
        engine.schedule_event(Event(timestamp=10, event_type=EventType.INJECT))
        engine.schedule_event(Event(timestamp=5, event_type=EventType.TICK))

        ordered = sorted(engine.event_queue)
        self.assertEqual(
            [(e.timestamp, e.event_type) for e in ordered],
            [(5, EventType.TICK), (10, EventType.INJECT), (10, EventType.TICK)],
        )

    def test_stream_interval_variance_stays_in_bounds(self) -> None:
        stream = InjectionStream(interval_ms=1000, variance=0.2)
        rng = random.Random(3)
        samples = [stream.sample_interval(rng) for _ in range(200)]
        self.assertTrue(all(800 <= s <= 1200 for s in samples))



class CommandLineTests(unittest.TestCase):
    def test_cli_runs_scenario_with_trace(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            main.main([
                "idle",
                "--env-file", "/nonexistent/alphastream.env",
                "--cores", "2",
                "--duration", "3600",
                "--trace",
                "--no-stats",
            ])

        text = out.getvalue()
        self.assertIn("Scenario idle: 2 core(s)", text)
        self.assertIn("--- Scheduling Trace ---", text)

    def test_cli_rejects_tick_out_of_range(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            main.main(["--env-file", "/nonexistent/alphastream.env", "--tick", "50"])

    def test_run_scenario_rejects_unknown_name(self) -> None:
        with self.assertRaises(ValueError):
            main.run_scenario("bogus")

if __name__ == "__main__":
    unittest.main()
