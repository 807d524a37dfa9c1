#!/usr/bin/env python3
"""
AlphaStream Round-Robin Scheduler - Discrete-Event Simulation

Runs the multi-core round-robin message scheduler on a virtual clock
with a chosen injection workload and prints per-client and per-core
statistics.

Usage:
  alphastream-sim [scenario] [options]

Scenarios:
  uniform    - One message for a random client every 2s (default)
  steady     - Every client injects at the same steady pace
  burst      - APEX floods while the other clients trickle in
  saturated  - Injection outpaces total service capacity
  idle       - No traffic; cores only rotate

Options:
  --env-file PATH   env defaults file (default: .env)
  --cores N         processing cores (default: 1)
  --duration MS     virtual run length (default: 60000)
  --tick MS         tick interval, 100-3000 in steps of 100 (default: 1200)
  --seed N          seed for workload sampling
  --[no-]trace      print the per-core scheduling trace
  --[no-]stats      print the summary tables (default: on)

Env keys in .env:
  SCENARIO, CORES, DURATION_MS, TICK_MS, TRACE, STATS, SEED
"""

from __future__ import annotations

import argparse
import sys

from rr_sched.constants import (
    DEFAULT_CORE_COUNT,
    DEFAULT_TICK_INTERVAL_MS,
    MAX_TICK_INTERVAL_MS,
    MIN_TICK_INTERVAL_MS,
    is_valid_tick_interval,
)
from simulator.engine import SimulationEngine
from simulator.workload import SCENARIOS
from alphastream.envfile import env_bool, env_int, env_opt_int, parse_env_file

DEFAULT_ENV_FILE = ".env"
DEFAULT_SCENARIO = "uniform"
DEFAULT_DURATION_MS = 60000


def _warn_env(msg: str) -> None:
    print(f"[env] {msg}", file=sys.stderr)


def _defaults_from_env(env: dict[str, str]) -> dict[str, object]:
    scenario = env.get("SCENARIO", DEFAULT_SCENARIO).strip().lower()
    if scenario not in SCENARIOS:
        _warn_env(f"SCENARIO={scenario!r} is unknown. Using {DEFAULT_SCENARIO!r}.")
        scenario = DEFAULT_SCENARIO

    return {
        "scenario": scenario,
        "cores": env_int(env, "CORES", DEFAULT_CORE_COUNT, warn=_warn_env),
        "duration": env_int(env, "DURATION_MS", DEFAULT_DURATION_MS, warn=_warn_env),
        "tick": env_int(
            env,
            "TICK_MS",
            DEFAULT_TICK_INTERVAL_MS,
            minimum=MIN_TICK_INTERVAL_MS,
            maximum=MAX_TICK_INTERVAL_MS,
            warn=_warn_env,
        ),
        "trace": env_bool(env, "TRACE", False, warn=_warn_env),
        "stats": env_bool(env, "STATS", True, warn=_warn_env),
        "seed": env_opt_int(env, "SEED", warn=_warn_env),
    }


def _build_parser(env_file: str, defaults: dict[str, object]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alphastream-sim",
        description="Discrete-event run of the AlphaStream round-robin scheduler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("scenario", nargs="?", choices=sorted(SCENARIOS), default=defaults["scenario"])
    parser.add_argument("--env-file", default=env_file, help="env defaults file")
    parser.add_argument("--cores", type=int, default=defaults["cores"], metavar="N")
    parser.add_argument("--duration", type=int, default=defaults["duration"], metavar="MS")
    parser.add_argument("--tick", type=int, default=defaults["tick"], metavar="MS")
    parser.add_argument("--seed", type=int, default=defaults["seed"], metavar="N")
    parser.add_argument("--trace", action=argparse.BooleanOptionalAction, default=defaults["trace"])
    parser.add_argument("--stats", action=argparse.BooleanOptionalAction, default=defaults["stats"])
    return parser


def run_scenario(
    scenario_name: str,
    num_cores: int = DEFAULT_CORE_COUNT,
    duration_ms: int = DEFAULT_DURATION_MS,
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
    trace: bool = False,
    seed: int | None = None,
) -> SimulationEngine:
    """Build an engine for ``scenario_name`` and run it for ``duration_ms``."""
    try:
        streams = SCENARIOS[scenario_name]()
    except KeyError:
        raise ValueError(
            f"Unknown scenario {scenario_name!r}. Available: {', '.join(sorted(SCENARIOS))}"
        ) from None

    engine = SimulationEngine(
        num_cores=num_cores,
        tick_interval_ms=tick_interval_ms,
        trace=trace,
        seed=seed,
    )
    for stream in streams:
        engine.add_stream(stream)

    print(
        f"Scenario {scenario_name}: {num_cores} core(s), {len(engine.streams)} stream(s), "
        f"{duration_ms}ms at one tick per {tick_interval_ms}ms"
    )
    engine.run(duration_ms)
    return engine


def _print_trace(trace_log: list[str], tail: int = 200) -> None:
    print("\n--- Scheduling Trace ---")
    hidden = len(trace_log) - tail
    if hidden > 0:
        print(f"... {hidden} earlier line(s) hidden")
    for line in trace_log[-tail:]:
        print(line)


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv

    # --env-file decides the defaults of every other flag
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--env-file", default=DEFAULT_ENV_FILE)
    known, _ = pre.parse_known_args(argv)
    defaults = _defaults_from_env(parse_env_file(known.env_file, warn=_warn_env))

    parser = _build_parser(known.env_file, defaults)
    args = parser.parse_args(argv)
    if args.cores < 1:
        parser.error("--cores must be >= 1")
    if args.duration < 1:
        parser.error("--duration must be >= 1")
    if not is_valid_tick_interval(args.tick):
        parser.error(f"--tick must be within {MIN_TICK_INTERVAL_MS}-{MAX_TICK_INTERVAL_MS}")

    engine = run_scenario(
        args.scenario,
        num_cores=args.cores,
        duration_ms=args.duration,
        tick_interval_ms=args.tick,
        trace=args.trace,
        seed=args.seed,
    )
    if args.trace:
        _print_trace(list(engine.scheduler.trace_log))
    if args.stats:
        engine.stats.print_summary()


if __name__ == "__main__":
    main()
