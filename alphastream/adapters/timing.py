"""Timing adapter: wall clock -> millisecond timestamps, plus timing config."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from rr_sched.constants import (
    DEFAULT_CORE_COUNT,
    DEFAULT_INJECTION_INTERVAL_MS,
    DEFAULT_TICK_INTERVAL_MS,
    INTERVAL_HISTORY_LIMIT,
    MAX_TICK_INTERVAL_MS,
    MIN_TICK_INTERVAL_MS,
    PROCESSED_HISTORY_LIMIT,
)

from alphastream.envfile import env_int, env_opt_int, parse_env_file


@dataclass(frozen=True)
class TimingConfig:
    """Timing and retention knobs for a simulation runtime."""

    cores: int = DEFAULT_CORE_COUNT
    tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS
    injection_interval_ms: int = DEFAULT_INJECTION_INTERVAL_MS
    processed_history_limit: int = PROCESSED_HISTORY_LIMIT
    interval_history_limit: int = INTERVAL_HISTORY_LIMIT
    seed: int | None = None


class SimulationClock:
    """Reads the wall clock as integer epoch milliseconds."""

    __slots__ = ("_now_provider",)

    def __init__(self, now_provider: Callable[[], datetime] | None = None) -> None:
        self._now_provider = now_provider or (lambda: datetime.now(timezone.utc))

    def now_wallclock(self) -> datetime:
        now = self._now_provider()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    def now_ms(self) -> int:
        return int(self.now_wallclock().timestamp() * 1000)

    @staticmethod
    def ms_to_wall(timestamp_ms: int) -> datetime:
        return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)


def load_timing_config(env_file: str = ".env") -> TimingConfig:
    """Load timing configuration from env file, with safe fallbacks."""

    env = parse_env_file(env_file)

    return TimingConfig(
        cores=env_int(env, "CORES", DEFAULT_CORE_COUNT),
        tick_interval_ms=env_int(
            env,
            "TICK_INTERVAL_MS",
            DEFAULT_TICK_INTERVAL_MS,
            minimum=MIN_TICK_INTERVAL_MS,
            maximum=MAX_TICK_INTERVAL_MS,
        ),
        injection_interval_ms=env_int(env, "INJECTION_INTERVAL_MS", DEFAULT_INJECTION_INTERVAL_MS),
        processed_history_limit=env_int(env, "PROCESSED_HISTORY_LIMIT", PROCESSED_HISTORY_LIMIT),
        interval_history_limit=env_int(env, "INTERVAL_HISTORY_LIMIT", INTERVAL_HISTORY_LIMIT),
        seed=env_opt_int(env, "SEED"),
    )
