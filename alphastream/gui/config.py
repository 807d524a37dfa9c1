"""Configuration loading for GUI host and adapters."""

from __future__ import annotations

from dataclasses import dataclass

from alphastream.envfile import env_bool, env_int, env_list, env_opt_int, parse_env_file


@dataclass(frozen=True, slots=True)
class GuiConfig:
    """Runtime configuration for selecting and booting a GUI adapter."""

    adapter_name: str = "terminal"
    env_file: str = ".env"
    seed_scenario: str = "empty"
    # None defers to the runtime CORES setting
    cores: int | None = None
    auto_process: bool = False
    auto_inject: bool = False
    enable_timers: bool = True
    stream_limit: int = 0
    # Empty streams every event type
    stream_event_types: tuple[str, ...] = ()


def load_gui_config(env_file: str = ".env") -> GuiConfig:
    """Load GUI config from env file with safe parsing defaults."""

    env = parse_env_file(env_file)

    return GuiConfig(
        adapter_name=env.get("GUI_ADAPTER", "").strip() or "terminal",
        env_file=env_file,
        seed_scenario=env.get("GUI_SCENARIO", "").strip() or "empty",
        cores=env_opt_int(env, "GUI_CORES", minimum=1),
        auto_process=env_bool(env, "GUI_AUTO_PROCESS", False),
        auto_inject=env_bool(env, "GUI_AUTO_INJECT", False),
        enable_timers=env_bool(env, "GUI_ENABLE_TIMERS", True),
        stream_limit=env_int(env, "GUI_STREAM_LIMIT", 0, minimum=0),
        stream_event_types=tuple(t.lower() for t in env_list(env, "GUI_STREAM_EVENTS")),
    )
