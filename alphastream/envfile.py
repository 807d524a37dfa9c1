"""Minimal ``KEY=VALUE`` env-file reader shared by every config loader.

Malformed values never raise: each typed getter falls back to its
default and, when a ``warn`` callback is given, reports why.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

Warn = Callable[[str], None]

TRUE_VALUES = frozenset({"1", "true", "yes", "on", "y"})
FALSE_VALUES = frozenset({"0", "false", "no", "off", "n"})


def _quiet(_: str) -> None:
    pass


def parse_env_file(path: str, *, warn: Warn = _quiet) -> dict[str, str]:
    """Read ``path`` into a dict. A missing file is an empty config."""
    env_path = Path(path)
    if not env_path.exists():
        return {}

    env: dict[str, str] = {}
    for lineno, line in enumerate(env_path.read_text(encoding="utf-8").splitlines(), start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        text = text.removeprefix("export ").strip()
        key, sep, value = text.partition("=")
        key = key.strip()
        if not sep:
            warn(f"Ignoring invalid env line {lineno} in {path!r}: {line!r}")
            continue
        if not key:
            warn(f"Ignoring empty key on env line {lineno} in {path!r}")
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        env[key] = value
    return env


def env_int(
    env: dict[str, str],
    key: str,
    default: int,
    *,
    minimum: int = 1,
    maximum: int | None = None,
    warn: Warn = _quiet,
) -> int:
    raw = env.get(key, "")
    if raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        warn(f"{key} must be an integer, got {raw!r}. Using {default}.")
        return default
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f">= {minimum}" if maximum is None else f"within {minimum}-{maximum}"
        warn(f"{key} must be {bounds}, got {value}. Using {default}.")
        return default
    return value


def env_opt_int(
    env: dict[str, str],
    key: str,
    *,
    minimum: int | None = None,
    warn: Warn = _quiet,
) -> int | None:
    raw = env.get(key, "")
    if raw == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        warn(f"{key} must be an integer, got {raw!r}. Ignoring it.")
        return None
    if minimum is not None and value < minimum:
        warn(f"{key} must be >= {minimum}, got {value}. Ignoring it.")
        return None
    return value


def env_bool(env: dict[str, str], key: str, default: bool, *, warn: Warn = _quiet) -> bool:
    raw = env.get(key, "").strip().lower()
    if raw == "":
        return default
    if raw in TRUE_VALUES:
        return True
    if raw in FALSE_VALUES:
        return False
    warn(f"{key} must be one of {sorted(TRUE_VALUES | FALSE_VALUES)}, got {raw!r}. Using {default}.")
    return default


def env_list(env: dict[str, str], key: str) -> tuple[str, ...]:
    """Comma-separated values, blanks dropped."""
    return tuple(item.strip() for item in env.get(key, "").split(",") if item.strip())
