"""
Scheduler constants.

Timing values are in milliseconds. Defaults match the AlphaStream demo:
one core, a 1200ms tick, a new message every 2000ms.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------
DEFAULT_TICK_INTERVAL_MS = 1200
MIN_TICK_INTERVAL_MS = 100
MAX_TICK_INTERVAL_MS = 3000
TICK_INTERVAL_STEP_MS = 100

DEFAULT_INJECTION_INTERVAL_MS = 2000

# ---------------------------------------------------------------------------
# Cores
# ---------------------------------------------------------------------------
DEFAULT_CORE_COUNT = 1

# ---------------------------------------------------------------------------
# History retention
# ---------------------------------------------------------------------------
PROCESSED_HISTORY_LIMIT = 50
INTERVAL_HISTORY_LIMIT = 100
# Trace lines kept by a long-running runtime; finite simulator runs keep all
TRACE_LOG_LIMIT = 1000

# ---------------------------------------------------------------------------
# Message generation
# ---------------------------------------------------------------------------
PRICE_FLOOR = 100.0
PRICE_SPAN = 1000.0
MESSAGE_ID_LENGTH = 9
ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def is_valid_tick_interval(interval_ms: int) -> bool:
    return MIN_TICK_INTERVAL_MS <= interval_ms <= MAX_TICK_INTERVAL_MS
