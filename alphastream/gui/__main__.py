"""`python -m alphastream.gui`: boot the GUI host with one adapter."""

from __future__ import annotations

import argparse
from dataclasses import replace

from alphastream.gui.config import load_gui_config
from alphastream.gui.host import GuiHost


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the AlphaStream scheduler GUI host")
    parser.add_argument("--env-file", default=".env", help="Path to env file")
    parser.add_argument("--adapter", help="GUI adapter name (terminal or stream)")
    parser.add_argument("--scenario", help="Seed scenario key")
    parser.add_argument("--cores", type=int, help="Number of processing cores")
    parser.add_argument("--auto-process", action="store_true", help="Start the tick timer on startup")
    parser.add_argument("--auto-inject", action="store_true", help="Start random injection on startup")
    parser.add_argument(
        "--stream-limit",
        type=int,
        help="Stop the stream adapter after this many events (0 = unbounded)",
    )
    parser.add_argument(
        "--events",
        help="Comma-separated event types for the stream adapter (default: all)",
    )
    parser.add_argument(
        "--disable-timers",
        action="store_true",
        help="Disable background tick and injection timers",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = load_gui_config(args.env_file)

    if args.adapter:
        config = replace(config, adapter_name=args.adapter)
    if args.scenario:
        config = replace(config, seed_scenario=args.scenario)
    if args.cores:
        config = replace(config, cores=args.cores)
    if args.auto_process:
        config = replace(config, auto_process=True)
    if args.auto_inject:
        config = replace(config, auto_inject=True)
    if args.stream_limit is not None:
        config = replace(config, stream_limit=max(0, args.stream_limit))
    if args.events:
        event_types = tuple(t.strip().lower() for t in args.events.split(",") if t.strip())
        config = replace(config, stream_event_types=event_types)
    if args.disable_timers:
        config = replace(config, enable_timers=False)

    try:
        host = GuiHost(config)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    try:
        host.start()
    except KeyboardInterrupt:
        pass
    finally:
        host.stop()


if __name__ == "__main__":
    main()
