"""Terminal GUI adapter for simple interactive operation."""

from __future__ import annotations

import json

from alphastream.gui.contract import AdapterCapability, GuiAdapterMetadata
from alphastream.gui.facade import SimulationGuiFacade


_HELP = (
    "configure <n> | inject <client> [kind] | random | tick [n] | run | stop | "
    "inject-on | inject-off | rate <ms> | queues | cores | metrics | logs | gantt | "
    "events | reset | quit"
)


class TerminalGuiAdapter:
    """Minimal terminal adapter used as a pluggable GUI."""

    metadata = GuiAdapterMetadata(
        name="terminal",
        version="1.0.0",
        capabilities=(AdapterCapability.COMMANDS, AdapterCapability.LIFECYCLE),
    )

    __slots__ = ("_facade", "_running")

    def __init__(self, facade: SimulationGuiFacade) -> None:
        self._facade = facade
        self._running = False

    def start(self) -> None:
        self._running = True
        clients = ", ".join(self._facade.app_settings()["clients"])
        print("Terminal GUI adapter started.")
        print(f"Clients: {clients}")
        print(f"Commands: {_HELP}, help")

        while self._running:
            try:
                raw = input("alphastream> ").strip()
            except EOFError:
                break
            except KeyboardInterrupt:
                break

            if not raw:
                continue

            if raw in {"quit", "exit"}:
                break
            if raw == "help":
                print(_HELP)
                continue

            try:
                self._dispatch(raw)
            except Exception as exc:  # pragma: no cover - interactive adapter safety net
                print(f"Error: {exc}")

        self.stop()

    def stop(self) -> None:
        self._running = False

    def _dispatch(self, raw: str) -> None:
        command, *args = raw.split()
        command = command.lower()

        if command == "configure":
            self._print(self._facade.configure(core_count=int(args[0])))
        elif command == "inject":
            kind = args[1] if len(args) > 1 else None
            self._print(self._facade.inject_message(client_id=args[0], kind=kind))
        elif command == "random":
            self._print(self._facade.inject_random())
        elif command == "tick":
            count = int(args[0]) if args else 1
            self._print(self._facade.tick(count=count))
        elif command == "run":
            self._print(self._facade.set_processing(enabled=True))
        elif command == "stop":
            self._print(self._facade.set_processing(enabled=False))
        elif command == "inject-on":
            self._print(self._facade.set_injecting(enabled=True))
        elif command == "inject-off":
            self._print(self._facade.set_injecting(enabled=False))
        elif command == "rate":
            self._print(self._facade.set_tick_interval(interval_ms=int(args[0])))
        elif command == "queues":
            self._print_queues()
        elif command == "cores":
            self._print(self._facade.list_cores())
        elif command == "metrics":
            self._print(self._facade.metrics())
        elif command == "logs":
            self._print(self._facade.processed_log(limit=10))
        elif command == "gantt":
            self._print(self._facade.gantt())
        elif command == "events":
            self._print(self._facade.list_events(limit=20))
        elif command == "reset":
            self._print(self._facade.reset_simulation())
        else:
            print("Unknown command. Type 'help'.")

    def _print_queues(self) -> None:
        for queue in self._facade.list_queues():
            marker = ""
            if queue["targeted_by"]:
                cores = ",".join(f"CORE{core_id}" for core_id in queue["targeted_by"])
                marker = f"  <- {cores}"
            print(f"{queue['client_id']:<6} depth={queue['depth']:<3}{marker}")

    @staticmethod
    def _print(payload: object) -> None:
        print(json.dumps(payload, indent=2))
