"""Command-line entry point that runs the dining philosophers simulation."""

from __future__ import annotations

import sys
import threading
from typing import Sequence, TextIO

from .config import USAGE, ConfigError, SimulationConfig, parse_arguments
from .philosopher import ForkOrder, philosopher_routine
from .table import Table
from .watcher import run_watcher


def _print_error(message: str) -> None:
    sys.stderr.write(f"Error : {message}\n")
    sys.stderr.flush()


def run_simulation(
    config: SimulationConfig,
    order: ForkOrder = ForkOrder.PARITY,
    out: TextIO | None = None,
) -> Table:
    """Run a whole simulation and return the table once every thread is done.

    Raises :class:`RuntimeError` if a thread cannot be started; threads that
    were already running are stopped and joined first.
    """
    table = Table(config, out)
    started: list[threading.Thread] = []

    def abort() -> None:
        table.stop()
        for thread in started:
            thread.join()

    for philo in table.philosophers:
        thread = threading.Thread(
            target=philosopher_routine,
            args=(table, philo, order),
            name=f"philosopher-{philo.id + 1}",
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError as exc:
            abort()
            raise RuntimeError("thread creation failed") from exc
        philo.thread = thread
        started.append(thread)

    watcher = threading.Thread(
        target=run_watcher, args=(table,), name="watcher", daemon=True
    )
    try:
        watcher.start()
    except RuntimeError as exc:
        abort()
        raise RuntimeError("thread creation failed") from exc

    watcher.join()
    table.stop()
    for thread in started:
        thread.join()
    return table


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the arguments, run the simulation and return an exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (4, 5):
        _print_error("Invalid number of arguments")
        print(USAGE)
        return 1
    try:
        config = parse_arguments(args)
    except ConfigError as exc:
        if exc.reason is not None:
            _print_error(exc.reason)
        if exc.argument is not None:
            print(f"Invalid argument: {exc.argument}")
        return 1
    try:
        run_simulation(config, ForkOrder.PARITY, sys.stdout)
    except RuntimeError as exc:
        _print_error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())