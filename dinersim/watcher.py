"""The monitor that ends the simulation on a death or when everyone is full."""

from __future__ import annotations

import time

from .clock import now_ms
from .table import Philosopher, Table

DEFAULT_INTERVAL = 0.00001


def check_meals(table: Table) -> bool:
    """Stop the simulation if every philosopher has eaten enough.

    Returns whether the simulation was stopped.
    """
    if table.all_full():
        table.stop()
        return True
    return False


def check_death(table: Table, philo: Philosopher) -> bool:
    """Stop the simulation and announce it if ``philo`` has starved.

    A philosopher who already reached the meal limit is never declared
    dead. Returns whether ``philo`` died.
    """
    config = table.config
    with table.death_lock:
        if config.must_eat is not None and philo.meals >= config.must_eat:
            return False
        starved = now_ms() - philo.last_meal_time > config.time_to_die
    if not starved:
        return False
    table.stop()
    table.print_death(philo)
    return True


def run_watcher(table: Table, interval: float = DEFAULT_INTERVAL) -> Philosopher | None:
    """Watch the table until the simulation ends.

    Polls every ``interval`` seconds. Returns the philosopher who died, or
    ``None`` if the simulation ended because everyone had eaten enough.
    """
    while True:
        if check_meals(table):
            return None
        for philo in table.philosophers:
            if check_death(table, philo):
                return philo
        time.sleep(interval)