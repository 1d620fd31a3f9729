"""Shared state of the dining table: forks, philosophers and output."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from typing import TextIO

from .clock import now_ms
from .config import SimulationConfig


@dataclass(eq=False)
class Fork:
    """A fork guarded by its own lock."""

    id: int
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


@dataclass(eq=False)
class Philosopher:
    """One philosopher seated between two forks; ``id`` counts from 0."""

    id: int
    left_fork: Fork
    right_fork: Fork
    meals: int = 0
    last_meal_time: int = field(default_factory=now_ms)
    thread: threading.Thread | None = field(default=None, repr=False)


class Table:
    """The simulation's shared state.

    ``death_lock`` guards the stop flag, the full counter and each
    philosopher's meal record; ``print_lock`` serialises output.
    """

    def __init__(self, config: SimulationConfig, out: TextIO | None = None) -> None:
        self.config = config
        self.out = out if out is not None else sys.stdout
        self.start_time = now_ms()
        self.print_lock = threading.Lock()
        self.death_lock = threading.Lock()
        self._stopped = False
        self.num_full = 0
        count = config.num_philos
        self.forks = [Fork(i) for i in range(count)]
        self.philosophers = [
            Philosopher(i, self.forks[i], self.forks[(i + 1) % count])
            for i in range(count)
        ]

    def _timestamp(self) -> int:
        return now_ms() - self.start_time

    def is_alive(self) -> bool:
        """True while the simulation has not been stopped."""
        with self.death_lock:
            return not self._stopped

    def stop(self) -> None:
        """Stop the simulation; every loop polling :meth:`is_alive` ends."""
        with self.death_lock:
            self._stopped = True

    def print_status(self, philo: Philosopher, message: str) -> bool:
        """Log ``message`` for ``philo`` unless the simulation has stopped.

        Returns whether a line was written.
        """
        with self.print_lock:
            if not self.is_alive():
                return False
            print(f"{self._timestamp()} {philo.id + 1} {message}", file=self.out, flush=True)
            return True

    def print_death(self, philo: Philosopher) -> None:
        """Log that ``philo`` died; written even after the simulation stopped."""
        with self.print_lock:
            print(f"{self._timestamp()} {philo.id + 1} died", file=self.out, flush=True)

    def record_meal(self, philo: Philosopher) -> None:
        """Note that ``philo`` starts a meal now."""
        with self.death_lock:
            philo.last_meal_time = now_ms()
            philo.meals += 1

    def mark_full(self) -> None:
        """Count one more philosopher as having eaten enough."""
        with self.death_lock:
            self.num_full += 1

    def all_full(self) -> bool:
        """True when a meal limit is set and every philosopher has reached it."""
        with self.death_lock:
            return (
                self.config.must_eat is not None
                and self.num_full == self.config.num_philos
            )