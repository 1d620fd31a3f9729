"""The life of one philosopher: taking forks, eating, sleeping and thinking."""

from __future__ import annotations

from enum import Enum

from .clock import now_ms, sleep_ms, sleep_while
from .table import Fork, Philosopher, Table

TAKEN_FORK = "has taken a fork"
EATING = "is eating"
SLEEPING = "is sleeping"
THINKING = "is thinking"


class ForkOrder(Enum):
    """Strategy that decides which fork a philosopher reaches for first.

    ``PARITY``: even seats take the left fork first and odd seats the right.
    Even seats start 1 ms late, and each round ends with a short pause.

    ``LAST_REVERSED``: every seat takes the left fork first except the last,
    which takes the right fork first and so breaks the cycle. Even seats
    start one meal late.
    """

    PARITY = "parity"
    LAST_REVERSED = "last-reversed"

    def fork_pair(self, philo: Philosopher, num_philos: int) -> tuple[Fork, Fork]:
        """The two forks of ``philo`` in the order they are to be taken."""
        if self is ForkOrder.PARITY:
            left_first = philo.id % 2 == 0
        else:
            left_first = philo.id != num_philos - 1
        if left_first:
            return philo.left_fork, philo.right_fork
        return philo.right_fork, philo.left_fork


def take_forks(table: Table, philo: Philosopher, order: ForkOrder) -> list[Fork]:
    """Acquire both forks of ``philo`` in the order ``order`` gives.

    Returns the forks now held, in acquisition order. Fewer than two means
    the simulation stopped after the first fork was taken; the caller must
    release what was returned.
    """
    held: list[Fork] = []
    for fork in order.fork_pair(philo, table.config.num_philos):
        if held and not table.is_alive():
            break
        fork.lock.acquire()
        held.append(fork)
        table.print_status(philo, TAKEN_FORK)
    return held


def release_forks(philo: Philosopher, held: list[Fork]) -> None:
    """Release those of the forks of ``philo`` that appear in ``held``."""
    for fork in (philo.left_fork, philo.right_fork):
        if fork in held:
            fork.lock.release()


def eat(table: Table, philo: Philosopher, order: ForkOrder) -> bool:
    """Take the forks, eat for ``time_to_eat`` and put the forks back.

    Returns whether a meal was eaten. A philosopher who already reached the
    meal limit does not eat again; reaching it marks the philosopher full.
    """
    config = table.config
    if config.must_eat is not None and philo.meals >= config.must_eat:
        return False
    held = take_forks(table, philo, order)
    if len(held) < 2 or not table.is_alive():
        release_forks(philo, held)
        return False
    table.record_meal(philo)
    table.print_status(philo, EATING)
    sleep_while(table.is_alive, config.time_to_eat)
    release_forks(philo, held)
    if config.must_eat is not None and philo.meals == config.must_eat:
        table.mark_full()
    return True


def sleep(table: Table, philo: Philosopher) -> bool:
    """Sleep for ``time_to_sleep`` unless that would outlast ``time_to_die``.

    Returns whether the philosopher slept.
    """
    if not table.is_alive():
        return False
    config = table.config
    since_meal = now_ms() - philo.last_meal_time
    if since_meal + config.time_to_sleep >= config.time_to_die:
        return False
    table.print_status(philo, SLEEPING)
    sleep_while(table.is_alive, config.time_to_sleep)
    return True


def _think_time(table: Table, allow_zero: bool) -> int:
    config = table.config
    if allow_zero and config.time_to_die - (config.time_to_sleep + config.time_to_eat) < 10:
        return 0
    if config.num_philos > 50:
        return 100
    return 5


def _think(table: Table, philo: Philosopher, allow_zero: bool) -> bool:
    if not table.is_alive():
        return False
    think_time = _think_time(table, allow_zero)
    since_meal = now_ms() - philo.last_meal_time
    if since_meal + think_time >= table.config.time_to_die:
        return False
    table.print_status(philo, THINKING)
    sleep_while(table.is_alive, think_time)
    return True


def think(table: Table, philo: Philosopher) -> bool:
    """Think briefly unless that would outlast ``time_to_die``.

    The pause is 0 ms when the schedule leaves less than 10 ms of slack,
    100 ms with more than 50 philosophers and 5 ms otherwise. Returns
    whether the philosopher thought.
    """
    return _think(table, philo, allow_zero=True)


def _dine_alone(table: Table, philo: Philosopher) -> None:
    with philo.right_fork.lock:
        table.print_status(philo, TAKEN_FORK)
    sleep_ms(table.config.time_to_die + 10)


def philosopher_routine(table: Table, philo: Philosopher, order: ForkOrder) -> None:
    """Run the eat, sleep, think cycle of ``philo`` until the table stops."""
    config = table.config
    if config.num_philos == 1:
        _dine_alone(table, philo)
        return
    if order is ForkOrder.PARITY:
        if philo.id % 2 == 0:
            sleep_ms(1)
        while table.is_alive():
            eat(table, philo, order)
            sleep(table, philo)
            think(table, philo)
            sleep_ms(1 + philo.id % 5)
        return
    if philo.id % 2 == 0:
        sleep_ms(config.time_to_eat)
    while table.is_alive():
        eat(table, philo, order)
        if not table.is_alive():
            break
        sleep(table, philo)
        if not table.is_alive():
            break
        _think(table, philo, allow_zero=False)