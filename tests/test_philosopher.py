import io
import threading
import time

import pytest

from dinersim.clock import now_ms
from dinersim.config import SimulationConfig
from dinersim.philosopher import (
    ForkOrder,
    eat,
    philosopher_routine,
    release_forks,
    sleep,
    take_forks,
    think,
)
from dinersim.table import Table


def make_table(num=3, die=1000, eat_ms=1, sleep_ms=1, must_eat=None):
    out = io.StringIO()
    config = SimulationConfig(num, die, eat_ms, sleep_ms, must_eat)
    return Table(config, out), out


def messages(out):
    return [line.split(" ", 2)[2] for line in out.getvalue().splitlines()]


def all_unlocked(table):
    return all(not fork.lock.locked() for fork in table.forks)


def test_parity_even_takes_left_first():
    table, out = make_table()
    philo = table.philosophers[0]
    held = take_forks(table, philo, ForkOrder.PARITY)
    assert held == [philo.left_fork, philo.right_fork]
    assert messages(out) == ["has taken a fork", "has taken a fork"]
    release_forks(philo, held)
    assert all_unlocked(table)


def test_parity_odd_takes_right_first():
    table, _ = make_table()
    philo = table.philosophers[1]
    held = take_forks(table, philo, ForkOrder.PARITY)
    assert held == [philo.right_fork, philo.left_fork]
    release_forks(philo, held)
    assert all_unlocked(table)


@pytest.mark.parametrize("seat", [0, 1])
def test_last_reversed_regular_seats_take_left_first(seat):
    table, _ = make_table()
    philo = table.philosophers[seat]
    held = take_forks(table, philo, ForkOrder.LAST_REVERSED)
    assert held[0] is philo.left_fork
    release_forks(philo, held)
    assert all_unlocked(table)


def test_last_reversed_last_seat_takes_right_first():
    table, _ = make_table()
    philo = table.philosophers[-1]
    held = take_forks(table, philo, ForkOrder.LAST_REVERSED)
    assert held[0] is philo.right_fork
    release_forks(philo, held)
    assert all_unlocked(table)


def test_take_forks_after_stop_holds_only_first_fork():
    table, out = make_table()
    table.stop()
    philo = table.philosophers[0]
    held = take_forks(table, philo, ForkOrder.PARITY)
    assert held == [philo.left_fork]
    assert out.getvalue() == ""
    release_forks(philo, held)
    assert all_unlocked(table)


def test_release_forks_only_releases_held():
    table, _ = make_table()
    philo = table.philosophers[0]
    philo.left_fork.lock.acquire()
    philo.right_fork.lock.acquire()
    release_forks(philo, [philo.left_fork])
    assert not philo.left_fork.lock.locked()
    assert philo.right_fork.lock.locked()
    philo.right_fork.lock.release()


def test_eat_records_meal_and_frees_forks():
    table, out = make_table()
    philo = table.philosophers[0]
    before = now_ms()
    assert eat(table, philo, ForkOrder.PARITY) is True
    assert philo.meals == 1
    assert philo.last_meal_time >= before
    assert messages(out) == ["has taken a fork", "has taken a fork", "is eating"]
    assert all_unlocked(table)


def test_eat_marks_full_at_limit():
    table, _ = make_table(num=2, must_eat=1)
    philo = table.philosophers[0]
    assert eat(table, philo, ForkOrder.PARITY) is True
    assert table.num_full == 1
    assert table.all_full() is False


def test_eat_refused_after_limit():
    table, out = make_table(must_eat=1)
    philo = table.philosophers[0]
    philo.meals = 1
    assert eat(table, philo, ForkOrder.PARITY) is False
    assert philo.meals == 1
    assert out.getvalue() == ""


def test_eat_when_stopped_does_nothing():
    table, out = make_table()
    table.stop()
    philo = table.philosophers[1]
    assert eat(table, philo, ForkOrder.LAST_REVERSED) is False
    assert philo.meals == 0
    assert out.getvalue() == ""
    assert all_unlocked(table)


def test_sleep_when_time_allows():
    table, out = make_table()
    philo = table.philosophers[0]
    assert sleep(table, philo) is True
    assert messages(out) == ["is sleeping"]


def test_sleep_skipped_near_starvation():
    table, out = make_table(die=100, sleep_ms=50)
    philo = table.philosophers[0]
    philo.last_meal_time = now_ms() - 60
    assert sleep(table, philo) is False
    assert out.getvalue() == ""


def test_sleep_when_stopped():
    table, out = make_table()
    table.stop()
    assert sleep(table, table.philosophers[0]) is False
    assert out.getvalue() == ""


def test_think_prints_status():
    table, out = make_table(die=400, eat_ms=100, sleep_ms=100)
    assert think(table, table.philosophers[0]) is True
    assert messages(out) == ["is thinking"]


def test_think_with_tight_schedule_still_thinks():
    table, out = make_table(die=200, eat_ms=100, sleep_ms=100)
    assert think(table, table.philosophers[2]) is True
    assert messages(out) == ["is thinking"]


def test_think_skipped_near_starvation():
    table, out = make_table(die=400, eat_ms=100, sleep_ms=100)
    philo = table.philosophers[0]
    philo.last_meal_time = now_ms() - 400
    assert think(table, philo) is False
    assert out.getvalue() == ""


def test_lone_philosopher_takes_one_fork_and_waits():
    table, out = make_table(num=1, die=20)
    philo = table.philosophers[0]
    start = now_ms()
    philosopher_routine(table, philo, ForkOrder.PARITY)
    assert now_ms() - start >= 30
    assert messages(out) == ["has taken a fork"]
    assert philo.meals == 0
    assert all_unlocked(table)


@pytest.mark.parametrize("order", list(ForkOrder))
def test_routine_stops_when_table_stops(order):
    table, out = make_table(num=2, eat_ms=5, sleep_ms=5)
    philo = table.philosophers[1]
    thread = threading.Thread(target=philosopher_routine, args=(table, philo, order))
    thread.start()
    time.sleep(0.1)
    table.stop()
    thread.join(timeout=5)
    assert not thread.is_alive()
    assert philo.meals >= 1
    assert "is eating" in messages(out)
    assert all_unlocked(table)


@pytest.mark.parametrize("order", list(ForkOrder))
def test_two_philosophers_both_reach_limit(order):
    table, _ = make_table(num=2, eat_ms=5, sleep_ms=5, must_eat=2)
    threads = [
        threading.Thread(target=philosopher_routine, args=(table, philo, order))
        for philo in table.philosophers
    ]
    for thread in threads:
        thread.start()
    deadline = time.monotonic() + 5
    while not table.all_full() and time.monotonic() < deadline:
        time.sleep(0.005)
    full = table.all_full()
    table.stop()
    for thread in threads:
        thread.join(timeout=5)
    assert full is True
    assert [philo.meals for philo in table.philosophers] == [2, 2]
    assert all_unlocked(table)