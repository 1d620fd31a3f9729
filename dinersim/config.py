"""Command-line arguments for the dining philosophers simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

INT_MAX = 2**31 - 1

USAGE = (
    "./philo philo_number time_to_die "
    "time_to_eat time_to_sleep [number_of_meals]"
)

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"


class ConfigError(ValueError):
    """Raised when the simulation arguments are rejected.

    ``reason`` is the diagnostic for the error stream (it may be ``None``
    when the source of the problem is only the offending argument), and
    ``argument`` is the rejected argument text, when a single one is at fault.
    """

    def __init__(self, reason: str | None, argument: str | None = None) -> None:
        self.reason = reason
        self.argument = argument
        if reason is not None:
            text = reason
        else:
            text = f"Invalid argument: {argument}"
        super().__init__(text)


@dataclass(frozen=True)
class SimulationConfig:
    """Validated simulation parameters; times are in milliseconds.

    ``must_eat`` is ``None`` when no meal limit was given.
    """

    num_philos: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    must_eat: int | None = None


def atoi(text: str) -> int:
    """Convert the leading integer of ``text`` the way C's ``atoi`` does.

    Leading whitespace is skipped, one optional sign is accepted and digits
    are read until the first non-digit. Anything unparsable yields 0. The
    result wraps to a 32-bit signed integer.
    """
    rest = text.lstrip(_WHITESPACE)
    sign = 1
    if rest[:1] == "+":
        rest = rest[1:]
    elif rest[:1] == "-":
        sign = -1
        rest = rest[1:]
    value = 0
    for char in rest:
        if char not in _DIGITS:
            break
        value = value * 10 + (ord(char) - ord("0"))
    value *= sign
    return ((value + 2**31) % 2**32) - 2**31


def _validate_number(text: str) -> None:
    if not text:
        raise ConfigError(None, text)
    if any(char not in _DIGITS for char in text):
        raise ConfigError("Non-digit character found in input", text)
    if int(text) > INT_MAX:
        raise ConfigError("Number too large, would cause integer overflow", text)


def parse_arguments(args: Sequence[str]) -> SimulationConfig:
    """Validate the four or five numeric arguments and build a config.

    ``args`` excludes the program name. Raises :class:`ConfigError` on the
    first problem found.
    """
    if len(args) not in (4, 5):
        raise ConfigError("Invalid number of arguments")
    for arg in args:
        _validate_number(arg)
    num_philos, time_to_die, time_to_eat, time_to_sleep = (atoi(a) for a in args[:4])
    must_eat = atoi(args[4]) if len(args) == 5 else None

    if num_philos <= 0:
        raise ConfigError("Need at least one philosopher")
    if time_to_die <= 0 or time_to_eat <= 0:
        raise ConfigError("Time values must be positive")
    if must_eat is not None and must_eat <= 0:
        raise ConfigError("Number of meals must be positive")

    return SimulationConfig(
        num_philos=num_philos,
        time_to_die=time_to_die,
        time_to_eat=time_to_eat,
        time_to_sleep=time_to_sleep,
        must_eat=must_eat,
    )