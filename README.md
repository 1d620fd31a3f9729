# dinersim

A simulation of the dining philosophers problem. Each philosopher runs in
its own thread. Neighbours share a fork, and each fork is a lock. The
philosophers eat, sleep and think in a loop. A watcher thread ends the
simulation in one of two cases:

- a philosopher goes longer than `time_to_die` milliseconds without starting
  a meal. Its death is announced.
- a meal limit was given and every philosopher has reached it.

A philosopher who has reached the meal limit is never declared dead.

## Installation

```
pip install .
```

## Usage

```
dinersim number_of_philosophers time_to_die time_to_eat time_to_sleep [number_of_meals]
```

`python -m dinersim.cli` with the same arguments does the same.

All times are in milliseconds. Each argument must be a plain string of
digits, with no sign and no spaces, and must fit in a 32-bit signed int. The
following are rejected:

- any number of arguments other than four or five (the usage line is printed),
- zero philosophers,
- a `time_to_die` or `time_to_eat` of zero,
- a `number_of_meals` of zero, when it is given.

A `time_to_sleep` of zero is allowed.

Diagnostics go to standard error as `Error : <message>`. When a single
argument is at fault, `Invalid argument: <argument>` is also printed to
standard output. In every one of these cases the exit status is 1. A run that
completes exits with 0.

Each state change is printed as one line:

```
<ms since start> <philosopher number> <message>
```

The messages are `has taken a fork`, `is eating`, `is sleeping`,
`is thinking` and `died`. Philosophers are numbered from 1. Once the
simulation has stopped, no further status lines are printed, except the
`died` line itself.

A lone philosopher takes one fork and waits `time_to_die + 10` ms. The
watcher then announces its death.

Example:

```
dinersim 5 800 200 200 7
```

## Library use

- `dinersim.config.parse_arguments(args)` takes the argument list without the
  program name and returns a frozen `SimulationConfig` (`num_philos`,
  `time_to_die`, `time_to_eat`, `time_to_sleep`, `must_eat`). `must_eat` is
  `None` when no limit is given. Invalid input raises `ConfigError`, a
  `ValueError` whose `reason` and `argument` attributes carry the details.
  `dinersim.config.atoi` converts text the way C's `atoi` does, with 32-bit
  wrap-around.
- `dinersim.clock` provides `now_ms()`, `sleep_ms(ms)` and
  `sleep_while(condition, ms)`.
- `dinersim.table.Table(config, out=None)` holds the `Fork` and
  `Philosopher` objects, the stop flag and the meal counters. It writes
  status lines to `out`, which defaults to standard output.
- `dinersim.philosopher` has the individual actions `take_forks`,
  `release_forks`, `eat`, `sleep` and `think`, and the whole loop
  `philosopher_routine(table, philo, order)`. `ForkOrder` sets the strategy
  for taking forks:
  - `ForkOrder.PARITY`: even seats take the left fork first and odd seats
    the right fork first.
  - `ForkOrder.LAST_REVERSED`: every seat takes the left fork first except
    the last, which takes the right fork first.
- `dinersim.watcher` has `check_meals`, `check_death` and
  `run_watcher(table, interval)`. `run_watcher` returns the philosopher who
  died, or `None` if everyone ate enough.
- `dinersim.cli.run_simulation(config, order=ForkOrder.PARITY, out=None)`
  runs a whole simulation and returns the `Table` once every thread has
  finished. The `dinersim` command always uses `ForkOrder.PARITY`. The other
  strategy is available only through this function.

## Limitations

The command has no option to choose the fork strategy or the watcher's
polling interval. Timing depends on the operating system's thread scheduling,
so the exact timestamps vary from run to run.