"""Duration functions mapping a task identifier to its processing time.

A duration function is any callable ``f(task) -> int``. The reference domain
charges ``base + position`` where position counts from 1 at the first letter
of the alphabet, so with ``base=60`` task ``A`` takes 61 time units.
"""

from __future__ import annotations

from typing import Callable, Iterable

from stepsched.exceptions import ConfigurationError
from stepsched.models import TaskId

DurationFn = Callable[[TaskId], int]


def letter_duration(base: int = 0, first: str = "A") -> DurationFn:
    """Build the alphabet-position duration function.

    Args:
        base: Non-negative constant added to every task.
        first: Letter whose position is 1.

    Returns:
        Callable ``f(task) -> base + ord(task) - ord(first) + 1``.

    Raises:
        ConfigurationError: If ``base`` is negative or not an integer.
    """
    if isinstance(base, bool) or not isinstance(base, int) or base < 0:
        raise ConfigurationError(f"duration base must be a non-negative integer, got {base!r}")
    offset = ord(first) - 1

    def duration(task: TaskId) -> int:
        return base + ord(task) - offset

    return duration


def unit_duration(task: TaskId) -> int:
    """Every task takes one time unit."""
    return 1


def validate_durations(duration: DurationFn, tasks: Iterable[TaskId]) -> dict:
    """Evaluate ``duration`` for every task and reject non-positive results.

    Returns:
        Mapping task -> duration for the given tasks.

    Raises:
        ConfigurationError: On the first task whose duration is not a positive
            integer (or cannot be computed at all).
    """
    table: dict = {}
    for task in sorted(tasks):
        try:
            value = duration(task)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"duration undefined for task {task!r}: {e}") from e
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(
                f"duration for task {task!r} must be a positive integer, got {value!r}"
            )
        table[task] = value
    return table
