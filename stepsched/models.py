"""Core data structures for precedence-constrained task scheduling.

This module defines:
    TaskId        -- alias for a task identifier (any totally ordered symbol).
    Dependency    -- immutable (pre, post) precedence edge.
    InProgress    -- heap entry for a task currently held by a worker.
    ScheduledTask -- one finished task with timing and lane data.
    Schedule      -- full simulation result plus makespan.
"""

from dataclasses import dataclass, field
from typing import Hashable

TaskId = Hashable  # single letters in the reference domain


@dataclass(frozen=True)
class Dependency:
    """Precedence edge: ``post`` may not start until ``pre`` has completed.

    Attributes:
        pre: Task that must finish first.
        post: Task gated by ``pre``.
    """

    pre: TaskId
    post: TaskId


@dataclass(frozen=True, order=True)
class InProgress:
    """Task occupying a worker slot until ``finish``.

    Ordering is ``(finish, task)`` ascending so a plain ``heapq`` pops the
    earliest finishing task first, ties going to the smallest identifier.
    ``lane`` and ``start`` are bookkeeping only and take no part in ordering.
    """

    finish: int
    task: TaskId
    lane: int = field(default=0, compare=False)
    start: int = field(default=0, compare=False)


@dataclass(frozen=True)
class ScheduledTask:
    """Single completed task with timing and identification data.

    Fields:
        task: Task identifier.
        lane: Worker slot that processed the task (0-based).
        start: Simulated start time.
        end: Completion time (start + duration).
    """

    task: TaskId
    lane: int
    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Schedule:
    """Full simulation result.

    Fields:
        rows: Scheduled tasks in completion order.
        order: Task identifiers in completion order.
        makespan: Elapsed time when the last task completed (0 if none).
    """

    rows: list[ScheduledTask]
    order: list[TaskId]
    makespan: int

    def finish_times(self) -> dict:
        return {row.task: row.end for row in self.rows}

    def start_times(self) -> dict:
        return {row.task: row.start for row in self.rows}
