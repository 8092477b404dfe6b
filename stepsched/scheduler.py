"""Greedy list scheduler over a ConstraintGraph.

Two modes share one policy, "smallest ready identifier first":

* ``completion_order`` -- a single worker; yields the deterministic
  topological order of the tasks.
* ``simulate`` -- a pool of ``worker_count`` interchangeable workers running a
  non-preemptive, time-stepped simulation. In-progress tasks sit in a min-heap
  ordered by ``(finish, task)``; popping the heap advances simulated time and
  completes the task in the graph, which releases its successors.

Both modes consume the graph they are given. Pass ``graph.copy()`` when the
same constraints feed more than one run.
"""

from __future__ import annotations

import heapq
import logging
from typing import Iterable, Optional

from stepsched.durations import DurationFn, letter_duration, validate_durations
from stepsched.exceptions import ConfigurationError, UnschedulableError
from stepsched.graph import ConstraintGraph
from stepsched.models import Dependency, InProgress, Schedule, ScheduledTask

logger = logging.getLogger("stepsched.scheduler")


class Scheduler:
    """Runs the single-worker order or the multi-worker simulation.

    Args:
        worker_count: Size of the worker pool (>= 1).
        duration: Task duration function; defaults to ``letter_duration(0)``.

    Raises:
        ConfigurationError: If ``worker_count`` is not a positive integer.
    """

    def __init__(self, worker_count: int = 1, duration: Optional[DurationFn] = None) -> None:
        if isinstance(worker_count, bool) or not isinstance(worker_count, int) or worker_count < 1:
            raise ConfigurationError(f"worker_count must be >= 1, got {worker_count!r}")
        self.worker_count = worker_count
        self.duration = duration if duration is not None else letter_duration(0)

    def completion_order(self, graph: ConstraintGraph) -> list:
        """Complete every task one at a time, smallest ready identifier first.

        Raises:
            UnschedulableError: If tasks remain pending but none is ready.
        """
        order: list = []
        while not graph.is_done():
            task = graph.next_ready()
            if task is None:
                raise UnschedulableError(graph.pending)
            order.append(task)
            graph.complete(task)
        return order

    def order_string(self, graph: ConstraintGraph) -> str:
        return "".join(str(task) for task in self.completion_order(graph))

    def simulate(self, graph: ConstraintGraph) -> Schedule:
        """Run the worker-pool simulation until every task has completed.

        Each step first hands the smallest ready, unassigned tasks to idle
        workers, then pops the earliest finishing task (ties: smallest
        identifier), advances the clock to its finish time and completes it.
        A task is "assigned" from the moment a worker takes it until it pops;
        only the pop calls ``graph.complete``.

        Args:
            graph: Graph to drive to completion (mutated in place).

        Returns:
            Schedule with one row per task in completion order and the
            makespan (0 for an empty graph).

        Raises:
            ConfigurationError: If the duration function yields a non-positive
                value for any pending task (checked before time 0).
            UnschedulableError: If nothing is in progress, nothing is ready
                and tasks remain pending.
        """
        durations = validate_durations(self.duration, graph.pending)
        now = 0
        running: list[InProgress] = []
        assigned: set = set()
        idle_lanes = list(range(self.worker_count))
        rows: list[ScheduledTask] = []
        order: list = []

        while not graph.is_done():
            while len(running) < self.worker_count:
                task = graph.next_ready(exclude=assigned)
                if task is None:
                    break
                lane = heapq.heappop(idle_lanes)
                assigned.add(task)
                heapq.heappush(
                    running,
                    InProgress(finish=now + durations[task], task=task, lane=lane, start=now),
                )
                logger.debug("t=%d assign %s to worker %d", now, task, lane)

            if not running:
                raise UnschedulableError(graph.pending)

            entry = heapq.heappop(running)
            now = entry.finish
            graph.complete(entry.task)
            assigned.discard(entry.task)
            heapq.heappush(idle_lanes, entry.lane)
            rows.append(
                ScheduledTask(task=entry.task, lane=entry.lane, start=entry.start, end=entry.finish)
            )
            order.append(entry.task)
            logger.debug("t=%d complete %s on worker %d", now, entry.task, entry.lane)

        logger.info(
            "Simulation done: workers=%d tasks=%d makespan=%d",
            self.worker_count,
            len(rows),
            now,
        )
        return Schedule(rows=rows, order=order, makespan=now)

    def elapsed_time(self, graph: ConstraintGraph) -> int:
        return self.simulate(graph).makespan


def makespan_by_workers(
    graph: ConstraintGraph,
    worker_counts: Iterable[int],
    duration: Optional[DurationFn] = None,
) -> dict[int, int]:
    """Makespan for each worker count, every run on its own copy of ``graph``."""
    result: dict[int, int] = {}
    for count in worker_counts:
        result[count] = Scheduler(count, duration).elapsed_time(graph.copy())
    return result


def check_precedence(schedule: Schedule, edges: Iterable[Dependency]) -> bool:
    """Ensure every ``pre`` finished no later than its ``post`` started.

    Raises:
        AssertionError: On the first violated edge.
    """
    starts = schedule.start_times()
    finishes = schedule.finish_times()
    for edge in edges:
        if finishes[edge.pre] > starts[edge.post]:
            raise AssertionError(
                f"Precedence violated: {edge.pre} ends at {finishes[edge.pre]} "
                f"but {edge.post} starts at {starts[edge.post]}"
            )
    return True


def check_no_lane_overlap(schedule: Schedule) -> bool:
    """Ensure no two tasks overlap on the same worker lane.

    Raises:
        AssertionError: On the first detected temporal overlap.
    """
    by_lane: dict[int, list[ScheduledTask]] = {}
    for row in schedule.rows:
        by_lane.setdefault(row.lane, []).append(row)
    for lane_rows in by_lane.values():
        lane_rows.sort(key=lambda r: r.start)
        prev_end = -1
        for r in lane_rows:
            if r.start < prev_end:
                raise AssertionError(
                    f"Overlap on worker {r.lane} between end {prev_end} and start {r.start}"
                )
            prev_end = r.end
    return True
