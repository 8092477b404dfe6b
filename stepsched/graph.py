"""Constraint graph: pending tasks plus still-active precedence edges.

Concepts
--------
Ready task
    A task that is still pending and is not the ``post`` side of any edge
    remaining in the graph. Completing a task drops every edge it gates, which
    is the only way new tasks become ready.
Universe
    The full set of task identifiers to schedule. It is always an explicit
    input; identifiers with no edges are ready from the start.
"""

from __future__ import annotations

from typing import Iterable, Optional

from stepsched.exceptions import ConfigurationError, DoubleCompletionError
from stepsched.models import Dependency, TaskId


def letter_universe(first: str = "A", last: str = "Z") -> set[str]:
    """Return the fixed single-letter alphabet ``first..last`` (inclusive).

    Args:
        first: First letter of the range.
        last: Last letter of the range.

    Returns:
        Set of single-character identifiers.

    Raises:
        ConfigurationError: If the bounds are not single characters or the
            range is empty.
    """
    if len(first) != 1 or len(last) != 1:
        raise ConfigurationError("Universe bounds must be single characters")
    if ord(first) > ord(last):
        raise ConfigurationError(f"Empty universe range {first}..{last}")
    return {chr(c) for c in range(ord(first), ord(last) + 1)}


def universe_from_edges(edges: Iterable[Dependency]) -> set:
    """Union of all identifiers mentioned on either side of an edge."""
    universe: set = set()
    for edge in edges:
        universe.add(edge.pre)
        universe.add(edge.post)
    return universe


class ConstraintGraph:
    """Mutable set of pending tasks and remaining ``(pre, post)`` edges.

    The graph is consumed destructively by a scheduling run; use ``copy()`` to
    give every independent run its own instance.
    """

    def __init__(self, edges: Iterable[Dependency], universe: Iterable[TaskId]) -> None:
        self.edges: list[Dependency] = list(edges)
        self.pending: set = set(universe)
        self.completed: list = []
        unknown = universe_from_edges(self.edges) - self.pending
        if unknown:
            raise ConfigurationError(
                "Edges reference tasks outside the universe: "
                + ", ".join(str(t) for t in sorted(unknown))
            )

    def __repr__(self) -> str:
        return (
            f"ConstraintGraph(pending={len(self.pending)}, edges={len(self.edges)}, "
            f"completed={len(self.completed)})"
        )

    def copy(self) -> "ConstraintGraph":
        """Return an independent duplicate (edges list, pending and history)."""
        clone = ConstraintGraph.__new__(ConstraintGraph)
        clone.edges = list(self.edges)
        clone.pending = set(self.pending)
        clone.completed = list(self.completed)
        return clone

    def ready_set(self) -> set:
        """Pending tasks that are not gated by any remaining edge."""
        ready = set(self.pending)
        for edge in self.edges:
            ready.discard(edge.post)
        return ready

    def next_ready(self, exclude: Iterable[TaskId] = ()) -> Optional[TaskId]:
        """Smallest ready task not in ``exclude``; ``None`` if there is none."""
        candidates = self.ready_set().difference(exclude)
        if not candidates:
            return None
        return min(candidates)

    def complete(self, task: TaskId) -> None:
        """Mark ``task`` done and drop every edge whose ``pre`` is ``task``.

        Raises:
            DoubleCompletionError: If ``task`` is not pending.
        """
        if task not in self.pending:
            raise DoubleCompletionError(task)
        self.pending.remove(task)
        self.edges = [edge for edge in self.edges if edge.pre != task]
        self.completed.append(task)

    def is_done(self) -> bool:
        return not self.pending
