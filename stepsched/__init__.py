"""Precedence-constrained task scheduling.

Exports the graph, the scheduler and the constraint parser.
"""

from stepsched.graph import ConstraintGraph, letter_universe, universe_from_edges  # noqa: F401
from stepsched.models import Dependency, Schedule, ScheduledTask  # noqa: F401
from stepsched.parser import load_constraints, parse_constraints  # noqa: F401
from stepsched.scheduler import Scheduler  # noqa: F401

__all__ = [
    "ConstraintGraph",
    "Dependency",
    "Schedule",
    "ScheduledTask",
    "Scheduler",
    "letter_universe",
    "load_constraints",
    "parse_constraints",
    "universe_from_edges",
]
