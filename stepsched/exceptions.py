"""Exceptions raised by graph construction, scheduling and input parsing."""

from __future__ import annotations

from typing import Iterable


class SchedulingError(RuntimeError):
    """Base class for errors that abort a scheduling run."""


class UnschedulableError(SchedulingError):
    """No task is ready, none is in progress, yet tasks remain pending."""

    def __init__(self, blocked: Iterable) -> None:
        self.blocked = sorted(blocked)
        super().__init__(
            "unschedulable: cyclic or missing dependency "
            f"(blocked: {''.join(str(t) for t in self.blocked)})"
        )


class DoubleCompletionError(SchedulingError):
    """``complete`` was called for a task that is not pending."""

    def __init__(self, task) -> None:
        self.task = task
        super().__init__(f"Task {task!r} is not pending (already completed or unknown)")


class ConfigurationError(ValueError):
    """Invalid worker count, duration function, universe or config value."""


class ConstraintParseError(ValueError):
    """Malformed constraint record in the input text."""

    def __init__(self, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(f"Invalid line {line_number}: {line!r}")
