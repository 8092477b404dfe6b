"""Parser for line-oriented precedence records.

Each non-blank line has the form::

    Step C must be finished before step A can begin.

and becomes ``Dependency(pre="C", post="A")``.
"""

from __future__ import annotations

import re
from typing import Iterable

from stepsched.exceptions import ConstraintParseError
from stepsched.models import Dependency

STEP_RE = re.compile(r"^Step (\S) must be finished before step (\S) can begin\.$")


def parse_constraints(lines: Iterable[str]) -> list[Dependency]:
    """Parse constraint records, preserving their order.

    Args:
        lines: Text lines (trailing newlines allowed). Blank lines are skipped.

    Returns:
        List of dependencies in input order (duplicates kept).

    Raises:
        ConstraintParseError: For the first line that does not match the
            record format; carries the 1-based line number.
    """
    edges: list[Dependency] = []
    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        match = STEP_RE.match(line)
        if match is None:
            raise ConstraintParseError(number, line)
        edges.append(Dependency(pre=match.group(1), post=match.group(2)))
    return edges


def load_constraints(file_path: str) -> list[Dependency]:
    """Read and parse a constraint file (UTF-8)."""
    with open(file_path, "r", encoding="utf-8") as f:
        return parse_constraints(f)
