"""Pytest configuration, shared fixtures & custom summary hook.

Also ensures the project root is on sys.path so 'import stepsched' works
without installation.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'import stepsched.*' works
_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from stepsched.models import Dependency  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def example_edges() -> list[Dependency]:
    """The seven-edge example over tasks A..F."""
    pairs = ["CA", "CF", "AB", "AD", "BE", "DE", "FE"]
    return [Dependency(pre=p[0], post=p[1]) for p in pairs]


@pytest.fixture
def example_universe() -> set[str]:
    return set("ABCDEF")


@pytest.fixture
def example_path() -> str:
    return str(FIXTURES / "example_steps.txt")


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    collected = terminalreporter._numcollected  # type: ignore[attr-defined]
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        "Collected: "
        f"{collected} | Passed: {passed} | Failed: {failed} | "
        f"Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
