"""Solve driver: plain ordering plus the timed worker-pool run.

Both solves start from the same parsed constraints but each gets its own copy
of the ConstraintGraph. Results are logged, persisted as JSON and, when
charts are enabled, rendered as a Gantt chart and an optional makespan sweep.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from stepsched.config import RunConfig
from stepsched.durations import letter_duration
from stepsched.graph import ConstraintGraph
from stepsched.models import Dependency, Schedule
from stepsched.parser import load_constraints
from stepsched.scheduler import Scheduler, check_no_lane_overlap, check_precedence, makespan_by_workers
from stepsched.visualization import next_unique_path, plot_gantt, plot_makespan_by_workers

logger = logging.getLogger("stepsched.runner")


@dataclass
class SolveResult:
    order: str
    makespan: int
    schedule: Schedule
    sweep: Dict[int, int] = field(default_factory=dict)
    results_path: Optional[str] = None
    charts: List[str] = field(default_factory=list)


def run_solve(config: RunConfig, edges: Optional[List[Dependency]] = None) -> SolveResult:
    """Run both solves for one configuration.

    Args:
        config: Validated run configuration.
        edges: Pre-parsed constraints; read from ``config.input`` when None.

    Returns:
        ``SolveResult`` with the single-worker order, the timed makespan, the
        simulated schedule and the optional worker sweep.
    """
    if edges is None:
        edges = load_constraints(config.input)
    universe = config.resolve_universe(edges)
    graph = ConstraintGraph(edges, universe)
    logger.info(
        "Constraints: %s edges=%d tasks=%d",
        config.input,
        len(graph.edges),
        len(graph.pending),
    )

    order = Scheduler(1, letter_duration(0)).order_string(graph.copy())
    logger.info("Completion order (1 worker): %s", order)

    duration = letter_duration(config.duration_base)
    schedule = Scheduler(config.workers, duration).simulate(graph.copy())
    check_precedence(schedule, edges)
    check_no_lane_overlap(schedule)
    logger.info(
        "Elapsed time (%d workers, base %d): %d",
        config.workers,
        config.duration_base,
        schedule.makespan,
    )

    sweep: Dict[int, int] = {}
    if config.sweep_workers:
        sweep = makespan_by_workers(graph, config.sweep_workers, duration)
        for count in sorted(sweep):
            logger.info("Sweep workers=%d makespan=%d", count, sweep[count])

    result = SolveResult(order=order, makespan=schedule.makespan, schedule=schedule, sweep=sweep)
    os.makedirs(config.charts_dir, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    result.results_path = _write_results(config, sorted(universe), result, stamp)
    if config.charts_enabled:
        result.charts = _write_charts(config, result, stamp)
    return result


def _write_results(config: RunConfig, universe: list, result: SolveResult, stamp: str) -> Optional[str]:
    results_path = next_unique_path(os.path.join(config.charts_dir, f"results_{stamp}.json"))
    payload = {
        "input": config.input,
        "timestamp": stamp,
        "universe": [str(t) for t in universe],
        "order": result.order,
        "workers": config.workers,
        "duration_base": config.duration_base,
        "makespan": result.makespan,
        "schedule": [
            {"task": str(row.task), "worker": row.lane, "start": row.start, "end": row.end}
            for row in result.schedule.rows
        ],
        "sweep": {str(k): v for k, v in sorted(result.sweep.items())},
    }
    try:
        with open(results_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
    except OSError as e:  # pragma: no cover
        logger.warning("Failed to write results JSON: %s", e)
        return None
    logger.info("Saved results JSON to %s", results_path)
    return results_path


def _write_charts(config: RunConfig, result: SolveResult, stamp: str) -> List[str]:
    charts: List[str] = []
    try:
        g_path = next_unique_path(
            os.path.join(
                config.charts_dir,
                f"gantt_w{config.workers}_t{result.makespan}_{stamp}.png",
            )
        )
        charts.append(plot_gantt(result.schedule, save_path=g_path))
        logger.info("Saved Gantt chart to %s", g_path)
        if result.sweep:
            s_path = next_unique_path(os.path.join(config.charts_dir, f"makespan_sweep_{stamp}.png"))
            charts.append(plot_makespan_by_workers(result.sweep, save_path=s_path))
            logger.info("Saved makespan sweep to %s", s_path)
    except OSError as e:  # pragma: no cover
        logger.warning("Failed to create charts: %s", e)
    return charts
