import os
from pathlib import Path
from typing import Dict, Optional

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from stepsched.models import Schedule  # noqa: E402


def plot_gantt(
    schedule: Schedule,
    save_path: str,
    title: Optional[str] = None,
    show_labels: Optional[bool] = None,
) -> str:
    """Draw the worker-pool schedule as a Gantt chart and save it.

    One horizontal row per worker lane, one bar per task. Task letters are
    written inside the bars unless there are too many tasks to read them.

    Returns:
        The path the chart was written to.
    """
    lanes = sorted({row.lane for row in schedule.rows}) or [0]
    n = len(schedule.rows)
    m = len(lanes)

    # Adaptive sizing: width grows slowly with tasks, height with workers
    base_w, base_h = 10, 0.6 * m + 2
    fig, ax = plt.subplots(
        figsize=(min(base_w + n * 0.05, 18), min(base_h, 12)),
        constrained_layout=True,
    )
    cmap = plt.get_cmap("tab20")
    if show_labels is None:
        show_labels = n <= 60
    for idx, row in enumerate(schedule.rows):
        ax.barh(
            row.lane,
            row.duration,
            left=row.start,
            height=0.8,
            color=cmap(idx % 20),
            alpha=0.85,
            edgecolor="black",
            linewidth=0.6,
        )
        if show_labels:
            ax.text(
                row.start + row.duration / 2,
                row.lane,
                str(row.task),
                ha="center",
                va="center",
                fontsize=8,
            )
    ax.set_xlabel("Time", fontsize=12)
    ax.set_ylabel("Worker", fontsize=12)
    ax.set_title(title or f"Gantt Chart - makespan = {schedule.makespan}", fontsize=14, fontweight="bold")
    ax.set_yticks(lanes)
    ax.set_yticklabels([f"W{i}" for i in lanes])
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)
    ax.set_ylim(-0.5, max(lanes) + 0.5)

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=180)
    plt.close(fig)
    return save_path


def plot_makespan_by_workers(makespans: Dict[int, int], save_path: str) -> str:
    """Plot makespan against worker count and save it."""
    counts = sorted(makespans)
    values = [makespans[c] for c in counts]
    fig, ax = plt.subplots(figsize=(8, 5), constrained_layout=True)
    ax.plot(
        counts,
        values,
        "b-o",
        linewidth=2,
        markersize=6,
        markerfacecolor="white",
        markeredgecolor="blue",
        markeredgewidth=2,
    )
    for c, v in zip(counts, values):
        ax.annotate(
            f"{v}",
            xy=(c, v),
            xytext=(6, 6),
            textcoords="offset points",
            fontsize=9,
            bbox=dict(boxstyle="round,pad=0.2", facecolor="white", alpha=0.55),
        )
    ax.set_xlabel("Workers", fontsize=12)
    ax.set_ylabel("Makespan", fontsize=12)
    ax.set_title("Makespan by worker count", fontsize=14, fontweight="bold")
    ax.set_xticks(counts)
    ax.grid(True, alpha=0.25, linestyle="--", linewidth=0.7)

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=180)
    plt.close(fig)
    return save_path


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def next_unique_path(path: str | Path) -> str:
    """If the file exists, append _1, _2 ... until a free name is found."""
    p = Path(path)
    if not p.exists():
        return str(p)
    stem = p.stem
    suffix = p.suffix
    parent = p.parent
    counter = 1
    while True:
        candidate = parent / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return str(candidate)
        counter += 1
