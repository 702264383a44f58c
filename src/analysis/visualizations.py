"""
Assignment visualization.

Renders the cost matrix as a heatmap with:
- Workers as rows, jobs as columns
- Each cell annotated with its cost (small matrices only)
- Matched cells outlined
- Unassigned jobs and unmatched workers greyed out on the axis labels

Usage:
    from src.assignment import solve
    from src.analysis.visualizations import plot_assignment

    result = solve(n, m, cost)
    fig = plot_assignment(cost, result)
    fig.savefig("assignment.png", dpi=150, bbox_inches="tight")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from src.assignment.cost_matrix import CostInput, as_cost_array
from src.assignment.solver import AssignmentResult

if TYPE_CHECKING:
    from matplotlib.figure import Figure


# ── Styling constants ────────────────────────────────────────────

CMAP = "viridis_r"
MATCH_EDGE_COLOR = "#e41a1c"
MATCH_EDGE_WIDTH = 2.5
IDLE_LABEL_COLOR = "#969696"
ANNOTATE_MAX_CELLS = 400


def plot_assignment(
    cost: CostInput,
    result: AssignmentResult,
    title: str | None = None,
    worker_ids: Sequence[str] | None = None,
    job_ids: Sequence[str] | None = None,
    figsize: tuple[float, float] | None = None,
    annotate: bool | None = None,
) -> Figure:
    """Render the cost matrix with the optimal matching highlighted.

    Args:
        cost: n×m costs that produced `result`.
        result: Solver output.
        title: Plot title; defaults to the total cost.
        worker_ids: Row labels.
        job_ids: Column labels.
        figsize: Figure size in inches. Auto-calculated if None.
        annotate: Write costs into cells. Auto (small matrices only) if None.

    Returns:
        matplotlib Figure object.
    """
    # matched plus unmatched workers gives n, even when `cost` is empty
    n_workers = len(result.pairs()) + len(result.unmatched_workers)
    arr = as_cost_array(cost, n_workers, len(result.match))
    n, m = arr.shape

    if figsize is None:
        figsize = (max(4.0, 0.8 * m + 2.0), max(3.0, 0.6 * n + 1.5))
    if annotate is None:
        annotate = arr.size <= ANNOTATE_MAX_CELLS

    fig, ax = plt.subplots(figsize=figsize)
    if arr.size:
        im = ax.imshow(arr, cmap=CMAP, aspect="auto")
        fig.colorbar(im, ax=ax, label="Cost")

    if annotate and arr.size:
        threshold = (arr.max() + arr.min()) / 2.0
        for i in range(n):
            for j in range(m):
                ax.text(
                    j,
                    i,
                    f"{arr[i, j]:.1f}",
                    ha="center",
                    va="center",
                    fontsize=8,
                    color="white" if arr[i, j] < threshold else "black",
                )

    for w, j in result.pairs():
        ax.add_patch(
            mpatches.Rectangle(
                (j - 0.5, w - 0.5),
                1.0,
                1.0,
                fill=False,
                edgecolor=MATCH_EDGE_COLOR,
                linewidth=MATCH_EDGE_WIDTH,
            )
        )

    # ── Axis labels ──────────────────────────────────────────────
    ax.set_xticks(range(m))
    ax.set_yticks(range(n))
    ax.set_xticklabels(list(job_ids) if job_ids is not None else [f"J{j}" for j in range(m)])
    ax.set_yticklabels(list(worker_ids) if worker_ids is not None else [f"W{i}" for i in range(n)])
    for j, label in enumerate(ax.get_xticklabels()):
        if result.match[j] < 0:
            label.set_color(IDLE_LABEL_COLOR)
    idle = set(result.unmatched_workers)
    for i, label in enumerate(ax.get_yticklabels()):
        if i in idle:
            label.set_color(IDLE_LABEL_COLOR)

    ax.set_xlabel("Job")
    ax.set_ylabel("Worker")
    ax.set_title(title or f"Optimal assignment (total cost = {result.total_cost:.3f})")
    fig.tight_layout()
    return fig
