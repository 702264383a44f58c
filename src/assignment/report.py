"""
Plain-text rendering of an AssignmentResult.

    Minimum total cost = 10.200
    Job 0 -> Worker 1 (Cost = 6.20)
    Job 3 -> unassigned
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from src.assignment.cost_matrix import CostInput
from src.assignment.solver import AssignmentResult


def format_assignment(
    result: AssignmentResult,
    cost: CostInput,
    worker_ids: Sequence[str] | None = None,
    job_ids: Sequence[str] | None = None,
    show_unmatched_workers: bool = False,
) -> str:
    """Render the total cost and one line per job.

    Args:
        result: Solver output.
        cost: The matrix that was solved, used to print per-pair costs.
        worker_ids: Optional row labels; default "Worker <index>".
        job_ids: Optional column labels; default "Job <index>".
        show_unmatched_workers: Append a line listing workers with no job.

    Returns:
        Multi-line string without a trailing newline.
    """
    arr = np.asarray(cost, dtype=np.float64)
    workers = list(worker_ids) if worker_ids is not None else None
    jobs = list(job_ids) if job_ids is not None else None

    def worker_label(w: int) -> str:
        return workers[w] if workers is not None else f"Worker {w}"

    lines = [f"Minimum total cost = {result.total_cost:.3f}"]
    for j, w in enumerate(result.match):
        job = jobs[j] if jobs is not None else f"Job {j}"
        if w >= 0:
            lines.append(f"{job} -> {worker_label(w)} (Cost = {arr[w, j]:.2f})")
        else:
            lines.append(f"{job} -> unassigned")

    if show_unmatched_workers and result.unmatched_workers:
        idle = ", ".join(worker_label(w) for w in result.unmatched_workers)
        lines.append(f"Unmatched workers: {idle}")

    return "\n".join(lines)
