"""
Cost matrix construction and validation for the assignment solver.

Builds a labelled float64 matrix from nested lists, numpy arrays or files,
and checks the preconditions the Hungarian solver relies on: rectangular
shape, declared dimensions, finite non-negative entries below the padding
sentinel.

Usage:
    matrix = compute_cost_matrix([[9.0, 2.5], [6.2, 4.8]])
    # matrix.costs[w][j] = cost of worker w doing job j
    matrix = load_cost_matrix("jobs.yaml")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

import numpy as np
import yaml

from src.assignment.config import PADDING_SENTINEL

# Anything `as_cost_array` accepts: a 2-D array or one sequence of costs per worker
CostInput = Union[np.ndarray, Sequence[Sequence[float]]]


class CostMatrixError(ValueError):
    """A cost matrix violates a solver precondition.

    `reason` is one of "dimension", "ragged", "negative", "non_finite",
    "sentinel".
    """

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


@dataclass
class CostMatrix:
    """Labelled assignment costs, indexed as [worker_index][job_index].

    Attributes:
        costs: (n_workers, n_jobs) float64 array.
        worker_ids: Label of each row.
        job_ids: Label of each column.
    """

    costs: np.ndarray
    worker_ids: list[str]
    job_ids: list[str]

    @property
    def n_workers(self) -> int:
        return int(self.costs.shape[0])

    @property
    def n_jobs(self) -> int:
        return int(self.costs.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.n_workers, self.n_jobs


def as_cost_array(cost: CostInput, n: int | None = None, m: int | None = None) -> np.ndarray:
    """Copy `cost` into a 2-D float64 array, raising on ragged rows.

    An empty input becomes a (n, m) array, which is only possible when one of
    the declared dimensions is zero.
    """
    if isinstance(cost, np.ndarray):
        arr = np.array(cost, dtype=np.float64)
    else:
        rows = [list(r) for r in cost]
        widths = {len(r) for r in rows}
        if len(widths) > 1:
            raise CostMatrixError("ragged", f"Cost matrix rows have differing lengths: {sorted(widths)}")
        width = widths.pop() if widths else (m or 0)
        arr = np.array(rows, dtype=np.float64).reshape(len(rows), width)

    if arr.ndim != 2:
        if arr.size == 0 and (n == 0 or m == 0):
            return np.zeros((n or 0, m or 0), dtype=np.float64)
        raise CostMatrixError("dimension", f"Cost matrix must be 2-D, got shape {arr.shape}")
    if arr.size == 0 and (n == 0 or m == 0):
        # [] and [[]] both describe a matrix with a zero dimension
        return np.zeros((n or 0, m or 0), dtype=np.float64)
    return arr


def validate_cost_matrix(
    cost: np.ndarray,
    n: int,
    m: int,
    padding_sentinel: float = PADDING_SENTINEL,
) -> None:
    """Raise CostMatrixError if `cost` cannot be solved as an n×m problem.

    Args:
        cost: Matrix already converted by `as_cost_array`.
        n: Declared number of workers (rows).
        m: Declared number of jobs (columns).
        padding_sentinel: Every real cost must be strictly below this.
    """
    if n < 0 or m < 0:
        raise CostMatrixError("dimension", f"Dimensions must be non-negative, got n={n}, m={m}")
    if cost.shape != (n, m):
        raise CostMatrixError(
            "dimension", f"Declared size {n}x{m} does not match cost matrix shape {cost.shape}"
        )
    if cost.size == 0:
        return

    bad = ~np.isfinite(cost)
    if bad.any():
        i, j = np.argwhere(bad)[0]
        raise CostMatrixError("non_finite", f"Cost at ({i}, {j}) is not finite: {cost[i, j]}")

    neg = cost < 0
    if neg.any():
        i, j = np.argwhere(neg)[0]
        raise CostMatrixError("negative", f"Cost at ({i}, {j}) is negative: {cost[i, j]}")

    big = cost >= padding_sentinel
    if big.any():
        i, j = np.argwhere(big)[0]
        raise CostMatrixError(
            "sentinel",
            f"Cost at ({i}, {j}) = {cost[i, j]} is not below the padding sentinel {padding_sentinel}",
        )


def compute_cost_matrix(
    rows: CostInput,
    worker_ids: Sequence[str] | None = None,
    job_ids: Sequence[str] | None = None,
) -> CostMatrix:
    """Build a validated CostMatrix.

    Args:
        rows: Nested sequence or 2-D array of costs, one row per worker.
        worker_ids: Row labels; defaults to "Worker 0", "Worker 1", …
        job_ids: Column labels; defaults to "Job 0", "Job 1", …

    Returns:
        CostMatrix holding a private float64 copy of the costs.
    """
    costs = as_cost_array(rows)
    n, m = costs.shape
    validate_cost_matrix(costs, n, m)

    workers = list(worker_ids) if worker_ids is not None else [f"Worker {i}" for i in range(n)]
    jobs = list(job_ids) if job_ids is not None else [f"Job {j}" for j in range(m)]
    if len(workers) != n or len(jobs) != m:
        raise CostMatrixError(
            "dimension",
            f"Got {len(workers)} worker labels and {len(jobs)} job labels for a {n}x{m} matrix",
        )

    return CostMatrix(costs=costs, worker_ids=workers, job_ids=jobs)


def load_cost_matrix(path: str | Path) -> CostMatrix:
    """Load a CostMatrix from a CSV or YAML file.

    CSV: plain comma-separated numbers, one worker per line.
    YAML: `costs: [[...], ...]` with optional `workers:` and `jobs:` labels.
    """
    path = Path(path)
    if path.suffix.lower() in (".yaml", ".yml"):
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise CostMatrixError(
                "dimension",
                f"{path} must hold a mapping with a `costs:` key, got {type(raw).__name__}",
            )
        return compute_cost_matrix(raw.get("costs", []), raw.get("workers"), raw.get("jobs"))

    costs = np.loadtxt(path, delimiter=",", dtype=np.float64, ndmin=2)
    return compute_cost_matrix(costs)
