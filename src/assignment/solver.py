"""
Rectangular linear assignment solvers.

The problem: n workers, m jobs, cost[w][j] ≥ 0. Match every member of the
smaller side to exactly one member of the larger side so the total cost is
minimal. Extra members of the larger side stay unmatched.

Core algorithm
──────────────
Successive shortest augmenting paths with dual potentials (Kuhn-Munkres in
its O(N³) form, N = max(n, m)):

  Padding     →  square N×N matrix, dummy cells = padding sentinel
  Insertion   →  one Dijkstra-like search per row over reduced costs
                 a[i][j] − u[i] − v[j], potentials updated after every step
  Augment     →  walk the `way` trace back to the virtual column 0
  Extraction  →  keep only (real worker, real job) pairs

Internally rows and columns are 1-based; index 0 is the virtual column that
holds the row being inserted. None of that leaks into AssignmentResult.

Solver menu
───────────
  HungarianSolver   pure-Python/numpy implementation above   ← DEFAULT
  ScipyLAPSolver    scipy.optimize.linear_sum_assignment     reference
  OrToolsLAPSolver  OR-Tools SimpleLinearSumAssignment       reference (int-scaled)
  BruteForceSolver  itertools.permutations                   ground truth, tiny inputs

All four return the same AssignmentResult.
"""

from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np

from src.assignment.config import SolverConfig
from src.assignment.cost_matrix import (
    CostInput,
    CostMatrixError,
    as_cost_array,
    validate_cost_matrix,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Public types
# ─────────────────────────────────────────────────────────────────────────────


class SolverStatus(Enum):
    """Shape of the solved problem"""

    OPTIMAL = auto()  # square problem, perfect matching
    PARTIAL = auto()  # n != m; some workers or jobs unmatched
    EMPTY = auto()  # n == 0 or m == 0; nothing to match


@dataclass
class AssignmentResult:
    """Unified output of every solver.

    `match[j]` is the worker assigned to job j, or -1. `unmatched_workers`
    lists real workers that no job refers to (non-empty only when n > m).
    Potentials are those of the padded square problem and are empty for the
    reference solvers.
    """

    total_cost: float
    match: list[int]
    unmatched_workers: list[int]
    status: SolverStatus
    solve_time_ms: float = 0.0
    row_potentials: list[float] = field(default_factory=list)
    col_potentials: list[float] = field(default_factory=list)

    def pairs(self) -> list[tuple[int, int]]:
        """(worker, job) for every matched job, in job order."""
        return [(w, j) for j, w in enumerate(self.match) if w >= 0]


def _status(n: int, m: int) -> SolverStatus:
    if n == 0 or m == 0:
        return SolverStatus.EMPTY
    return SolverStatus.OPTIMAL if n == m else SolverStatus.PARTIAL


def _make_result(
    cost: np.ndarray,
    match: list[int],
    t0: float,
    row_potentials: list[float] | None = None,
    col_potentials: list[float] | None = None,
) -> AssignmentResult:
    """Sum real costs and collect unmatched workers for a 0-based job → worker map."""
    n, m = cost.shape
    total = 0.0
    for j, w in enumerate(match):
        if w >= 0:
            total += float(cost[w, j])
    used = {w for w in match if w >= 0}
    return AssignmentResult(
        total_cost=total,
        match=match,
        unmatched_workers=[w for w in range(n) if w not in used],
        status=_status(n, m),
        solve_time_ms=(time.perf_counter() - t0) * 1e3,
        row_potentials=row_potentials or [],
        col_potentials=col_potentials or [],
    )


def _prepare(n: int | None, m: int | None, cost: CostInput, cfg: SolverConfig) -> np.ndarray:
    """Copy the caller's matrix and check it when validation is on."""
    if (n is not None and n < 0) or (m is not None and m < 0):
        raise CostMatrixError("dimension", f"Dimensions must be non-negative, got n={n}, m={m}")
    arr = as_cost_array(cost, n, m)
    if n is None or m is None:
        n, m = arr.shape
    if cfg.validate_inputs:
        validate_cost_matrix(arr, n, m, cfg.padding_sentinel)
    return arr


# ─────────────────────────────────────────────────────────────────────────────
# Core — Hungarian algorithm
# ─────────────────────────────────────────────────────────────────────────────


def _pad_square(cost: np.ndarray, size: int, padding_sentinel: float) -> np.ndarray:
    """Return a (size+1)×(size+1) matrix; real costs at [1..n][1..m], sentinel elsewhere.

    Row and column 0 are never read as costs; they only keep 1-based indexing.
    """
    n, m = cost.shape
    a = np.full((size + 1, size + 1), padding_sentinel, dtype=np.float64)
    a[1 : n + 1, 1 : m + 1] = cost
    return a


# pylint: disable=invalid-name
def _insert_row(
    i: int,
    a: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    p: np.ndarray,
    way: np.ndarray,
    search_infinity: float,
) -> int:
    """Grow shortest paths from row i until an unmatched column is reached.

    Updates u, v and way in place. Returns that column; p is untouched
    except for the scratch slot p[0].
    """
    size = a.shape[0] - 1
    p[0] = i
    minv = np.full(size + 1, search_infinity, dtype=np.float64)
    used = np.zeros(size + 1, dtype=bool)

    j0 = 0
    while True:
        used[j0] = True
        i0 = p[j0]

        free = np.flatnonzero(~used[1:]) + 1
        cur = a[i0, free] - u[i0] - v[free]
        better = cur < minv[free]
        minv[free[better]] = cur[better]
        way[free[better]] = j0

        # argmin returns the first minimum, so ties go to the lowest column
        k = int(np.argmin(minv[free]))
        delta = minv[free[k]]
        j1 = int(free[k])

        # Rows of visited columns are distinct, so fancy-index += is safe
        visited = np.flatnonzero(used)
        u[p[visited]] += delta
        v[visited] -= delta
        minv[~used] -= delta

        j0 = j1
        if p[j0] == 0:
            return j0


def _augment(j0: int, p: np.ndarray, way: np.ndarray) -> None:
    """Flip matches along the traced path ending at free column j0."""
    while j0 != 0:
        j1 = way[j0]
        p[j0] = p[j1]
        j0 = j1


# pylint: enable=invalid-name


def solve(n: int, m: int, cost: CostInput, config: SolverConfig | None = None) -> AssignmentResult:
    """Minimum-cost assignment of n workers to m jobs.

    Args:
        n: Number of workers (rows), ≥ 0.
        m: Number of jobs (columns), ≥ 0.
        cost: n×m nested sequence or array of finite, non-negative costs.
            Never modified.
        config: Sentinels and validation switch; defaults to SolverConfig().

    Returns:
        AssignmentResult with `match` of length m and the optimal `total_cost`.

    Raises:
        CostMatrixError: Malformed input, when config.validate_inputs is set.
    """
    cfg = config or SolverConfig()
    t0 = time.perf_counter()
    arr = _prepare(n, m, cost, cfg)
    return _hungarian(arr, n, m, cfg, t0)


def _hungarian(arr: np.ndarray, n: int, m: int, cfg: SolverConfig, t0: float) -> AssignmentResult:
    """Run the padded O(N³) search on an already prepared matrix."""
    if n == 0 or m == 0:
        return _make_result(arr, [-1] * m, t0)

    size = max(n, m)
    logger.debug("Solving %dx%d assignment (padded to %d)", n, m, size)

    a = _pad_square(arr, size, cfg.padding_sentinel)
    u = np.zeros(size + 1, dtype=np.float64)
    v = np.zeros(size + 1, dtype=np.float64)
    p = np.zeros(size + 1, dtype=np.int64)
    way = np.zeros(size + 1, dtype=np.int64)

    for i in range(1, size + 1):
        j0 = _insert_row(i, a, u, v, p, way, cfg.search_infinity)
        _augment(j0, p, way)

    match = [int(p[j]) - 1 if 0 < p[j] <= n else -1 for j in range(1, m + 1)]
    result = _make_result(arr, match, t0, u[1:].tolist(), v[1:].tolist())
    logger.debug("Solved %dx%d: cost=%.6g in %.2f ms", n, m, result.total_cost, result.solve_time_ms)
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Solver 1 — HungarianSolver
# ─────────────────────────────────────────────────────────────────────────────


class HungarianSolver:
    """Object front-end to `solve` that infers the dimensions and keeps statistics.

    Holds no state between solves other than the counters.
    """

    name = "hungarian"

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost: CostInput) -> AssignmentResult:
        """Solve a matrix whose shape gives n and m."""

        t0 = time.perf_counter()
        arr = _prepare(None, None, cost, self.config)
        n, m = arr.shape
        result = _hungarian(arr, n, m, self.config, t0)
        self.total_solves += 1
        self.total_solve_time_ms += result.solve_time_ms
        return result


# ─────────────────────────────────────────────────────────────────────────────
# Solver 2 — ScipyLAPSolver
# ─────────────────────────────────────────────────────────────────────────────


class ScipyLAPSolver:
    """Reference solver: scipy.optimize.linear_sum_assignment (JV algorithm).

    Handles rectangular matrices natively; no padding involved.
    """

    name = "scipy"

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost: CostInput) -> AssignmentResult:
        """Solve with scipy"""

        from scipy.optimize import linear_sum_assignment  # type: ignore # pylint: disable=import-error, import-outside-toplevel

        t0 = time.perf_counter()
        arr = _prepare(None, None, cost, self.config)
        n, m = arr.shape
        match = [-1] * m
        if n and m:
            row_ind, col_ind = linear_sum_assignment(arr)
            for r, c in zip(row_ind, col_ind):
                match[int(c)] = int(r)

        result = _make_result(arr, match, t0)
        self.total_solves += 1
        self.total_solve_time_ms += result.solve_time_ms
        return result


# ─────────────────────────────────────────────────────────────────────────────
# Solver 3 — OrToolsLAPSolver
# ─────────────────────────────────────────────────────────────────────────────


class OrToolsLAPSolver:
    """Reference solver: OR-Tools SimpleLinearSumAssignment.

    OR-Tools needs integer arc costs and a perfect matching, so costs are
    scaled by config.ortools_cost_scale and the matrix is squared with
    zero-cost dummy cells (a constant pad does not change which real pairs
    are optimal). The returned total is recomputed from the float costs;
    only the matching comes from OR-Tools.
    """

    name = "ortools"

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost: CostInput) -> AssignmentResult:
        """Solve with OR-Tools"""

        from ortools.graph.python import linear_sum_assignment  # type: ignore # pylint: disable=import-error, import-outside-toplevel

        t0 = time.perf_counter()
        arr = _prepare(None, None, cost, self.config)
        n, m = arr.shape
        match = [-1] * m
        if n and m:
            size = max(n, m)
            scaled = np.zeros((size, size), dtype=np.int64)
            scaled[:n, :m] = np.rint(arr * self.config.ortools_cost_scale).astype(np.int64)

            end_nodes, start_nodes = np.meshgrid(np.arange(size), np.arange(size))
            lsa = linear_sum_assignment.SimpleLinearSumAssignment()
            lsa.add_arcs_with_cost(start_nodes.ravel(), end_nodes.ravel(), scaled.ravel())
            status = lsa.solve()
            if status != lsa.OPTIMAL:
                raise RuntimeError(f"OR-Tools linear sum assignment failed with status {status}")

            for worker in range(n):
                job = int(lsa.right_mate(worker))
                if job < m:
                    match[job] = worker

        result = _make_result(arr, match, t0)
        self.total_solves += 1
        self.total_solve_time_ms += result.solve_time_ms
        return result


# ─────────────────────────────────────────────────────────────────────────────
# Solver 4 — BruteForceSolver
# ─────────────────────────────────────────────────────────────────────────────


class BruteForceSolver:
    """Exhaustive search over all injective matchings of the smaller side.

    min(n, m)! · C(max, min) candidates, so only usable for tiny problems.
    """

    name = "bruteforce"
    max_side: int = 8

    def __init__(self, solver_config: SolverConfig | None = None) -> None:
        self.config = solver_config or SolverConfig()
        self.total_solves: int = 0
        self.total_solve_time_ms: float = 0.0

    def solve(self, cost: CostInput) -> AssignmentResult:
        """Enumerate every matching and keep the cheapest (first found on ties)."""

        t0 = time.perf_counter()
        arr = _prepare(None, None, cost, self.config)
        n, m = arr.shape
        if min(n, m) > self.max_side:
            raise ValueError(
                f"BruteForceSolver supports at most {self.max_side} on the smaller side, got {n}x{m}"
            )

        best_match = [-1] * m
        if n and m:
            best_total = float("inf")
            if n <= m:
                # each worker picks a distinct job
                for jobs in itertools.permutations(range(m), n):
                    total = sum(arr[w, j] for w, j in enumerate(jobs))
                    if total < best_total:
                        best_total = total
                        best_match = [-1] * m
                        for w, j in enumerate(jobs):
                            best_match[j] = w
            else:
                # each job picks a distinct worker
                for workers in itertools.permutations(range(n), m):
                    total = sum(arr[w, j] for j, w in enumerate(workers))
                    if total < best_total:
                        best_total = total
                        best_match = list(workers)

        result = _make_result(arr, best_match, t0)
        self.total_solves += 1
        self.total_solve_time_ms += result.solve_time_ms
        return result


# ─────────────────────────────────────────────────────────────────────────────
# Factory
# ─────────────────────────────────────────────────────────────────────────────

SOLVERS: dict[str, type] = {
    HungarianSolver.name: HungarianSolver,
    ScipyLAPSolver.name: ScipyLAPSolver,
    OrToolsLAPSolver.name: OrToolsLAPSolver,
    BruteForceSolver.name: BruteForceSolver,
}


def create_solver(name: str, solver_config: SolverConfig | None = None):
    """Instantiate a solver by name.

    Args:
        name: One of "hungarian", "scipy", "ortools", "bruteforce".
        solver_config: Shared configuration.

    Returns:
        Solver instance exposing `.solve(cost) -> AssignmentResult`.
    """
    try:
        cls = SOLVERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown solver '{name}'. Choose from: {', '.join(sorted(SOLVERS))}"
        ) from None
    return cls(solver_config)
