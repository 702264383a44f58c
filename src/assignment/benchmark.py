"""
src/assignment/benchmark.py
──────────────────────────────────────────────────────────────────────────────
Benchmark: assignment solvers head-to-head on random cost matrices.

Every scenario is solved by each requested solver; the first solver in the
list is the baseline the others are checked against.

Metrics per solver:
  • Total cost              (mean over scenarios)
  • Solve time              (wall-clock, ms: mean / P95 / max)
  • Cost disagreement       (max |cost − baseline cost|)
  • Matching disagreement   (scenarios whose match differs from the baseline)

Usage:
    python -m src.assignment.benchmark                         # 50 scenarios, 30×20
    python -m src.assignment.benchmark --scenarios 200
    python -m src.assignment.benchmark --workers 6 --jobs 6 --solvers hungarian bruteforce
    python -m src.assignment.benchmark --solvers hungarian scipy ortools
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field

import numpy as np

from src.assignment.config import SolverConfig, load_config
from src.assignment.solver import SOLVERS, AssignmentResult, create_solver

logger = logging.getLogger(__name__)


# ── Scenario generation ───────────────────────────────────────────────────────


def generate_scenario(
    n_workers: int,
    n_jobs: int,
    rng: np.random.Generator,
    max_cost: float = 100.0,
    tie_fraction: float = 0.0,
) -> np.ndarray:
    """Random (n_workers × n_jobs) cost matrix in [0, max_cost).

    tie_fraction rounds that share of entries to integers so several optimal
    matchings can exist, which stresses tie-breaking.
    """
    cost = rng.uniform(0.0, max_cost, size=(n_workers, n_jobs))
    if tie_fraction > 0.0:
        mask = rng.random(size=cost.shape) < tie_fraction
        cost[mask] = np.floor(cost[mask])
    return cost


# ── Per-solver accumulator ────────────────────────────────────────────────────


@dataclass
class SolverStats:
    """Benchmark measurements for one solver."""

    costs: list[float] = field(default_factory=list)
    times_ms: list[float] = field(default_factory=list)
    max_cost_gap: float = 0.0
    match_mismatches: int = 0

    def record(self, result: AssignmentResult, baseline: AssignmentResult | None) -> None:
        self.costs.append(result.total_cost)
        self.times_ms.append(result.solve_time_ms)
        if baseline is not None:
            self.max_cost_gap = max(self.max_cost_gap, abs(result.total_cost - baseline.total_cost))
            if result.match != baseline.match:
                self.match_mismatches += 1


# ── Main benchmark loop ───────────────────────────────────────────────────────


def run_benchmark(
    n_scenarios: int = 50,
    n_workers: int = 30,
    n_jobs: int = 20,
    seed: int = 42,
    solver_names: list[str] | None = None,
    solver_config: SolverConfig | None = None,
) -> dict[str, SolverStats]:
    """Run scenarios, print a comparison table and return the raw stats."""

    active = solver_names or ["hungarian", "scipy"]
    solvers = {name: create_solver(name, solver_config) for name in active}
    baseline_name = active[0]

    print("=" * 80)
    print("  Linear Assignment Benchmark")
    print("=" * 80)
    print(
        f"  Scenarios: {n_scenarios}  |  Workers: {n_workers}  |  Jobs: {n_jobs}  |  Seed: {seed}"
    )
    print(f"  Solvers:   {', '.join(active)}  (baseline: {baseline_name})")
    print()

    rng = np.random.default_rng(seed)
    stats = {name: SolverStats() for name in active}

    for k in range(n_scenarios):
        cost = generate_scenario(n_workers, n_jobs, rng)
        baseline = solvers[baseline_name].solve(cost)
        stats[baseline_name].record(baseline, None)
        for name in active[1:]:
            result = solvers[name].solve(cost)
            stats[name].record(result, baseline)
            if abs(result.total_cost - baseline.total_cost) > 1e-6:
                logger.warning(
                    "Scenario %d: %s cost %.6f differs from %s cost %.6f",
                    k,
                    name,
                    result.total_cost,
                    baseline_name,
                    baseline.total_cost,
                )

    # ── Print results ─────────────────────────────────────────────────────────
    col_w = 14

    print(f"  {'Metric':<30}" + "".join(f"{n:>{col_w}}" for n in active))
    print("  " + "─" * (30 + col_w * len(active)))

    fn_map = {
        "Avg total cost": (lambda s: np.mean(s.costs), ".3f"),
        "Avg solve time (ms)": (lambda s: np.mean(s.times_ms), ".2f"),
        "P95 solve time (ms)": (lambda s: np.percentile(s.times_ms, 95), ".2f"),
        "Max solve time (ms)": (lambda s: np.max(s.times_ms), ".2f"),
        "Max cost gap vs baseline": (lambda s: s.max_cost_gap, ".2e"),
        "Match mismatches": (lambda s: s.match_mismatches, "d"),
    }

    if n_scenarios > 0:
        for label, (fn, fmt) in fn_map.items():
            row = f"  {label:<30}"
            for name in active:
                row += f"{fn(stats[name]):{col_w}{fmt}}"
            print(row)

    print("\n" + "=" * 80)
    return stats


# ── CLI entry point ───────────────────────────────────────────────────────────

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Benchmark linear assignment solvers")
    parser.add_argument("--scenarios", type=int, default=50)
    parser.add_argument("--workers", type=int, default=30)
    parser.add_argument("--jobs", type=int, default=20)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--config", type=str, default=None, help="Solver config YAML")
    parser.add_argument(
        "--solvers",
        nargs="+",
        choices=sorted(SOLVERS),
        default=None,
        help="Solvers to compare; the first is the baseline (default: hungarian scipy)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = load_config(args.config) if args.config else None
    run_benchmark(args.scenarios, args.workers, args.jobs, args.seed, args.solvers, cfg)
