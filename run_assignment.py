"""
run_assignment.py
──────────────────────────────────────────────────────────────────────────────
Quick-run script for the Hungarian assignment solver.

Usage:
    python run_assignment.py                                # built-in 3×4 sample
    python run_assignment.py --matrix config/sample_jobs.yaml
    python run_assignment.py --matrix costs.csv --solver scipy
    python run_assignment.py --plot assignment.png
    python run_assignment.py --config config/default_solver.yaml --verbose

Solver options:
    hungarian   Kuhn-Munkres with potentials, O(N³)      [default]
    scipy       scipy.optimize.linear_sum_assignment     reference
    ortools     OR-Tools SimpleLinearSumAssignment       reference
    bruteforce  exhaustive search                        ≤ 8 on the smaller side
"""

import argparse
import logging
import sys
from pathlib import Path

from src.assignment.config import SolverConfig, load_config
from src.assignment.cost_matrix import compute_cost_matrix, load_cost_matrix
from src.assignment.report import format_assignment
from src.assignment.solver import SOLVERS, create_solver

SAMPLE_COSTS = [
    [9.0, 2.5, 7.1, 8.3],
    [6.2, 4.8, 3.0, 7.9],
    [5.0, 8.1, 1.5, 8.7],
]


def main(argv: list[str] | None = None) -> int:
    """Main"""

    parser = argparse.ArgumentParser(description="Solve a rectangular assignment problem")
    parser.add_argument(
        "--config",
        type=str,
        default="config/default_solver.yaml",
        help="Path to solver config YAML",
    )
    parser.add_argument(
        "--matrix",
        type=str,
        default=None,
        help="Cost matrix file (.csv or .yaml); defaults to the built-in 3x4 sample",
    )
    parser.add_argument(
        "--solver", type=str, default="hungarian", choices=sorted(SOLVERS), help="Solver to use"
    )
    parser.add_argument("--plot", type=str, default=None, help="Save a heatmap PNG to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load config
    config_path = Path(args.config)
    if config_path.exists():
        config = load_config(config_path)
        print(f"Loaded config from {config_path}")
    else:
        print(f"Config {config_path} not found, using defaults")
        config = SolverConfig()

    try:
        matrix = load_cost_matrix(args.matrix) if args.matrix else compute_cost_matrix(SAMPLE_COSTS)
        result = create_solver(args.solver, config).solve(matrix.costs)
    except (ValueError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"\nSolved {matrix.n_workers}x{matrix.n_jobs} with {args.solver} "
          f"({result.status.name}, {result.solve_time_ms:.2f} ms)\n")
    print(
        format_assignment(
            result,
            matrix.costs,
            worker_ids=matrix.worker_ids,
            job_ids=matrix.job_ids,
            show_unmatched_workers=True,
        )
    )

    if args.plot:
        from src.analysis.visualizations import plot_assignment  # pylint: disable=import-outside-toplevel

        fig = plot_assignment(matrix.costs, result, worker_ids=matrix.worker_ids, job_ids=matrix.job_ids)
        fig.savefig(args.plot, dpi=150, bbox_inches="tight")
        print(f"\nSaved plot to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
