"""
Rectangular linear assignment via the Hungarian (Kuhn-Munkres) algorithm.

Finds the minimum-cost matching of n workers to m jobs; the larger side keeps
its surplus members unmatched.

Quick start:
    from src.assignment import solve
    result = solve(3, 4, [[9.0, 2.5, 7.1, 8.3], [6.2, 4.8, 3.0, 7.9], [5.0, 8.1, 1.5, 8.7]])
    result.total_cost   # 10.2
    result.match        # [1, 0, 2, -1]
"""

from src.assignment.config import SolverConfig, load_config
from src.assignment.cost_matrix import (
    CostMatrix,
    CostMatrixError,
    compute_cost_matrix,
    load_cost_matrix,
)
from src.assignment.solver import (
    AssignmentResult,
    HungarianSolver,
    SolverStatus,
    create_solver,
    solve,
)
from src.assignment.report import format_assignment

__all__ = [
    "solve",
    "HungarianSolver",
    "create_solver",
    "AssignmentResult",
    "SolverStatus",
    "SolverConfig",
    "load_config",
    "CostMatrix",
    "CostMatrixError",
    "compute_cost_matrix",
    "load_cost_matrix",
    "format_assignment",
]
