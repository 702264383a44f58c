"""
Solver configuration dataclass and YAML loader.

The two large magnitudes used by the Hungarian solver live here as named,
validated fields. Load from YAML with `load_config()` or construct directly
for tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


PADDING_SENTINEL: float = 1.0e9  # cost of cells added when squaring the matrix
SEARCH_INFINITY: float = 1.0e18  # "column not reached yet" during the path search


@dataclass(frozen=True)
class SolverConfig:
    """Hungarian solver parameters.

    Ordering guarantee: 0 < padding_sentinel < search_infinity. Every real
    cost must also be strictly below padding_sentinel (checked per solve when
    validate_inputs is on).

    Attributes:
        padding_sentinel: Cost of the dummy cells that square a rectangular matrix.
        search_infinity: Initial best-estimate for every column in a row search.
        validate_inputs: Reject malformed matrices instead of trusting the caller.
        ortools_cost_scale: Float → int multiplier for the OR-Tools reference solver.
    """

    padding_sentinel: float = PADDING_SENTINEL
    search_infinity: float = SEARCH_INFINITY
    validate_inputs: bool = True
    ortools_cost_scale: int = 1000

    def __post_init__(self) -> None:
        if not 0.0 < self.padding_sentinel < self.search_infinity:
            raise ValueError(
                "padding_sentinel must be positive and below search_infinity, got "
                f"padding_sentinel={self.padding_sentinel}, search_infinity={self.search_infinity}"
            )
        if self.ortools_cost_scale <= 0:
            raise ValueError(f"ortools_cost_scale must be positive, got {self.ortools_cost_scale}")


def load_config(path: str | Path) -> SolverConfig:
    """Load a SolverConfig from a YAML file.

    Args:
        path: Path to a YAML config file with an optional `solver:` section.

    Returns:
        SolverConfig with defaults for every key the file leaves out.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return SolverConfig(**raw.get("solver", {}))
