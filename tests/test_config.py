"""Tests for solver configuration and the YAML loader.

Run with: pytest tests/test_config.py -v
"""

from pathlib import Path

import pytest

from src.assignment.config import PADDING_SENTINEL, SEARCH_INFINITY, SolverConfig, load_config

REPO_ROOT = Path(__file__).resolve().parents[1]


class TestSolverConfig:
    """Defaults and ordering guarantees of the two sentinels."""

    def test_defaults(self):
        cfg = SolverConfig()
        assert cfg.padding_sentinel == PADDING_SENTINEL == 1e9
        assert cfg.search_infinity == SEARCH_INFINITY == 1e18
        assert cfg.validate_inputs is True

    def test_sentinel_must_be_below_infinity(self):
        with pytest.raises(ValueError, match="padding_sentinel"):
            SolverConfig(padding_sentinel=1e18, search_infinity=1e9)

    def test_sentinel_must_be_positive(self):
        with pytest.raises(ValueError):
            SolverConfig(padding_sentinel=0.0)

    def test_ortools_scale_must_be_positive(self):
        with pytest.raises(ValueError, match="ortools_cost_scale"):
            SolverConfig(ortools_cost_scale=0)

    def test_frozen(self):
        cfg = SolverConfig()
        with pytest.raises(AttributeError):
            cfg.padding_sentinel = 5.0


class TestLoadConfig:
    """YAML loading with defaults for missing keys."""

    def test_shipped_default_config(self):
        cfg = load_config(REPO_ROOT / "config" / "default_solver.yaml")
        assert cfg == SolverConfig()

    def test_partial_override(self, tmp_path):
        path = tmp_path / "solver.yaml"
        path.write_text("solver:\n  padding_sentinel: 5000.0\n  validate_inputs: false\n", encoding="utf-8")

        cfg = load_config(path)

        assert cfg.padding_sentinel == 5000.0
        assert cfg.validate_inputs is False
        assert cfg.search_infinity == SEARCH_INFINITY

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == SolverConfig()

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("solver:\n  tolerance: 0.1\n", encoding="utf-8")
        with pytest.raises(TypeError):
            load_config(path)
