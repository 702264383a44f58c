"""Smoke tests for the assignment heatmap.

Run with: pytest tests/test_visualizations.py -v
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from src.analysis.visualizations import IDLE_LABEL_COLOR, plot_assignment  # noqa: E402
from src.assignment.solver import solve  # noqa: E402


@pytest.fixture
def sample_costs() -> list[list[float]]:
    return [
        [9.0, 2.5, 7.1, 8.3],
        [6.2, 4.8, 3.0, 7.9],
        [5.0, 8.1, 1.5, 8.7],
    ]


def test_outlines_each_matched_cell(sample_costs):
    result = solve(3, 4, sample_costs)
    fig = plot_assignment(sample_costs, result)
    ax = fig.axes[0]

    assert len(ax.patches) == 3
    corners = sorted(p.get_xy() for p in ax.patches)
    assert corners == [(-0.5, 0.5), (0.5, -0.5), (1.5, 1.5)]
    assert "10.200" in ax.get_title()
    plt.close(fig)


def test_unassigned_job_label_greyed(sample_costs):
    result = solve(3, 4, sample_costs)
    fig = plot_assignment(sample_costs, result, job_ids=["a", "b", "c", "d"])
    labels = fig.axes[0].get_xticklabels()

    assert [label.get_text() for label in labels] == ["a", "b", "c", "d"]
    assert labels[3].get_color() == IDLE_LABEL_COLOR
    plt.close(fig)


def test_saves_png(tmp_path, sample_costs):
    result = solve(3, 4, sample_costs)
    fig = plot_assignment(sample_costs, result, title="Sample")
    out = tmp_path / "assignment.png"

    fig.savefig(out)

    assert out.exists() and out.stat().st_size > 0
    plt.close(fig)


def test_empty_problem_renders():
    result = solve(0, 2, [])
    fig = plot_assignment([], result)
    ax = fig.axes[0]

    assert len(ax.patches) == 0
    assert all(label.get_color() == IDLE_LABEL_COLOR for label in ax.get_xticklabels())
    plt.close(fig)
