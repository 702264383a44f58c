"""Tests for plain-text result rendering.

Run with: pytest tests/test_report.py -v
"""

import pytest

from src.assignment.report import format_assignment
from src.assignment.solver import solve


@pytest.fixture
def sample_costs() -> list[list[float]]:
    return [
        [9.0, 2.5, 7.1, 8.3],
        [6.2, 4.8, 3.0, 7.9],
        [5.0, 8.1, 1.5, 8.7],
    ]


def test_default_labels(sample_costs):
    result = solve(3, 4, sample_costs)

    assert format_assignment(result, sample_costs) == (
        "Minimum total cost = 10.200\n"
        "Job 0 -> Worker 1 (Cost = 6.20)\n"
        "Job 1 -> Worker 0 (Cost = 2.50)\n"
        "Job 2 -> Worker 2 (Cost = 1.50)\n"
        "Job 3 -> unassigned"
    )


def test_custom_labels(sample_costs):
    result = solve(3, 4, sample_costs)
    text = format_assignment(
        result,
        sample_costs,
        worker_ids=["ann", "bob", "cy"],
        job_ids=["cut", "glue", "sand", "paint"],
    )

    assert "cut -> bob (Cost = 6.20)" in text
    assert text.endswith("paint -> unassigned")


def test_unmatched_workers_line(sample_costs):
    transposed = [list(col) for col in zip(*sample_costs)]
    result = solve(4, 3, transposed)

    text = format_assignment(result, transposed, show_unmatched_workers=True)

    assert text.splitlines()[-1] == "Unmatched workers: Worker 3"


def test_unmatched_workers_hidden_by_default(sample_costs):
    transposed = [list(col) for col in zip(*sample_costs)]
    result = solve(4, 3, transposed)

    assert "Unmatched" not in format_assignment(result, transposed)


def test_empty_problem():
    result = solve(0, 2, [])

    assert format_assignment(result, []) == (
        "Minimum total cost = 0.000\nJob 0 -> unassigned\nJob 1 -> unassigned"
    )
