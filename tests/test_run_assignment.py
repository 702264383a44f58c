"""Tests for the run_assignment.py driver.

Run with: pytest tests/test_run_assignment.py -v
"""

import matplotlib

matplotlib.use("Agg")

from run_assignment import main  # noqa: E402


def test_builtin_sample(capsys, tmp_path):
    code = main(["--config", str(tmp_path / "missing.yaml")])
    out = capsys.readouterr().out

    assert code == 0
    assert "using defaults" in out
    assert "Minimum total cost = 10.200" in out
    assert "Job 0 -> Worker 1 (Cost = 6.20)" in out
    assert "Job 3 -> unassigned" in out


def test_yaml_matrix_with_more_workers(capsys, tmp_path):
    path = tmp_path / "crew.yaml"
    path.write_text(
        "workers: [ann, bob, cy]\n"
        "jobs: [cut, glue]\n"
        "costs:\n"
        "  - [1.0, 9.0]\n"
        "  - [9.0, 1.0]\n"
        "  - [5.0, 5.0]\n",
        encoding="utf-8",
    )

    code = main(["--config", str(tmp_path / "missing.yaml"), "--matrix", str(path)])
    out = capsys.readouterr().out

    assert code == 0
    assert "cut -> ann (Cost = 1.00)" in out
    assert "glue -> bob (Cost = 1.00)" in out
    assert "Unmatched workers: cy" in out


def test_invalid_matrix_exits_nonzero(capsys, tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("1.0,-2.0\n", encoding="utf-8")

    code = main(["--config", str(tmp_path / "missing.yaml"), "--matrix", str(path)])

    assert code == 1
    assert "negative" in capsys.readouterr().err


def test_plot_written(capsys, tmp_path):
    out_png = tmp_path / "plot.png"

    code = main(["--config", str(tmp_path / "missing.yaml"), "--plot", str(out_png)])

    assert code == 0
    assert out_png.exists()
    assert "Saved plot" in capsys.readouterr().out


def test_bruteforce_too_large_exits_nonzero(capsys, tmp_path):
    path = tmp_path / "big.csv"
    path.write_text("\n".join(",".join(["1.0"] * 9) for _ in range(9)) + "\n", encoding="utf-8")

    code = main(
        ["--config", str(tmp_path / "missing.yaml"), "--matrix", str(path), "--solver", "bruteforce"]
    )

    assert code == 1
    assert "at most 8" in capsys.readouterr().err


def test_yaml_without_mapping_exits_nonzero(capsys, tmp_path):
    path = tmp_path / "rows.yaml"
    path.write_text("- [1.0, 2.0]\n- [3.0, 4.0]\n", encoding="utf-8")

    code = main(["--config", str(tmp_path / "missing.yaml"), "--matrix", str(path)])

    assert code == 1
    assert "costs" in capsys.readouterr().err
