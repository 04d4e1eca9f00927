"""Unit tests for CLI command handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.main import main
from tests.fixture_paths import fixture_path


def test_cli_clean_writes_run_directory(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """CLI clean should print the created run directory and counts."""
    args = [
        "--output-root",
        str(tmp_path),
        "clean",
        str(fixture_path("layoffs_sample.csv")),
        "--dataset",
        "cli-demo",
    ]

    exit_code = main(args)
    output_lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert Path(output_lines[0]).is_dir()
    assert Path(output_lines[0]).name.startswith("cli-demo-")
    assert "records=18" in output_lines[1]


def test_cli_report_prints_table(capsys: pytest.CaptureFixture[str]) -> None:
    """CLI report should print the selected view as a table."""
    exit_code = main(
        ["report", str(fixture_path("layoffs_sample.csv")), "--view", "yearly_totals"]
    )
    output_lines = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert output_lines[0] == "year\ttotal_laid_off"
    assert output_lines[1:] == ["2020\t4420", "2021\t2434", "2022\t2650", "2023\t1860"]


def test_cli_views_lists_view_names(capsys: pytest.CaptureFixture[str]) -> None:
    """CLI views should list every registered view."""
    exit_code = main(["views"])
    output = capsys.readouterr().out

    assert exit_code == 0 and "stage_trend" in output


def test_cli_reports_domain_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Domain errors print a message and exit with status 1."""
    exit_code = main(["report", str(tmp_path / "missing.csv"), "--view", "yearly_totals"])
    output = capsys.readouterr().out

    assert exit_code == 1 and output.startswith("error=")


def test_cli_report_names_top_n_flag_on_bad_value(capsys: pytest.CaptureFixture[str]) -> None:
    """An invalid --top-n is reported against the flag, not the env variable."""
    exit_code = main(
        [
            "report",
            str(fixture_path("layoffs_sample.csv")),
            "--view",
            "stage_trend",
            "--top-n",
            "0",
        ]
    )
    output = capsys.readouterr().out

    assert exit_code == 1
    assert "--top-n" in output and "LAYOFFKIT_TOP_N" not in output
