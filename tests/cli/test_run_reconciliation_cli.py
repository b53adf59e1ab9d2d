from __future__ import annotations

from pathlib import Path

import pytest

from bsi_reconciliation.core.exceptions import EmptySourceWarning
from bsi_reconciliation.core.generate_sample_data import generate_sample_data
from bsi_reconciliation.run_reconciliation import main


def _argv(paths: dict[str, Path]) -> list[str]:
    return [
        "--money",
        str(paths["money"]),
        "--days",
        str(paths["days"]),
        "--description",
        str(paths["description_1"]),
        str(paths["description_2"]),
    ]


def test_main_prints_summary_and_writes_workbook(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    paths = generate_sample_data(tmp_path / "sample", n_employees=4)
    output = tmp_path / "out" / "bsi.xlsx"

    exit_code = main(_argv(paths) + ["--output", str(output)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Employees detected: 4" in captured.out
    assert output.exists() is True


def test_main_empty_ledger_exits_non_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    paths = generate_sample_data(tmp_path / "sample", n_employees=2)
    paths["money"].write_bytes(b"")

    with pytest.warns(EmptySourceWarning):
        exit_code = main(_argv(paths))

    assert exit_code == 1
    assert "no employees detected" in capsys.readouterr().err


def test_main_reports_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    paths = generate_sample_data(tmp_path / "sample", n_employees=2)
    paths["days"] = tmp_path / "absent.xlsx"

    exit_code = main(_argv(paths))

    assert exit_code == 2
    assert "absent.xlsx" in capsys.readouterr().err
