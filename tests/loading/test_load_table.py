from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from bsi_reconciliation.core.exceptions import (
    BsiReconciliationError,
    SourceFileNotFoundError,
    UnreadableFormatError,
)
from bsi_reconciliation import load_data
from bsi_reconciliation.load_data import decode_text, detect_separator, load_table, rows_to_frame


def test_detect_separator() -> None:
    assert detect_separator("Nom;Prénom;Poste") == ";"
    assert detect_separator("Nom,Prénom,Poste") == ","
    assert detect_separator("Nom") == ","


def test_decode_text_falls_back_to_windows_1252() -> None:
    assert decode_text("Libellé".encode("utf-8")) == "Libellé"
    assert decode_text("Libellé".encode("cp1252")) == "Libellé"
    assert decode_text("\ufeffCode".encode("utf-8")) == "Code"


def test_load_table_semicolon_csv_keeps_row_and_cell_order(tmp_path: Path, write_delimited) -> None:
    path = write_delimited(
        tmp_path / "ledger.csv",
        [
            ["Code", "Libellé", "", "Base S."],
            ["1000", "Salaire de base", "", "1 000,00"],
            ["2000"],
        ],
    )

    rows = load_table(path)

    assert rows == [
        ["Code", "Libellé", "", "Base S."],
        ["1000", "Salaire de base", "", "1 000,00"],
        ["2000"],
    ]


def test_load_table_ragged_rows_keep_their_own_cell_count(tmp_path: Path) -> None:
    path = tmp_path / "ragged.csv"
    path.write_bytes(b"a;b;c;d\n1\n\n2;;\n\"x;y\";z\n\n")

    rows = load_table(path)

    assert rows == [["a", "b", "c", "d"], ["1"], [], ["2", "", ""], ["x;y", "z"]]


def test_load_table_comma_csv_in_windows_1252(tmp_path: Path, write_delimited) -> None:
    path = write_delimited(
        tmp_path / "jours.csv",
        [["Nom", "Prénom", "Jours"], ["DUPONT", "Jérôme", "12"]],
        sep=",",
        encoding="cp1252",
    )

    rows = load_table(path)

    assert rows == [["Nom", "Prénom", "Jours"], ["DUPONT", "Jérôme", "12"]]


def test_load_table_empty_csv_has_no_rows(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_bytes(b"")

    assert load_table(path) == []


def test_load_table_spreadsheet_renders_cells_as_text(tmp_path: Path) -> None:
    path = tmp_path / "description.xlsx"
    pd.DataFrame(
        [
            ["Nom", "Ancienneté", "Jours", "Date d'arrivée"],
            ["DUPONT", 43525, 12.5, datetime(2019, 3, 1)],
        ]
    ).to_excel(path, engine="openpyxl", header=False, index=False)

    rows = load_table(path)

    assert rows == [
        ["Nom", "Ancienneté", "Jours", "Date d'arrivée"],
        ["DUPONT", "43525", "12.5", "01/03/2019"],
    ]


def test_load_table_open_document_spreadsheet(tmp_path: Path) -> None:
    path = tmp_path / "description.ods"
    pd.DataFrame([["Nom", "Ancienneté"], ["DUPONT", 43525]]).to_excel(
        path, engine="odf", header=False, index=False
    )

    rows = load_table(path)

    assert rows == [["Nom", "Ancienneté"], ["DUPONT", "43525"]]


def test_load_table_missing_spreadsheet_engine_is_not_a_format_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "legacy.xls"
    path.write_bytes(b"placeholder")

    def _no_engine(*args, **kwargs):
        raise ImportError("Missing optional dependency 'xlrd'.")

    monkeypatch.setattr(load_data.pd, "read_excel", _no_engine)

    with pytest.raises(ImportError):
        load_table(path)


def test_load_table_corrupt_legacy_spreadsheet(tmp_path: Path) -> None:
    path = tmp_path / "broken.xls"
    path.write_bytes(b"this is not a spreadsheet")

    with pytest.raises(UnreadableFormatError):
        load_table(path)


def test_load_table_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SourceFileNotFoundError) as excinfo:
        load_table(tmp_path / "absent.csv")

    assert isinstance(excinfo.value, FileNotFoundError)
    assert isinstance(excinfo.value, BsiReconciliationError)


def test_load_table_corrupt_spreadsheet(tmp_path: Path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"this is not a spreadsheet")

    with pytest.raises(UnreadableFormatError):
        load_table(path)


def test_rows_to_frame_pads_ragged_rows() -> None:
    frame = rows_to_frame([["a", "b", "c"], ["d"]])

    assert frame.shape == (2, 3)
    assert frame.iloc[1].tolist() == ["d", "", ""]
    assert rows_to_frame([]).empty
