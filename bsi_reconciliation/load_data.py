# Docstring for bsi_reconciliation/load_data module
"""
load_data.py

Input loader utilities for the compensation, worked-days and description exports.

This module provides thin, predictable I/O functions that read a delimited text
file or a spreadsheet into an ordered list of rows of strings, with no other
transformation. The extraction modules never assume a header layout, so the
loader deliberately returns raw rows instead of a header-indexed DataFrame.

Design goals
------------
- Separation of concerns: keep file I/O distinct from header detection and
  extraction logic.
- Fidelity: row order, cell order and the cell count of every delimited
  record are preserved exactly as on disk.
- Forgiving text decoding: payroll tools still export Windows-1252 CSVs.

Inputs
------
- Delimited text (.csv, .txt): separator auto-detected (';' if present in the
  first line, else ','), decoded as UTF-8 with a Windows-1252 / Latin-1
  fallback.
- Spreadsheets: first sheet only, trailing empty cells kept as empty strings.
  .xlsx / .xlsm via openpyxl, legacy .xls via xlrd, .ods via odfpy.

Outputs
-------
- list[list[str]]: rows x cells.

Public API
----------
- load_table(path) -> list[list[str]]
- detect_separator(first_line) -> str
- decode_text(raw) -> str
- rows_to_frame(rows) -> pd.DataFrame

Privacy / compliance note
-------------------------
Never commit real exports to source control. Repository sample files must be
synthetic (see `core.generate_sample_data`).
"""


from __future__ import annotations

import csv
import io
import zipfile
from datetime import date, datetime
from pathlib import Path

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError

from .core.exceptions import SourceFileNotFoundError, UnreadableFormatError


DELIMITED_EXTENSIONS = {".csv", ".txt"}
SPREADSHEET_EXTENSIONS = {".xlsx", ".xlsm", ".xls", ".ods"}

# Decoding attempts, in order. latin-1 never fails, so it closes the list.
_FALLBACK_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")



# --- Helper functions ------------------------------------------------------------


def detect_separator(first_line: str) -> str:
    """Semicolon if the first line contains one, comma otherwise."""
    return ";" if ";" in first_line else ","


def decode_text(raw: bytes) -> str:
    """Decode file content to text, converting legacy encodings to UTF-8 strings."""
    for encoding in _FALLBACK_ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    # Unreachable: latin-1 maps every byte
    return raw.decode("latin-1")


def _render_cell(value: object) -> str:

    """

    Convert a spreadsheet cell to the string the extractors expect.

    - missing -> ''
    - whole floats -> integer text (43525.0 -> '43525'), so date serials and
      counts stay purely numeric
    - dates -> 'DD/MM/YYYY'

    """

    if value is None:
        return ""
    if isinstance(value, (pd.Timestamp, datetime, date)):
        if pd.isna(value):
            return ""
        return value.strftime("%d/%m/%Y")
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, bool):
        return str(value).upper()
    return str(value)


def _record_widths(text: str, sep: str) -> list[int]:
    """Field count of every record, blank lines included (0 fields)."""
    return [len(record) for record in csv.reader(io.StringIO(text), delimiter=sep)]


def _read_delimited_rows(path: Path) -> list[list[str]]:
    text = decode_text(path.read_bytes())
    # Trailing blank lines hold no cells
    text = text.rstrip("\r\n")
    lines = text.splitlines()
    if not lines:
        return []

    sep = detect_separator(lines[0])

    # Upper bound of fields per row (quoted separators can only overestimate);
    # explicit column names stop pandas from rejecting ragged rows.
    width = max(line.count(sep) for line in lines) + 1

    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=sep,
            header=None,
            names=range(width),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as exc:
        raise UnreadableFormatError(f"Could not parse delimited file {path}: {exc}") from exc

    # pandas pads short records to `width`, so a missing trailing cell and an
    # empty one look alike; cut every row back to its own field count.
    widths = _record_widths(text, sep)
    if len(widths) != len(df):
        raise UnreadableFormatError(
            f"Could not parse delimited file {path}: {len(widths)} records but {len(df)} parsed rows."
        )
    return [
        ["" if pd.isna(cell) else cell for cell in row[:record_width]]
        for row, record_width in zip(df.itertuples(index=False, name=None), widths)
    ]


def _read_spreadsheet_rows(path: Path) -> list[list[str]]:
    try:
        df = pd.read_excel(path, sheet_name=0, header=None, dtype=object)
    # ImportError (reader engine not installed) propagates unchanged
    except (ValueError, KeyError, OSError, zipfile.BadZipFile, InvalidFileException, XLRDError) as exc:
        raise UnreadableFormatError(f"Could not read spreadsheet {path}: {exc}") from exc

    return [
        [_render_cell(cell) for cell in row]
        for row in df.itertuples(index=False, name=None)
    ]



# --- Main loading functions ------------------------------------------------------------


def load_table(path: Path | str) -> list[list[str]]:

    """

    Read a delimited or spreadsheet file into rows of strings.

    Args:
        path:
            File path. The extension selects the reader; unknown extensions
            are tried as spreadsheets.

    Returns:
        Ordered list of rows, each an ordered list of cell strings.

    Raises:
        SourceFileNotFoundError: if the path is not a readable file.
        UnreadableFormatError: if the file cannot be parsed.
        ImportError: if the spreadsheet engine for the extension is missing.

    """

    path = Path(path)
    if not path.is_file():
        raise SourceFileNotFoundError(f"Input file not found at: {path}")

    if path.suffix.lower() in DELIMITED_EXTENSIONS:
        return _read_delimited_rows(path)
    return _read_spreadsheet_rows(path)


def rows_to_frame(rows: list[list[str]]) -> pd.DataFrame:
    """Pad ragged rows into a rectangular DataFrame of strings (missing cells -> '')."""
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows).fillna("").astype(str)
