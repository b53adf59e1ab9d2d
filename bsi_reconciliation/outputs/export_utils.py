# Docstring for bsi_reconciliation/outputs/export_utils module
"""
export_utils.py

Utilities for flattening reconciled employee records into pandas DataFrames
and exporting them to an Excel workbook for review.

Design goals
------------
- Low friction: one call turns the record snapshot into a flat table.
- Exact in memory, rounded on paper: category totals keep full precision in
  the records and are rounded to cents only in the exported table.
- Safe output: ensure parent directories exist before writing files.
- Timestamped filenames when no explicit path is given.

Public API
----------
- records_to_dataframe(records, ndigits=2) -> pd.DataFrame
- entries_to_dataframe(records) -> pd.DataFrame
- write_reconciliation_workbook(records, output_path=None, *, out_dir=REPORTS_OUTPUTS_DIR,
  ndigits=2) -> Path
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Mapping

import pandas as pd

from .. import config
from ..config import DESCRIPTION_FIELDS
from ..core.records import EmployeeRecord


def _ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _timestamped_filename(prefix: str) -> str:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{stamp}.xlsx"


def records_to_dataframe(records: Mapping[str, EmployeeRecord], ndigits: int = 2) -> pd.DataFrame:
    """
    One row per employee: identity, flags, worked days, description fields and
    `<category>_salarial` / `<category>_patronal` columns rounded to `ndigits`.
    """
    rows = []
    for key, record in records.items():
        row: dict[str, object] = {
            "canonical_key": key,
            "official_name": record.official_name,
            "forfait_jours": record.forfait_jours,
            "worked_days": record.worked_days,
        }
        for field_name in DESCRIPTION_FIELDS:
            row[field_name] = record.description.get(field_name, config.NO_DATA)
        for category, pair in record.category_totals.items():
            rounded = pair.rounded(ndigits)
            row[f"{category}_salarial"] = rounded.salarial
            row[f"{category}_patronal"] = rounded.patronal
        rows.append(row)

    df = pd.DataFrame(rows)
    if "worked_days" in df.columns:
        df["worked_days"] = pd.to_numeric(df["worked_days"], errors="coerce")
    return df


def entries_to_dataframe(records: Mapping[str, EmployeeRecord]) -> pd.DataFrame:
    """Long format: one row per (employee, raw ledger label), amounts as parsed."""
    rows = [
        {
            "canonical_key": key,
            "label": label,
            "salarial": pair.salarial,
            "patronal": pair.patronal,
        }
        for key, record in records.items()
        for label, pair in record.monetary_entries.items()
    ]
    return pd.DataFrame(rows, columns=["canonical_key", "label", "salarial", "patronal"])


def write_reconciliation_workbook(
    records: Mapping[str, EmployeeRecord],
    output_path: Path | str | None = None,
    *,
    out_dir: Path | str | None = None,
    ndigits: int = 2,
) -> Path:
    """
    Write the 'employees' and 'entries' sheets for a reconciliation snapshot
    and return the workbook path.

    If output_path is None, a timestamped file is created under out_dir
    (defaults to config.REPORTS_OUTPUTS_DIR).
    """
    if output_path is None:
        out_dir_path = Path(out_dir) if out_dir is not None else config.REPORTS_OUTPUTS_DIR
        output_path = out_dir_path / _timestamped_filename("bsi_reconciliation")
    path = Path(output_path)
    _ensure_parent_dir(path)

    sheets = {
        "employees": records_to_dataframe(records, ndigits=ndigits),
        "entries": entries_to_dataframe(records),
    }
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, df in sheets.items():
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    return path
