# Docstring for bsi_reconciliation/cleaning/extract_days module
"""
extract_days.py

Worked-days extraction: matches each row of the worked-days ledger to a
registered person and accumulates the number of days worked.

Core transformations
--------------------
1) Column detection
   - Surname, given-name and days columns are located by keyword among the
     first rows (`core.headers.locate_columns`); undetected columns fall back
     to configured indices. The detected header row is skipped.

2) Normalization
   - Surnames and given names go through the same `normalize_name` as the
     registry keys; days are parsed as comma-decimal numbers (invalid -> 0).

3) Matching
   - `core.matching.match_person` with the configured policy. Rows without a
     surname or given name, or matching nobody, are skipped silently.

4) Accumulation
   - The first matching row sets `worked_days`, later rows add to it.

Public API
----------
- extract_days(rows, registry, layout=None, policy="greedy") -> MatchCounts
- MatchCounts
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Sequence

from ..config import MATCH_STATUS_CONFIG, DaysLayoutConfig
from ..core.exceptions import AmbiguousMatchWarning
from ..core.headers import locate_columns
from ..core.matching import MatchResult, match_person
from ..core.normalizers import to_amount_series
from ..load_data import rows_to_frame
from .registry import PersonRegistry


@dataclass
class MatchCounts:
    """Row-level match outcomes for one source file."""

    matched: int = 0
    unmatched: int = 0
    ambiguous: int = 0

    def record(self, result: MatchResult) -> None:
        status_cfg = MATCH_STATUS_CONFIG
        if result.status == status_cfg.matched:
            self.matched += 1
        elif result.status == status_cfg.ambiguous:
            self.ambiguous += 1
        else:
            self.unmatched += 1

    def __add__(self, other: "MatchCounts") -> "MatchCounts":
        return MatchCounts(
            matched=self.matched + other.matched,
            unmatched=self.unmatched + other.unmatched,
            ambiguous=self.ambiguous + other.ambiguous,
        )


def warn_ambiguous(counts: MatchCounts, source_name: str) -> None:
    if counts.ambiguous > 0:
        warnings.warn(
            f"{source_name}: {counts.ambiguous} row(s) matched several employees and were skipped.",
            AmbiguousMatchWarning,
            stacklevel=3,
        )


def extract_days(
    rows: Sequence[Sequence[str]],
    registry: PersonRegistry,
    layout: DaysLayoutConfig | None = None,
    policy: str = "greedy",
) -> MatchCounts:

    """

    Accumulate worked days onto registered persons.

    Args:
        rows:
            Worked-days ledger rows from `load_table`.
        registry:
            Person registry (matching order == registration order).
        layout:
            Keyword lists and fallback indices.
        policy:
            Matching policy, "greedy" or "strict".

    Returns:
        MatchCounts for the processed data rows.

    """

    layout = layout or DaysLayoutConfig()
    counts = MatchCounts()
    if not rows or len(registry) == 0:
        return counts

    columns = locate_columns(
        rows,
        {
            "surname": layout.surname_keywords,
            "given_name": layout.given_name_keywords,
            "days": layout.days_keywords,
        },
        {
            "surname": layout.surname_index,
            "given_name": layout.given_name_index,
            "days": layout.days_index,
        },
        required=("surname", "given_name"),
        max_rows=layout.header_search_rows,
    )

    data = rows_to_frame(list(rows[columns.data_start:]))
    if data.empty:
        return counts

    needed = max(columns.indices.values()) + 1
    data = data.reindex(columns=range(max(data.shape[1], needed)), fill_value="")

    surnames = data[columns.indices["surname"]]
    given_names = data[columns.indices["given_name"]]
    days = to_amount_series(data[columns.indices["days"]])

    keys = registry.keys
    for surname, given_name, worked in zip(surnames, given_names, days):
        result = match_person(keys, surname, given_name, policy=policy)
        counts.record(result)
        if result.key is not None:
            registry[result.key].add_worked_days(float(worked))

    warn_ambiguous(counts, "Worked-days ledger")
    return counts
