# Docstring for bsi_reconciliation/engines/reconcile_employees module
"""
reconcile_employees.py

Reconciliation engine: builds one unified record per employee from the three
source kinds.

Pipeline (strictly linear)
--------------------------
1) Load the compensation ledger (`load_data.load_table`).
2) Build the person registry from its person header row.
3) Extract money entries and fixed-days flags.
4) Extract worked days.
5) Merge every description export, in input order (first writer wins).
6) Aggregate category totals.
7) Convert date serials in seniority / arrival-date fields.
8) Freeze the records into a read-only snapshot.

The only early exit: a compensation ledger with no rows or no persons yields
an empty result (with an `EmptySourceWarning`); callers must treat that as
"no employees detected" rather than a crash. Fatal input problems (missing
file, unreadable spreadsheet, missing ledger header) propagate to the caller.

Each call owns its registry and records, so concurrent runs share no state.

Public API
----------
- run_reconciliation(money_path, days_path, description_paths, cfg=RECONCILIATION_CONFIG)
    -> ReconciliationResult
- reconcile_employee_records(money_path, days_path, description_paths, cfg=RECONCILIATION_CONFIG)
    -> Mapping[str, EmployeeRecord]
"""


from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

from ..cleaning.extract_days import MatchCounts, extract_days
from ..cleaning.extract_money import extract_money
from ..cleaning.merge_descriptions import merge_descriptions
from ..cleaning.registry import PersonRegistry, build_person_registry
from ..config import RECONCILIATION_CONFIG, ReconciliationConfig
from ..core.exceptions import EmptySourceWarning
from ..core.records import EmployeeRecord
from ..load_data import load_table
from .aggregate_categories import aggregate_categories
from .convert_dates import convert_date_serials


@dataclass(frozen=True)
class ReconciliationStats:
    """Run-level counts reported alongside the records."""

    total_employees: int = 0
    forfait_jours_count: int = 0
    days_rows: MatchCounts = field(default_factory=MatchCounts)
    description_rows: MatchCounts = field(default_factory=MatchCounts)
    description_files: int = 0
    dates_converted: int = 0


@dataclass(frozen=True)
class ReconciliationResult:
    records: Mapping[str, EmployeeRecord]
    stats: ReconciliationStats

    @property
    def is_empty(self) -> bool:
        return len(self.records) == 0


def _empty_result(reason: str) -> ReconciliationResult:
    warnings.warn(f"Compensation ledger: {reason}; no employees detected.", EmptySourceWarning, stacklevel=3)
    return ReconciliationResult(records=MappingProxyType({}), stats=ReconciliationStats())


def _snapshot(registry: PersonRegistry) -> Mapping[str, EmployeeRecord]:
    return MappingProxyType({record.canonical_key: record.freeze() for record in registry})


def run_reconciliation(
    money_path: Path | str,
    days_path: Path | str,
    description_paths: Iterable[Path | str],
    cfg: ReconciliationConfig = RECONCILIATION_CONFIG,
) -> ReconciliationResult:

    """

    Reconcile the compensation, worked-days and description sources.

    Args:
        money_path:
            Compensation ledger (CSV or spreadsheet).
        days_path:
            Worked-days ledger.
        description_paths:
            One or more HR description exports, merged in this order.
        cfg:
            Vocabulary, layouts, matching policy and date rules.

    Returns:
        ReconciliationResult with the frozen per-employee records (keyed by
        canonical name) and run statistics.

    Raises:
        SourceFileNotFoundError, UnreadableFormatError: unreadable inputs.
        MissingHeaderAnchorError: the compensation ledger header is missing.
        ValueError: if no description export is provided.

    """

    description_paths = list(description_paths)
    if not description_paths:
        raise ValueError("At least one description export is required.")

    # 1) Compensation ledger
    money_rows = load_table(money_path)
    if not money_rows:
        return _empty_result("file has no rows")

    # 2) Registry
    registry = build_person_registry(
        money_rows,
        layout=cfg.ledger,
        labels=cfg.vocabulary.recognized_labels,
    )
    if len(registry) == 0:
        return _empty_result("no person found in the header row")

    # 3) Money
    extract_money(money_rows, registry, vocabulary=cfg.vocabulary, layout=cfg.ledger)

    # 4) Worked days
    days_counts = extract_days(
        load_table(days_path),
        registry,
        layout=cfg.days,
        policy=cfg.matching.policy,
    )

    # 5) Descriptions, in input order
    description_counts = MatchCounts()
    for path in description_paths:
        description_counts = description_counts + merge_descriptions(
            load_table(path),
            registry,
            layout=cfg.descriptions,
            policy=cfg.matching.policy,
        )

    # 6) Category totals
    aggregate_categories(registry, cfg.vocabulary)

    # 7) Date serials
    dates_converted = convert_date_serials(registry, cfg.dates)

    stats = ReconciliationStats(
        total_employees=len(registry),
        forfait_jours_count=sum(1 for record in registry if record.forfait_jours),
        days_rows=days_counts,
        description_rows=description_counts,
        description_files=len(description_paths),
        dates_converted=dates_converted,
    )
    return ReconciliationResult(records=_snapshot(registry), stats=stats)


def reconcile_employee_records(
    money_path: Path | str,
    days_path: Path | str,
    description_paths: Iterable[Path | str],
    cfg: ReconciliationConfig = RECONCILIATION_CONFIG,
) -> Mapping[str, EmployeeRecord]:
    """Read-only mapping canonical key -> EmployeeRecord (see `run_reconciliation`)."""
    return run_reconciliation(money_path, days_path, description_paths, cfg=cfg).records
