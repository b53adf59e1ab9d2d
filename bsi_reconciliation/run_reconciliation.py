"""
run_reconciliation.py

Command-line entrypoint: reconciles one set of compensation, worked-days and
description exports, prints a summary and optionally writes the flattened
records to an Excel workbook.

    bsi-reconcile --money bsi_money.csv --days bsi_jours.xlsx \
        --description rh_1.xlsx rh_2.csv --output reports/outputs/bsi.xlsx
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import RECONCILIATION_CONFIG, load_label_vocabulary
from .core.exceptions import BsiReconciliationError
from .engines.reconcile_employees import ReconciliationResult, run_reconciliation
from .outputs.export_utils import write_reconciliation_workbook


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile compensation, worked-days and HR description exports per employee."
    )
    parser.add_argument("--money", type=Path, required=True, help="Compensation ledger (CSV or spreadsheet)")
    parser.add_argument("--days", type=Path, required=True, help="Worked-days ledger")
    parser.add_argument(
        "--description",
        type=Path,
        nargs="+",
        required=True,
        help="HR description exports, merged in the given order",
    )
    parser.add_argument("--vocabulary", type=Path, default=None, help="JSON label vocabulary override")
    parser.add_argument(
        "--match-policy",
        choices=("greedy", "strict"),
        default=RECONCILIATION_CONFIG.matching.policy,
        help="Person matching policy for days/description rows",
    )
    parser.add_argument("--output", type=Path, default=None, help="Excel workbook to write")
    return parser.parse_args(argv)


def format_summary(result: ReconciliationResult) -> list[str]:
    stats = result.stats
    return [
        f"Employees detected: {stats.total_employees}",
        f"Fixed-days scheme: {stats.forfait_jours_count}",
        f"Worked-days rows matched: {stats.days_rows.matched} "
        f"(unmatched: {stats.days_rows.unmatched}, ambiguous: {stats.days_rows.ambiguous})",
        f"Description files merged: {stats.description_files}",
        f"Description rows matched: {stats.description_rows.matched} "
        f"(unmatched: {stats.description_rows.unmatched}, ambiguous: {stats.description_rows.ambiguous})",
        f"Date serials converted: {stats.dates_converted}",
    ]


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    cfg = RECONCILIATION_CONFIG.with_matching_policy(args.match_policy)
    try:
        if args.vocabulary is not None:
            cfg = cfg.with_vocabulary(load_label_vocabulary(args.vocabulary))
        result = run_reconciliation(args.money, args.days, args.description, cfg=cfg)
    except (BsiReconciliationError, FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if result.is_empty:
        print("Error: no employees detected in the provided files.", file=sys.stderr)
        return 1

    for line in format_summary(result):
        print(line)

    if args.output is not None:
        path = write_reconciliation_workbook(result.records, args.output)
        print(f"Wrote reconciliation workbook to: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
