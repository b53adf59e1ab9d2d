# Docstring for bsi_reconciliation/engines/aggregate_categories module
"""
aggregate_categories.py

Category aggregation: rolls raw ledger labels up into the five semantic
categories (retirement, health, unemployment, provident insurance,
supplementary health).

Totals are *recomputed* from the raw monetary entries on every call, never
incremented, so running the aggregation twice (or after more entries were
added) always yields totals consistent with the current raw data.

Public API
----------
- aggregate_categories(records, vocabulary=LABEL_VOCABULARY) -> None
- compute_category_totals(entries, vocabulary=LABEL_VOCABULARY) -> dict[str, MoneyPair]
"""

from __future__ import annotations

from typing import Iterable, Mapping

from ..config import LABEL_VOCABULARY, LabelVocabulary
from ..core.normalizers import normalize_name
from ..core.records import MoneyPair, PersonRecord


def compute_category_totals(
    entries: Mapping[str, MoneyPair],
    vocabulary: LabelVocabulary = LABEL_VOCABULARY,
) -> dict[str, MoneyPair]:
    """Exact sum of the entries whose normalized label is one of each category's aliases."""
    entries_norm = [(normalize_name(label), pair) for label, pair in entries.items()]

    totals: dict[str, MoneyPair] = {}
    for category in vocabulary.categories:
        aliases = {normalize_name(alias) for alias in category.aliases}
        total = MoneyPair()
        for label_norm, pair in entries_norm:
            if label_norm in aliases:
                total = total + pair
        totals[category.name] = total
    return totals


def aggregate_categories(
    records: Iterable[PersonRecord],
    vocabulary: LabelVocabulary = LABEL_VOCABULARY,
) -> None:
    """Replace every record's category totals with a fresh recomputation."""
    for record in records:
        record.category_totals = compute_category_totals(record.monetary_entries, vocabulary)
