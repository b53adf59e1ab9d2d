# Docstring for bsi_reconciliation/cleaning/merge_descriptions module
"""
merge_descriptions.py

Description merge: fills job title, seniority, arrival date and contract type
(plus the surname / given name as written by HR) from one or more description
exports.

Files are merged in input order. A field is only written while it still holds
the "no data" sentinel, so the first file supplying a non-empty value is the
authoritative source for that field; later files never overwrite it.

Public API
----------
- merge_descriptions(rows, registry, layout=None, policy="greedy") -> MatchCounts
"""

from __future__ import annotations

from typing import Sequence

from ..config import DESCRIPTION_FIELDS, DescriptionLayoutConfig
from ..core.headers import locate_columns
from ..core.matching import match_person
from ..load_data import rows_to_frame
from .extract_days import MatchCounts, warn_ambiguous
from .registry import PersonRegistry


def merge_descriptions(
    rows: Sequence[Sequence[str]],
    registry: PersonRegistry,
    layout: DescriptionLayoutConfig | None = None,
    policy: str = "greedy",
) -> MatchCounts:
    """Merge one description export into the registry's records (first writer wins)."""

    layout = layout or DescriptionLayoutConfig()
    counts = MatchCounts()
    if not rows or len(registry) == 0:
        return counts

    keywords = {name: layout.keywords[name] for name in DESCRIPTION_FIELDS}
    columns = locate_columns(
        rows,
        keywords,
        layout.fallback_indices,
        required=("nom", "prenom"),
        max_rows=layout.header_search_rows,
    )

    data = rows_to_frame(list(rows[columns.data_start:]))
    if data.empty:
        return counts

    needed = max(columns.indices.values()) + 1
    data = data.reindex(columns=range(max(data.shape[1], needed)), fill_value="")

    keys = registry.keys
    for row in data.itertuples(index=False, name=None):
        surname = row[columns.indices["nom"]]
        given_name = row[columns.indices["prenom"]]
        result = match_person(keys, surname, given_name, policy=policy)
        counts.record(result)
        if result.key is None:
            continue

        record = registry[result.key]
        for field_name in DESCRIPTION_FIELDS:
            record.fill_description(field_name, row[columns.indices[field_name]])

    warn_ambiguous(counts, "Description export")
    return counts
