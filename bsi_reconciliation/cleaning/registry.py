# Docstring for bsi_reconciliation/cleaning/registry module
"""
registry.py

Person registry built from the compensation ledger's person header row.

Every non-empty header cell other than the total marker is one employee. The
order of appearance is load-bearing: the Nth person owns the Nth repeating
column group of every data row, so the registry keeps one *slot* per header
cell, even for cells it cannot register (duplicate or empty keys). Those slots
still consume a column group, keeping the following persons aligned.

Public API
----------
- build_person_registry(rows, layout=LedgerLayoutConfig(), labels=()) -> PersonRegistry
- PersonRegistry
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from ..config import LedgerLayoutConfig
from ..core.normalizers import is_blank, normalize_name
from ..core.records import PersonRecord


@dataclass
class PersonRegistry:

    """

    Ordered canonical keys and their working records.

    slots:
        One entry per column group, in ledger order. None for groups whose
        header cell could not be registered.
    records:
        Canonical key -> PersonRecord (insertion order == registration order).

    """

    slots: list[str | None] = field(default_factory=list)
    records: dict[str, PersonRecord] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PersonRecord]:
        return iter(self.records.values())

    def __contains__(self, key: object) -> bool:
        return key in self.records

    def __getitem__(self, key: str) -> PersonRecord:
        return self.records[key]

    @property
    def keys(self) -> list[str]:
        return list(self.records)

    def register(self, official_name: str) -> str | None:
        """Register a header cell; returns its canonical key or None if rejected."""
        key = normalize_name(official_name)
        if not key:
            warnings.warn(
                f"Person header {official_name!r} normalizes to an empty key; its column group is ignored.",
                stacklevel=3,
            )
            self.slots.append(None)
            return None
        if key in self.records:
            warnings.warn(
                f"Person header {official_name!r} duplicates canonical key {key!r}; its column group is ignored.",
                stacklevel=3,
            )
            self.slots.append(None)
            return None

        self.records[key] = PersonRecord(canonical_key=key, official_name=official_name)
        self.slots.append(key)
        return key

    def seed_labels(self, labels: Iterable[str]) -> None:
        labels = tuple(labels)
        for record in self.records.values():
            record.seed_labels(labels)


def build_person_registry(
    rows: Sequence[Sequence[str]],
    layout: LedgerLayoutConfig | None = None,
    labels: Iterable[str] = (),
) -> PersonRegistry:

    """

    Build the registry from the person header row of the compensation ledger.

    Args:
        rows:
            Compensation ledger rows from `load_table`.
        layout:
            Ledger layout (header row index and total marker).
        labels:
            Recognized monetary labels pre-seeded at zero for every person.

    Returns:
        PersonRegistry, empty when the ledger has fewer rows than the header
        row index requires.

    """

    layout = layout or LedgerLayoutConfig()
    registry = PersonRegistry()

    if len(rows) <= layout.person_header_row:
        return registry

    for cell in rows[layout.person_header_row]:
        if is_blank(cell) or cell.strip() == layout.total_marker:
            continue
        registry.register(cell)

    registry.seed_labels(labels)
    return registry
