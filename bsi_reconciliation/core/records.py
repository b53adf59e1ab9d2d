"""
records.py

Per-employee record types.

`PersonRecord` is the mutable working record owned by a single reconciliation
run. At the end of the run it is frozen into an `EmployeeRecord`, the
read-only shape handed to renderers.

Field shapes are explicit: a closed set of scalar fields (description, flags,
day counts) plus an open map of raw label -> MoneyPair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from ..config import DESCRIPTION_FIELDS, NO_DATA


@dataclass(frozen=True)
class MoneyPair:
    """Employee-side (salarial) and employer-side (patronal) amounts."""

    salarial: float = 0.0
    patronal: float = 0.0

    def __add__(self, other: "MoneyPair") -> "MoneyPair":
        if not isinstance(other, MoneyPair):
            return NotImplemented
        return MoneyPair(self.salarial + other.salarial, self.patronal + other.patronal)

    def rounded(self, ndigits: int = 2) -> "MoneyPair":
        return MoneyPair(round(self.salarial, ndigits), round(self.patronal, ndigits))


@dataclass
class PersonRecord:

    """

    Working record for one employee during a run.

    canonical_key / official_name are assigned once by the registry. The
    other fields are filled by the extraction stages:
        - monetary_entries: accumulated by the money extractor
        - forfait_jours:    set by the money extractor
        - worked_days:      accumulated by the days extractor
        - description:      first-writer-wins, description merger
        - category_totals:  recomputed from monetary_entries by the aggregator

    """

    canonical_key: str
    official_name: str
    forfait_jours: bool = False
    monetary_entries: dict[str, MoneyPair] = field(default_factory=dict)
    category_totals: dict[str, MoneyPair] = field(default_factory=dict)
    description: dict[str, str] = field(
        default_factory=lambda: {name: NO_DATA for name in DESCRIPTION_FIELDS}
    )
    worked_days: float | None = None

    def seed_labels(self, labels: Iterable[str]) -> None:
        for label in labels:
            self.monetary_entries.setdefault(label, MoneyPair())

    def add_amount(self, label: str, salarial: float, patronal: float) -> None:
        current = self.monetary_entries.get(label, MoneyPair())
        self.monetary_entries[label] = current + MoneyPair(salarial, patronal)

    def add_worked_days(self, days: float) -> None:
        if self.worked_days is None:
            self.worked_days = days
        else:
            self.worked_days += days

    def fill_description(self, field_name: str, value: str) -> bool:
        """Set a description field only while it still holds the sentinel."""
        if self.description.get(field_name, NO_DATA) != NO_DATA:
            return False
        text = value.strip()
        if not text:
            return False
        self.description[field_name] = text
        return True

    def freeze(self) -> "EmployeeRecord":
        return EmployeeRecord(
            canonical_key=self.canonical_key,
            official_name=self.official_name,
            forfait_jours=self.forfait_jours,
            worked_days=self.worked_days,
            category_totals=MappingProxyType(dict(self.category_totals)),
            monetary_entries=MappingProxyType(dict(self.monetary_entries)),
            description=MappingProxyType(dict(self.description)),
        )


@dataclass(frozen=True)
class EmployeeRecord:
    """Read-only reconciled record consumed by renderers."""

    canonical_key: str
    official_name: str
    forfait_jours: bool
    worked_days: float | None
    category_totals: Mapping[str, MoneyPair]
    monetary_entries: Mapping[str, MoneyPair]
    description: Mapping[str, str]

    @property
    def nom(self) -> str:
        return self.description.get("nom", NO_DATA)

    @property
    def prenom(self) -> str:
        return self.description.get("prenom", NO_DATA)

    @property
    def poste(self) -> str:
        return self.description.get("poste", NO_DATA)

    @property
    def anciennete(self) -> str:
        return self.description.get("anciennete", NO_DATA)

    @property
    def date_arrivee(self) -> str:
        return self.description.get("date_arrivee", NO_DATA)

    @property
    def type_contrat(self) -> str:
        return self.description.get("type_contrat", NO_DATA)

    def amount(self, label: str) -> MoneyPair:
        """Raw entry for a ledger label (zero pair when the label was never seen)."""
        return self.monetary_entries.get(label, MoneyPair())
