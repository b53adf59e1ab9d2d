#Docstring for bsi_reconciliation/config module
"""
config.py

Central configuration for the BSI employee record reconciliation pipeline.

This module defines the label vocabulary, ledger layouts, header keywords,
matching policy and date-serial rules used across the project.

It is intentionally the single source of truth for:
- Label vocabulary (raw payroll labels -> semantic categories)
- Compensation ledger layout (header anchors, person header row, total marker)
- Header keywords for the worked-days and description exports
- Person matching policy and status labels
- Date-serial conversion rules

Design goals
------------
- Data, not code: payroll exports drift from one format to the next, so every
  label and keyword lives here (or in a JSON vocabulary file) and the pipeline
  only consumes the dataclasses.
- Explicit injection: the pipeline receives a `ReconciliationConfig` instance;
  the module-level singletons are just defaults.
- Immutability: all configuration dataclasses are frozen.

Contents
--------
1) Paths and project defaults
2) Label vocabulary
   - CategoryDefinition / LabelVocabulary / LABEL_VOCABULARY
   - load_label_vocabulary(path): JSON override
3) Layouts
   - LedgerLayoutConfig (compensation ledger)
   - DaysLayoutConfig (worked-days ledger)
   - DescriptionLayoutConfig (HR description exports)
4) Matching configuration
   - MatchingConfig / MATCHING_CONFIG
   - MatchStatusConfig / MATCH_STATUS_CONFIG
5) Date serial configuration
6) ReconciliationConfig bundle

Usage
-----
    from bsi_reconciliation.config import RECONCILIATION_CONFIG, load_label_vocabulary

    vocabulary = load_label_vocabulary("vocab/silae_2024.json")
    cfg = RECONCILIATION_CONFIG.with_vocabulary(vocabulary)

Privacy / compliance note
-------------------------
Payroll exports contain personal data. Repository sample files must be
synthetic (see `core.generate_sample_data`). Never commit real exports.
"""


from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace #create simple classes for configuration
from pathlib import Path #object-oriented filesystem paths instead of strings
from typing import Literal



# --- Base paths ----------------------------------------------------------------

# bsi_reconciliation/ -> project root
BASE_DIR = Path(__file__).resolve().parents[1]

DATA_DIR = BASE_DIR / "data"
SAMPLE_DIR = DATA_DIR / "sample"
RAW_DATA_DIR = DATA_DIR / "raw"

REPORTS_DIR = BASE_DIR / "reports"
REPORTS_OUTPUTS_DIR = Path(os.environ.get("BSI_OUTPUT_PATH", REPORTS_DIR / "outputs"))


# Sentinel stored in description fields until a source supplies a real value
NO_DATA = "no data"

# Description fields filled by the HR description exports, in export order
DESCRIPTION_FIELDS = (
    "nom",
    "prenom",
    "poste",
    "anciennete",
    "date_arrivee",
    "type_contrat",
)



# --- Label vocabulary ------------------------------------------------------------

@dataclass(frozen=True)
class CategoryDefinition:

    """

    One semantic category and the raw ledger labels aggregated into it.

    name:
        Category identifier used as the key of `category_totals`.
    aliases:
        Raw labels as they appear in the compensation ledger. They are
        compared after name normalization, so accents/case do not matter.

    """

    name: str
    aliases: tuple[str, ...]


@dataclass(frozen=True)
class LabelVocabulary:

    """

    Every raw label the money extractor cares about.

    categories:
        The five category definitions (retirement, health, unemployment,
        provident insurance, supplementary health).
    standalone_labels:
        Labels kept as raw entries without belonging to any category
        (base salary, gross salary, net taxable, ...).
    forfait_jours_triggers:
        Labels whose presence (any non-empty cell) marks a person as being on
        the fixed-days scheme.

    """

    categories: tuple[CategoryDefinition, ...]
    standalone_labels: tuple[str, ...] = ()
    forfait_jours_triggers: tuple[str, ...] = ()

    @property
    def category_names(self) -> tuple[str, ...]:
        return tuple(category.name for category in self.categories)

    @property
    def recognized_labels(self) -> tuple[str, ...]:
        """Standalone labels followed by every category alias, without duplicates."""
        labels: list[str] = []
        for label in self.standalone_labels:
            if label not in labels:
                labels.append(label)
        for category in self.categories:
            for alias in category.aliases:
                if alias not in labels:
                    labels.append(alias)
        return tuple(labels)


LABEL_VOCABULARY = LabelVocabulary(
    categories=(
        CategoryDefinition(
            name="retirement",
            aliases=(
                "Vieillesse déplafonnée",
                "Vieillesse plafonnée",
                "Retraite TU1",
                "Contribution d'Equilibre Général TU1",
                "Réduct. générale des cotisat. pat. retraite",
            ),
        ),
        CategoryDefinition(
            name="health",
            aliases=("Maladie - maternité - invalidité - décès",),
        ),
        CategoryDefinition(
            name="unemployment",
            aliases=("Assurance chômage TrA+TrB", "AGS"),
        ),
        CategoryDefinition(
            name="provident_insurance",
            aliases=("Prévoyance supplémentaire non cadre TrA",),
        ),
        CategoryDefinition(
            name="supplementary_health",
            aliases=("Frais de santé",),
        ),
    ),
    standalone_labels=(
        "Salaire de base",
        "Salaire Brut",
        "Sous-total Primes",
        "INTERESSEMENT",
        "Net imposable",
        "Acomptes",
        "Frais de transport personnel non soumis",
        "Heures mensuelles majorées",
    ),
    forfait_jours_triggers=(
        "RTT pris (j)",
        "RTT acquis (j)",
        "RTT et autres repos",
    ),
)


def load_label_vocabulary(path: Path | str) -> LabelVocabulary:

    """

    Load a label vocabulary from a JSON document.

    Expected shape:

        {
          "categories": [{"name": "retirement", "aliases": ["Retraite TU1"]}],
          "standalone_labels": ["Salaire de base"],
          "forfait_jours_triggers": ["RTT pris (j)"]
        }

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the document does not describe at least one category.

    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Label vocabulary file not found at: {path}")

    payload = json.loads(path.read_text(encoding="utf-8"))

    raw_categories = payload.get("categories") or []
    if not raw_categories:
        raise ValueError(f"Label vocabulary {path} defines no categories.")

    categories = []
    for entry in raw_categories:
        if "name" not in entry:
            raise ValueError(f"Label vocabulary {path}: category without a name: {entry!r}")
        categories.append(
            CategoryDefinition(name=str(entry["name"]), aliases=tuple(entry.get("aliases", ())))
        )

    return LabelVocabulary(
        categories=tuple(categories),
        standalone_labels=tuple(payload.get("standalone_labels", ())),
        forfait_jours_triggers=tuple(payload.get("forfait_jours_triggers", ())),
    )



# --- Layouts -------------------------------------------------------------------

@dataclass(frozen=True)
class LedgerLayoutConfig:

    """

    Layout of the compensation ledger (wide export, one column group per person).

    code_anchor / label_anchor / value_anchor:
        Header keywords located anywhere in the file. The value anchor marks
        the first column of the first person's (base, employee, employer) group.
    person_header_row:
        Zero-based index of the row listing the employees (third row).
    total_marker:
        Header cell that closes the person list and is not a person.
    group_width:
        Number of columns per person in every data row.

    """

    code_anchor: str = "Code"
    label_anchor: str = "Libellé"
    value_anchor: str = "Base S."
    person_header_row: int = 2
    total_marker: str = "TOTAL"
    group_width: int = 3


@dataclass(frozen=True)
class DaysLayoutConfig:

    """

    Keyword detection for the worked-days ledger.

    Keywords are tried in order; the first keyword found in any cell of a
    scanned row wins for that field. Fallback indices apply to fields that are
    never detected.

    """

    surname_keywords: tuple[str, ...] = ("Nom", "Nom de famille", "Nom usuel")
    given_name_keywords: tuple[str, ...] = ("Prénom",)
    days_keywords: tuple[str, ...] = (
        "Jours travaillés",
        "Nb jours",
        "Nombre de jours",
        "Jours",
    )
    header_search_rows: int = 5
    surname_index: int = 2
    given_name_index: int = 3
    days_index: int = 6


@dataclass(frozen=True)
class DescriptionLayoutConfig:

    """

    Keyword detection for the HR description exports.

    `keywords` and `fallback_indices` are keyed by description field name
    (see DESCRIPTION_FIELDS).

    """

    keywords: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: {
            "nom": ("Nom", "Nom de famille", "Nom usuel"),
            "prenom": ("Prénom",),
            "poste": ("Poste", "Intitulé du poste", "Emploi", "Fonction"),
            "anciennete": ("Ancienneté", "Date d'ancienneté"),
            "date_arrivee": (
                "Date d'arrivée",
                "Date arrivée",
                "Date d'entrée",
                "Date entrée",
                "Arrivée",
                "Entrée",
            ),
            "type_contrat": ("Type de contrat", "Type contrat", "Contrat"),
        }
    )
    fallback_indices: dict[str, int] = field(
        default_factory=lambda: {
            "nom": 0,
            "prenom": 1,
            "poste": 2,
            "anciennete": 3,
            "date_arrivee": 4,
            "type_contrat": 5,
        }
    )
    header_search_rows: int = 5



# --- Matching configuration ------------------------------------------------------------

@dataclass(frozen=True)
class MatchingConfig:

    """

    Person matching policy for worked-days and description rows.

    policy:
        "greedy" -> first registered person (in ledger order) whose canonical
                    key contains the surname and the given name (or the
                    surname followed by the given-name initial).
        "strict" -> among all such candidates, prefer the unique person whose
                    key tokens equal the row's full name; otherwise accept a
                    single candidate only. Several candidates without a unique
                    full-name match are reported as ambiguous and skipped.

    """

    policy: Literal["greedy", "strict"] = "greedy"


MATCHING_CONFIG = MatchingConfig()


@dataclass(frozen=True)
class MatchStatusConfig:
    matched: str = "matched"
    unmatched: str = "unmatched"
    ambiguous: str = "ambiguous"


MATCH_STATUS_CONFIG = MatchStatusConfig()



# --- Date serial configuration ------------------------------------------------------------

@dataclass(frozen=True)
class DateSerialConfig:

    """

    Spreadsheet date-serial conversion for description fields.

    threshold:
        Purely numeric values strictly above this are treated as date serials
        (10000 -> 1927-05-18). Smaller numbers are left untouched.
    epoch:
        Day zero of the spreadsheet serial calendar (1899-12-30 absorbs the
        1900 leap-year bug for every serial after February 1900).

    """

    threshold: float = 10000
    fields: tuple[str, ...] = ("anciennete", "date_arrivee")
    epoch: str = "1899-12-30"
    output_format: str = "%d/%m/%Y"


DATE_SERIAL_CONFIG = DateSerialConfig()



# --- Bundle ------------------------------------------------------------

@dataclass(frozen=True)
class ReconciliationConfig:
    vocabulary: LabelVocabulary = LABEL_VOCABULARY
    ledger: LedgerLayoutConfig = field(default_factory=LedgerLayoutConfig)
    days: DaysLayoutConfig = field(default_factory=DaysLayoutConfig)
    descriptions: DescriptionLayoutConfig = field(default_factory=DescriptionLayoutConfig)
    matching: MatchingConfig = MATCHING_CONFIG
    dates: DateSerialConfig = DATE_SERIAL_CONFIG

    def with_vocabulary(self, vocabulary: LabelVocabulary) -> "ReconciliationConfig":
        return replace(self, vocabulary=vocabulary)

    def with_matching_policy(self, policy: str) -> "ReconciliationConfig":
        if policy not in ("greedy", "strict"):
            raise ValueError(f"Unknown matching policy: {policy!r}. Expected 'greedy' or 'strict'.")
        return replace(self, matching=MatchingConfig(policy=policy))


RECONCILIATION_CONFIG = ReconciliationConfig()
