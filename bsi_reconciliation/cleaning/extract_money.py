# Docstring for bsi_reconciliation/cleaning/extract_money module
"""
extract_money.py

Money extraction from the wide compensation ledger.

Each data row carries a label column and, starting at the value-block anchor,
one 3-column group per registered person:

    ... | Libellé | Base S. | Sal. | Pat. | Base S. | Sal. | Pat. | ...
                    <---- person 1 ---->  <---- person 2 ---->

Core transformations
--------------------
1) Header anchors
   - Locate the code, label and value-block columns by keyword
     (`core.headers.locate_header_anchors`); a missing anchor is fatal.

2) Label recognition
   - Normalize every row label and map it onto the configured vocabulary
     (standalone labels + category aliases) by normalized equality.

3) Per-person slicing
   - For the Nth registry slot, read columns start + 3N .. start + 3N + 2 as
     (base, salarial, patronal) and parse them as French amounts.
   - Sum recognized rows per label and *add* the result to the person's
     monetary entries.

4) Fixed-days scheme
   - If a row label is one of the configured triggers and any of the three
     cells is non-empty, flag the person as `forfait_jours`.

Unrecognized rows contribute nothing. Column groups beyond the registry (or
beyond the row width) are ignored.

Public API
----------
- extract_money(rows, registry, vocabulary=LABEL_VOCABULARY, layout=None) -> dict[str, int]
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from ..config import LABEL_VOCABULARY, LabelVocabulary, LedgerLayoutConfig
from ..core.headers import locate_header_anchors
from ..core.normalizers import normalize_name, normalize_name_series, to_amount_series
from ..load_data import rows_to_frame
from .registry import PersonRegistry


def _label_lookup(vocabulary: LabelVocabulary) -> dict[str, str]:
    """Normalized label -> configured label (first definition wins)."""
    lookup: dict[str, str] = {}
    for label in vocabulary.recognized_labels:
        lookup.setdefault(normalize_name(label), label)
    return lookup


def _has_value_mask(block: pd.DataFrame) -> pd.Series:
    """True where any cell of the 3-column group holds non-blank text."""
    return block.apply(lambda col: col.astype(str).str.strip().ne("")).any(axis=1)


def extract_money(
    rows: Sequence[Sequence[str]],
    registry: PersonRegistry,
    vocabulary: LabelVocabulary = LABEL_VOCABULARY,
    layout: LedgerLayoutConfig | None = None,
) -> dict[str, int]:

    """

    Fill monetary entries and fixed-days flags on the registry's records.

    Args:
        rows:
            Compensation ledger rows from `load_table`.
        registry:
            Registry built from the same rows (slot order == group order).
        vocabulary:
            Recognized labels and fixed-days triggers.
        layout:
            Header anchors and group width.

    Returns:
        The located anchor indices ({"code": .., "label": .., "value": ..}).

    Raises:
        MissingHeaderAnchorError: if the ledger header cannot be located.

    """

    layout = layout or LedgerLayoutConfig()
    anchors = locate_header_anchors(
        rows,
        {
            "code": layout.code_anchor,
            "label": layout.label_anchor,
            "value": layout.value_anchor,
        },
    )

    frame = rows_to_frame(list(rows))
    if frame.empty or len(registry) == 0:
        return anchors

    width = layout.group_width
    start = anchors["value"]
    last_needed = start + width * len(registry.slots)
    # Missing trailing cells read as empty strings
    frame = frame.reindex(columns=range(max(frame.shape[1], last_needed)), fill_value="")

    labels_norm = normalize_name_series(frame[anchors["label"]])
    canonical_labels = labels_norm.map(_label_lookup(vocabulary))
    recognized = canonical_labels.notna()

    triggers = {normalize_name(label) for label in vocabulary.forfait_jours_triggers}
    trigger_mask = labels_norm.isin(list(triggers))

    for slot_idx, key in enumerate(registry.slots):
        if key is None:
            continue
        record = registry[key]
        group_start = start + width * slot_idx
        block = frame[[group_start + offset for offset in range(width)]]

        if (trigger_mask & _has_value_mask(block)).any():
            record.forfait_jours = True

        if not recognized.any():
            continue

        amounts = pd.DataFrame(
            {
                "label": canonical_labels[recognized],
                "salarial": to_amount_series(block.iloc[:, 1][recognized]),
                "patronal": to_amount_series(block.iloc[:, 2][recognized]),
            }
        )
        totals = amounts.groupby("label", sort=False)[["salarial", "patronal"]].sum()
        for label, row in totals.iterrows():
            record.add_amount(label, float(row["salarial"]), float(row["patronal"]))

    return anchors
