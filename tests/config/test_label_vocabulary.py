from __future__ import annotations

import json
from pathlib import Path

import pytest

from bsi_reconciliation.config import (
    LABEL_VOCABULARY,
    RECONCILIATION_CONFIG,
    load_label_vocabulary,
)


def test_recognized_labels_standalone_first_without_duplicates() -> None:
    labels = LABEL_VOCABULARY.recognized_labels

    assert labels[: len(LABEL_VOCABULARY.standalone_labels)] == LABEL_VOCABULARY.standalone_labels
    assert len(labels) == len(set(labels))
    assert "Retraite TU1" in labels
    assert "RTT pris (j)" not in labels


def test_default_vocabulary_has_five_categories() -> None:
    assert LABEL_VOCABULARY.category_names == (
        "retirement",
        "health",
        "unemployment",
        "provident_insurance",
        "supplementary_health",
    )


def test_load_label_vocabulary_from_json(tmp_path: Path) -> None:
    path = tmp_path / "vocab.json"
    path.write_text(
        json.dumps(
            {
                "categories": [{"name": "retirement", "aliases": ["Retraite TU1", "Retraite TU2"]}],
                "standalone_labels": ["Salaire de base"],
                "forfait_jours_triggers": ["Jours forfait"],
            }
        ),
        encoding="utf-8",
    )

    vocabulary = load_label_vocabulary(path)

    assert vocabulary.category_names == ("retirement",)
    assert vocabulary.recognized_labels == ("Salaire de base", "Retraite TU1", "Retraite TU2")
    assert vocabulary.forfait_jours_triggers == ("Jours forfait",)


def test_load_label_vocabulary_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_label_vocabulary(tmp_path / "absent.json")

    empty = tmp_path / "empty.json"
    empty.write_text(json.dumps({"standalone_labels": ["Salaire de base"]}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_label_vocabulary(empty)


def test_with_matching_policy() -> None:
    assert RECONCILIATION_CONFIG.with_matching_policy("strict").matching.policy == "strict"
    assert RECONCILIATION_CONFIG.matching.policy == "greedy"
    with pytest.raises(ValueError):
        RECONCILIATION_CONFIG.with_matching_policy("fuzzy")
