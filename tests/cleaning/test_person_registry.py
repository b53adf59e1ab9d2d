import pytest

from bsi_reconciliation.cleaning.registry import PersonRegistry, build_person_registry
from bsi_reconciliation.config import LABEL_VOCABULARY, LedgerLayoutConfig
from bsi_reconciliation.core.records import MoneyPair


def test_build_person_registry_reads_header_row_in_order(money_rows) -> None:
    registry = build_person_registry(money_rows)

    assert registry.keys == ["DUPONT JEAN", "CURIE MARIE"]
    assert registry.slots == ["DUPONT JEAN", "CURIE MARIE"]
    assert registry["DUPONT JEAN"].official_name == "DUPONT Jean"
    assert "TOTAL" not in registry


def test_build_person_registry_seeds_labels_at_zero(money_rows) -> None:
    registry = build_person_registry(money_rows, labels=LABEL_VOCABULARY.recognized_labels)

    for record in registry:
        assert set(record.monetary_entries) == set(LABEL_VOCABULARY.recognized_labels)
        assert record.monetary_entries["Salaire de base"] == MoneyPair()


def test_build_person_registry_duplicate_key_keeps_its_slot() -> None:
    rows = [
        [],
        [],
        ["", "", "", "DUPONT Jean", "", "", "Dupont  jean", "", "", "CURIE Marie"],
    ]

    with pytest.warns(UserWarning, match="duplicates"):
        registry = build_person_registry(rows)

    assert len(registry) == 2
    assert registry.slots == ["DUPONT JEAN", None, "CURIE MARIE"]


def test_build_person_registry_custom_header_row() -> None:
    rows = [["", "", "", "DUPONT Jean", "", "", "TOTAL"]]

    registry = build_person_registry(rows, layout=LedgerLayoutConfig(person_header_row=0))

    assert registry.keys == ["DUPONT JEAN"]


def test_build_person_registry_short_file_is_empty() -> None:
    registry = build_person_registry([["Code", "Libellé"]])

    assert len(registry) == 0
    assert registry.slots == []


def test_register_rejects_keys_that_normalize_to_nothing() -> None:
    registry = PersonRegistry()

    with pytest.warns(UserWarning, match="empty key"):
        assert registry.register("---") is None

    assert registry.slots == [None]
    assert len(registry) == 0
