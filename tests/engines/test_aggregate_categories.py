from bsi_reconciliation.config import LABEL_VOCABULARY
from bsi_reconciliation.core.records import MoneyPair, PersonRecord
from bsi_reconciliation.engines.aggregate_categories import (
    aggregate_categories,
    compute_category_totals,
)


def _record() -> PersonRecord:
    record = PersonRecord(canonical_key="DUPONT JEAN", official_name="DUPONT Jean")
    record.seed_labels(LABEL_VOCABULARY.recognized_labels)
    record.add_amount("Salaire de base", 1000.0, 0.0)
    record.add_amount("Retraite TU1", 10.5, 20.25)
    record.add_amount("Vieillesse plafonnée", 1.5, 2.75)
    record.add_amount("Frais de santé", 4.0, 6.0)
    return record


def test_compute_category_totals_sums_aliases_only() -> None:
    totals = compute_category_totals(_record().monetary_entries)

    assert list(totals) == list(LABEL_VOCABULARY.category_names)
    assert totals["retirement"] == MoneyPair(12.0, 23.0)
    assert totals["supplementary_health"] == MoneyPair(4.0, 6.0)
    assert totals["health"] == MoneyPair()
    assert totals["unemployment"] == MoneyPair()


def test_compute_category_totals_keeps_exact_sums() -> None:
    entries = {"AGS": MoneyPair(0.125, 1.0049), "Assurance chômage TrA+TrB": MoneyPair(0.25, 0.0)}

    totals = compute_category_totals(entries)

    assert totals["unemployment"] == MoneyPair(0.125 + 0.25, 1.0049 + 0.0)
    assert totals["unemployment"].patronal == 1.0049


def test_aggregate_categories_is_idempotent() -> None:
    record = _record()

    aggregate_categories([record])
    first = dict(record.category_totals)
    aggregate_categories([record])

    assert record.category_totals == first


def test_aggregate_categories_recomputes_after_new_entries() -> None:
    record = _record()
    aggregate_categories([record])

    record.add_amount("Retraite TU1", 1.0, 1.0)
    aggregate_categories([record])

    assert record.category_totals["retirement"] == MoneyPair(13.0, 24.0)
