from bsi_reconciliation.config import NO_DATA, DateSerialConfig
from bsi_reconciliation.core.records import PersonRecord
from bsi_reconciliation.engines.convert_dates import convert_date_serials


def _record(anciennete: str, date_arrivee: str) -> PersonRecord:
    record = PersonRecord(canonical_key="DUPONT JEAN", official_name="DUPONT Jean")
    record.fill_description("anciennete", anciennete)
    record.fill_description("date_arrivee", date_arrivee)
    record.fill_description("poste", "43525")
    return record


def test_convert_date_serials_only_touches_date_fields() -> None:
    record = _record("43525", "01/03/2019")

    converted = convert_date_serials([record])

    assert converted == 1
    assert record.description["anciennete"] == "01/03/2019"
    assert record.description["date_arrivee"] == "01/03/2019"
    assert record.description["poste"] == "43525"


def test_convert_date_serials_keeps_placeholders_and_small_numbers() -> None:
    record = _record("", "12")

    converted = convert_date_serials([record])

    assert converted == 0
    assert record.description["anciennete"] == NO_DATA
    assert record.description["date_arrivee"] == "12"


def test_convert_date_serials_custom_threshold() -> None:
    record = _record("43525", "43525")

    converted = convert_date_serials([record], DateSerialConfig(threshold=50000))

    assert converted == 0
    assert record.description["anciennete"] == "43525"
