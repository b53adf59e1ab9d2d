from __future__ import annotations

import sys
from pathlib import Path

import pytest

# tests/ is one level under the repo root
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))


def _write_delimited(path: Path, rows: list[list[str]], sep: str = ";", encoding: str = "utf-8") -> Path:
    path.write_bytes("\n".join(sep.join(row) for row in rows).encode(encoding))
    return path


@pytest.fixture
def write_delimited():
    """Write rows as a delimited file without quoting (cells must not contain the separator)."""
    return _write_delimited


@pytest.fixture
def money_rows() -> list[list[str]]:
    """Two-person compensation ledger with a TOTAL group and a fixed-days trigger row."""
    return [
        ["Bulletins de salaire", "", "", "", "", "", "", "", "", "", "", ""],
        ["Période", "01/2024", "", "", "", "", "", "", "", "", "", ""],
        ["", "", "", "DUPONT Jean", "", "", "CURIE Marie", "", "", "TOTAL", "", ""],
        ["Code", "Libellé", "", "Base S.", "Sal.", "Pat.", "Base S.", "Sal.", "Pat.", "Base S.", "Sal.", "Pat."],
        ["1000", "Salaire de base", "", "", "1 000,00", "", "", "2 000,00", "", "", "3 000,00", ""],
        ["2000", "Retraite TU1", "", "3 000,00", "10,50", "20,25", "3 000,00", "5,00", "7,00", "", "15,50", "27,25"],
        ["2010", "Vieillesse plafonnée", "", "", "1,50", "2,75", "", "", "", "", "1,50", "2,75"],
        ["3000", "Frais de santé", "", "", "4,00", "6,00", "", "8,00", "12,00", "", "12,00", "18,00"],
        ["9000", "Titres restaurant", "", "", "50,00", "60,00", "", "50,00", "60,00", "", "100,00", "120,00"],
        ["9500", "RTT pris (j)", "", "", "", "", "2,5", "", "", "", "", ""],
    ]


@pytest.fixture
def days_rows() -> list[list[str]]:
    return [
        ["Matricule", "Etablissement", "Nom", "Prénom", "Période", "Type", "Jours travaillés"],
        ["M0001", "Siège", "DUPONT", "Jean", "S1", "Présence", "12,5"],
        ["M0001", "Siège", "Dupont", "jean", "S2", "Présence", "3"],
        ["M0002", "Siège", "CURIE", "Marie", "S1", "Présence", "20"],
        ["M0003", "Siège", "INCONNU", "Personne", "S1", "Présence", "7"],
    ]


@pytest.fixture
def description_rows() -> list[list[str]]:
    return [
        ["Nom", "Prénom", "Poste", "Ancienneté", "Date d'arrivée", "Type de contrat"],
        ["Dupont", "Jean", "Comptable", "43525", "01/03/2019", ""],
        ["Curie", "Marie", "Chimiste", "", "", "CDI"],
    ]
