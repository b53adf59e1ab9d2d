"""
generate_sample_data.py

Seeded generator for synthetic compensation, worked-days and description inputs.

This script writes one file per source kind into data/sample/, using the header
keywords declared in bsi_reconciliation/config.py so the extractors can locate
every column. The outputs are deterministic given a seed and include the
awkward parts of real exports: accented names, French-formatted amounts,
preamble rows, a TOTAL column group, split worked-days rows, date serials and
a second description file that contradicts the first one.
"""

from __future__ import annotations

import argparse
import random
from datetime import date
from pathlib import Path

import pandas as pd
from faker import Faker

from ..config import LABEL_VOCABULARY, SAMPLE_DIR, LabelVocabulary
from .normalizers import normalize_name


DEFAULT_SEED = 20240131
DEFAULT_EMPLOYEES = 6

_SERIAL_EPOCH = date(1899, 12, 30)


def _amount(rng: random.Random, low: float, high: float) -> float:
    value = rng.uniform(low, high)
    return round(value, 2)


def format_french_amount(value: float) -> str:
    """1234.5 -> '1 234,50' (space thousands separator, comma decimals)."""
    return f"{value:,.2f}".replace(",", " ").replace(".", ",")


def _date_serial(value: date) -> int:
    return (value - _SERIAL_EPOCH).days


def _is_distinct(surname: str, given_name: str, people: list[dict[str, object]]) -> bool:
    """Reject names that substring-match an existing employee (keeps samples unambiguous)."""
    surname_key = normalize_name(surname)
    given_key = normalize_name(given_name)
    if not surname_key or not given_key:
        return False
    full_key = f"{surname_key} {given_key}"
    for person in people:
        other_surname = normalize_name(person["surname"])
        other_given = normalize_name(person["given_name"])
        other_full = f"{other_surname} {other_given}"
        if surname_key in other_full or given_key in other_full:
            return False
        if other_surname in full_key or other_given in full_key:
            return False
    return True


def _build_people(rng: random.Random, faker: Faker, n_employees: int) -> list[dict[str, object]]:
    people: list[dict[str, object]] = []
    attempts = 0
    while len(people) < n_employees:
        attempts += 1
        if attempts > 1000 * n_employees:
            raise ValueError(f"Could not draw {n_employees} distinct employee names.")
        surname = faker.last_name()
        given_name = faker.first_name()
        if not _is_distinct(surname, given_name, people):
            continue
        arrival = faker.date_between(start_date=date(2005, 1, 1), end_date=date(2023, 12, 31))
        people.append(
            {
                "surname": surname,
                "given_name": given_name,
                "official_name": f"{surname.upper()} {given_name}",
                "job": faker.job(),
                "arrival": arrival,
                "contract": rng.choice(["CDI", "CDD", "CDI Forfait jours"]),
                "forfait_jours": len(people) % 3 == 0,
                "days": [_amount(rng, 80, 120), _amount(rng, 80, 120)],
            }
        )
    return people


def _build_money_rows(
    rng: random.Random,
    people: list[dict[str, object]],
    vocabulary: LabelVocabulary,
) -> list[list[str]]:
    width = 3 + 3 * (len(people) + 1)

    title = ["BSI - Bulletins de salaire"] + [""] * (width - 1)
    period = ["Période", "01/2024 - 12/2024"] + [""] * (width - 2)

    person_header = [""] * width
    for idx, person in enumerate(people):
        person_header[3 + 3 * idx] = str(person["official_name"])
    person_header[3 + 3 * len(people)] = "TOTAL"

    column_header = ["Code", "Libellé", ""] + ["Base S.", "Sal.", "Pat."] * (len(people) + 1)

    rows = [title, period, person_header, column_header]

    labels = list(vocabulary.recognized_labels) + ["Indemnité de congés payés", "Titres restaurant"]
    for code, label in enumerate(labels, start=1000):
        row = [str(code), label, ""]
        total_sal = 0.0
        total_pat = 0.0
        for _ in people:
            base = _amount(rng, 1500, 4500)
            sal = _amount(rng, 10, 400)
            pat = _amount(rng, 10, 800)
            total_sal += sal
            total_pat += pat
            row += [format_french_amount(base), format_french_amount(sal), format_french_amount(pat)]
        row += ["", format_french_amount(total_sal), format_french_amount(total_pat)]
        rows.append(row)

    # Fixed-days trigger: only filled for employees on the scheme
    for trigger in vocabulary.forfait_jours_triggers[:1]:
        row = ["9000", trigger, ""]
        for person in people:
            row += [format_french_amount(_amount(rng, 1, 12)), "", ""] if person["forfait_jours"] else ["", "", ""]
        row += ["", "", ""]
        rows.append(row)

    return rows


def _build_days_frame(people: list[dict[str, object]]) -> pd.DataFrame:
    records = []
    for idx, person in enumerate(people):
        for half, days in enumerate(person["days"], start=1):
            records.append(
                {
                    "Matricule": f"M{idx + 1:04d}",
                    "Etablissement": "Siège",
                    "Nom": str(person["surname"]).upper(),
                    "Prénom": person["given_name"],
                    "Période": f"S{half} 2024",
                    "Type": "Présence",
                    "Jours travaillés": format_french_amount(days),
                }
            )
    # An employee unknown to the compensation ledger
    records.append(
        {
            "Matricule": "M9999",
            "Etablissement": "Siège",
            "Nom": "INCONNU",
            "Prénom": "Personne",
            "Période": "S1 2024",
            "Type": "Présence",
            "Jours travaillés": "10,0",
        }
    )
    return pd.DataFrame(records)


def _build_description_frames(people: list[dict[str, object]]) -> tuple[pd.DataFrame, pd.DataFrame]:
    primary = []
    secondary = []
    for idx, person in enumerate(people):
        serial = _date_serial(person["arrival"])
        # The first file leaves the contract type empty for every other employee
        primary.append(
            {
                "Nom": person["surname"],
                "Prénom": person["given_name"],
                "Poste": person["job"],
                "Ancienneté": serial,
                "Date d'arrivée": serial,
                "Type de contrat": person["contract"] if idx % 2 == 0 else "",
            }
        )
        secondary.append(
            {
                "Nom": person["surname"],
                "Prénom": person["given_name"],
                "Poste": "Poste à confirmer",
                "Ancienneté": "",
                "Date d'arrivée": "",
                "Type de contrat": person["contract"],
            }
        )
    return pd.DataFrame(primary), pd.DataFrame(secondary)


def generate_sample_data(
    output_dir: Path = SAMPLE_DIR,
    seed: int = DEFAULT_SEED,
    n_employees: int = DEFAULT_EMPLOYEES,
    vocabulary: LabelVocabulary = LABEL_VOCABULARY,
) -> dict[str, Path]:
    """Write the sample inputs and return a mapping of source label -> path."""
    rng = random.Random(seed)
    faker = Faker("fr_FR")
    faker.seed_instance(seed)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    people = _build_people(rng, faker, n_employees)

    money_path = output_dir / "bsi_money.csv"
    pd.DataFrame(_build_money_rows(rng, people, vocabulary)).to_csv(
        money_path, sep=";", header=False, index=False, encoding="utf-8"
    )

    days_path = output_dir / "bsi_jours.xlsx"
    _build_days_frame(people).to_excel(days_path, engine="openpyxl", index=False)

    primary, secondary = _build_description_frames(people)
    description_path = output_dir / "bsi_description_1.xlsx"
    primary.to_excel(description_path, engine="openpyxl", index=False)
    description_path_2 = output_dir / "bsi_description_2.csv"
    secondary.to_csv(description_path_2, sep=";", index=False, encoding="utf-8")

    return {
        "money": money_path,
        "days": days_path,
        "description_1": description_path,
        "description_2": description_path_2,
    }


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate seeded synthetic compensation / worked-days / description inputs."
    )
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Deterministic RNG seed")
    parser.add_argument("--employees", type=int, default=DEFAULT_EMPLOYEES, help="Number of employees")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=SAMPLE_DIR,
        help="Destination directory for sample files",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    outputs = generate_sample_data(output_dir=args.output_dir, seed=args.seed, n_employees=args.employees)
    for label, path in outputs.items():
        print(f"Wrote {label} sample to: {path}")


if __name__ == "__main__":
    main()
