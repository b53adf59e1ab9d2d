# Docstring for bsi_reconciliation/core/normalizers module
"""
normalizers.py

Shared normalization helpers for names, amounts and spreadsheet date serials.

Every source (compensation ledger, worked-days ledger, description exports)
goes through the same helpers so that a name read in one file produces the
exact same key as the same name read in another.

Design goals
------------
- Single source of truth for canonical name keys: the registry and the
  matchers call the same `normalize_name` function.
- Forgiving parsing: unparsable numbers become 0.0, never an exception.
- Scalar and vectorized (pandas Series) variants behave identically.

Public API
----------
- normalize_name(value) -> str
- normalize_name_series(series) -> pd.Series
- name_tokens(value) -> tuple[str, ...]
- parse_amount(value) -> float
- to_amount_series(series) -> pd.Series
- is_blank(value) -> bool
- serial_to_date_string(value, threshold, epoch="1899-12-30", output_format="%d/%m/%Y") -> str | None
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any

import pandas as pd


# Letters NFKD does not decompose into a base letter + combining mark
_LIGATURES = str.maketrans({
    "Œ": "OE",
    "œ": "oe",
    "Æ": "AE",
    "æ": "ae",
    "ß": "ss",
    "Ø": "O",
    "ø": "o",
    "Ł": "L",
    "ł": "l",
})

# Regular, non-breaking and narrow non-breaking spaces used as thousands separators
_THOUSANDS_SEPARATORS = re.compile(r"[\s\u00a0\u202f]+")
_NON_ALNUM = re.compile(r"[^0-9A-Za-z]+")
_NUMERIC_TEXT = re.compile(r"^\d+(\.\d+)?$")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):  # list-like values
        return False


def normalize_name(value: Any) -> str:
    """Canonical matching key: diacritics stripped, alphanumerics only, uppercased.

    normalize_name("  Émilie ") == normalize_name("EMILIE") == "EMILIE"
    normalize_name("Jean-Pierre  d'Alès") == "JEAN PIERRE D ALES"
    """
    if _is_missing(value):
        return ""

    text = str(value).translate(_LIGATURES)
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))

    # Any run of separators (or leftover non-ASCII symbols) becomes one space
    return _NON_ALNUM.sub(" ", stripped).strip().upper()


def normalize_name_series(series: pd.Series) -> pd.Series:
    """Vectorized name normalization with pandas string dtype."""
    return series.map(normalize_name).astype("string")


def name_tokens(value: Any) -> tuple[str, ...]:
    """Split a value into its normalized tokens ('Date d'arrivée' -> ('DATE', 'D', 'ARRIVEE'))."""
    normalized = normalize_name(value)
    return tuple(normalized.split()) if normalized else ()


def is_blank(value: Any) -> bool:
    """True for missing values and whitespace-only text."""
    if _is_missing(value):
        return True
    return str(value).strip() == ""


def parse_amount(value: Any) -> float:
    """
    Parse a French-formatted amount: comma decimal separator, spaces as
    thousands separators. Empty or unparsable values become 0.0.

    Examples:
        '1 234,56'  -> 1234.56
        '-12,5'     -> -12.5
        ''          -> 0.0
        'n/a'       -> 0.0
    """
    if _is_missing(value):
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    text = _THOUSANDS_SEPARATORS.sub("", str(value)).replace(",", ".")
    if not text:
        return 0.0
    try:
        number = float(text)
    except ValueError:
        return 0.0
    if pd.isna(number):
        return 0.0
    return number


def to_amount_series(series: pd.Series) -> pd.Series:
    """Vectorized `parse_amount`, returning a float Series with 0.0 for invalid entries."""
    return series.map(parse_amount).astype(float)


def serial_to_date_string(
    value: Any,
    threshold: float,
    *,
    epoch: str = "1899-12-30",
    output_format: str = "%d/%m/%Y",
) -> str | None:
    """
    Convert a spreadsheet date serial to a calendar string.

    Returns None when the value is not purely numeric or is not above the
    plausibility threshold (it is then a formatted date or a placeholder).

    Example: 43525 -> '01/03/2019'
    """
    if _is_missing(value):
        return None
    text = str(value).strip()
    if not _NUMERIC_TEXT.match(text):
        return None

    serial = float(text)
    if serial <= threshold:
        return None

    try:
        converted = pd.Timestamp(epoch) + pd.Timedelta(days=int(serial))
    except (OverflowError, ValueError):  # beyond pandas' Timestamp range
        return None
    return converted.strftime(output_format)
