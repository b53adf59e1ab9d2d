"""
convert_dates.py

Normalizes spreadsheet date serials stored in description fields (seniority
and arrival date) into DD/MM/YYYY strings. Values that are already formatted
dates, placeholders, or small numbers are left untouched.
"""

from __future__ import annotations

from typing import Iterable

from ..config import DATE_SERIAL_CONFIG, DateSerialConfig
from ..core.normalizers import serial_to_date_string
from ..core.records import PersonRecord


def convert_date_serials(
    records: Iterable[PersonRecord],
    cfg: DateSerialConfig = DATE_SERIAL_CONFIG,
) -> int:
    """Convert date-serial description fields in place; returns the number converted."""
    converted = 0
    for record in records:
        for field_name in cfg.fields:
            value = record.description.get(field_name)
            date_text = serial_to_date_string(
                value,
                cfg.threshold,
                epoch=cfg.epoch,
                output_format=cfg.output_format,
            )
            if date_text is not None:
                record.description[field_name] = date_text
                converted += 1
    return converted
