# Docstring for bsi_reconciliation/core/headers module
"""
headers.py

Keyword-based header detection for exports with unstable column ordering.

None of the three source kinds guarantees a fixed column layout, so columns are
found by searching header text rather than by position.

Two strategies are provided:

- `locate_header_anchors(rows, anchors)`
    Compensation ledger. Scans every cell in row-major order and records the
    column of the first cell whose normalized text *contains* each anchor.
    Missing anchors are fatal (`MissingHeaderAnchorError`): the money
    extractor has no positional fallback.

- `locate_columns(rows, keywords, fallback_indices, ...)`
    Worked-days and description exports. Scans the first few rows, matching
    keywords as whole normalized tokens (so "Nom" never matches "Prénom").
    Fields that are never found fall back to configured indices.

Public API
----------
- locate_header_anchors(rows, anchors) -> dict[str, int]
- locate_columns(rows, keywords, fallback_indices, *, required, max_rows=5) -> ColumnLayout
- ColumnLayout
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from .exceptions import MissingHeaderAnchorError
from .normalizers import name_tokens, normalize_name


@dataclass(frozen=True)
class ColumnLayout:

    """

    Result of keyword column detection.

    indices:
        Column index per field (detected or fallback).
    header_row:
        Index of the detected header row, or None when the required fields
        were never found together (every row is then treated as data).
    detected:
        Fields whose index comes from a keyword match.

    """

    indices: dict[str, int]
    header_row: int | None = None
    detected: frozenset[str] = field(default_factory=frozenset)

    @property
    def data_start(self) -> int:
        return 0 if self.header_row is None else self.header_row + 1


def locate_header_anchors(
    rows: Sequence[Sequence[str]],
    anchors: Mapping[str, str],
) -> dict[str, int]:

    """

    Find the column index of each anchor keyword.

    Args:
        rows:
            Full row sequence of the file.
        anchors:
            Mapping of anchor name -> keyword (e.g. {"label": "Libellé"}).

    Returns:
        Mapping of anchor name -> column index of the first cell (row-major)
        whose normalized text contains the normalized keyword.

    Raises:
        MissingHeaderAnchorError: if any anchor is never found.

    """

    targets = {name: normalize_name(keyword) for name, keyword in anchors.items()}
    found: dict[str, int] = {}

    for row in rows:
        for idx, cell in enumerate(row):
            cell_norm = normalize_name(cell)
            if not cell_norm:
                continue
            for name, target in targets.items():
                if name not in found and target and target in cell_norm:
                    found[name] = idx
            # Return as soon as every anchor is located
            if len(found) == len(targets):
                return found

    missing = [anchors[name] for name in targets if name not in found]
    raise MissingHeaderAnchorError(missing)


def _contains_tokens(cell_tokens: tuple[str, ...], keyword_tokens: tuple[str, ...]) -> bool:
    """True if keyword_tokens appear as a contiguous run inside cell_tokens."""
    size = len(keyword_tokens)
    if size == 0 or size > len(cell_tokens):
        return False
    return any(
        cell_tokens[start:start + size] == keyword_tokens
        for start in range(len(cell_tokens) - size + 1)
    )


def _match_row(
    row: Sequence[str],
    keywords: Mapping[str, Sequence[str]],
) -> dict[str, int]:
    """Column index per field for a single row (keyword priority, then leftmost cell)."""
    row_tokens = [name_tokens(cell) for cell in row]
    matches: dict[str, int] = {}
    for field_name, field_keywords in keywords.items():
        for keyword in field_keywords:
            keyword_tokens = name_tokens(keyword)
            idx = next(
                (i for i, tokens in enumerate(row_tokens) if _contains_tokens(tokens, keyword_tokens)),
                None,
            )
            if idx is not None:
                matches[field_name] = idx
                break
    return matches


def locate_columns(
    rows: Sequence[Sequence[str]],
    keywords: Mapping[str, Sequence[str]],
    fallback_indices: Mapping[str, int],
    *,
    required: Sequence[str],
    max_rows: int = 5,
) -> ColumnLayout:

    """

    Detect a header row among the first `max_rows` rows.

    The header row is the first scanned row in which every `required` field
    is found. Other fields are taken from that row when present, else from
    the first scanned row that names them, else from `fallback_indices`.

    """

    header_row: int | None = None
    header_matches: dict[str, int] = {}
    seen_elsewhere: dict[str, int] = {}

    for row_idx, row in enumerate(rows[:max_rows]):
        matches = _match_row(row, keywords)
        if header_row is None and all(name in matches for name in required):
            header_row = row_idx
            header_matches = matches
        for name, idx in matches.items():
            seen_elsewhere.setdefault(name, idx)

    indices: dict[str, int] = {}
    detected: set[str] = set()
    for name in keywords:
        if name in header_matches:
            indices[name] = header_matches[name]
            detected.add(name)
        elif name in seen_elsewhere:
            indices[name] = seen_elsewhere[name]
            detected.add(name)
        else:
            indices[name] = fallback_indices[name]

    return ColumnLayout(indices=indices, header_row=header_row, detected=frozenset(detected))
