# Docstring for bsi_reconciliation/core/matching module
"""
matching.py

Fuzzy person matching for the worked-days and description sources.

The three sources never share an identifier, so rows are matched to registered
persons on normalized names only. A registered key matches a row when it
contains the row's surname and either contains the given name or contains
"<surname> <given-name initial>".

Policies (see config.MatchingConfig):
- greedy: first candidate in registration order. Two employees sharing a
  surname and given-name fragment cannot be told apart: the one registered
  first absorbs the rows.
- strict: the unique candidate whose key tokens equal the row's full name,
  else the single candidate, else "ambiguous".

Public API
----------
- is_candidate(key, surname_key, given_key) -> bool
- match_person(keys, surname, given_name, policy="greedy") -> MatchResult
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from ..config import MATCH_STATUS_CONFIG
from .normalizers import normalize_name


@dataclass(frozen=True)
class MatchResult:
    status: str
    key: str | None = None
    candidates: tuple[str, ...] = ()


def is_candidate(key: str, surname_key: str, given_key: str) -> bool:
    """Substring rule on already-normalized values."""
    if not surname_key or surname_key not in key:
        return False
    return given_key in key or f"{surname_key} {given_key[:1]}" in key


def _full_name_equal(key: str, surname_key: str, given_key: str) -> bool:
    return Counter(key.split()) == Counter(f"{surname_key} {given_key}".split())


def match_person(
    keys: Sequence[str],
    surname: str,
    given_name: str,
    policy: str = "greedy",
) -> MatchResult:

    """

    Match a (surname, given name) pair against registered canonical keys.

    Args:
        keys:
            Canonical keys in registration order.
        surname / given_name:
            Raw cell values; they are normalized here.
        policy:
            "greedy" or "strict".

    Returns:
        MatchResult with status matched / unmatched / ambiguous.

    """

    status_cfg = MATCH_STATUS_CONFIG
    surname_key = normalize_name(surname)
    given_key = normalize_name(given_name)
    if not surname_key or not given_key:
        return MatchResult(status=status_cfg.unmatched)

    if policy == "greedy":
        for key in keys:
            if is_candidate(key, surname_key, given_key):
                return MatchResult(status=status_cfg.matched, key=key, candidates=(key,))
        return MatchResult(status=status_cfg.unmatched)

    if policy != "strict":
        raise ValueError(f"Unknown matching policy: {policy!r}. Expected 'greedy' or 'strict'.")

    candidates = tuple(key for key in keys if is_candidate(key, surname_key, given_key))
    if not candidates:
        return MatchResult(status=status_cfg.unmatched)
    if len(candidates) == 1:
        return MatchResult(status=status_cfg.matched, key=candidates[0], candidates=candidates)

    exact = [key for key in candidates if _full_name_equal(key, surname_key, given_key)]
    if len(exact) == 1:
        return MatchResult(status=status_cfg.matched, key=exact[0], candidates=candidates)
    return MatchResult(status=status_cfg.ambiguous, candidates=candidates)
