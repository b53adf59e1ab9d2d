"""Exception and warning hierarchy for the BSI reconciliation pipeline."""

from __future__ import annotations


class BsiReconciliationError(Exception):
    """Base exception for all fatal reconciliation errors."""


class SourceFileNotFoundError(BsiReconciliationError, FileNotFoundError):
    """An input path does not resolve to a readable file."""


class UnreadableFormatError(BsiReconciliationError, ValueError):
    """A spreadsheet (or delimited file) could not be parsed."""


class MissingHeaderAnchorError(BsiReconciliationError, ValueError):
    """The compensation ledger is missing one or more header anchors."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            "Compensation ledger: header anchor(s) not found: "
            + ", ".join(repr(anchor) for anchor in self.missing)
        )


class EmptySourceWarning(UserWarning):
    """The compensation ledger yielded no rows or no persons."""


class AmbiguousMatchWarning(UserWarning):
    """A days/description row matched several registered persons (strict policy)."""
