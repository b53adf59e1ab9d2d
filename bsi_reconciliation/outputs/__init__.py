"""Tabular exports of reconciled records."""
