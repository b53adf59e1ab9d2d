"""Aggregation, date conversion and the end-to-end reconciliation engine."""
