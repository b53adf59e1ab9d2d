"""Shared helpers: exceptions, normalizers, header detection, matching and record types."""
