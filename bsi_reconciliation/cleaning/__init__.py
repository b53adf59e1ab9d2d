"""Per-source extraction stages: registry, money, worked days and descriptions."""
