"""Debt cycle dashboard: FRED data caching and metric derivation."""
