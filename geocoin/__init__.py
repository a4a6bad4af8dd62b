"""Deterministic location-grid coin caches."""

__version__ = "0.1.0"
