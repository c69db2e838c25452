"""Deterministic, seed-driven procedural generation for grid worlds."""

__version__ = "0.1.0"
