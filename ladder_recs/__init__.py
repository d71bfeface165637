"""Ladder recommendations: per-session personalization for opportunity feeds."""

__version__ = "0.1.0"
