"""
Shared pytest fixtures for the Ladder recommendations test suite.

Provides:
  - ``NOW`` and ``fixed_clock``: a frozen UTC instant so recency and seed
    timestamps are reproducible.
  - ``engine``: a seeded ``RecommendationEngine`` with popularity pinned.
  - ``make_opportunity``: factory for opportunity payload dicts.
  - ``reset_root_logger``: undo ``configure_logging`` after CLI/logging tests.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from ladder_recs.recommendations.engine import RecommendationEngine
from ladder_recs.recommendations.popularity import FixedPopularity

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture
def now() -> datetime:
    """The frozen instant every fixture clock returns."""
    return NOW


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return fixed_clock


@pytest.fixture
def engine() -> RecommendationEngine:
    """Seeded engine; popularity fixed at 0.5, clock frozen at ``NOW``."""
    return RecommendationEngine(popularity=FixedPopularity(0.5), clock=fixed_clock)


@pytest.fixture
def empty_engine() -> RecommendationEngine:
    """Unseeded engine; popularity fixed at 0.5, clock frozen at ``NOW``."""
    return RecommendationEngine(
        popularity=FixedPopularity(0.5), clock=fixed_clock, seed=False
    )


@pytest.fixture
def make_opportunity() -> Callable[..., dict[str, Any]]:
    """Return a factory for client-shaped opportunity payloads."""

    def _make(
        id: str = "o1",
        category: str = "Internships",
        location: str = "Athens, Greece",
        field: str = "Technology",
        age: timedelta = timedelta(0),
        **extra: Any,
    ) -> dict[str, Any]:
        payload = {
            "id": id,
            "category": category,
            "location": location,
            "field": field,
            "postedDate": (NOW - age).isoformat(),
        }
        payload.update(extra)
        return payload

    return _make


@pytest.fixture
def reset_root_logger():
    """Drop the handlers ``configure_logging`` installs and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
