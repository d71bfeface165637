"""
Behavior log: append-only record of user actions, most-recent-first.

Events are immutable and never removed. The log answers two questions for
the scorer — which locations and which fields has the user interacted with —
and aggregates action weights per category for category recommendations.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Callable, Iterable

from ladder_recs.models.behavior import BehaviorEvent
from ladder_recs.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class BehaviorLog:
    """Most-recent-first list of ``BehaviorEvent`` records.

    Args:
        clock: Zero-arg callable returning the current UTC datetime; stamps
            every recorded event.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._events: list[BehaviorEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def record(
        self,
        opportunity_id: str,
        action: str,
        category: str,
        location: str,
        field: str,
    ) -> BehaviorEvent:
        """Create an event stamped with the current time and put it first."""
        event = BehaviorEvent(
            opportunity_id=opportunity_id,
            action=action,
            timestamp=self._clock(),
            category=category,
            location=location,
            field=field,
        )
        if not event.is_known_action:
            logger.debug(
                "Unrecognized action %r on opportunity %s; weighting as %.1f",
                action, event.opportunity_id, event.weight,
            )
        self._events.insert(0, event)
        return event

    def events(self) -> list[BehaviorEvent]:
        """Return all events, most-recent-first."""
        return list(self._events)

    def locations(self) -> set[str]:
        """Distinct locations across all events."""
        return {e.location for e in self._events}

    def fields(self) -> set[str]:
        """Distinct fields across all events."""
        return {e.field for e in self._events}

    def category_totals(self) -> dict[str, float]:
        """Sum of action weights per category over the whole log.

        Keys are ordered by first appearance walking the log most-recent-first.
        """
        totals: dict[str, float] = defaultdict(float)
        for event in self._events:
            totals[event.category] += event.weight
        return dict(totals)

    def recommended_categories(self, limit: int = 5) -> list[str]:
        """Top ``limit`` categories by aggregate action weight, descending.

        Ties keep ``category_totals()`` order (stable sort).
        """
        totals = self.category_totals()
        ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
        return [category for category, _ in ranked[:limit]]

    def load(self, events: Iterable[BehaviorEvent]) -> None:
        """Replace the log with ``events`` (given most-recent-first)."""
        self._events = list(events)
