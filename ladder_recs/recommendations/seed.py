"""
Cold-start seed data for new sessions.

A fresh engine would otherwise score every opportunity on defaults alone.
Seeding gives it four category preferences and a short behavior history.
Both are timestamped relative to the moment of seeding.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ladder_recs.models.behavior import BehaviorEvent
from ladder_recs.models.preference import Preference
from ladder_recs.taxonomy.action_taxonomy import BehaviorAction

SEED_PREFERENCES: tuple[tuple[str, float], ...] = (
    ("Internships",  0.8),
    ("Hackathons",   0.6),
    ("Scholarships", 0.4),
    ("Volunteering", 0.3),
)

# (opportunity_id, action, age, category, location, field), most-recent-first
SEED_BEHAVIORS: tuple[tuple[str, BehaviorAction, timedelta, str, str, str], ...] = (
    ("1", BehaviorAction.VIEW,  timedelta(minutes=30), "Internships", "Athens, Greece", "Technology"),
    ("2", BehaviorAction.LIKE,  timedelta(hours=2),    "Hackathons",  "Remote",         "Technology"),
    ("3", BehaviorAction.APPLY, timedelta(days=1),     "Internships", "Athens, Greece", "Technology"),
)


def seed_preferences(now: datetime) -> list[Preference]:
    """Return the default preferences, all timestamped ``now``."""
    return [
        Preference(category=category, weight=weight, last_updated=now)
        for category, weight in SEED_PREFERENCES
    ]


def seed_behaviors(now: datetime) -> list[BehaviorEvent]:
    """Return the default behavior history, most-recent-first."""
    return [
        BehaviorEvent(
            opportunity_id=opp_id,
            action=action,
            timestamp=now - age,
            category=category,
            location=location,
            field=field,
        )
        for opp_id, action, age, category, location, field in SEED_BEHAVIORS
    ]
