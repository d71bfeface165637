"""
Engine state snapshot.

``EngineSnapshot`` is the hand-off format between a ``RecommendationEngine``
and whatever persists it (the engine itself keeps state in memory only).
Round-trips through ``model_dump_json()`` / ``model_validate_json()``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from ladder_recs.models.behavior import BehaviorEvent
from ladder_recs.models.preference import Preference


class EngineSnapshot(BaseModel):
    """Point-in-time copy of a session's preferences and behavior log.

    Attributes:
        preferences: Preference entries in store order.
        behaviors: Behavior events, most-recent-first.
        taken_at: UTC datetime the snapshot was taken.
    """

    model_config = ConfigDict(frozen=True)

    preferences: list[Preference]
    behaviors: list[BehaviorEvent]
    taken_at: datetime
