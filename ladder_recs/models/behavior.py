"""
Behavior event model — one tracked user interaction with one opportunity.

The descriptive fields (``category``, ``location``, ``field``) are copies of
the opportunity's attributes at the time of the action, not references. They
feed location/field matching long after the opportunity itself is gone.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from ladder_recs.taxonomy.action_taxonomy import action_weight, is_known_action
from ladder_recs.utils.time_utils import ensure_utc


class BehaviorEvent(BaseModel):
    """Immutable record of one user action.

    Attributes:
        opportunity_id: Id of the opportunity acted on.
        action: Action string. Normally a ``BehaviorAction`` value; unknown
            strings are kept verbatim and weigh ``UNKNOWN_ACTION_WEIGHT``.
        timestamp: UTC datetime the event was recorded (set by the log).
        category: Opportunity category at action time.
        location: Opportunity location at action time.
        field: Opportunity field/discipline at action time.
    """

    model_config = ConfigDict(frozen=True)

    opportunity_id: str
    action: str
    timestamp: datetime
    category: str
    location: str
    field: str

    @field_validator("opportunity_id", mode="before")
    @classmethod
    def coerce_opportunity_id(cls, v: object) -> object:
        # API ids are integers; the log keys everything by string.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @property
    def weight(self) -> float:
        """Affinity weight of this event's action."""
        return action_weight(self.action)

    @property
    def is_known_action(self) -> bool:
        return is_known_action(self.action)
