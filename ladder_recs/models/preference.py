"""
Category preference model.

``Preference`` is the user's current affinity for one opportunity category.
It is the only mutable model in the package: the preference store updates
``weight`` and ``last_updated`` in place so that an updated category keeps its
original position in the store.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from ladder_recs.utils.time_utils import ensure_utc


class Preference(BaseModel):
    """Affinity weight for one opportunity category.

    Attributes:
        category: Category name; unique key within a preference store.
        weight: Affinity, expected in ``[0, 1]`` (higher = stronger).
            Not range-checked: out-of-range caller values are
            stored and scored as given.
        last_updated: UTC datetime of the last write to this entry.
    """

    # Not frozen: weight and last_updated are rewritten on every upsert
    model_config = ConfigDict(frozen=False)

    category: str
    weight: float
    last_updated: datetime

    @field_validator("last_updated")
    @classmethod
    def validate_last_updated(cls, v: datetime) -> datetime:
        return ensure_utc(v)
