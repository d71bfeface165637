"""
Opportunity input contract and score output models.

``Opportunity`` is the minimal view of a listing that scoring needs. Listings
arrive from two sources with different key conventions:

  - the mobile client: ``id``, ``category``, ``location``, ``field``, ``postedDate``
  - the REST API rows: integer ``id`` and ``created_at`` instead of ``postedDate``

Both validate into the same model; any other keys are ignored here and
preserved untouched by the ranker.

Every mapping validates; malformed attributes degrade instead of raising:

  - missing or null ``id``           -> ``""``
  - non-string id / text attributes  -> ``str(value)``
  - empty or unparseable date        -> ``None`` (recency scores 0.0)

``OpportunityScore`` is the transient result of scoring one opportunity:
the final score plus the five-factor breakdown (``ScoreFactors``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from ladder_recs.utils.time_utils import ensure_utc

_DATETIME = TypeAdapter(datetime)


class Opportunity(BaseModel):
    """The scoring-relevant attributes of one opportunity listing.

    Attributes:
        id: Listing id (integers are coerced to strings; ``""`` when the
            listing carries none).
        category: Category name, e.g. ``"Internships"``.
        location: Free-text location, e.g. ``"Athens, Greece"``.
        field: Discipline, e.g. ``"Technology"``.
        posted_date: When the listing was posted (UTC). ``None`` when the
            source row carries no usable date; recency then scores 0.
        title: Listing title (used by feed search only).
        description: Listing description (used by feed search only).
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = ""
    category: Optional[str] = None
    location: Optional[str] = None
    field: Optional[str] = None
    posted_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("posted_date", "postedDate", "created_at"),
    )
    title: Optional[str] = None
    description: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @field_validator("category", "location", "field", "title", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: object) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("posted_date", mode="before")
    @classmethod
    def parse_posted_date(cls, v: object) -> Optional[datetime]:
        if v is None or v == "":
            return None
        try:
            return ensure_utc(_DATETIME.validate_python(v))
        except ValidationError:
            return None


class ScoreFactors(BaseModel):
    """The five sub-scores combined into an opportunity score.

    Each factor lies in ``[0, 1]`` for well-formed inputs. ``category_match``
    mirrors the stored preference weight, so it inherits any out-of-range
    weight a caller wrote into the store.
    """

    model_config = ConfigDict(frozen=True)

    category_match: float
    location_match: float
    field_match: float
    recency: float
    popularity: float


class OpportunityScore(BaseModel):
    """Relevance of one opportunity for the current session.

    Attributes:
        opportunity_id: Id of the scored opportunity.
        score: Weighted sum of ``factors``; in ``[0, 1]`` for in-range inputs.
        factors: Per-factor breakdown.
    """

    model_config = ConfigDict(frozen=True)

    opportunity_id: str
    score: float
    factors: ScoreFactors
