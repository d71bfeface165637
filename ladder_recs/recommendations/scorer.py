"""
Opportunity relevance scoring — pure functions, no engine state.

Score formula (weighted sum, range 0–1)
---------------------------------------
    score = (
        category_match   * 0.40   # stored preference for the category
        + location_match * 0.20   # location seen in the behavior log
        + field_match    * 0.15   # field seen in the behavior log
        + recency        * 0.15   # linear decay over 30 days
        + popularity     * 0.10   # popularity source (random stand-in)
    )

The weights sum to 1.0 and the terms are added in exactly this order, so a
score is reproducible bit-for-bit from its factors.

Component explanations
----------------------
category_match:
    Weight of the opportunity's category in the preference store;
    0.1 when the category has no stored preference.

location_match:
    0.8 when the user has acted on any opportunity with the same location,
    0.3 otherwise. Exact string match.

field_match:
    0.7 when the user has acted on any opportunity in the same field,
    0.4 otherwise. Exact string match.

recency:
    max(0, 1 - days_since_posted / 30), fractional days. Zero at 30 days and
    beyond. Future-dated postings are capped at 1.0; postings without a date
    score 0.0.

popularity:
    Supplied by the caller (see ``popularity.py``).
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ladder_recs.models.opportunity import Opportunity, OpportunityScore, ScoreFactors
from ladder_recs.utils.time_utils import days_between

CATEGORY_WEIGHT   = 0.40
LOCATION_WEIGHT   = 0.20
FIELD_WEIGHT      = 0.15
RECENCY_WEIGHT    = 0.15
POPULARITY_WEIGHT = 0.10

DEFAULT_CATEGORY_MATCH = 0.1
LOCATION_HIT, LOCATION_MISS = 0.8, 0.3
FIELD_HIT, FIELD_MISS = 0.7, 0.4
RECENCY_WINDOW_DAYS = 30.0


def category_match(preference_weight: Optional[float]) -> float:
    """Stored preference weight, or ``DEFAULT_CATEGORY_MATCH`` when absent."""
    if preference_weight is None:
        return DEFAULT_CATEGORY_MATCH
    return preference_weight


def location_match(location: Optional[str], seen_locations: set[str]) -> float:
    return LOCATION_HIT if location in seen_locations else LOCATION_MISS


def field_match(field: Optional[str], seen_fields: set[str]) -> float:
    return FIELD_HIT if field in seen_fields else FIELD_MISS


def recency_score(posted_date: Optional[datetime], now: datetime) -> float:
    """Linear decay from 1.0 (posted now) to 0.0 (posted 30+ days ago).

    Args:
        posted_date: When the opportunity was posted; ``None`` scores 0.0.
        now: Reference instant.

    Returns:
        Recency in ``[0, 1]``.
    """
    if posted_date is None:
        return 0.0
    days_old = days_between(posted_date, now)
    return _clamp(1.0 - days_old / RECENCY_WINDOW_DAYS, 0.0, 1.0)


def weighted_score(factors: ScoreFactors) -> float:
    """Combine the five factors with the fixed weights."""
    return (
        factors.category_match   * CATEGORY_WEIGHT
        + factors.location_match * LOCATION_WEIGHT
        + factors.field_match    * FIELD_WEIGHT
        + factors.recency        * RECENCY_WEIGHT
        + factors.popularity     * POPULARITY_WEIGHT
    )


def compute_score(
    opportunity:       Opportunity,
    preference_weight: Optional[float],
    seen_locations:    set[str],
    seen_fields:       set[str],
    popularity:        float,
    now:               datetime,
) -> OpportunityScore:
    """Score one opportunity against a snapshot of session state.

    Args:
        opportunity:       The candidate listing.
        preference_weight: Stored weight for ``opportunity.category`` or ``None``.
        seen_locations:    Distinct locations in the behavior log.
        seen_fields:       Distinct fields in the behavior log.
        popularity:        Popularity factor for this opportunity.
        now:               Reference instant for recency.

    Returns:
        ``OpportunityScore`` keyed by ``opportunity.id``.
    """
    factors = ScoreFactors(
        category_match=category_match(preference_weight),
        location_match=location_match(opportunity.location, seen_locations),
        field_match=field_match(opportunity.field, seen_fields),
        recency=recency_score(opportunity.posted_date, now),
        popularity=popularity,
    )
    return OpportunityScore(
        opportunity_id=opportunity.id,
        score=weighted_score(factors),
        factors=factors,
    )


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
