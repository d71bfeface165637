"""
Feed filtering: narrows a list of opportunity listings by the home feed's
filter controls before (or after) ranking.

Every dimension is optional. ``"all"`` or ``None`` disables it.

    category / location / field : exact match on the listing attribute
    query                       : case-insensitive substring of title,
                                  description, category, or location
    max_age_days                : whole days since ``created_at`` /
                                  ``postedDate`` must be <= the limit;
                                  listings without a readable date pass

With every filter disabled the input comes back unchanged (non-mapping
items aside).

Listings are returned as given (ranked dicts keep their ``"score"`` key).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from ladder_recs.models.opportunity import Opportunity
from ladder_recs.recommendations.ranker import as_opportunity
from ladder_recs.utils.time_utils import days_between, utcnow

logger = logging.getLogger(__name__)

ALL = "all"

_SEARCH_ATTRS = ("title", "description", "category", "location")


def filter_opportunities(
    opportunities: list[Any],
    category:      Optional[str] = ALL,
    location:      Optional[str] = ALL,
    field:         Optional[str] = ALL,
    query:         str = "",
    max_age_days:  Optional[int] = None,
    now:           Optional[datetime] = None,
) -> list[Any]:
    """Return the listings that pass every active filter, in input order.

    Args:
        opportunities: Listings (mappings or ``Opportunity`` instances).
        category:      Required category, or ``"all"``/``None``.
        location:      Required location, or ``"all"``/``None``.
        field:         Required field, or ``"all"``/``None``.
        query:         Free-text search; empty disables it.
        max_age_days:  Maximum whole-day age, or ``None``.
        now:           Reference time for the age filter (default: now).

    Returns:
        Matching listings. Non-mapping items are dropped with a warning.
    """
    now = now or utcnow()
    needle = query.strip().lower()

    kept: list[Any] = []
    for item in opportunities:
        opportunity = as_opportunity(item)
        if opportunity is None:
            logger.warning("Filter skipping non-mapping listing: %s", type(item).__name__)
            continue
        if not _matches(category, opportunity.category):
            continue
        if not _matches(location, opportunity.location):
            continue
        if not _matches(field, opportunity.field):
            continue
        if needle and not _search_hit(opportunity, needle):
            continue
        if max_age_days is not None and not _within_age(opportunity, max_age_days, now):
            continue
        kept.append(item)
    return kept


def _matches(wanted: Optional[str], actual: Optional[str]) -> bool:
    if wanted is None or wanted == ALL:
        return True
    return actual == wanted


def _search_hit(opportunity: Opportunity, needle: str) -> bool:
    for attr in _SEARCH_ATTRS:
        value = getattr(opportunity, attr)
        if value and needle in value.lower():
            return True
    return False


def _within_age(opportunity: Opportunity, max_age_days: int, now: datetime) -> bool:
    if opportunity.posted_date is None:
        return True
    age_days = math.floor(days_between(opportunity.posted_date, now))
    return age_days <= max_age_days
