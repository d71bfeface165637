"""
Opportunity ranker: attaches an ``OpportunityScore`` to every candidate and
orders the feed by relevance.

Usage flow
----------
1. read_candidates(opportunities)
   -> list[RankCandidate]  (one per mapping; non-mappings skipped)

2. rank_opportunities(opportunities, score_fn)
   -> list[dict]  (each listing copied, ``"score"`` key added, best first)

Input that is not a list/tuple never raises: it is logged and ranks to ``[]``.
The personalization layer must not take the feed down with it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ladder_recs.models.opportunity import Opportunity, OpportunityScore

logger = logging.getLogger(__name__)

SCORE_KEY = "score"


@dataclass
class RankCandidate:
    """A listing as received, paired with its validated scoring view.

    Attributes:
        payload:     Shallow copy of the original listing (all keys kept).
        opportunity: Validated ``Opportunity`` used for scoring.
    """

    payload:     dict[str, Any]
    opportunity: Opportunity


def as_opportunity(item: Any) -> Optional[Opportunity]:
    """Scoring view of one listing, or ``None`` if it is not a mapping.

    Any mapping validates (see ``Opportunity``), so a listing with a bad date
    or no id is still scored.
    """
    if isinstance(item, Opportunity):
        return item
    if isinstance(item, Mapping):
        return Opportunity.model_validate(dict(item))
    return None


def read_candidates(opportunities: list[Any] | tuple[Any, ...]) -> list[RankCandidate]:
    """Pair every mapping with its scoring view; skip (and log) anything else.

    Args:
        opportunities: Listings from the opportunity API or client.

    Returns:
        One ``RankCandidate`` per mapping or ``Opportunity``, in input order.
    """
    candidates: list[RankCandidate] = []
    for index, item in enumerate(opportunities):
        opportunity = as_opportunity(item)
        if opportunity is None:
            logger.warning("Skipping opportunity #%d: expected a mapping, got %s", index, type(item).__name__)
            continue
        payload = item.model_dump() if item is opportunity else dict(item)
        candidates.append(RankCandidate(payload=payload, opportunity=opportunity))
    return candidates


def rank_opportunities(
    opportunities: Any,
    score_fn:      Callable[[Opportunity], OpportunityScore],
) -> list[dict[str, Any]]:
    """Score every candidate and sort by score descending.

    Each returned item is a copy of the input listing with a ``"score"`` key
    holding the full ``OpportunityScore`` (breakdown included). The sort is
    stable, so equal scores keep input order. No truncation.

    Args:
        opportunities: Candidate listings. Anything other than a list or
            tuple is logged as a warning and yields ``[]``.
        score_fn:      Scores one validated ``Opportunity``.

    Returns:
        Scored listings, best first.
    """
    if not isinstance(opportunities, (list, tuple)):
        logger.warning(
            "rank_opportunities expected a list, got %s; returning no results",
            type(opportunities).__name__,
        )
        return []

    ranked: list[dict[str, Any]] = []
    for candidate in read_candidates(opportunities):
        scored = dict(candidate.payload)
        scored[SCORE_KEY] = score_fn(candidate.opportunity)
        ranked.append(scored)

    ranked.sort(key=lambda item: item[SCORE_KEY].score, reverse=True)
    return ranked
