"""
Ranking report writer: JSON output for a ranked opportunity feed.

Pure I/O — consumes the list returned by
``RecommendationEngine.get_personalized_opportunities()`` and writes it with
each score breakdown serialized in place.

Output shape::

    {
      "generated_at": "2026-02-24T15:00:00+00:00",
      "count": 2,
      "opportunities": [
        {"id": "o1", ..., "rank": 1,
         "score": {"opportunity_id": "o1", "score": 0.79,
                   "factors": {"category_match": 0.8, ...}}},
        ...
      ]
    }
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from ladder_recs.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


def ranking_to_records(ranked: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Convert ranked listings into JSON-safe dicts with a 1-based ``rank``."""
    records: list[dict[str, Any]] = []
    for rank, item in enumerate(ranked, start=1):
        record = {
            key: (val.model_dump(mode="json") if isinstance(val, BaseModel) else val)
            for key, val in item.items()
        }
        record["rank"] = rank
        records.append(record)
    return records


def write_ranking_json(
    ranked:       list[dict[str, Any]],
    output_path:  Path,
    generated_at: Optional[datetime] = None,
) -> Path:
    """Write a ranked feed to ``output_path`` as JSON.

    Args:
        ranked:       Output of ``get_personalized_opportunities()``.
        output_path:  Target file (parent dirs created if missing).
        generated_at: Timestamp recorded in the report. Defaults to now.

    Returns:
        ``output_path``.
    """
    generated_at = generated_at or utcnow()
    records = ranking_to_records(ranked)
    payload = {
        "generated_at": generated_at.isoformat(),
        "count":        len(records),
        "opportunities": records,
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=str)

    logger.info("Ranking JSON written: %s (%d opportunities)", output_path, len(records))
    return output_path
