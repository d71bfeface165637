"""
Preference store: category → affinity weight, upsert-only.

Entries keep insertion order. Updating an existing category rewrites its
weight and timestamp in place, so the entry keeps its original position.
There is no removal operation.

The store is not thread-safe on its own; ``RecommendationEngine`` guards it
together with the behavior log.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Optional

from ladder_recs.models.preference import Preference
from ladder_recs.utils.time_utils import utcnow


class PreferenceStore:
    """Ordered, upsert-only mapping of category to ``Preference``.

    Args:
        clock: Zero-arg callable returning the current UTC datetime.
    """

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock
        self._entries: dict[str, Preference] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, category: object) -> bool:
        return category in self._entries

    def set_preference(self, category: str, weight: float) -> Preference:
        """Upsert ``category`` with ``weight``; refresh ``last_updated``.

        The weight is stored as given — no clamping, no range check.

        Returns:
            The stored (live) ``Preference`` entry.
        """
        now = self._clock()
        existing = self._entries.get(category)
        if existing is not None:
            existing.weight = weight
            existing.last_updated = now
            return existing

        entry = Preference(category=category, weight=weight, last_updated=now)
        self._entries[category] = entry
        return entry

    def get_preferences(self) -> list[Preference]:
        """Return copies of all entries, in store order."""
        return [p.model_copy() for p in self._entries.values()]

    def weight_for(self, category: Optional[str]) -> Optional[float]:
        """Return the stored weight for ``category``, or ``None`` if absent."""
        if category is None:
            return None
        entry = self._entries.get(category)
        return entry.weight if entry is not None else None

    def load(self, preferences: Iterable[Preference]) -> None:
        """Replace the whole store with ``preferences`` (timestamps kept)."""
        self._entries = {p.category: p.model_copy() for p in preferences}
