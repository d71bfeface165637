"""
RecommendationEngine — one user session's personalization state.

Owns a ``PreferenceStore`` and a ``BehaviorLog`` and exposes the operations
the app calls:

    get_preferences()                     update_preference(category, weight)
    track_behavior(...)                   get_opportunity_score(opportunity)
    get_personalized_opportunities(opps)  get_recommended_categories()
    apply_onboarding_preferences(cats)    snapshot() / restore(snapshot)

Create one engine per session; there is no module-level instance.

Concurrency
-----------
Store and log sit behind one lock. ``track_behavior`` appends the event and
overwrites the category preference under a single acquisition, so a
concurrent scorer sees either neither change or both. Scoring and ranking read
under the same lock, so a ranked list reflects one consistent state.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from ladder_recs.config import AppConfig
from ladder_recs.models.behavior import BehaviorEvent
from ladder_recs.models.opportunity import Opportunity, OpportunityScore
from ladder_recs.models.preference import Preference
from ladder_recs.models.snapshot import EngineSnapshot
from ladder_recs.recommendations.behavior_log import BehaviorLog
from ladder_recs.recommendations.popularity import (
    FixedPopularity,
    PopularitySource,
    RandomPopularity,
)
from ladder_recs.recommendations.preferences import PreferenceStore
from ladder_recs.recommendations import ranker
from ladder_recs.recommendations.scorer import compute_score
from ladder_recs.recommendations.seed import seed_behaviors, seed_preferences
from ladder_recs.taxonomy.action_taxonomy import action_weight
from ladder_recs.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

DEFAULT_MAX_CATEGORIES = 5
DEFAULT_ONBOARDING_WEIGHT = 0.8


class RecommendationEngine:
    """Per-session preference store, behavior log, and scorer.

    Args:
        popularity:        Popularity source; defaults to a fresh
                           ``RandomPopularity`` owned by this engine.
        clock:             Zero-arg callable returning the current UTC time.
        seed:              Start with the default preferences and history.
        max_categories:    Cap for ``get_recommended_categories()``.
        onboarding_weight: Weight for categories picked during onboarding.
    """

    def __init__(
        self,
        popularity:        Optional[PopularitySource] = None,
        clock:             Callable[[], datetime] = utcnow,
        seed:              bool = True,
        max_categories:    int = DEFAULT_MAX_CATEGORIES,
        onboarding_weight: float = DEFAULT_ONBOARDING_WEIGHT,
    ) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        self._popularity: PopularitySource = popularity or RandomPopularity()
        self._preferences = PreferenceStore(clock=clock)
        self._behaviors = BehaviorLog(clock=clock)
        self.max_categories = max_categories
        self.onboarding_weight = onboarding_weight

        if seed:
            now = clock()
            self._preferences.load(seed_preferences(now))
            self._behaviors.load(seed_behaviors(now))

        logger.debug(
            "Engine created: %d preferences, %d behaviors",
            len(self._preferences), len(self._behaviors),
        )

    @classmethod
    def from_config(
        cls,
        config:     AppConfig,
        popularity: Optional[PopularitySource] = None,
        clock:      Callable[[], datetime] = utcnow,
    ) -> "RecommendationEngine":
        """Build an engine from ``AppConfig`` (seeding + popularity settings).

        An explicit ``popularity`` source takes precedence over the config.
        """
        rec_cfg = config.recommendations
        if popularity is None:
            if rec_cfg.fixed_popularity is not None:
                popularity = FixedPopularity(rec_cfg.fixed_popularity)
            else:
                popularity = RandomPopularity(seed=rec_cfg.popularity_seed)
        return cls(
            popularity=popularity,
            clock=clock,
            seed=config.seed.enabled,
            max_categories=rec_cfg.max_categories,
            onboarding_weight=config.seed.onboarding_weight,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot:   EngineSnapshot,
        popularity: Optional[PopularitySource] = None,
        clock:      Callable[[], datetime] = utcnow,
    ) -> "RecommendationEngine":
        """Build an unseeded engine and load ``snapshot`` into it."""
        engine = cls(popularity=popularity, clock=clock, seed=False)
        engine.restore(snapshot)
        return engine

    # ── Preferences ──────────────────────────────────────────────────────────

    def get_preferences(self) -> list[Preference]:
        """Copies of all preferences, in store order."""
        with self._lock:
            return self._preferences.get_preferences()

    def update_preference(self, category: str, weight: float) -> None:
        """Set ``category`` to ``weight`` (upsert, not range-checked)."""
        with self._lock:
            self._preferences.set_preference(category, weight)

    def apply_onboarding_preferences(
        self,
        categories: Iterable[str],
        weight:     Optional[float] = None,
    ) -> None:
        """Set every category chosen during onboarding to the onboarding weight.

        Args:
            categories: Categories the user picked.
            weight:     Override for ``self.onboarding_weight``.
        """
        target = self.onboarding_weight if weight is None else weight
        with self._lock:
            for category in categories:
                self._preferences.set_preference(category, target)

    # ── Behaviors ────────────────────────────────────────────────────────────

    def get_behaviors(self) -> list[BehaviorEvent]:
        """All tracked events, most-recent-first."""
        with self._lock:
            return self._behaviors.events()

    def track_behavior(
        self,
        opportunity_id: str,
        action:         str,
        category:       str,
        location:       str,
        field:          str,
    ) -> BehaviorEvent:
        """Log an action and overwrite its category preference.

        The new preference weight is the action's fixed weight. It replaces
        the previous weight outright, so the latest action on a category wins
        even when an earlier action was stronger.

        Returns:
            The recorded event.
        """
        with self._lock:
            event = self._behaviors.record(opportunity_id, action, category, location, field)
            self._preferences.set_preference(category, action_weight(action))
        logger.debug(
            "Tracked %s on %s (%s) -> preference %.1f",
            event.action, event.opportunity_id, event.category, event.weight,
        )
        return event

    def get_recommended_categories(self) -> list[str]:
        """Up to ``max_categories`` categories by total tracked weight, descending."""
        with self._lock:
            return self._behaviors.recommended_categories(self.max_categories)

    # ── Scoring ──────────────────────────────────────────────────────────────

    def get_opportunity_score(self, opportunity: Any) -> OpportunityScore:
        """Score one opportunity against the current session state.

        Args:
            opportunity: An ``Opportunity`` or a mapping. Missing attributes
                score as absent; anything else is scored as an empty listing.
        """
        item = opportunity
        opportunity = ranker.as_opportunity(item)
        if opportunity is None:
            logger.warning(
                "get_opportunity_score expected a mapping, got %s; scoring with defaults",
                type(item).__name__,
            )
            opportunity = Opportunity()
        with self._lock:
            return self._score_locked(
                opportunity, self._clock(), self._behaviors.locations(), self._behaviors.fields()
            )

    def get_personalized_opportunities(self, opportunities: Any) -> list[dict[str, Any]]:
        """Rank ``opportunities`` best-first, each with a ``"score"`` attached.

        Non-list input logs a warning and returns ``[]``.
        """
        with self._lock:
            now = self._clock()
            locations = self._behaviors.locations()
            fields = self._behaviors.fields()
            ranked = ranker.rank_opportunities(
                opportunities,
                lambda opp: self._score_locked(opp, now, locations, fields),
            )
        logger.debug("Ranked %d opportunities", len(ranked))
        return ranked

    # Short names used by the scoring/ranking API
    score_opportunity = get_opportunity_score
    rank_opportunities = get_personalized_opportunities

    def _score_locked(
        self,
        opportunity: Opportunity,
        now:         datetime,
        locations:   set[str],
        fields:      set[str],
    ) -> OpportunityScore:
        # Caller holds self._lock.
        return compute_score(
            opportunity=opportunity,
            preference_weight=self._preferences.weight_for(opportunity.category),
            seen_locations=locations,
            seen_fields=fields,
            popularity=self._popularity.popularity_for(opportunity),
            now=now,
        )

    # ── Snapshot / restore ───────────────────────────────────────────────────

    def snapshot(self) -> EngineSnapshot:
        """Copy the current preferences and behavior log."""
        with self._lock:
            return EngineSnapshot(
                preferences=self._preferences.get_preferences(),
                behaviors=self._behaviors.events(),
                taken_at=self._clock(),
            )

    def restore(self, snapshot: EngineSnapshot) -> None:
        """Replace all session state with ``snapshot``."""
        with self._lock:
            self._preferences.load(snapshot.preferences)
            self._behaviors.load(snapshot.behaviors)
        logger.info(
            "Restored snapshot from %s: %d preferences, %d behaviors",
            snapshot.taken_at.isoformat(), len(snapshot.preferences), len(snapshot.behaviors),
        )
