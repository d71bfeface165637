"""
Recommendation engine: per-session preference store + behavior log, scored
and ranked opportunity feeds, and category recommendations.

Modules
-------
preferences  : PreferenceStore — category → weight, upsert-only.
behavior_log : BehaviorLog — immutable action events, most-recent-first.
seed         : Default cold-start preferences and behavior history.
popularity   : PopularitySource protocol + RandomPopularity / FixedPopularity.
scorer       : compute_score() and its factor functions — pure, no state.
ranker       : rank_opportunities() — attach scores, sort best-first.
engine       : RecommendationEngine — composes the above behind one lock.
filters      : filter_opportunities() — home feed filter controls.
reporter     : write_ranking_json() — file output.
"""
