"""
Recommendation engine: ranks marketplace opportunities for a user with a
bounded 0–100 relevance score and a human-readable explanation.

Modules
-------
scorer   : ScoreComponents dataclass + per-factor score functions +
           compute_score() + build_reasoning(); pure functions, no I/O.
engine   : RecommendationEngine (built from a UserProfile) with score()
           and recommend(); ScoredOpportunity result type.
reporter : write_recommendation_json() + write_recommendation_csv(); file output.
"""
