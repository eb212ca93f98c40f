"""
Recommendation engine: converts quiz answers into a ranked set of career
path recommendations.

Modules
-------
scorer   : score() + resolve_answers() — answers → complete ScoreVector.
           Pure functions, no DB or I/O.
ranker   : rank() + build_recommendation_set() + recommend() — deterministic
           ordering (score desc, declaration order on ties) and catalog lookup.
reporter : write_recommendation_json() + load_recommendation_json() — file output.
"""
