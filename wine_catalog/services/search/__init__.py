"""Text search over catalog records.

Key Components:
    - normalize: case and whitespace folding
    - FuzzyMatcher: substring, per-word and edit-distance matching
    - SearchSession: debounced remote search that discards stale responses
"""
from wine_catalog.services.search.normalizer import normalize, split_words
from wine_catalog.services.search.fuzzy import (
    DEFAULT_THRESHOLD,
    FuzzyMatcher,
    edit_distance,
    matches,
    similarity,
)
from wine_catalog.services.search.session import SearchSession

__all__ = [
    "normalize",
    "split_words",
    "DEFAULT_THRESHOLD",
    "FuzzyMatcher",
    "edit_distance",
    "matches",
    "similarity",
    "SearchSession",
]
