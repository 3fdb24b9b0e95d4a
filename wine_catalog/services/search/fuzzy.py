"""Fuzzy text matching for catalog search.

Matching strategies, tried in order:
    1. Contained substring on whitespace-free, lowercased strings
    2. Per-word: every query word must be satisfied by some candidate word,
       either by containment or by edit-distance similarity
    3. Whole-string edit-distance similarity

Edit distance is classic Levenshtein (unit insert/delete/substitute cost),
computed with RapidFuzz.
"""
from typing import Iterable, List, Optional, Sequence

import structlog
from rapidfuzz.distance import Levenshtein

from wine_catalog.config import CatalogSettings, settings
from wine_catalog.models import WineRecord
from wine_catalog.services.search.normalizer import normalize, split_words

logger = structlog.get_logger(__name__)

DEFAULT_THRESHOLD: float = CatalogSettings.model_fields["fuzzy_threshold"].default


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]: ``1 - distance / max(len(a), len(b))``.

    Two empty strings are identical (score 1).
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - edit_distance(a, b) / longest


def _word_satisfied(query_word: str, candidate_words: Sequence[str], threshold: float) -> bool:
    for candidate_word in candidate_words:
        if query_word in candidate_word or candidate_word in query_word:
            return True
        if similarity(normalize(query_word), normalize(candidate_word)) >= threshold:
            return True
    return False


class FuzzyMatcher:
    """Edit-distance based matcher between a query and candidate fields.

    Usage:
        matcher = FuzzyMatcher()
        matcher.matches("cabernet", "Cabernet Sauvignon")  # True
    """

    def __init__(self, threshold: Optional[float] = None):
        self.threshold = settings.fuzzy_threshold if threshold is None else threshold

    def matches(self, query: str, candidate: str) -> bool:
        """Return True if ``query`` approximately matches ``candidate``.

        An empty query matches everything; callers skip blank input.
        """
        normalized_query = normalize(query)
        normalized_candidate = normalize(candidate)

        if normalized_query in normalized_candidate:
            return True

        query_words = split_words(query)
        candidate_words = split_words(candidate)
        if query_words and candidate_words and all(
            _word_satisfied(word, candidate_words, self.threshold) for word in query_words
        ):
            return True

        return similarity(normalized_query, normalized_candidate) >= self.threshold

    def record_matches(self, query: str, record: WineRecord) -> bool:
        """Match against name, country, subregion, grape/style, type or any aroma."""
        fields = (
            record.name,
            record.country,
            record.subregion,
            record.grape_or_style,
            record.wine_type,
        )
        for value in fields:
            if value and self.matches(query, value):
                return True
        return any(self.matches(query, aroma) for aroma in record.aromas)

    def search(self, records: Iterable[WineRecord], query: str) -> List[WineRecord]:
        """Records matching ``query``, in input order. Blank queries match nothing."""
        if not query.strip():
            return []
        results = [record for record in records if self.record_matches(query, record)]
        logger.debug("local_search_completed", query=query, matched=len(results))
        return results


def matches(query: str, candidate: str, threshold: float = DEFAULT_THRESHOLD) -> bool:
    """Module-level shortcut for ``FuzzyMatcher(threshold).matches``."""
    return FuzzyMatcher(threshold).matches(query, candidate)
