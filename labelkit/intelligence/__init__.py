"""Label intelligence: similarity, duplicates, patterns and auto-apply decisions."""

from labelkit.intelligence.auto_apply import decide
from labelkit.intelligence.duplicates import DuplicateFinder, find_duplicates
from labelkit.intelligence.patterns import LabelPatternAggregator, aggregate
from labelkit.intelligence.similarity import normalize_url, score, string_similarity

__all__ = [
    "DuplicateFinder",
    "LabelPatternAggregator",
    "aggregate",
    "decide",
    "find_duplicates",
    "normalize_url",
    "score",
    "string_similarity",
]
