import json
from pathlib import Path

from labelkit.domain.content import CategoryAnalysis, SuggestionRequest
from labelkit.errors import SuggestionProviderError


class StaticSuggestionProvider:
    """Suggestion provider serving precomputed suggestions keyed by URL."""

    def __init__(self, analyses: dict[str, CategoryAnalysis]) -> None:
        self._analyses = analyses

    @classmethod
    def load(cls, filepath: str | Path) -> "StaticSuggestionProvider":
        """Load suggestions from a JSON file of the form {"<url>": {"labels": [...]}, ...}."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls({url: CategoryAnalysis(**analysis) for url, analysis in data.items()})

    def suggest(self, request: SuggestionRequest) -> CategoryAnalysis:
        if request.url not in self._analyses:
            raise SuggestionProviderError(f"No suggestions recorded for {request.url}")
        return self._analyses[request.url]
