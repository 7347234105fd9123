from typing import Protocol

from loguru import logger

from labelkit.domain.content import CategoryAnalysis, SuggestionRequest


class SuggestionProvider(Protocol):
    def suggest(self, request: SuggestionRequest) -> CategoryAnalysis:
        """Suggest labels for a bookmark. May raise on provider failure."""
        ...


def safe_suggest(provider: SuggestionProvider, request: SuggestionRequest) -> CategoryAnalysis:
    """Ask the provider for suggestions, treating any failure as no suggestions."""
    try:
        return provider.suggest(request)
    except Exception as e:
        logger.warning(f"Suggestion provider failed for {request.url}: {e}")
        return CategoryAnalysis()
