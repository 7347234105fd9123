"""Cleaning raw provider suggestions before they reach the decision procedure."""

from loguru import logger

from labelkit.domain.labels import LabelSuggestion


def clean_suggestions(
    suggestions: list[LabelSuggestion],
    *,
    existing_labels: list[str],
    min_confidence: float | None = None,
    max_labels: int | None = None,
) -> list[LabelSuggestion]:
    """Drop suggestions that are too weak or already on the bookmark.

    Args:
        suggestions: Suggestions as returned by the provider
        existing_labels: Label texts the bookmark already carries
        min_confidence: Drop suggestions below this confidence, if given
        max_labels: Keep at most this many suggestions, in provider order

    Returns:
        Cleaned suggestions, in provider order
    """
    existing = {label.lower() for label in existing_labels}
    cleaned = []

    for suggestion in suggestions:
        if min_confidence is not None and suggestion.confidence < min_confidence:
            logger.debug(f"Dropping {suggestion.label!r}, below confidence {min_confidence}")
            continue
        if suggestion.label.lower() in existing:
            logger.debug(f"Dropping {suggestion.label!r}, already on bookmark")
            continue
        cleaned.append(suggestion)

    if max_labels is not None:
        cleaned = cleaned[:max_labels]
    return cleaned
