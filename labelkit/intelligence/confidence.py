"""Grouping items and bookmarks by confidence band."""

from typing import Callable, Generic, TypeVar

from pydantic import BaseModel

from labelkit.domain.bookmark import AnnotatedBookmark
from labelkit.domain.labels import confidence_band

T = TypeVar("T")


class ConfidenceGroups(BaseModel, Generic[T]):
    high: list[T] = []
    medium: list[T] = []
    low: list[T] = []


class BookmarkConfidenceGroups(ConfidenceGroups[AnnotatedBookmark]):
    none: list[AnnotatedBookmark] = []  # bookmarks without any suggestion


class ConfidenceBreakdown(BaseModel):
    high: int = 0
    medium: int = 0
    low: int = 0

    @property
    def total(self) -> int:
        return self.high + self.medium + self.low


def group_by_confidence(items: list[T], get_confidence: Callable[[T], float]) -> ConfidenceGroups[T]:
    """Split items into high, medium and low confidence groups, keeping their order."""
    groups: ConfidenceGroups[T] = ConfidenceGroups()
    for item in items:
        getattr(groups, confidence_band(get_confidence(item))).append(item)
    return groups


def group_bookmarks_by_confidence(batch: list[AnnotatedBookmark]) -> BookmarkConfidenceGroups:
    """Group bookmarks by the highest confidence among their remaining labels.

    Bookmarks with neither auto-applied nor remaining labels go to "none".
    Bookmarks whose labels were all auto-applied have a max confidence of 0
    and therefore land in "low".
    """
    groups = BookmarkConfidenceGroups()
    for annotated in batch:
        if not annotated.has_suggestions():
            groups.none.append(annotated)
        else:
            getattr(groups, confidence_band(annotated.max_remaining_confidence)).append(annotated)
    return groups


def bulk_impact_breakdown(
    batch: list[AnnotatedBookmark],
    selections: dict[str, set[tuple[str, str]]] | None = None,
) -> ConfidenceBreakdown:
    """Count the labels a bulk apply would add, per confidence band.

    Args:
        batch: Bookmarks selected for the bulk operation
        selections: Optional mapping of bookmark ID to the (label, category)
            keys chosen for it. Without it every remaining label counts.

    Returns:
        ConfidenceBreakdown of the labels that would be applied
    """
    breakdown = ConfidenceBreakdown()
    for annotated in batch:
        chosen = None if selections is None else selections.get(annotated.bookmark.id, set())
        for suggestion in annotated.remaining_labels:
            if chosen is not None and suggestion.key not in chosen:
                continue
            band = confidence_band(suggestion.confidence)
            setattr(breakdown, band, getattr(breakdown, band) + 1)
    return breakdown
