"""Filtering, sorting and selecting within a batch of annotated bookmarks.

All functions take the batch explicitly and return new lists, leaving the
input untouched.
"""

from typing import Literal

from labelkit.domain.bookmark import AnnotatedBookmark
from labelkit.domain.labels import confidence_band

FilterMode = Literal["all", "high", "medium", "low", "no_suggestions"]
SortBy = Literal["confidence", "title", "added"]


def filter_batch(batch: list[AnnotatedBookmark], mode: FilterMode = "all") -> list[AnnotatedBookmark]:
    """Filter bookmarks by the band of their highest remaining confidence."""
    if mode == "all":
        return list(batch)
    if mode == "no_suggestions":
        return [a for a in batch if not a.has_suggestions()]
    return [a for a in batch if confidence_band(a.max_remaining_confidence) == mode]


def sort_batch(batch: list[AnnotatedBookmark], sort_by: SortBy = "confidence") -> list[AnnotatedBookmark]:
    """Sort bookmarks by max remaining confidence (desc), title, or date added (newest first)."""
    if sort_by == "confidence":
        return sorted(batch, key=lambda a: a.max_remaining_confidence, reverse=True)
    if sort_by == "title":
        return sorted(batch, key=lambda a: a.bookmark.title.casefold())
    return sorted(batch, key=lambda a: a.bookmark.date_added or 0.0, reverse=True)


def select(batch: list[AnnotatedBookmark], bookmark_ids: set[str]) -> list[AnnotatedBookmark]:
    """Return the selected bookmarks in batch order."""
    return [a for a in batch if a.bookmark.id in bookmark_ids]


def replace(batch: list[AnnotatedBookmark], updated: AnnotatedBookmark) -> list[AnnotatedBookmark]:
    """Return a new batch with the bookmark sharing updated's ID swapped for updated."""
    return [updated if a.bookmark.id == updated.bookmark.id else a for a in batch]


def mark_applied(
    batch: list[AnnotatedBookmark], bookmark_ids: set[str], label_keys: set[tuple[str, str]] | None = None
) -> list[AnnotatedBookmark]:
    """Move remaining labels of the given bookmarks into their auto-applied labels.

    Used by callers after a successful bulk apply so the next aggregation
    reflects what was applied.

    Args:
        batch: Annotated bookmarks
        bookmark_ids: Bookmarks whose labels were applied
        label_keys: Only move these (label, category) keys. All remaining labels if None.

    Returns:
        New batch with updated bookmarks
    """
    result = []
    for annotated in batch:
        if annotated.bookmark.id not in bookmark_ids:
            result.append(annotated)
            continue
        moved = [
            s for s in annotated.remaining_labels if label_keys is None or s.key in label_keys
        ]
        kept = [s for s in annotated.remaining_labels if s not in moved]
        result.append(
            annotated.model_copy(
                update={
                    "auto_applied_labels": [*annotated.auto_applied_labels, *moved],
                    "remaining_labels": kept,
                }
            )
        )
    return result
