"""Tests for confidence bands and grouping."""

import pytest

from labelkit.domain.bookmark import AnnotatedBookmark, Bookmark
from labelkit.domain.labels import confidence_band
from labelkit.intelligence.confidence import (
    bulk_impact_breakdown,
    group_bookmarks_by_confidence,
    group_by_confidence,
)


@pytest.mark.parametrize(
    "confidence, band",
    [
        (1.0, "high"),
        (0.85, "high"),
        (0.8499, "medium"),
        (0.6, "medium"),
        (0.5999, "low"),
        (0.0, "low"),
    ],
)
def test_confidence_band_boundaries(confidence: float, band: str) -> None:
    assert confidence_band(confidence) == band


def test_group_by_confidence_keeps_order() -> None:
    groups = group_by_confidence([0.9, 0.1, 0.7, 0.95, 0.6], lambda c: c)

    assert groups.high == [0.9, 0.95]
    assert groups.medium == [0.7, 0.6]
    assert groups.low == [0.1]


def test_group_bookmarks_by_confidence(annotated_batch: list[AnnotatedBookmark]) -> None:
    """Test bookmarks are grouped by their highest remaining confidence."""
    empty = AnnotatedBookmark(bookmark=Bookmark(id="b4", url="https://x.com", title="Empty"))

    groups = group_bookmarks_by_confidence([*annotated_batch, empty])

    assert [a.bookmark.id for a in groups.high] == ["b1", "b3"]
    assert [a.bookmark.id for a in groups.medium] == ["b2"]
    assert groups.low == []
    assert [a.bookmark.id for a in groups.none] == ["b4"]


def test_fully_auto_applied_bookmark_is_low(annotated_batch: list[AnnotatedBookmark]) -> None:
    only_applied = annotated_batch[0].model_copy(update={"remaining_labels": []})

    groups = group_bookmarks_by_confidence([only_applied])

    assert [a.bookmark.id for a in groups.low] == ["b1"]


def test_bulk_impact_breakdown(annotated_batch: list[AnnotatedBookmark]) -> None:
    breakdown = bulk_impact_breakdown(annotated_batch)

    assert breakdown.high == 3
    assert breakdown.medium == 3
    assert breakdown.low == 1
    assert breakdown.total == 7


def test_bulk_impact_breakdown_with_selection(annotated_batch: list[AnnotatedBookmark]) -> None:
    """Test only the chosen labels are counted, and unselected bookmarks count nothing."""
    breakdown = bulk_impact_breakdown(
        annotated_batch, selections={"b1": {("Documentation", "type")}}
    )

    assert breakdown.high == 1
    assert breakdown.total == 1
