"""Aggregating label suggestions across a batch of bookmarks into patterns."""

from collections import Counter
from statistics import fmean
from urllib.parse import urlsplit

from loguru import logger

from labelkit.domain.bookmark import AnnotatedBookmark
from labelkit.domain.labels import LabelCategory, confidence_band
from labelkit.domain.patterns import (
    CategoryPattern,
    DomainPattern,
    LabelPattern,
    PatternReport,
    PatternStats,
)

COMMON_LABELS_PER_DOMAIN = 5


def _hostname(url: str) -> str | None:
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


class LabelPatternAggregator:
    """Builds label, category and domain patterns from annotated bookmarks.

    The aggregator holds no state between calls, so running it twice on the
    same batch gives equal reports.
    """

    def aggregate(self, batch: list[AnnotatedBookmark]) -> PatternReport:
        """Aggregate all suggestions in a batch.

        Args:
            batch: Annotated bookmarks from one analysis pass

        Returns:
            PatternReport with label, category and domain patterns and statistics
        """
        label_patterns = self.build_label_patterns(batch)
        category_patterns = self.build_category_patterns(label_patterns)
        domain_patterns = self.build_domain_patterns(batch)
        stats = self._build_stats(batch, label_patterns, domain_patterns)

        return PatternReport(
            label_patterns=label_patterns,
            category_patterns=category_patterns,
            domain_patterns=domain_patterns,
            stats=stats,
        )

    def build_label_patterns(self, batch: list[AnnotatedBookmark]) -> list[LabelPattern]:
        """Build one pattern per (label, category) pair.

        Args:
            batch: Annotated bookmarks

        Returns:
            Label patterns sorted by bookmark count, most common first
        """
        bookmark_ids: dict[tuple[str, LabelCategory], set[str]] = {}
        confidences: dict[tuple[str, LabelCategory], list[float]] = {}

        for annotated in batch:
            for suggestion in annotated.all_labels:
                key = (suggestion.label, suggestion.category)
                bookmark_ids.setdefault(key, set()).add(annotated.bookmark.id)
                confidences.setdefault(key, []).append(suggestion.confidence)

        patterns = []
        for (label, category), ids in bookmark_ids.items():
            avg_confidence = fmean(confidences[(label, category)])
            patterns.append(
                LabelPattern(
                    label=label,
                    category=category,
                    bookmark_ids=frozenset(ids),
                    count=len(ids),
                    avg_confidence=avg_confidence,
                    confidence_band=confidence_band(avg_confidence),
                )
            )

        # sorted() is stable, ties keep first-seen order
        return sorted(patterns, key=lambda p: p.count, reverse=True)

    def build_category_patterns(self, label_patterns: list[LabelPattern]) -> list[CategoryPattern]:
        """Group label patterns by category.

        Args:
            label_patterns: Patterns sorted by count

        Returns:
            One CategoryPattern per category that has at least one label
        """
        grouped: dict[LabelCategory, list[LabelPattern]] = {}
        for pattern in label_patterns:
            grouped.setdefault(pattern.category, []).append(pattern)

        category_patterns = []
        for category, labels in grouped.items():
            covered: set[str] = set()
            for pattern in labels:
                covered.update(pattern.bookmark_ids)
            category_patterns.append(
                CategoryPattern(category=category, labels=labels, total_bookmarks=len(covered))
            )
        return category_patterns

    def build_domain_patterns(self, batch: list[AnnotatedBookmark]) -> list[DomainPattern]:
        """Group bookmarks by hostname and collect their most common labels.

        Bookmarks whose URL has no parsable hostname are skipped.
        """
        bookmark_ids: dict[str, set[str]] = {}
        label_counts: dict[str, Counter[str]] = {}

        for annotated in batch:
            domain = _hostname(annotated.bookmark.url)
            if domain is None:
                logger.warning(
                    f"Skipping bookmark {annotated.bookmark.id} for domain patterns, "
                    f"invalid URL: {annotated.bookmark.url!r}"
                )
                continue

            bookmark_ids.setdefault(domain, set()).add(annotated.bookmark.id)
            counts = label_counts.setdefault(domain, Counter())
            counts.update(s.label for s in annotated.all_labels)

        patterns = [
            DomainPattern(
                domain=domain,
                bookmark_ids=frozenset(ids),
                count=len(ids),
                common_labels=[
                    label
                    for label, _ in label_counts[domain].most_common(COMMON_LABELS_PER_DOMAIN)
                ],
            )
            for domain, ids in bookmark_ids.items()
        ]
        return sorted(patterns, key=lambda p: p.count, reverse=True)

    @staticmethod
    def _build_stats(
        batch: list[AnnotatedBookmark],
        label_patterns: list[LabelPattern],
        domain_patterns: list[DomainPattern],
    ) -> PatternStats:
        total_labels = sum(p.count for p in label_patterns)
        bands = Counter(p.confidence_band for p in label_patterns)

        return PatternStats(
            total_labels=total_labels,
            unique_labels=len(label_patterns),
            avg_labels_per_bookmark=total_labels / len(batch) if batch else 0.0,
            high_confidence_patterns=bands["high"],
            medium_confidence_patterns=bands["medium"],
            low_confidence_patterns=bands["low"],
            total_domains=len(domain_patterns),
        )


def aggregate(batch: list[AnnotatedBookmark]) -> PatternReport:
    return LabelPatternAggregator().aggregate(batch)


def bookmarks_with_label(
    batch: list[AnnotatedBookmark], label: str, category: LabelCategory | None = None
) -> list[AnnotatedBookmark]:
    """Return bookmarks that were suggested the given label, optionally in one category."""
    return [
        annotated
        for annotated in batch
        if any(
            s.label == label and (category is None or s.category == category)
            for s in annotated.all_labels
        )
    ]


def find_similar_bookmarks(
    batch: list[AnnotatedBookmark], bookmark_id: str, min_overlap: int = 2
) -> list[AnnotatedBookmark]:
    """Find bookmarks sharing at least min_overlap suggested labels with a bookmark.

    Args:
        batch: Annotated bookmarks
        bookmark_id: ID of the bookmark to compare against
        min_overlap: Minimum number of shared (label, category) suggestions

    Returns:
        Similar bookmarks, largest overlap first
    """
    target = next((a for a in batch if a.bookmark.id == bookmark_id), None)
    if target is None:
        return []

    target_keys = {s.key for s in target.all_labels}
    similar = []
    for annotated in batch:
        if annotated.bookmark.id == bookmark_id:
            continue
        overlap = sum(1 for s in annotated.all_labels if s.key in target_keys)
        if overlap >= min_overlap:
            similar.append((overlap, annotated))

    similar.sort(key=lambda item: item[0], reverse=True)
    return [annotated for _, annotated in similar]
