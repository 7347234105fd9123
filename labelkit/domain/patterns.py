"""Pattern domain models derived from a batch of annotated bookmarks."""

from pydantic import BaseModel

from labelkit.domain.labels import ConfidenceBand, LabelCategory


class LabelPattern(BaseModel):
    """A label suggested across one or more bookmarks.

    Attributes:
        label: Label text
        category: Label category
        bookmark_ids: IDs of bookmarks the label was suggested for
        count: Number of distinct bookmarks
        avg_confidence: Mean confidence over every contributing suggestion
        confidence_band: Band of avg_confidence
    """

    label: str
    category: LabelCategory
    bookmark_ids: frozenset[str]
    count: int
    avg_confidence: float
    confidence_band: ConfidenceBand

    model_config = {"frozen": True}


class CategoryPattern(BaseModel):
    """Label patterns grouped by category."""

    category: LabelCategory
    labels: list[LabelPattern]
    total_bookmarks: int


class DomainPattern(BaseModel):
    """Bookmarks sharing a hostname, with their most common labels."""

    domain: str
    bookmark_ids: frozenset[str]
    count: int
    common_labels: list[str] = []


class PatternStats(BaseModel):
    total_labels: int = 0
    unique_labels: int = 0
    avg_labels_per_bookmark: float = 0.0
    high_confidence_patterns: int = 0
    medium_confidence_patterns: int = 0
    low_confidence_patterns: int = 0
    total_domains: int = 0


class PatternReport(BaseModel):
    """Everything the aggregator derives from one batch."""

    label_patterns: list[LabelPattern] = []
    category_patterns: list[CategoryPattern] = []
    domain_patterns: list[DomainPattern] = []
    stats: PatternStats = PatternStats()

    def top_patterns(self, n: int = 10) -> list[LabelPattern]:
        """Return the n most common label patterns."""
        return self.label_patterns[:n]

    def patterns_by_category(self, category: LabelCategory) -> list[LabelPattern]:
        return [p for p in self.label_patterns if p.category == category]

    def patterns_for_bookmarks(self, bookmark_ids: list[str]) -> list[LabelPattern]:
        """Return patterns that touch at least one of the given bookmarks."""
        wanted = set(bookmark_ids)
        return [p for p in self.label_patterns if not p.bookmark_ids.isdisjoint(wanted)]
