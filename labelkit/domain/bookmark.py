"""Bookmark domain models."""

from pydantic import BaseModel, model_validator

from labelkit.domain.labels import LabelSuggestion, StoredLabel


class BookmarkRef(BaseModel):
    """Minimal bookmark identity used for similarity and duplicate detection."""

    id: str
    url: str
    title: str
    description: str | None = None


class Bookmark(BookmarkRef):
    """Represents a bookmark as held by the bookmark store.

    Attributes:
        id: Unique identifier
        url: Saved URL
        title: Bookmark title
        description: Optional user or AI written description
        favicon: Optional favicon URL
        date_added: Creation timestamp (seconds since epoch)
        visit_count: Number of recorded visits
        labels: Labels already attached to the bookmark
        collections: IDs of collections the bookmark belongs to
    """

    favicon: str | None = None
    date_added: float | None = None
    visit_count: int = 0
    labels: list[StoredLabel] = []
    collections: list[str] = []

    def to_ref(self) -> BookmarkRef:
        return BookmarkRef(
            id=self.id, url=self.url, title=self.title, description=self.description
        )


class AnnotatedBookmark(BaseModel):
    """A bookmark together with its partitioned label suggestions from one analysis pass.

    Attributes:
        bookmark: The analyzed bookmark
        auto_applied_labels: Suggestions applied without user confirmation
        remaining_labels: Suggestions left for review
        suggestions: Every cleaned suggestion in provider order, used when
            the auto-apply rules are re-run. Defaults to auto_applied_labels
            followed by remaining_labels.
        suggested_description: Optional description proposed by the provider
        language: Detected page language
    """

    bookmark: Bookmark
    auto_applied_labels: list[LabelSuggestion] = []
    remaining_labels: list[LabelSuggestion] = []
    suggestions: list[LabelSuggestion] = []
    suggested_description: str | None = None
    language: str | None = None

    @model_validator(mode="after")
    def _check_labels(self) -> "AnnotatedBookmark":
        applied = {label.key for label in self.auto_applied_labels}
        overlap = applied.intersection(label.key for label in self.remaining_labels)
        if overlap:
            raise ValueError(f"Labels both auto-applied and remaining: {sorted(overlap)}")
        if not self.suggestions:
            self.suggestions = self.all_labels
        return self

    @property
    def all_labels(self) -> list[LabelSuggestion]:
        return [*self.auto_applied_labels, *self.remaining_labels]

    @property
    def max_remaining_confidence(self) -> float:
        return max((label.confidence for label in self.remaining_labels), default=0.0)

    def has_suggestions(self) -> bool:
        return bool(self.auto_applied_labels or self.remaining_labels)
