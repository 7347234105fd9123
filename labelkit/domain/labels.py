"""Label domain models."""

from typing import Literal

from pydantic import BaseModel, Field

LabelCategory = Literal["topic", "type", "priority"]
ConfidenceBand = Literal["high", "medium", "low"]

HIGH_CONFIDENCE = 0.85
MEDIUM_CONFIDENCE = 0.60


def confidence_band(confidence: float) -> ConfidenceBand:
    """Classify a confidence score into its band.

    Args:
        confidence: Confidence score between 0.0 and 1.0

    Returns:
        "high" for >= 0.85, "medium" for >= 0.60, otherwise "low"
    """
    if confidence >= HIGH_CONFIDENCE:
        return "high"
    if confidence >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


class LabelSuggestion(BaseModel):
    """A label suggested for a bookmark by the suggestion provider.

    Attributes:
        label: Short label text, e.g. "Python"
        category: Which axis the label describes
        confidence: Provider confidence between 0.0 and 1.0
        reasoning: Optional explanation from the provider
    """

    label: str
    category: LabelCategory
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str | None = None

    model_config = {"frozen": True}

    @property
    def key(self) -> tuple[str, str]:
        return (self.label, self.category)

    @property
    def band(self) -> ConfidenceBand:
        return confidence_band(self.confidence)


class StoredLabel(BaseModel):
    """A label as persisted on a bookmark by the bookmark store."""

    label: str
    source: Literal["user", "ai", "auto"]
    confidence: float | None = None
    category: Literal["topic", "type", "project", "priority"] | None = None

    @classmethod
    def from_suggestion(cls, suggestion: LabelSuggestion) -> "StoredLabel":
        return cls(
            label=suggestion.label,
            source="ai",
            confidence=suggestion.confidence,
            category=suggestion.category,
        )


class LabelUpdate(BaseModel):
    """A label mutation request sent to the bookmark store."""

    add_labels: list[StoredLabel] = []

    @classmethod
    def from_suggestions(cls, suggestions: list[LabelSuggestion]) -> "LabelUpdate":
        return cls(add_labels=[StoredLabel.from_suggestion(s) for s in suggestions])


class AutoApplySettings(BaseModel):
    """Settings controlling automatic label application.

    Attributes:
        enabled: Whether auto-apply is switched on
        confidence_threshold: Minimum confidence for a label to qualify. None disables the feature.
        max_labels: Maximum number of labels auto-applied per bookmark
        notifications_enabled: Whether callers should notify the user about auto-applied labels
    """

    enabled: bool = False
    confidence_threshold: float | None = Field(default=0.7, ge=0.0, le=1.0)
    max_labels: int = Field(default=1, ge=1)
    notifications_enabled: bool = True

    model_config = {"frozen": True}


class AutoApplyDecision(BaseModel):
    """Partition of a bookmark's suggestions into auto-applied and remaining."""

    auto_applied: list[LabelSuggestion] = []
    remaining: list[LabelSuggestion] = []
