from labelkit.domain.labels import LabelSuggestion


def suggestion(label: str, confidence: float, category: str = "topic") -> LabelSuggestion:
    """Shorthand for building a LabelSuggestion in tests."""
    return LabelSuggestion(label=label, category=category, confidence=confidence)
