"""Deciding which suggested labels to apply without user confirmation."""

from loguru import logger

from labelkit.domain.labels import AutoApplyDecision, AutoApplySettings, LabelSuggestion


def decide(
    suggestions: list[LabelSuggestion],
    settings: AutoApplySettings,
    existing_label_count: int,
) -> AutoApplyDecision:
    """Split suggestions into labels to auto-apply and labels left for review.

    Nothing is auto-applied when auto-apply is disabled, has no confidence
    threshold, the bookmark already carries labels, or no suggestion reaches
    the threshold. Otherwise the highest-confidence qualifying suggestions are
    auto-applied, up to settings.max_labels.

    Args:
        suggestions: Suggestions for one bookmark, in provider order
        settings: Auto-apply settings
        existing_label_count: Number of labels the bookmark already carries

    Returns:
        AutoApplyDecision with auto_applied and remaining suggestions
    """
    untouched = AutoApplyDecision(auto_applied=[], remaining=list(suggestions))

    if not settings.enabled:
        return untouched

    if settings.confidence_threshold is None:
        logger.debug("Auto-apply enabled without a confidence threshold, skipping")
        return untouched

    if existing_label_count > 0:
        logger.debug(
            f"Bookmark already has {existing_label_count} labels, skipping auto-apply"
        )
        return untouched

    threshold = settings.confidence_threshold
    qualifying = [s for s in suggestions if s.confidence >= threshold]
    if not qualifying:
        return untouched

    ranked = sorted(qualifying, key=lambda s: s.confidence, reverse=True)
    auto_applied = ranked[: min(settings.max_labels, len(ranked))]

    # Excluded by label text only, so a same-named label in another category is dropped too
    applied_names = {s.label for s in auto_applied}
    remaining = [s for s in suggestions if s.label not in applied_names]

    logger.debug(
        f"Auto-applying {[s.label for s in auto_applied]}, {len(remaining)} left for review"
    )
    return AutoApplyDecision(auto_applied=auto_applied, remaining=remaining)
