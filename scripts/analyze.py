"""CLI for analyzing label suggestions for a local bookmark store and optionally accepting them"""

import argparse
import asyncio
import sys

import instructor
from anthropic import Anthropic
from loguru import logger

from labelkit.analysis.orchestrator import AnalysisOrchestrator
from labelkit.bookmark_store.local import LocalBookmarkStore
from labelkit.bulk.executor import BulkOperationExecutor
from labelkit.config import settings
from labelkit.domain.bookmark import Bookmark
from labelkit.domain.bulk import BulkOperationProgress
from labelkit.intelligence.duplicates import DuplicateFinder
from labelkit.intelligence.patterns import LabelPatternAggregator
from labelkit.suggestions.base import SuggestionProvider
from labelkit.suggestions.instructor_provider import InstructorSuggestionProvider
from labelkit.suggestions.static import StaticSuggestionProvider


def create_provider(suggestions_path: str | None) -> SuggestionProvider:
    """Use precomputed suggestions when a file is given, otherwise ask Claude."""
    if suggestions_path:
        return StaticSuggestionProvider.load(suggestions_path)

    logger.info("Using Claude with Instructor for label suggestions")
    anthropic_client = Anthropic(api_key=settings.anthropic_api_key)
    instructor_client = instructor.from_anthropic(
        anthropic_client, mode=instructor.Mode.ANTHROPIC_TOOLS
    )
    return InstructorSuggestionProvider(
        instructor_client,
        model=settings.suggestion_model,
        system_message=settings.suggestion_system_message,
        max_content_chars=settings.max_content_chars,
    )


def log_progress(progress: BulkOperationProgress) -> None:
    logger.info(f"[{progress.completed}/{progress.total}] {progress.current}")


def report_duplicates(bookmarks: list[Bookmark], finder: DuplicateFinder) -> None:
    refs = [bookmark.to_ref() for bookmark in bookmarks]
    for index, ref in enumerate(refs):
        for candidate in finder.find_duplicates(ref, refs[:index]):
            logger.info(
                f"Possible duplicate: {ref.url} ~ {candidate.existing_bookmark.url} "
                f"({candidate.similarity.overall:.0%}: {', '.join(candidate.differences) or 'identical'})"
            )


async def main(
    store_path: str,
    suggestions_path: str | None,
    accept_high_confidence: bool,
    threshold: float,
    top: int,
    duplicates: bool,
) -> None:
    store = LocalBookmarkStore(filepath=store_path)
    provider = create_provider(suggestions_path)
    orchestrator = AnalysisOrchestrator(
        provider=provider,
        store=store,
        min_confidence=settings.confidence_threshold,
        max_suggestions=settings.max_suggested_labels,
    )

    bookmarks = await store.list_bookmarks()
    batch = await orchestrator.analyze(bookmarks, settings.auto_apply_settings())

    report = LabelPatternAggregator().aggregate(batch)
    stats = report.stats
    logger.info(
        f"{stats.unique_labels} unique labels, {stats.total_labels} total, "
        f"{stats.avg_labels_per_bookmark:.1f} per bookmark across {stats.total_domains} domains"
    )
    logger.info(
        f"Patterns by confidence: {stats.high_confidence_patterns} high, "
        f"{stats.medium_confidence_patterns} medium, {stats.low_confidence_patterns} low"
    )
    for pattern in report.top_patterns(top):
        logger.info(
            f"  {pattern.label} ({pattern.category}): {pattern.count} bookmarks, "
            f"{pattern.avg_confidence:.0%} {pattern.confidence_band}"
        )

    if duplicates:
        report_duplicates(bookmarks, DuplicateFinder(threshold=settings.duplicate_threshold))

    if accept_high_confidence:
        executor = BulkOperationExecutor(
            store=store,
            item_delay=settings.bulk_item_delay_seconds,
            on_progress=log_progress,
        )
        result = await executor.accept_high_confidence(batch, threshold=threshold)
        for error in result.errors:
            logger.warning(f"  {error.bookmark_id}: {error.error}")

    store.save()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--store",
        type=str,
        required=False,
        help="Local bookmark store file",
        default=settings.local_bookmark_store_path,
    )
    parser.add_argument(
        "--suggestions",
        type=str,
        required=False,
        help="JSON file mapping bookmark URLs to label suggestions. Asks Claude if omitted.",
    )
    parser.add_argument(
        "--accept-high-confidence",
        action="store_true",
        help="Apply remaining labels at or above --threshold to every bookmark",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        required=False,
        help="Confidence threshold for --accept-high-confidence",
        default=settings.high_confidence_threshold,
    )
    parser.add_argument(
        "--top", type=int, required=False, help="Number of patterns to show", default=10
    )
    parser.add_argument(
        "--duplicates", action="store_true", help="Report likely duplicate bookmarks"
    )

    args = parser.parse_args()

    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])

    asyncio.run(
        main(
            store_path=args.store,
            suggestions_path=args.suggestions,
            accept_high_confidence=args.accept_high_confidence,
            threshold=args.threshold,
            top=args.top,
            duplicates=args.duplicates,
        )
    )
