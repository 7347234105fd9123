"""Orchestration of one analysis pass over a set of bookmarks."""

import logging

from labelkit.bookmark_store.base import BookmarkStore
from labelkit.content.base import ContentFetcher
from labelkit.domain.bookmark import AnnotatedBookmark, Bookmark
from labelkit.domain.content import CategoryAnalysis, SuggestionRequest
from labelkit.domain.labels import AutoApplySettings, LabelUpdate
from labelkit.intelligence import auto_apply
from labelkit.suggestions.base import SuggestionProvider, safe_suggest
from labelkit.suggestions.filtering import clean_suggestions

logger = logging.getLogger(__name__)


class AnalysisOrchestrator:
    """Turns bookmarks into annotated bookmarks with auto-apply decisions."""

    def __init__(
        self,
        *,
        provider: SuggestionProvider,
        store: BookmarkStore,
        fetcher: ContentFetcher | None = None,
        min_confidence: float | None = None,
        max_suggestions: int | None = 5,
    ):
        """Initialize the orchestrator with required services.

        Args:
            provider: Suggestion provider producing raw label suggestions
            store: Bookmark store that receives auto-applied labels
            fetcher: Optional content fetcher. Without it the bookmark description is used as content.
            min_confidence: Drop provider suggestions below this confidence
            max_suggestions: Keep at most this many suggestions per bookmark
        """
        self.provider = provider
        self.store = store
        self.fetcher = fetcher
        self.min_confidence = min_confidence
        self.max_suggestions = max_suggestions

    async def analyze(
        self, bookmarks: list[Bookmark], settings: AutoApplySettings
    ) -> list[AnnotatedBookmark]:
        """Analyze bookmarks one by one and persist auto-applied labels.

        Args:
            bookmarks: Bookmarks to analyze, processed in order
            settings: Auto-apply settings for this pass

        Returns:
            One AnnotatedBookmark per input bookmark, in input order
        """
        batch = []
        auto_applied_count = 0

        for bookmark in bookmarks:
            analysis = self._suggest(bookmark)
            annotated = self.annotate(bookmark, analysis, settings)

            if annotated.auto_applied_labels:
                annotated = await self._persist_auto_applied(annotated, analysis)
                auto_applied_count += len(annotated.auto_applied_labels)

            batch.append(annotated)

        logger.info(
            f"Analyzed {len(batch)} bookmarks, auto-applied {auto_applied_count} labels"
        )
        return batch

    def annotate(
        self, bookmark: Bookmark, analysis: CategoryAnalysis, settings: AutoApplySettings
    ) -> AnnotatedBookmark:
        """Clean the suggestions for a bookmark and split them with the auto-apply rules."""
        suggestions = clean_suggestions(
            analysis.labels,
            existing_labels=[label.label for label in bookmark.labels],
            min_confidence=self.min_confidence,
            max_labels=self.max_suggestions,
        )
        decision = auto_apply.decide(suggestions, settings, len(bookmark.labels))

        return AnnotatedBookmark(
            bookmark=bookmark,
            auto_applied_labels=decision.auto_applied,
            remaining_labels=decision.remaining,
            suggestions=suggestions,
            suggested_description=analysis.suggested_description,
            language=analysis.language,
        )

    @staticmethod
    def reprocess(
        annotated: AnnotatedBookmark, settings: AutoApplySettings, existing_label_count: int
    ) -> AnnotatedBookmark:
        """Re-run the auto-apply rules over the bookmark's suggestions in provider order."""
        decision = auto_apply.decide(annotated.suggestions, settings, existing_label_count)
        return annotated.model_copy(
            update={
                "auto_applied_labels": decision.auto_applied,
                "remaining_labels": decision.remaining,
            }
        )

    def _suggest(self, bookmark: Bookmark) -> CategoryAnalysis:
        content = bookmark.description or ""
        if self.fetcher is not None:
            page = self.fetcher.fetch(bookmark.url)
            content = page.content or content

        request = SuggestionRequest(
            url=bookmark.url,
            title=bookmark.title,
            content=content,
            existing_labels=[label.label for label in bookmark.labels],
        )
        return safe_suggest(self.provider, request)

    async def _persist_auto_applied(
        self, annotated: AnnotatedBookmark, analysis: CategoryAnalysis
    ) -> AnnotatedBookmark:
        """Store auto-applied labels. On failure they go back to the remaining labels."""
        bookmark_id = annotated.bookmark.id
        try:
            updated = await self.store.update(
                bookmark_id, LabelUpdate.from_suggestions(annotated.auto_applied_labels)
            )
        except Exception as e:
            logger.warning(f"Failed to store auto-applied labels for {bookmark_id}: {e}")
            updated = False

        if updated:
            logger.debug(
                f"Auto-applied {[s.label for s in annotated.auto_applied_labels]} to {bookmark_id}"
            )
            return annotated

        return self.annotate(annotated.bookmark, analysis, AutoApplySettings(enabled=False))
