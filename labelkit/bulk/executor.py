"""Sequential bulk application of labels across many bookmarks."""

import asyncio
from typing import Callable

from loguru import logger

from labelkit.bookmark_store.base import BookmarkStore
from labelkit.domain.bookmark import AnnotatedBookmark
from labelkit.domain.bulk import BulkOperationProgress, BulkOperationResult
from labelkit.domain.labels import HIGH_CONFIDENCE, LabelSuggestion, LabelUpdate
from labelkit.domain.patterns import LabelPattern
from labelkit.errors import StoreUnavailableError

ProgressObserver = Callable[[BulkOperationProgress], None]
LabelSelector = Callable[[AnnotatedBookmark], list[LabelSuggestion]]

DEFAULT_ITEM_DELAY = 0.05


class BulkOperationExecutor:
    """Applies labels to bookmarks one at a time through a bookmark store.

    Items are processed strictly in order with at most one store call in
    flight and a short pause between calls. A failing item is recorded in the
    result and the run moves on to the next one.
    """

    def __init__(
        self,
        *,
        store: BookmarkStore,
        item_delay: float = DEFAULT_ITEM_DELAY,
        on_progress: ProgressObserver | None = None,
    ):
        """Initialize the executor.

        Args:
            store: Bookmark store receiving label updates
            item_delay: Seconds to wait between store calls
            on_progress: Optional observer notified after every processed bookmark
        """
        self.store = store
        self.item_delay = item_delay
        self.on_progress = on_progress

    async def apply_labels(
        self,
        bookmarks: list[AnnotatedBookmark],
        labels: list[LabelSuggestion],
        *,
        cancel: asyncio.Event | None = None,
    ) -> BulkOperationResult:
        """Apply the same labels to every bookmark."""
        return await self._run("apply labels", bookmarks, lambda _: list(labels), cancel)

    async def accept_high_confidence(
        self,
        bookmarks: list[AnnotatedBookmark],
        threshold: float = HIGH_CONFIDENCE,
        *,
        cancel: asyncio.Event | None = None,
    ) -> BulkOperationResult:
        """Apply each bookmark's remaining labels at or above threshold.

        Bookmarks without a qualifying label are counted as skipped.
        """
        return await self._run(
            "accept high confidence",
            bookmarks,
            lambda b: [s for s in b.remaining_labels if s.confidence >= threshold],
            cancel,
        )

    async def accept_all(
        self,
        bookmarks: list[AnnotatedBookmark],
        *,
        cancel: asyncio.Event | None = None,
    ) -> BulkOperationResult:
        """Apply every remaining label of each bookmark."""
        return await self._run("accept all", bookmarks, lambda b: list(b.remaining_labels), cancel)

    async def apply_pattern(
        self,
        pattern: LabelPattern,
        bookmarks: list[AnnotatedBookmark],
        *,
        cancel: asyncio.Event | None = None,
    ) -> BulkOperationResult:
        """Apply a pattern's label to the bookmarks that still have it pending.

        Only bookmarks listed in the pattern and still carrying its exact
        (label, category) among their remaining labels are updated. Each gets
        its own suggestion, with its own confidence.
        """
        key = (pattern.label, pattern.category)

        def matching(bookmark: AnnotatedBookmark) -> list[LabelSuggestion]:
            return [s for s in bookmark.remaining_labels if s.key == key][:1]

        affected = [
            b for b in bookmarks if b.bookmark.id in pattern.bookmark_ids and matching(b)
        ]
        if not affected:
            logger.info(f"No bookmarks to update for pattern {pattern.label!r}")
            return BulkOperationResult()

        return await self._run(f"apply pattern {pattern.label!r}", affected, matching, cancel)

    async def reject_all(self, bookmarks: list[AnnotatedBookmark]) -> BulkOperationResult:
        """Reject all suggestions for the bookmarks. Nothing is persisted."""
        logger.info(f"Rejected labels for {len(bookmarks)} bookmarks")
        return BulkOperationResult(success=len(bookmarks))

    async def _run(
        self,
        operation: str,
        bookmarks: list[AnnotatedBookmark],
        select_labels: LabelSelector,
        cancel: asyncio.Event | None,
    ) -> BulkOperationResult:
        """Process bookmarks sequentially, isolating per-item failures.

        Args:
            operation: Name used in log messages
            bookmarks: Bookmarks in processing order
            select_labels: Returns the labels to apply to a bookmark, empty to skip it
            cancel: Optional event, checked before each bookmark, that stops the run

        Returns:
            BulkOperationResult for the run
        """
        result = BulkOperationResult()
        total = len(bookmarks)
        if total == 0:
            return result

        logger.info(f"Starting bulk operation '{operation}' on {total} bookmarks")

        for index, annotated in enumerate(bookmarks):
            if cancel is not None and cancel.is_set():
                logger.info(f"Bulk operation '{operation}' cancelled after {index} of {total}")
                result.cancelled = True
                break

            bookmark_id = annotated.bookmark.id
            labels = select_labels(annotated)

            if not labels:
                result.skipped += 1
                self._report(total, index + 1, annotated.bookmark.title)
                continue

            try:
                updated = await self.store.update(bookmark_id, LabelUpdate.from_suggestions(labels))
            except StoreUnavailableError as e:
                logger.error(f"Bookmark store unavailable during '{operation}': {e}")
                result.record_failure(bookmark_id, str(e) or "Bookmark store unavailable")
                result.skipped += total - index - 1
                result.store_unavailable = True
                self._report(total, index + 1, annotated.bookmark.title)
                break
            except Exception as e:
                logger.warning(f"Failed to update bookmark {bookmark_id}: {e}")
                result.record_failure(bookmark_id, str(e) or type(e).__name__)
            else:
                if updated:
                    result.success += 1
                else:
                    logger.warning(f"Store rejected update for bookmark {bookmark_id}")
                    result.record_failure(bookmark_id, "Update returned false")

            self._report(total, index + 1, annotated.bookmark.title)

            if index < total - 1:
                await asyncio.sleep(self.item_delay)

        logger.info(
            f"Bulk operation '{operation}' complete: {result.success} successful, "
            f"{result.failed} failed, {result.skipped} skipped"
        )
        return result

    def _report(self, total: int, completed: int, current: str) -> None:
        if self.on_progress is None:
            return
        try:
            self.on_progress(BulkOperationProgress(total=total, completed=completed, current=current))
        except Exception as e:
            logger.warning(f"Progress observer failed: {e}")
