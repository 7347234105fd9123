"""Bulk operation domain models."""

from pydantic import BaseModel


class BulkOperationError(BaseModel):
    bookmark_id: str
    error: str


class BulkOperationResult(BaseModel):
    """Outcome of one bulk operation.

    Attributes:
        success: Bookmarks updated successfully
        failed: Bookmarks whose update failed
        skipped: Bookmarks with nothing to apply, or not reached after a store outage
        errors: Per-bookmark failure messages, in processing order
        cancelled: True if the run stopped early on a cancellation signal
        store_unavailable: True if the run stopped because the store became unreachable
    """

    success: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[BulkOperationError] = []
    cancelled: bool = False
    store_unavailable: bool = False

    def record_failure(self, bookmark_id: str, error: str) -> None:
        self.failed += 1
        self.errors.append(BulkOperationError(bookmark_id=bookmark_id, error=error))

    @property
    def failed_ids(self) -> list[str]:
        """IDs of failed bookmarks, for callers that want to retry."""
        return [e.bookmark_id for e in self.errors]

    @property
    def processed(self) -> int:
        return self.success + self.failed + self.skipped


class BulkOperationProgress(BaseModel):
    total: int
    completed: int
    current: str | None = None  # title of the bookmark just processed
