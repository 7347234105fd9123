import json
from pathlib import Path
from typing import Dict, List

from loguru import logger

from labelkit.bookmark_store.base import BookmarkStore
from labelkit.domain.bookmark import Bookmark
from labelkit.domain.labels import LabelUpdate


class LocalBookmarkStore(BookmarkStore):
    """Local bookmark store that keeps bookmarks in a JSON file."""

    def __init__(self, filepath: str | Path | None = None) -> None:
        """Initialize LocalBookmarkStore.

        Args:
            filepath: Path to bookmark store file. If provided and exists, will auto-load.
                     If provided and doesn't exist, will save to this path when save() is called.
                     If not provided, creates empty store in memory only.
        """
        self._filepath = str(filepath) if filepath else None

        if self._filepath and Path(self._filepath).exists():
            with open(self._filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._bookmarks = {
                bookmark_id: Bookmark(**bookmark_data)
                for bookmark_id, bookmark_data in data["bookmarks"].items()
            }
        else:
            self._bookmarks = {}

    @classmethod
    def from_bookmarks(cls, bookmarks: List[Bookmark]) -> "LocalBookmarkStore":
        """Create an in-memory store holding the given bookmarks."""
        instance = cls(filepath=None)
        instance._bookmarks = {bookmark.id: bookmark for bookmark in bookmarks}
        return instance

    async def get(self, bookmark_id: str) -> Bookmark | None:
        """Get a bookmark by its ID."""
        return self._bookmarks.get(bookmark_id)

    async def list_bookmarks(self) -> List[Bookmark]:
        """Get all bookmarks in the store."""
        return list(self._bookmarks.values())

    async def update(self, bookmark_id: str, update: LabelUpdate) -> bool:
        """Add labels to a bookmark, skipping labels it already carries (case-insensitive)."""
        bookmark = self._bookmarks.get(bookmark_id)
        if bookmark is None:
            logger.warning(f"Cannot update unknown bookmark {bookmark_id}")
            return False

        existing = {label.label.lower() for label in bookmark.labels}
        added = []
        for label in update.add_labels:
            if label.label.lower() in existing:
                logger.debug(f"Bookmark {bookmark_id} already has label {label.label!r}")
                continue
            existing.add(label.label.lower())
            added.append(label)

        self._bookmarks[bookmark_id] = bookmark.model_copy(
            update={"labels": [*bookmark.labels, *added]}
        )
        return True

    def add_bookmark(self, bookmark: Bookmark) -> None:
        """Add or replace a bookmark."""
        self._bookmarks[bookmark.id] = bookmark

    def save(self, filepath: str | None = None) -> None:
        """Save the bookmark store to a JSON file.

        Args:
            filepath: Path to save to. If not provided, uses the filepath from initialization.
        """
        save_path = filepath or self._filepath
        if not save_path:
            raise ValueError(
                "No filepath provided and no default filepath set during initialization"
            )

        data: Dict[str, Dict] = {
            "bookmarks": {
                bookmark_id: bookmark.model_dump()
                for bookmark_id, bookmark in self._bookmarks.items()
            }
        }
        with open(str(save_path), "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
