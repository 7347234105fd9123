from typing import List, Protocol

from labelkit.domain.bookmark import Bookmark
from labelkit.domain.labels import LabelUpdate


class BookmarkStore(Protocol):
    """Protocol for bookmark store implementations.

    Implementations may raise StoreError for a rejected request and
    StoreUnavailableError when the store cannot be reached at all.
    """

    async def get(self, bookmark_id: str) -> Bookmark | None:
        """Get a bookmark by its ID."""
        ...

    async def list_bookmarks(self) -> List[Bookmark]:
        """Get all bookmarks in the store."""
        ...

    async def update(self, bookmark_id: str, update: LabelUpdate) -> bool:
        """Add labels to a bookmark. Returns False if the bookmark could not be updated.

        Adding a label the bookmark already carries must be safe.
        """
        ...
