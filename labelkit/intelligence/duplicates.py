"""Duplicate bookmark detection."""

from loguru import logger

from labelkit.domain.bookmark import BookmarkRef
from labelkit.domain.duplicates import DuplicateCandidate

from . import similarity

DUPLICATE_THRESHOLD = 0.7


class DuplicateFinder:
    """Finds existing bookmarks that are likely duplicates of a candidate bookmark."""

    def __init__(self, threshold: float = DUPLICATE_THRESHOLD):
        """Initialize the finder.

        Args:
            threshold: Minimum overall similarity for a bookmark to be reported
        """
        self.threshold = threshold

    def find_duplicates(
        self, candidate: BookmarkRef, existing: list[BookmarkRef]
    ) -> list[DuplicateCandidate]:
        """Compare a candidate bookmark against existing bookmarks.

        Args:
            candidate: The new bookmark
            existing: Bookmarks already in the collection

        Returns:
            Duplicate candidates sorted by overall similarity, highest first
        """
        candidates = []

        for bookmark in existing:
            score = similarity.score(candidate, bookmark)
            if score.overall >= self.threshold:
                candidates.append(
                    DuplicateCandidate(
                        existing_bookmark=bookmark,
                        new_bookmark=candidate,
                        similarity=score,
                        differences=self.identify_differences(candidate, bookmark),
                    )
                )

        candidates.sort(key=lambda c: c.similarity.overall, reverse=True)
        logger.debug(
            f"Found {len(candidates)} duplicate candidates for {candidate.url} "
            f"among {len(existing)} bookmarks"
        )
        return candidates

    @staticmethod
    def identify_differences(a: BookmarkRef, b: BookmarkRef) -> list[str]:
        """Describe how two bookmarks differ in human-readable terms.

        Args:
            a: First bookmark
            b: Second bookmark

        Returns:
            List of difference descriptions, empty if the bookmarks are identical
        """
        differences = []

        if similarity.normalize_url(a.url) != similarity.normalize_url(b.url):
            differences.append("Different URLs")
        elif a.url.lower() != b.url.lower():
            differences.append("Minor URL differences (parameters, www, trailing slash)")

        if a.title.lower().strip() != b.title.lower().strip():
            differences.append("Different titles")

        if a.description and b.description:
            if a.description != b.description:
                differences.append("Different descriptions")
        elif a.description or b.description:
            differences.append("One has description, other does not")

        return differences


def find_duplicates(
    candidate: BookmarkRef,
    existing: list[BookmarkRef],
    threshold: float = DUPLICATE_THRESHOLD,
) -> list[DuplicateCandidate]:
    return DuplicateFinder(threshold=threshold).find_duplicates(candidate, existing)
