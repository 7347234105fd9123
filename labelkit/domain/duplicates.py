"""Duplicate detection domain models."""

from pydantic import BaseModel, Field

from labelkit.domain.bookmark import BookmarkRef


class SimilarityScore(BaseModel):
    """Per-field and weighted overall similarity between two bookmarks."""

    url: float = Field(ge=0.0, le=1.0)
    title: float = Field(ge=0.0, le=1.0)
    content: float = Field(ge=0.0, le=1.0)
    overall: float = Field(ge=0.0, le=1.0)


class DuplicateCandidate(BaseModel):
    """An existing bookmark that looks like a duplicate of a new one."""

    existing_bookmark: BookmarkRef
    new_bookmark: BookmarkRef
    similarity: SimilarityScore
    differences: list[str] = []
