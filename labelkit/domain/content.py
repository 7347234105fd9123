"""Page content and suggestion exchange models."""

from typing import Literal

from pydantic import BaseModel

from labelkit.domain.labels import LabelSuggestion


class PageContent(BaseModel):
    """Best-effort content extracted from a bookmarked page."""

    url: str
    title: str
    description: str | None = None
    content: str = ""
    language: str | None = None
    keywords: list[str] = []
    site_name: str | None = None
    content_type: Literal["html", "text", "unknown"] = "unknown"


class SuggestionRequest(BaseModel):
    url: str
    title: str
    content: str = ""
    existing_labels: list[str] = []


class CategoryAnalysis(BaseModel):
    """Label suggestions returned by a suggestion provider for one bookmark."""

    labels: list[LabelSuggestion] = []
    suggested_description: str | None = None
    language: str | None = None
