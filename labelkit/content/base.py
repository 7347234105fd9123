import re
from typing import Protocol
from urllib.parse import urlsplit

from labelkit.domain.content import PageContent


class ContentFetcher(Protocol):
    def fetch(self, url: str) -> PageContent:
        """Fetch best-effort page content. Must not raise; use fallback_page_content instead."""
        ...


def title_from_url(url: str) -> str:
    """Derive a readable title from a URL.

    Uses the last path segment with hyphens and underscores turned into
    spaces, or the capitalized hostname when the path is empty.

    Examples:
        https://example.com/getting-started_guide -> "Getting Started Guide"
        https://www.example.com/ -> "Example.com"
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError:
        return "Untitled"
    if not parts.scheme or not hostname:
        return "Untitled"

    path_parts = [part for part in parts.path.split("/") if part]
    if path_parts:
        words = re.sub(r"[-_]", " ", path_parts[-1])
        return re.sub(r"\b\w", lambda m: m.group().upper(), words)

    hostname = hostname.removeprefix("www.")
    return hostname[:1].upper() + hostname[1:]


def fallback_page_content(url: str) -> PageContent:
    """Minimal page content used when fetching fails."""
    return PageContent(url=url, title=title_from_url(url), content="", content_type="unknown")
