"""Similarity scoring between bookmarks."""

from urllib.parse import parse_qsl, urlencode, urlsplit

from loguru import logger
from rapidfuzz.distance import Levenshtein

from labelkit.domain.bookmark import BookmarkRef
from labelkit.domain.duplicates import SimilarityScore

TRACKING_PARAMS = frozenset(
    {"utm_source", "utm_medium", "utm_campaign", "utm_content", "utm_term", "fbclid", "gclid"}
)

URL_WEIGHT = 0.5
TITLE_WEIGHT = 0.3
CONTENT_WEIGHT = 0.2


def normalize_url(url: str) -> str:
    """Normalize a URL so that trivially different variants compare equal.

    Lower-cases the URL, strips tracking parameters, a trailing slash and a
    leading "www." from the host. The fragment and port are dropped.

    Args:
        url: Raw URL as saved in the bookmark

    Returns:
        Normalized URL, or the lower-cased raw string if it cannot be parsed
    """
    lowered = url.lower()
    try:
        parts = urlsplit(lowered)
        hostname = parts.hostname
    except ValueError as e:
        logger.warning(f"Could not parse URL {url!r}: {e}")
        return lowered

    if not parts.scheme or not hostname:
        logger.warning(f"Could not parse URL {url!r}: missing scheme or host")
        return lowered

    if hostname.startswith("www."):
        hostname = hostname[4:]

    path = parts.path
    if path.endswith("/"):
        path = path[:-1]
    if not path:
        path = "/"

    params = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in TRACKING_PARAMS
    ]
    query = f"?{urlencode(params)}" if params else ""

    return f"{parts.scheme}://{hostname}{path}{query}"


def string_similarity(s1: str, s2: str) -> float:
    """Similarity between two strings based on Levenshtein edit distance.

    Returns:
        1.0 for equal strings (including two empty strings), 0.0 if exactly
        one is empty, otherwise 1 - distance / max(len(s1), len(s2))
    """
    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    distance = Levenshtein.distance(s1, s2)
    return 1.0 - distance / max(len(s1), len(s2))


def score(a: BookmarkRef, b: BookmarkRef) -> SimilarityScore:
    """Calculate weighted similarity between two bookmarks.

    Content similarity only counts when both bookmarks have a description.
    A bookmark without one therefore scores 0.8 against itself, not 1.0.

    Args:
        a: First bookmark
        b: Second bookmark

    Returns:
        SimilarityScore with url, title, content and overall similarity
    """
    url_a = normalize_url(a.url)
    url_b = normalize_url(b.url)
    url_similarity = 1.0 if url_a == url_b else string_similarity(url_a, url_b)

    title_similarity = string_similarity(a.title.lower().strip(), b.title.lower().strip())

    content_a = a.description or ""
    content_b = b.description or ""
    content_similarity = (
        string_similarity(content_a.lower(), content_b.lower())
        if content_a and content_b
        else 0.0
    )

    overall = (
        URL_WEIGHT * url_similarity
        + TITLE_WEIGHT * title_similarity
        + CONTENT_WEIGHT * content_similarity
    )

    return SimilarityScore(
        url=url_similarity,
        title=title_similarity,
        content=content_similarity,
        # clamp float rounding
        overall=min(overall, 1.0),
    )
