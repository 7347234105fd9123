import pytest

from labelkit.domain.bookmark import AnnotatedBookmark, Bookmark
from labelkit.domain.labels import AutoApplySettings
from tests.fakes import FakeBookmarkStore
from tests.helpers import suggestion


@pytest.fixture
def test_bookmarks() -> dict[str, Bookmark]:
    return {
        "b1": Bookmark(
            id="b1",
            url="https://docs.python.org/3/library/asyncio.html",
            title="asyncio: Asynchronous I/O",
            description="Python standard library documentation for asyncio",
        ),
        "b2": Bookmark(
            id="b2",
            url="https://www.bbc.co.uk/news/technology",
            title="Technology News",
        ),
        "b3": Bookmark(
            id="b3",
            url="https://realpython.com/async-io-python/",
            title="Async IO in Python: A Complete Walkthrough",
        ),
    }


@pytest.fixture
def annotated_batch(test_bookmarks: dict[str, Bookmark]) -> list[AnnotatedBookmark]:
    return [
        AnnotatedBookmark(
            bookmark=test_bookmarks["b1"],
            auto_applied_labels=[suggestion("Python", 0.95)],
            remaining_labels=[
                suggestion("Documentation", 0.9, "type"),
                suggestion("Async", 0.7),
            ],
        ),
        AnnotatedBookmark(
            bookmark=test_bookmarks["b2"],
            remaining_labels=[suggestion("News", 0.65), suggestion("Read Later", 0.4, "priority")],
        ),
        AnnotatedBookmark(
            bookmark=test_bookmarks["b3"],
            remaining_labels=[
                suggestion("Python", 0.85),
                suggestion("Async", 0.8),
                suggestion("Tutorial", 0.88, "type"),
            ],
        ),
    ]


@pytest.fixture
def auto_apply_settings() -> AutoApplySettings:
    return AutoApplySettings(enabled=True, confidence_threshold=0.8, max_labels=1)


@pytest.fixture
def fake_store(test_bookmarks: dict[str, Bookmark]) -> FakeBookmarkStore:
    return FakeBookmarkStore(test_bookmarks)
