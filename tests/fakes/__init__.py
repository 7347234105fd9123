from tests.fakes.fake_bookmark_store import FakeBookmarkStore
from tests.fakes.fake_content_fetcher import FakeContentFetcher
from tests.fakes.fake_suggestion_provider import FakeSuggestionProvider

__all__ = ["FakeBookmarkStore", "FakeContentFetcher", "FakeSuggestionProvider"]
