import json

import pytest

from labelkit.bookmark_store.local import LocalBookmarkStore
from labelkit.domain.bookmark import Bookmark
from labelkit.domain.labels import LabelUpdate, StoredLabel


@pytest.fixture
def store(test_bookmarks: dict[str, Bookmark]) -> LocalBookmarkStore:
    return LocalBookmarkStore.from_bookmarks(list(test_bookmarks.values()))


@pytest.mark.asyncio
async def test_get_and_list(store: LocalBookmarkStore) -> None:
    bookmark = await store.get("b1")

    assert bookmark is not None
    assert bookmark.title == "asyncio: Asynchronous I/O"
    assert await store.get("missing") is None
    assert [b.id for b in await store.list_bookmarks()] == ["b1", "b2", "b3"]


@pytest.mark.asyncio
async def test_update_adds_labels(store: LocalBookmarkStore) -> None:
    update = LabelUpdate(add_labels=[StoredLabel(label="Python", source="ai", confidence=0.9)])

    assert await store.update("b1", update)

    bookmark = await store.get("b1")
    assert [label.label for label in bookmark.labels] == ["Python"]


@pytest.mark.asyncio
async def test_update_skips_existing_labels_case_insensitively(store: LocalBookmarkStore) -> None:
    await store.update("b1", LabelUpdate(add_labels=[StoredLabel(label="Python", source="user")]))

    result = await store.update(
        "b1",
        LabelUpdate(
            add_labels=[
                StoredLabel(label="python", source="ai"),
                StoredLabel(label="Docs", source="ai"),
                StoredLabel(label="DOCS", source="ai"),
            ]
        ),
    )

    assert result
    bookmark = await store.get("b1")
    assert [(label.label, label.source) for label in bookmark.labels] == [
        ("Python", "user"),
        ("Docs", "ai"),
    ]


@pytest.mark.asyncio
async def test_update_unknown_bookmark_returns_false(store: LocalBookmarkStore) -> None:
    update = LabelUpdate(add_labels=[StoredLabel(label="Python", source="ai")])

    assert await store.update("missing", update) is False


@pytest.mark.asyncio
async def test_save_and_load(tmp_path, store: LocalBookmarkStore) -> None:
    """Test a saved store loads back with the same bookmarks and labels."""
    filepath = tmp_path / "bookmarks.json"
    await store.update(
        "b2", LabelUpdate(add_labels=[StoredLabel(label="News", source="ai", category="topic")])
    )

    store.save(str(filepath))
    loaded = LocalBookmarkStore(filepath)

    assert await loaded.list_bookmarks() == await store.list_bookmarks()
    with open(filepath, encoding="utf-8") as f:
        data = json.load(f)
    assert set(data["bookmarks"]) == {"b1", "b2", "b3"}
    assert data["bookmarks"]["b2"]["labels"][0]["label"] == "News"


def test_new_store_file_is_created_on_save(tmp_path) -> None:
    filepath = tmp_path / "new.json"
    store = LocalBookmarkStore(filepath)
    store.add_bookmark(Bookmark(id="x", url="https://x.com", title="X"))

    assert not filepath.exists()
    store.save()
    assert filepath.exists()


def test_save_without_path_raises() -> None:
    with pytest.raises(ValueError):
        LocalBookmarkStore().save()
