import pytest
from pydantic import ValidationError

from labelkit.config import Settings
from labelkit.domain.bookmark import AnnotatedBookmark, Bookmark
from labelkit.domain.bulk import BulkOperationResult
from labelkit.domain.labels import AutoApplySettings, LabelSuggestion, LabelUpdate
from tests.helpers import suggestion


def test_label_and_remaining_must_be_disjoint() -> None:
    bookmark = Bookmark(id="b1", url="https://a.com", title="A")

    with pytest.raises(ValidationError):
        AnnotatedBookmark(
            bookmark=bookmark,
            auto_applied_labels=[suggestion("Python", 0.9)],
            remaining_labels=[suggestion("Python", 0.5)],
        )

    # same text in another category is a different label
    annotated = AnnotatedBookmark(
        bookmark=bookmark,
        auto_applied_labels=[suggestion("Python", 0.9)],
        remaining_labels=[suggestion("Python", 0.5, "type")],
    )
    assert len(annotated.all_labels) == 2


@pytest.mark.parametrize("confidence", [-0.1, 1.1])
def test_confidence_out_of_range(confidence: float) -> None:
    with pytest.raises(ValidationError):
        LabelSuggestion(label="X", category="topic", confidence=confidence)


def test_max_labels_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        AutoApplySettings(max_labels=0)


def test_auto_apply_defaults() -> None:
    defaults = AutoApplySettings()

    assert not defaults.enabled
    assert defaults.confidence_threshold == 0.7
    assert defaults.max_labels == 1
    assert defaults.notifications_enabled


def test_label_update_from_suggestions() -> None:
    update = LabelUpdate.from_suggestions([suggestion("Docs", 0.7, "type")])

    assert update.add_labels[0].model_dump() == {
        "label": "Docs",
        "source": "ai",
        "confidence": 0.7,
        "category": "type",
    }


def test_bulk_result_accounting() -> None:
    result = BulkOperationResult(success=2, skipped=1)
    result.record_failure("b9", "boom")

    assert result.failed == 1
    assert result.failed_ids == ["b9"]
    assert result.processed == 4


def test_settings_auto_apply(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTO_APPLY_ENABLED", "true")
    monkeypatch.setenv("AUTO_APPLY_MAX_LABELS", "3")

    auto_apply = Settings().auto_apply_settings()

    assert auto_apply.enabled
    assert auto_apply.max_labels == 3
    assert auto_apply.confidence_threshold == 0.7


def test_suggestions_default_to_all_labels() -> None:
    annotated = AnnotatedBookmark(
        bookmark=Bookmark(id="b1", url="https://a.com", title="A"),
        auto_applied_labels=[suggestion("Python", 0.9)],
        remaining_labels=[suggestion("Web", 0.5)],
    )

    assert [s.label for s in annotated.suggestions] == ["Python", "Web"]
