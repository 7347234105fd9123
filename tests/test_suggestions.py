import json
from types import SimpleNamespace

import pytest

from labelkit.domain.content import CategoryAnalysis, SuggestionRequest
from labelkit.errors import SuggestionProviderError
from labelkit.suggestions.base import safe_suggest
from labelkit.suggestions.filtering import clean_suggestions
from labelkit.suggestions.instructor_provider import (
    InstructorSuggestionProvider,
    LabelingResponse,
    SuggestedLabel,
    get_prompt,
)
from labelkit.suggestions.static import StaticSuggestionProvider
from tests.fakes import FakeSuggestionProvider
from tests.helpers import suggestion


class FakeInstructor:
    """Mimics the client.chat.completions.create interface of an instructor client."""

    def __init__(self, response: LabelingResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def request_() -> SuggestionRequest:
    return SuggestionRequest(
        url="https://realpython.com/async-io-python/",
        title="Async IO in Python",
        content="x" * 50,
        existing_labels=["Python"],
    )


def test_clean_suggestions_drops_existing_and_weak_labels() -> None:
    suggestions = [
        suggestion("PYTHON", 0.9),
        suggestion("Async", 0.8),
        suggestion("Web", 0.3),
        suggestion("Tutorial", 0.7, "type"),
    ]

    cleaned = clean_suggestions(suggestions, existing_labels=["python"], min_confidence=0.5)

    assert [s.label for s in cleaned] == ["Async", "Tutorial"]


def test_clean_suggestions_caps_in_provider_order() -> None:
    suggestions = [suggestion("A", 0.1), suggestion("B", 0.9), suggestion("C", 0.5)]

    cleaned = clean_suggestions(suggestions, existing_labels=[], max_labels=2)

    assert [s.label for s in cleaned] == ["A", "B"]


def test_safe_suggest_swallows_provider_errors(request_: SuggestionRequest) -> None:
    provider = FakeSuggestionProvider({})

    assert safe_suggest(provider, request_) == CategoryAnalysis()
    assert provider.requests == [request_]


def test_static_provider_load(tmp_path, request_: SuggestionRequest) -> None:
    filepath = tmp_path / "suggestions.json"
    filepath.write_text(
        json.dumps(
            {
                request_.url: {
                    "labels": [{"label": "Async", "category": "topic", "confidence": 0.8}],
                    "language": "en",
                }
            }
        ),
        encoding="utf-8",
    )

    provider = StaticSuggestionProvider.load(filepath)
    analysis = provider.suggest(request_)

    assert analysis.labels == [suggestion("Async", 0.8)]
    assert analysis.language == "en"
    with pytest.raises(SuggestionProviderError):
        provider.suggest(SuggestionRequest(url="https://unknown.org", title="Unknown"))


def test_get_prompt_truncates_content(request_: SuggestionRequest) -> None:
    prompt = get_prompt(request_, max_content_chars=10)

    assert request_.url in prompt
    assert "Existing labels: Python" in prompt
    assert "x" * 10 in prompt
    assert "x" * 11 not in prompt


def test_get_prompt_without_content() -> None:
    prompt = get_prompt(SuggestionRequest(url="https://a.com", title="A"), max_content_chars=10)

    assert "Existing labels: none" in prompt
    assert "No content available" in prompt


def test_labeling_response_to_analysis() -> None:
    """Test provider confidences are clamped and the language defaults to English."""
    response = LabelingResponse(
        labels=[
            SuggestedLabel(label="Python", category="topic", confidence=1.3),
            SuggestedLabel(label="Old", category="priority", confidence=-0.2, reasoning="Stale"),
        ]
    )

    analysis = response.to_analysis()

    assert [s.confidence for s in analysis.labels] == [1.0, 0.0]
    assert analysis.labels[1].reasoning == "Stale"
    assert analysis.language == "en"


def test_instructor_provider(request_: SuggestionRequest) -> None:
    response = LabelingResponse(
        labels=[SuggestedLabel(label="Async", category="topic", confidence=0.8)],
        suggested_description="A walkthrough of asyncio",
        language="en",
    )
    client = FakeInstructor(response=response)
    provider = InstructorSuggestionProvider(
        client, model="test-model", system_message="Label things", max_content_chars=20
    )

    analysis = provider.suggest(request_)

    assert analysis.labels == [suggestion("Async", 0.8)]
    assert analysis.suggested_description == "A walkthrough of asyncio"
    call = client.calls[0]
    assert call["model"] == "test-model"
    assert call["response_model"] is LabelingResponse
    assert call["messages"][0] == {"role": "system", "content": "Label things"}


def test_instructor_provider_wraps_errors(request_: SuggestionRequest) -> None:
    client = FakeInstructor(error=RuntimeError("rate limited"))
    provider = InstructorSuggestionProvider(client, model="m", system_message="s")

    with pytest.raises(SuggestionProviderError):
        provider.suggest(request_)
