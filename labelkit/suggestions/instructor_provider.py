from typing import List, Literal, Optional

from instructor import Instructor
from pydantic import BaseModel, Field

from labelkit.domain.content import CategoryAnalysis, SuggestionRequest
from labelkit.domain.labels import LabelSuggestion
from labelkit.errors import SuggestionProviderError

PROMPT_TEMPLATE = """Suggest labels for this bookmark.

URL: {url}
Title: {title}
Existing labels: {existing_labels}
Content preview: {content}
"""


class SuggestedLabel(BaseModel):
    """A label suggested for the bookmarked page"""

    label: str = Field(..., description="Short, reusable label text, e.g. 'Python'")
    category: Literal["topic", "type", "priority"] = Field(
        ..., description="What the label describes"
    )
    confidence: float = Field(..., description="Confidence between 0 and 1")
    reasoning: Optional[str] = Field(None, description="One sentence explaining the label")


class LabelingResponse(BaseModel):
    """Structured labeling response for one bookmark"""

    labels: List[SuggestedLabel] = Field(..., description="Suggested labels, best first")
    suggested_description: Optional[str] = Field(
        None, description="A 1-2 sentence description of what the page is about"
    )
    language: Optional[str] = Field(None, description="ISO 639-1 code of the page language")

    def to_analysis(self) -> CategoryAnalysis:
        return CategoryAnalysis(
            labels=[
                LabelSuggestion(
                    label=label.label,
                    category=label.category,
                    confidence=min(max(label.confidence, 0.0), 1.0),
                    reasoning=label.reasoning,
                )
                for label in self.labels
            ],
            suggested_description=self.suggested_description,
            language=self.language or "en",
        )


def get_prompt(request: SuggestionRequest, max_content_chars: int) -> str:
    return PROMPT_TEMPLATE.format(
        url=request.url,
        title=request.title,
        existing_labels=", ".join(request.existing_labels) or "none",
        content=request.content[:max_content_chars] or "No content available",
    )


class InstructorSuggestionProvider:
    def __init__(
        self,
        instructor: Instructor,
        *,
        model: str,
        system_message: str,
        max_content_chars: int = 1000,
    ) -> None:
        self.instructor = instructor
        self.model = model
        self.system_message = system_message
        self.max_content_chars = max_content_chars

    def suggest(self, request: SuggestionRequest) -> CategoryAnalysis:
        try:
            response = self.instructor.chat.completions.create(
                model=self.model,
                max_tokens=1024,
                messages=[
                    {"role": "system", "content": self.system_message},
                    {"role": "user", "content": get_prompt(request, self.max_content_chars)},
                ],  # type: ignore
                response_model=LabelingResponse,
            )
        except Exception as e:
            raise SuggestionProviderError(f"Suggestion request failed for {request.url}") from e
        return response.to_analysis()
