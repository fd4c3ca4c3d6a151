"""Question-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stackit.core.settings import settings

from .answer import AnswerResponse
from .tag import TagResponse
from .user import AuthorSummary


class QuestionCreate(BaseModel):
    """Schema for asking a new question."""

    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=10)
    tags: list[str] = Field(..., min_length=1)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Reject blank tag names and overlong tag lists."""
        cleaned = [name.strip() for name in v]
        if any(not name for name in cleaned):
            raise ValueError("Tag names must not be blank")
        if len(cleaned) > settings.max_tags_per_question:
            raise ValueError(f"At most {settings.max_tags_per_question} tags are allowed")
        return cleaned


class QuestionUpdate(QuestionCreate):
    """Schema for editing a question; same constraints as creation."""


class QuestionSummary(BaseModel):
    """Question information shown in listings."""

    id: int
    title: str
    description: str
    votes: int
    views: int
    is_closed: bool
    accepted_answer_id: int | None
    author: AuthorSummary
    tags: list[TagResponse]
    answer_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuestionDetail(QuestionSummary):
    """Question with its answers, best first."""

    answers: list[AnswerResponse] = Field(default_factory=list)


class AcceptAnswerRequest(BaseModel):
    """Body of the accept-answer action."""

    answer_id: int
