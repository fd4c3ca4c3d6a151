"""Answer-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import AuthorSummary


class AnswerCreate(BaseModel):
    """Schema for posting an answer to a question."""

    question_id: int
    content: str = Field(..., min_length=5)


class AnswerUpdate(BaseModel):
    """Schema for editing an answer's content."""

    content: str = Field(..., min_length=5)


class AnswerResponse(BaseModel):
    """Answer information returned by the API."""

    id: int
    content: str
    question_id: int
    votes: int
    is_accepted: bool
    author: AuthorSummary
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
