"""Search response schema."""

from pydantic import BaseModel, ConfigDict

from .answer import AnswerResponse
from .question import QuestionSummary
from .tag import TagResponse
from .user import UserResponse


class SearchResponse(BaseModel):
    """One page of matches per searched collection."""

    query: str
    search_type: str
    total: int
    questions: list[QuestionSummary] | None = None
    answers: list[AnswerResponse] | None = None
    users: list[UserResponse] | None = None
    tags: list[TagResponse] | None = None

    model_config = ConfigDict(from_attributes=True)
