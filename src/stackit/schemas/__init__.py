"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .answer import AnswerCreate, AnswerResponse, AnswerUpdate
from .common import MessageResponse
from .question import (
    AcceptAnswerRequest,
    QuestionCreate,
    QuestionDetail,
    QuestionSummary,
    QuestionUpdate,
)
from .search import SearchResponse
from .tag import TagCreate, TagResponse
from .user import LoginRequest, LoginResponse, RegisterRequest, UserAdminUpdate, UserResponse
from .vote import VoteCreate, VoteResponse

__all__ = [
    "AnswerCreate", "AnswerResponse", "AnswerUpdate",
    "MessageResponse",
    "AcceptAnswerRequest", "QuestionCreate", "QuestionDetail", "QuestionSummary", "QuestionUpdate",
    "SearchResponse",
    "TagCreate", "TagResponse",
    "LoginRequest", "LoginResponse", "RegisterRequest", "UserAdminUpdate", "UserResponse",
    "VoteCreate", "VoteResponse",
]
