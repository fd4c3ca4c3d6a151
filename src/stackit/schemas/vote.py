"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote on a question or answer.

    ``value`` is range-checked by the vote ledger rather than here so that an
    out-of-range value is reported as an invalid argument.
    """

    value: int = Field(..., strict=True, description="1 for upvote, -1 for downvote")


class VoteResponse(BaseModel):
    """Target counter and the caller's resulting vote state."""

    votes: int
    user_vote: int = Field(..., description="1, -1 or 0 when no vote is recorded")
