"""Tag-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    """Schema for creating a tag explicitly."""

    name: str = Field(..., min_length=2, max_length=50)
    description: str = Field(..., min_length=5, max_length=200)


class TagResponse(BaseModel):
    """Tag information returned by the API."""

    id: int
    name: str
    description: str

    model_config = ConfigDict(from_attributes=True)
