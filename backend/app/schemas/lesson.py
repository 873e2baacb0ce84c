"""
StudySphere Backend: Lesson Schemas
=====================================

What:  Pydantic models for the lesson catalog and search endpoints.
Why:   Request validation, response serialization, and OpenAPI docs.

Schemas are kept apart from the ORM model so the API contract can differ
from the table (e.g. LessonUpdate where every field is optional).
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


LessonSortField = Literal["id", "subject", "location", "price", "spaces"]
SortOrder = Literal["asc", "desc"]

# Range of the 32-bit INTEGER columns (lessons.id, lessons.spaces)
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class LessonBase(BaseModel):
    """Fields shared by lesson creation and responses."""

    subject: str = Field(min_length=1, max_length=120, description="Lesson subject")
    location: str = Field(min_length=1, max_length=120, description="Where the lesson takes place")
    price: float = Field(ge=0, description="Price per space")
    spaces: int = Field(description="Remaining available spaces")
    image: str = Field(default="", max_length=255, description="Image file name under /images")


class LessonCreate(LessonBase):
    """
    Body of POST /api/lessons.

    The client supplies the integer id; it is the public identifier used in
    every lesson URL, so it is not generated server-side.
    """

    id: int = Field(ge=0, le=INT32_MAX, description="Public lesson identifier")
    spaces: int = Field(ge=0, le=INT32_MAX, description="Initial number of spaces")


class LessonUpdate(BaseModel):
    """
    Body of PUT /api/lessons/{id}: a partial update.

    Only the fields present in the request are written. `spaces` has no
    lower bound here because an admin may correct an oversold lesson.
    """

    subject: Optional[str] = Field(default=None, min_length=1, max_length=120)
    location: Optional[str] = Field(default=None, min_length=1, max_length=120)
    price: Optional[float] = Field(default=None, ge=0)
    spaces: Optional[int] = Field(default=None, ge=INT32_MIN, le=INT32_MAX)
    image: Optional[str] = Field(default=None, max_length=255)


class LessonResponse(LessonBase):
    """A lesson as returned by every catalog endpoint."""

    id: int = Field(description="Public lesson identifier")

    model_config = {"from_attributes": True}
