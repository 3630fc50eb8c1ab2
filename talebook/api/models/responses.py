"""Pydantic models for API responses."""

from datetime import datetime

from pydantic import Field

from .enums import AgeRange, Topic
from .requests import CamelModel


class TaleResponse(CamelModel):
    """A stored tale with its like-tracking."""

    id: str
    title: str
    content: str
    age_range: AgeRange
    topic: Topic
    author: str
    is_public: bool = False
    likes: int = Field(default=0, ge=0)
    liked_by: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class TaleDetailResponse(CamelModel):
    """Single tale envelope."""

    success: bool = True
    tale: TaleResponse


class TaleListResponse(CamelModel):
    """List of tales, newest first."""

    success: bool = True
    count: int
    tales: list[TaleResponse]


class DeleteTaleResponse(CamelModel):
    """Response after deleting a tale."""

    success: bool = True
    message: str = "Tale deleted"


class LikeToggleResponse(CamelModel):
    """Like state after toggling."""

    success: bool = True
    liked: bool
    likes: int


class LikeStatusResponse(CamelModel):
    """Whether the requester currently likes a tale."""

    success: bool = True
    liked: bool


class GeneratedTaleResponse(CamelModel):
    """An unsaved tale draft produced by the narrative generator."""

    title: str
    content: str
    age_range: AgeRange
    topic: Topic


class GenerateTaleResponse(CamelModel):
    """Response for a generation request. The draft is not persisted."""

    tale: GeneratedTaleResponse


class ErrorResponse(CamelModel):
    """Error body returned for every failed request."""

    success: bool = False
    message: str
