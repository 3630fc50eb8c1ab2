"""Pydantic models for API requests and responses."""

from .enums import AgeRange, Topic
from .requests import CreateTaleRequest, GenerateTaleRequest, UpdateTaleRequest
from .responses import (
    DeleteTaleResponse,
    ErrorResponse,
    GeneratedTaleResponse,
    GenerateTaleResponse,
    LikeStatusResponse,
    LikeToggleResponse,
    TaleDetailResponse,
    TaleListResponse,
    TaleResponse,
)

__all__ = [
    "AgeRange",
    "Topic",
    "CreateTaleRequest",
    "GenerateTaleRequest",
    "UpdateTaleRequest",
    "DeleteTaleResponse",
    "ErrorResponse",
    "GeneratedTaleResponse",
    "GenerateTaleResponse",
    "LikeStatusResponse",
    "LikeToggleResponse",
    "TaleDetailResponse",
    "TaleListResponse",
    "TaleResponse",
]
