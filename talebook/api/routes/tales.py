"""Tale endpoints: generation, CRUD, and likes."""

from fastapi import APIRouter, status

from ..dependencies import CurrentUser, OptionalUser, Service
from ..models.requests import CreateTaleRequest, GenerateTaleRequest, UpdateTaleRequest
from ..models.responses import (
    DeleteTaleResponse,
    ErrorResponse,
    GenerateTaleResponse,
    LikeStatusResponse,
    LikeToggleResponse,
    TaleDetailResponse,
    TaleListResponse,
)

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Tale not found"}}
FORBIDDEN = {403: {"model": ErrorResponse, "description": "Not allowed for this tale"}}


@router.post(
    "/generate",
    response_model=GenerateTaleResponse,
    summary="Generate a tale",
    description="Ask the AI author for a tale draft. The draft is returned but not saved.",
    responses={500: {"model": ErrorResponse, "description": "Generation failed"}},
)
async def generate_tale(request: GenerateTaleRequest, user: CurrentUser, service: Service):
    """Generate a tale draft from an age range, topic and optional details."""
    tale = await service.generate(request)
    return GenerateTaleResponse(tale=tale)


@router.post(
    "",
    response_model=TaleDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a tale",
    description="Save a new tale owned by the caller. Tales are private unless isPublic is set.",
)
async def create_tale(request: CreateTaleRequest, user: CurrentUser, service: Service):
    """Save a new tale."""
    tale = await service.create(user, request)
    return TaleDetailResponse(tale=tale)


@router.get(
    "/user",
    response_model=TaleListResponse,
    summary="List my tales",
    description="All tales owned by the caller, newest first.",
)
async def list_user_tales(user: CurrentUser, service: Service):
    """List the caller's tales."""
    tales = await service.list_for_user(user)
    return TaleListResponse(count=len(tales), tales=tales)


@router.get(
    "/public",
    response_model=TaleListResponse,
    summary="List public tales",
    description="All public tales, newest first. No authentication required.",
)
async def list_public_tales(service: Service):
    """List public tales."""
    tales = await service.list_public()
    return TaleListResponse(count=len(tales), tales=tales)


@router.get(
    "/{tale_id}",
    response_model=TaleDetailResponse,
    summary="Get a tale",
    description="Public tales are visible to everyone; private tales only to their author.",
    responses={**FORBIDDEN, **NOT_FOUND},
)
async def get_tale(tale_id: str, user: OptionalUser, service: Service):
    """Get a tale by ID."""
    tale = await service.get_by_id(tale_id, user)
    return TaleDetailResponse(tale=tale)


@router.patch(
    "/{tale_id}",
    response_model=TaleDetailResponse,
    summary="Update a tale",
    description="Change any of title, content, ageRange, topic, isPublic. Author only.",
    responses={**FORBIDDEN, **NOT_FOUND},
)
async def update_tale(
    tale_id: str, request: UpdateTaleRequest, user: CurrentUser, service: Service
):
    """Update a tale."""
    tale = await service.update(tale_id, user, request)
    return TaleDetailResponse(tale=tale)


@router.delete(
    "/{tale_id}",
    response_model=DeleteTaleResponse,
    summary="Delete a tale",
    description="Permanently delete a tale. Author only.",
    responses={**FORBIDDEN, **NOT_FOUND},
)
async def delete_tale(tale_id: str, user: CurrentUser, service: Service):
    """Delete a tale."""
    await service.delete(tale_id, user)
    return DeleteTaleResponse()


@router.post(
    "/{tale_id}/like",
    response_model=LikeToggleResponse,
    summary="Like or unlike a tale",
    description="Toggles the caller's like on a public tale.",
    responses={**FORBIDDEN, **NOT_FOUND},
)
async def toggle_like(tale_id: str, user: CurrentUser, service: Service):
    """Toggle the caller's like."""
    liked, likes = await service.toggle_like(tale_id, user)
    return LikeToggleResponse(liked=liked, likes=likes)


@router.get(
    "/{tale_id}/like",
    response_model=LikeStatusResponse,
    summary="Check like status",
    description="Whether the caller currently likes the tale.",
    responses=NOT_FOUND,
)
async def check_like_status(tale_id: str, user: CurrentUser, service: Service):
    """Check whether the caller likes a tale."""
    liked = await service.check_like_status(tale_id, user)
    return LikeStatusResponse(liked=liked)
