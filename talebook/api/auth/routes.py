"""Authentication routes for PIN-gated login."""

import os

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from .tokens import create_access_token

router = APIRouter(prefix="/auth", tags=["Authentication"])

# PIN for authentication - set via environment variable
APP_PIN = os.getenv("APP_PIN", "1234")  # Default for development only


class LoginRequest(BaseModel):
    """Login request with the user's name and the shared PIN."""

    username: str = Field(..., min_length=1, max_length=255)
    pin: str


class LoginResponse(BaseModel):
    """Login response with access token."""

    access_token: str
    token_type: str = "bearer"


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest) -> LoginResponse:
    """Authenticate with the PIN and receive an access token.

    The token's subject is the username, which becomes the author
    identity of every tale created with it. The token is valid for 30
    days and should be sent in the Authorization header.
    """
    if request.pin != APP_PIN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid PIN",
            headers={"WWW-Authenticate": "Bearer"},
        )

    username = request.username.strip()
    if not username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username cannot be empty",
        )

    return LoginResponse(access_token=create_access_token(username))
