"""FastAPI dependency injection for services, repositories and the requester."""

from typing import Annotated, AsyncGenerator, Optional

import asyncpg
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth.tokens import username_from_token
from .database.db import get_pool
from .database.repository import TaleRepository
from .services.tale_service import TaleService

# Security scheme for bearer token authentication.
# Missing credentials are handled below so they always yield 401.
security = HTTPBearer(auto_error=False)


# Database connection dependency
async def get_connection() -> AsyncGenerator[asyncpg.Connection, None]:
    """Acquire a pooled connection for the duration of a request."""
    async with get_pool().acquire() as conn:
        yield conn


# Repository - requires connection
def get_repository(
    conn: Annotated[asyncpg.Connection, Depends(get_connection)]
) -> TaleRepository:
    """Get a TaleRepository instance with injected connection."""
    return TaleRepository(conn)


# Service - depends on repository
def get_tale_service(
    repo: Annotated[TaleRepository, Depends(get_repository)]
) -> TaleService:
    """Get a TaleService instance with injected repository."""
    return TaleService(repo)


# Type alias for cleaner route signatures
Service = Annotated[TaleService, Depends(get_tale_service)]


# Authentication dependency
async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]
) -> str:
    """Verify the bearer token and return the user identity.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    user = username_from_token(credentials.credentials) if credentials else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)]
) -> Optional[str]:
    """Return the user identity if a valid bearer token was sent, else None."""
    if credentials is None:
        return None
    return username_from_token(credentials.credentials)


# Type aliases for authenticated / anonymous-allowed routes
CurrentUser = Annotated[str, Depends(get_current_user)]
OptionalUser = Annotated[Optional[str], Depends(get_optional_user)]
