"""FastAPI application for the Talebook tale service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth.routes import router as auth_router
from .config import CORS_ORIGINS, DATABASE_URL, LOG_FORMAT, LOG_LEVEL
from .logging import configure_logging
from .routes import tales
from .services.exceptions import TaleError

# Configure in every server process, including uvicorn reload workers
configure_logging(json_format=LOG_FORMAT != "text", level=LOG_LEVEL)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    # Startup: Initialize database (only if DATABASE_URL is configured)
    if DATABASE_URL:
        from .database.db import init_db, open_pool

        await init_db()
        await open_pool()
        logger.info("Database initialized")
    else:
        logger.warning("DATABASE_URL not set - database not initialized")

    yield

    # Shutdown: Close the connection pool
    if DATABASE_URL:
        from .database.db import close_pool

        await close_pool()


app = FastAPI(
    title="Talebook API",
    description="""
Save, share and generate children's tales.

## Features
- **Generation**: Ask the AI author for a tale by age range and topic
- **Library**: Save, edit and delete your own tales
- **Sharing**: Make tales public, browse public tales, and like them

## Workflow
1. POST `/auth/login` to get a bearer token
2. POST `/tales/generate` for a draft, then POST `/tales` to save it
3. PATCH `/tales/{id}` with `isPublic: true` to share it
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaleError)
async def tale_error_handler(request: Request, exc: TaleError) -> JSONResponse:
    """Translate service errors into JSON error responses."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Give framework HTTP errors the same body shape as service errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 with a readable message."""
    messages = []
    for err in exc.errors():
        # Drop the leading "body"/"query" segment from the location
        location = ".".join(str(part) for part in err["loc"][1:])
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "; ".join(messages)},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors and return a generic 500."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error"},
    )


# Include routers
app.include_router(auth_router)  # No prefix - already has /auth
app.include_router(tales.router, prefix="/tales", tags=["Tales"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
