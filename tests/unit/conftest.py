"""Pytest fixtures for API tests."""

import os
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Unit tests never touch a real database or LLM
os.environ["DATABASE_URL"] = ""
os.environ.setdefault("APP_PIN", "1234")

from talebook.api.auth.tokens import create_access_token  # noqa: E402
from talebook.api.database.repository import UPDATABLE_COLUMNS, TaleRepository  # noqa: E402
from talebook.api.dependencies import get_repository, get_tale_service  # noqa: E402
from talebook.api.main import app  # noqa: E402
from talebook.api.models.responses import TaleResponse  # noqa: E402
from talebook.api.services.tale_service import TaleService  # noqa: E402

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


class InMemoryTaleRepository:
    """Dict-backed stand-in for TaleRepository with the same contract."""

    def __init__(self):
        self.rows: dict[str, dict] = {}
        self._ticks = count()

    def _now(self) -> datetime:
        # Strictly increasing so newest-first ordering is deterministic
        return BASE_TIME + timedelta(seconds=next(self._ticks))

    def _to_response(self, row: dict) -> TaleResponse:
        return TaleResponse(**{**row, "liked_by": list(row["liked_by"])})

    async def create_tale(
        self, tale_id, title, content, age_range, topic, author, is_public=False
    ) -> TaleResponse:
        now = self._now()
        self.rows[tale_id] = {
            "id": tale_id,
            "title": title,
            "content": content,
            "age_range": age_range,
            "topic": topic,
            "author": author,
            "is_public": is_public,
            "likes": 0,
            "liked_by": [],
            "created_at": now,
            "updated_at": now,
        }
        return self._to_response(self.rows[tale_id])

    async def get_tale(self, tale_id) -> Optional[TaleResponse]:
        row = self.rows.get(tale_id)
        return self._to_response(row) if row else None

    async def list_public_tales(self) -> list[TaleResponse]:
        rows = [r for r in self.rows.values() if r["is_public"]]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        return [self._to_response(r) for r in rows]

    async def list_tales_by_author(self, author) -> list[TaleResponse]:
        rows = [r for r in self.rows.values() if r["author"] == author]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        return [self._to_response(r) for r in rows]

    async def update_tale(self, tale_id, author, fields) -> Optional[TaleResponse]:
        unknown = set(fields) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")
        row = self.rows.get(tale_id)
        if row is None or row["author"] != author:
            return None
        row.update(fields)
        row["updated_at"] = self._now()
        return self._to_response(row)

    async def delete_tale(self, tale_id, author) -> bool:
        row = self.rows.get(tale_id)
        if row is None or row["author"] != author:
            return False
        del self.rows[tale_id]
        return True

    async def toggle_like(self, tale_id, user):
        row = self.rows.get(tale_id)
        if row is None or not row["is_public"]:
            return None
        if user in row["liked_by"]:
            row["liked_by"].remove(user)
        else:
            row["liked_by"].append(user)
        row["likes"] = len(row["liked_by"])
        row["updated_at"] = self._now()
        return user in row["liked_by"], row["likes"]

    async def is_liked_by(self, tale_id, user) -> Optional[bool]:
        row = self.rows.get(tale_id)
        if row is None:
            return None
        return user in row["liked_by"]


def make_tale(**overrides) -> TaleResponse:
    """Build a TaleResponse with sensible defaults."""
    data = {
        "id": "tale-123",
        "title": "The Brave Little Fox",
        "content": "Once upon a time, a little fox lived at the edge of the woods.",
        "age_range": "5-7",
        "topic": "animals",
        "author": "alice",
        "is_public": False,
        "likes": 0,
        "liked_by": [],
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
    }
    data.update(overrides)
    return TaleResponse(**data)


def auth_header(user: str) -> dict[str, str]:
    """Authorization header carrying a token for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def alice_headers():
    return auth_header("alice")


@pytest.fixture
def bob_headers():
    return auth_header("bob")


@pytest.fixture
def memory_repository():
    """Create an in-memory repository."""
    return InMemoryTaleRepository()


@pytest.fixture
def tale_service(memory_repository):
    """A real TaleService over the in-memory repository."""
    return TaleService(memory_repository)


@pytest.fixture
def mock_repository():
    """Create a mock repository for unit tests."""
    repo = AsyncMock(spec=TaleRepository)
    return repo


@pytest.fixture
def mock_service(mock_repository):
    """Create a mock service for unit tests."""
    service = AsyncMock(spec=TaleService)
    return service


@pytest.fixture
def client_with_mocks(mock_repository, mock_service):
    """TestClient with mocked dependencies."""
    app.dependency_overrides[get_repository] = lambda: mock_repository
    app.dependency_overrides[get_tale_service] = lambda: mock_service

    with TestClient(app) as client:
        yield client, mock_repository, mock_service

    app.dependency_overrides.clear()


@pytest.fixture
def client(tale_service):
    """TestClient backed by a real service over the in-memory repository."""
    app.dependency_overrides[get_tale_service] = lambda: tale_service

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def tale_factory():
    """Factory for TaleResponse objects."""
    return make_tale
