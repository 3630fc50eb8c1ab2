"""Repository for tale CRUD operations using raw asyncpg SQL."""

from typing import Any, Optional

import asyncpg

from ..models.enums import AgeRange, Topic
from ..models.responses import TaleResponse

# Columns a tale's author may change after creation
UPDATABLE_COLUMNS = ("title", "content", "age_range", "topic", "is_public")


class TaleRepository:
    """Repository for tale persistence operations."""

    def __init__(self, conn: asyncpg.Connection):
        self.conn = conn

    async def create_tale(
        self,
        tale_id: str,
        title: str,
        content: str,
        age_range: str,
        topic: str,
        author: str,
        is_public: bool = False,
    ) -> TaleResponse:
        """Insert a new tale and return the stored record."""
        row = await self.conn.fetchrow(
            """
            INSERT INTO tales (id, title, content, age_range, topic, author, is_public)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            RETURNING *
            """,
            tale_id,
            title,
            content,
            age_range,
            topic,
            author,
            is_public,
        )
        return self._record_to_response(row)

    async def get_tale(self, tale_id: str) -> Optional[TaleResponse]:
        """Get a tale by ID."""
        row = await self.conn.fetchrow(
            "SELECT * FROM tales WHERE id = $1",
            tale_id,
        )
        if not row:
            return None
        return self._record_to_response(row)

    async def list_public_tales(self) -> list[TaleResponse]:
        """List all public tales, newest first."""
        rows = await self.conn.fetch(
            """
            SELECT * FROM tales
            WHERE is_public
            ORDER BY created_at DESC, id
            """
        )
        return [self._record_to_response(r) for r in rows]

    async def list_tales_by_author(self, author: str) -> list[TaleResponse]:
        """List every tale owned by an author, newest first."""
        rows = await self.conn.fetch(
            """
            SELECT * FROM tales
            WHERE author = $1
            ORDER BY created_at DESC, id
            """,
            author,
        )
        return [self._record_to_response(r) for r in rows]

    async def update_tale(
        self,
        tale_id: str,
        author: str,
        fields: dict[str, Any],
    ) -> Optional[TaleResponse]:
        """
        Apply a partial update to a tale owned by ``author``.

        Returns the updated record, or None when no tale with that id
        belongs to the author.
        """
        unknown = set(fields) - set(UPDATABLE_COLUMNS)
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")

        # Column names come from the whitelist above, values are bound
        assignments = []
        values = [tale_id, author]
        for column in UPDATABLE_COLUMNS:
            if column in fields:
                values.append(fields[column])
                assignments.append(f"{column} = ${len(values)}")
        assignments.append("updated_at = now()")

        row = await self.conn.fetchrow(
            f"""
            UPDATE tales
            SET {", ".join(assignments)}
            WHERE id = $1 AND author = $2
            RETURNING *
            """,
            *values,
        )
        if not row:
            return None
        return self._record_to_response(row)

    async def delete_tale(self, tale_id: str, author: str) -> bool:
        """Delete a tale owned by ``author``."""
        result = await self.conn.execute(
            "DELETE FROM tales WHERE id = $1 AND author = $2",
            tale_id,
            author,
        )
        # Result is like "DELETE 1" or "DELETE 0"
        return result.split()[-1] != "0"

    async def toggle_like(self, tale_id: str, user: str) -> Optional[tuple[bool, int]]:
        """
        Add or remove ``user`` from a public tale's likers in one statement.

        The new array and counter are both computed from the row being
        updated, so concurrent toggles on the same tale serialise on the
        row lock and none is lost.

        Returns (liked, likes) after the toggle, or None when the tale does
        not exist or is private.
        """
        row = await self.conn.fetchrow(
            """
            UPDATE tales
            SET liked_by = CASE
                    WHEN $2 = ANY(liked_by) THEN array_remove(liked_by, $2)
                    ELSE array_append(liked_by, $2)
                END,
                likes = CASE
                    WHEN $2 = ANY(liked_by) THEN GREATEST(cardinality(liked_by) - 1, 0)
                    ELSE cardinality(liked_by) + 1
                END,
                updated_at = now()
            WHERE id = $1 AND is_public
            RETURNING $2 = ANY(liked_by) AS liked, likes
            """,
            tale_id,
            user,
        )
        if not row:
            return None
        return row["liked"], row["likes"]

    async def is_liked_by(self, tale_id: str, user: str) -> Optional[bool]:
        """Whether ``user`` likes the tale, or None if the tale does not exist."""
        row = await self.conn.fetchrow(
            "SELECT $2 = ANY(liked_by) AS liked FROM tales WHERE id = $1",
            tale_id,
            user,
        )
        if not row:
            return None
        return row["liked"]

    def _record_to_response(self, tale: asyncpg.Record) -> TaleResponse:
        """Convert asyncpg Record to response model."""
        return TaleResponse(
            id=tale["id"],
            title=tale["title"],
            content=tale["content"],
            age_range=AgeRange(tale["age_range"]),
            topic=Topic(tale["topic"]),
            author=tale["author"],
            is_public=tale["is_public"],
            likes=tale["likes"],
            liked_by=list(tale["liked_by"] or []),
            created_at=tale["created_at"],
            updated_at=tale["updated_at"],
        )
