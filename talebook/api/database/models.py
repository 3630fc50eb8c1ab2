"""SQLAlchemy ORM models for PostgreSQL."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, Integer, String, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from ...core.types import TITLE_MAX_LENGTH
from ..models.enums import AgeRange, Topic
from .db import Base


def _in_values(column: str, enum) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"


class Tale(Base):
    """Tale model - a saved children's story with like tracking."""

    __tablename__ = "tales"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    age_range: Mapped[str] = mapped_column(String(10), nullable=False)
    topic: Mapped[str] = mapped_column(String(20), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    likes: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    # Identities of users who currently like the tale (no duplicates)
    liked_by: Mapped[list[str]] = mapped_column(
        ARRAY(Text), nullable=False, server_default=text("'{}'::text[]")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_tales_likes_non_negative"),
        CheckConstraint("likes = cardinality(liked_by)", name="ck_tales_likes_match_liked_by"),
        CheckConstraint(_in_values("age_range", AgeRange), name="ck_tales_age_range"),
        CheckConstraint(_in_values("topic", Topic), name="ck_tales_topic"),
        Index("idx_tales_author_created_at", "author", "created_at"),
        Index("idx_tales_public_created_at", "is_public", "created_at"),
    )
