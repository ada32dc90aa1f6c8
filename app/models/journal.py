"""
Journal — a single user journal post.

Only title + body count as content; tags can change without triggering
re-analysis.
"""
from datetime import datetime
from typing import Any

from sqlalchemy import String, Text, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, new_document_id, utcnow


class Journal(Base):
    __tablename__ = "journals"
    __table_args__ = (
        Index("ix_journals_user_created", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    user_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    ai: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
