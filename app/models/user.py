"""
User — only the derived `ai` aggregate lives here.

  ai.journalSentimentAvg30d  float      (aggregation engine)
  ai.lastJournalSentiment    float      (aggregation engine)
  ai.recommendedEventIds     list[str]  (recommendation engine)
  ai.updatedAt               ISO str    (both)
"""
from datetime import datetime
from typing import Any

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    ai: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
