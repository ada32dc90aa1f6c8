"""
Event — a community event document.

`ai` holds the sentiment block written once by the events/created handler:
  {sentimentScore, sentimentMagnitude, sentimentLabel, analyzedAt}
"""
import datetime as dt
from typing import Any

from sqlalchemy import String, Text, DateTime, Date, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, new_document_id, utcnow

APPROVED = "Approved"


class Event(Base):
    __tablename__ = "events"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    title: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    approval_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    ai: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
