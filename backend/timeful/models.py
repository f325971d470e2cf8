"""SQLAlchemy ORM models."""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime

from timeful.database import Base


def _new_event_id() -> str:
    # 24 hex chars, same shape as the ids the frontend already links to
    return uuid.uuid4().hex[:24]


class Event(Base):
    __tablename__ = "events"

    id = Column(String(24), primary_key=True, default=_new_event_id)
    short_id = Column(String(32), unique=True, nullable=True, index=True)
    name = Column(String(200), nullable=False)

    # Set when the event was imported from a When2meet link
    when2meet_href = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
