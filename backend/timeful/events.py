"""Event lookups shared by the events API and link-preview metadata."""

from typing import Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from timeful.models import Event


async def get_event_by_either_id(db: AsyncSession, event_id: str) -> Optional[Event]:
    """Return the event whose primary id or short id equals ``event_id``."""
    result = await db.execute(
        select(Event)
        .where(or_(Event.id == event_id, Event.short_id == event_id))
        .limit(1)
    )
    return result.scalar_one_or_none()
