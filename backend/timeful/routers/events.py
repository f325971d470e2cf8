"""Events API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from timeful.database import get_db
from timeful.events import get_event_by_either_id
from timeful.schemas import EventResponse

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get an event by its id or its short share id."""
    event = await get_event_by_either_id(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return EventResponse.model_validate(event)
