"""Pydantic request/response schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class EventResponse(BaseModel):
    id: str
    short_id: Optional[str] = None
    name: str
    when2meet_href: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HealthResponse(BaseModel):
    status: str
