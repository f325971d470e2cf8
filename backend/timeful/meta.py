"""Link-preview metadata for event deep links.

Crawlers that unfurl ``/e/<eventId>`` links never run the SPA's JavaScript,
so the title and Open Graph tags have to be rendered server-side from the
event as it is at request time.
"""

import logging
import re
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.routing import compile_path

from timeful.config import Settings
from timeful.events import get_event_by_either_id

logger = logging.getLogger(__name__)

MetaParams = Dict[str, str]

EVENT_ROUTE = "/e/{event_id}"
_EVENT_ROUTE_RE, _, _ = compile_path(EVENT_ROUTE)
_EVENT_ID_RE = re.compile(r"\w+", re.ASCII)


def match_event_id(path: str) -> Optional[str]:
    """Return the event id if ``path`` is an event deep link."""
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    match = _EVENT_ROUTE_RE.match(path)
    if match is None:
        return None
    event_id = match.group("event_id")
    if not _EVENT_ID_RE.fullmatch(event_id):
        return None
    return event_id


class MetaResolver:
    """Resolves the template parameters for a request path."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], settings: Settings):
        self.session_factory = session_factory
        self.product_name = settings.PRODUCT_NAME
        self.when2meet_og_image = settings.WHEN2MEET_OG_IMAGE

    async def resolve(self, path: str) -> MetaParams:
        params: MetaParams = {}

        event_id = match_event_id(path)
        if event_id is None:
            return params

        async with self.session_factory() as session:
            event = await get_event_by_either_id(session, event_id)

        if event is None:
            logger.debug(f"No event {event_id} for link preview")
            return params

        title = f"{event.name} - {self.product_name}"
        params["title"] = title
        params["ogTitle"] = title
        if event.when2meet_href:
            params["ogImage"] = self.when2meet_og_image
        return params
