"""Server context shared by the components wired up in ``timeful.main``."""

from dataclasses import dataclass
from typing import Optional, Tuple

from celery import Celery
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from starlette.templating import Jinja2Templates

from timeful.assets import RouteTableEntry
from timeful.config import Settings


@dataclass
class ServerContext:
    """Everything a component needs, built once per application.

    ``templates`` and ``route_table`` stay empty until the static asset
    publisher has run against an existing build directory.
    """

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    task_queue: Celery
    templates: Optional[Jinja2Templates] = None
    route_table: Tuple[RouteTableEntry, ...] = ()

    @property
    def serves_frontend(self) -> bool:
        return self.templates is not None
