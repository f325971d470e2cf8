"""Publishing of the built frontend as individually served static routes.

The frontend build directory is walked once at startup. Every file except
the SPA entry point gets its own GET route, whose public path is the file's
path with the build-root prefix removed::

    ../frontend/dist/assets/app.js  ->  /assets/app.js
    ../frontend/dist/favicon.ico    ->  /favicon.ico

The entry point itself is loaded as a Jinja template for the SPA fallback
(see ``timeful.spa``).
"""

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Tuple

from fastapi import FastAPI
from fastapi.responses import FileResponse
from jinja2 import TemplateError
from starlette.templating import Jinja2Templates

from timeful.errors import TemplateLoadError
from timeful.paths import split_path

if TYPE_CHECKING:
    from timeful.context import ServerContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteTableEntry:
    public_path: str
    source_file: str


RouteTable = Tuple[RouteTableEntry, ...]


def _walk_files(top: str) -> Iterator[str]:
    """Yield every regular file below ``top``.

    Unreadable directories and entries are logged and skipped so one bad
    entry never stops the rest of the build from being published.
    """
    pending = [top]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            logger.warning(f"Cannot read directory {current}: {e}")
            continue

        for entry in sorted(entries, key=lambda e: e.name):
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(entry.path)
                elif entry.is_file():
                    yield entry.path
            except OSError as e:
                logger.warning(f"Cannot stat {entry.path}: {e}")


def collect_assets(build_root: str, entry_point: str = "index.html") -> RouteTable:
    """Compute the route table for every asset under ``build_root``.

    The number of leading segments stripped from each file path is the
    segment count of ``build_root`` as configured, so files at the top level
    and nested files map the same way.
    """
    root_parts = split_path(build_root)
    if root_parts == [os.curdir]:
        # Walked paths like "./x" normalize to "x": nothing to strip
        root_parts = []
    depth = len(root_parts)

    entries = []
    for path in _walk_files(build_root):
        if os.path.basename(path) == entry_point:
            continue

        parts = split_path(path)
        if parts[:depth] != root_parts or len(parts) <= depth:
            logger.warning(f"{path} is not below {build_root}; skipping")
            continue

        public_path = "/" + "/".join(parts[depth:])
        if "{" in public_path or "}" in public_path:
            # Starlette would compile these as path parameters
            logger.warning(f"Cannot route {path} literally; skipping")
            continue
        entries.append(RouteTableEntry(public_path, os.path.abspath(path)))

    entries.sort(key=lambda e: e.public_path)
    return tuple(entries)


def load_entry_point(build_root: str, entry_point: str = "index.html") -> Jinja2Templates:
    """Load the SPA entry point as a template, failing loudly if it is unusable."""
    templates = Jinja2Templates(directory=os.path.abspath(build_root))
    try:
        templates.get_template(entry_point)
    except (TemplateError, OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(os.path.join(build_root, entry_point), e) from e
    return templates


def _file_endpoint(source_file: str):
    async def serve_asset():
        return FileResponse(source_file)

    return serve_asset


def register_assets(app: FastAPI, table: RouteTable) -> None:
    for entry in table:
        app.add_api_route(
            entry.public_path,
            _file_endpoint(entry.source_file),
            methods=["GET", "HEAD"],
            include_in_schema=False,
        )


def publish_assets(app: FastAPI, ctx: "ServerContext") -> RouteTable:
    """Register the frontend build on ``app`` and load its entry point.

    A missing build directory is normal in development, where the frontend
    is served by its own dev server; nothing is published in that case.
    """
    build_root = ctx.settings.FRONTEND_DIST
    entry_point = ctx.settings.ENTRY_POINT

    if not os.path.isdir(build_root):
        logger.info("Frontend dist not found; skipping static frontend serving")
        return ()

    table = collect_assets(build_root, entry_point)
    register_assets(app, table)
    ctx.templates = load_entry_point(build_root, entry_point)
    ctx.route_table = table

    logger.info(f"Published {len(table)} static assets from {build_root}")
    return table
