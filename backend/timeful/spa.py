"""SPA catch-all: renders the frontend entry point for every unmatched path."""

from fastapi import FastAPI, Request

from timeful.context import ServerContext
from timeful.meta import MetaResolver

FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def install_fallback(app: FastAPI, ctx: ServerContext, resolver: MetaResolver) -> None:
    """Append the catch-all route. Must run after every other route is added.

    Unknown paths, including deep links to events that don't exist, still get
    the shell with a 200; the client-side router shows its own not-found page.
    """
    templates = ctx.templates
    entry_point = ctx.settings.ENTRY_POINT

    async def spa_fallback(request: Request, full_path: str):
        params = await resolver.resolve(request.url.path)
        return templates.TemplateResponse(request, entry_point, params, status_code=200)

    app.add_api_route(
        "/{full_path:path}",
        spa_fallback,
        methods=FALLBACK_METHODS,
        include_in_schema=False,
    )
