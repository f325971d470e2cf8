"""Shared fixtures: a fake frontend build, a temp database and an HTTP client."""

import pytest
from httpx import AsyncClient, ASGITransport

from timeful.config import Settings
from timeful.database import init_db
from timeful.main import create_app
from timeful.models import Event


INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>{{ title | default("Timeful") }}</title>
  <meta property="og:title" content="{{ ogTitle | default('Timeful') }}" />
  {% if ogImage %}<meta property="og:image" content="{{ ogImage }}" />{% endif %}
</head>
<body><div id="app"></div></body>
</html>
"""

BUILD_FILES = {
    "index.html": INDEX_HTML,
    "favicon.ico": "icon",
    "robots.txt": "User-agent: *\n",
    "assets/app.js": "console.log('timeful')\n",
    "assets/style.css": "body { margin: 0; }\n",
    "img/when2meetOgImage2.png": "png",
    "nested/deep/index.html": "<p>not an asset</p>",
    "nested/deep/data.json": '{"ok": true}',
}


# ── Settings / filesystem ────────────────────────────────────────────────────

@pytest.fixture
def server_dir(tmp_path, monkeypatch):
    """Working directory laid out like production: ./server next to ./frontend."""
    path = tmp_path / "server"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def settings(tmp_path, server_dir):
    return Settings(
        _env_file=None,
        FRONTEND_DIST="../frontend/dist",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        LOG_FILE=str(tmp_path / "logs.log"),
        CELERY_BROKER_URL="memory://",
        CELERY_RESULT_BACKEND="cache+memory://",
    )


@pytest.fixture
def build_dir(tmp_path):
    dist = tmp_path / "frontend" / "dist"
    for rel, content in BUILD_FILES.items():
        target = dist / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return dist


# ── Applications ─────────────────────────────────────────────────────────────

async def _start(settings):
    app = create_app(settings)
    await init_db(app.state.context.engine)
    return app


@pytest.fixture
async def app(settings, build_dir):
    app = await _start(settings)
    yield app
    await app.state.context.engine.dispose()


@pytest.fixture
async def api_only_app(settings):
    app = await _start(settings)
    yield app
    await app.state.context.engine.dispose()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_only_client(api_only_app):
    transport = ASGITransport(app=api_only_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ── Data ─────────────────────────────────────────────────────────────────────

@pytest.fixture
async def events(app):
    session_factory = app.state.context.session_factory
    async with session_factory() as session:
        session.add_all([
            Event(id="abc123", short_id="teamsync", name="Team Sync"),
            Event(
                id="6512bd43d9caa6e02c990b0a",
                short_id="w2mimport",
                name="Imported Poll",
                when2meet_href="https://www.when2meet.com/?21880542-fOlLd",
            ),
            Event(id="emptylink", name="No Link", when2meet_href=""),
        ])
        await session.commit()
