"""Tests for the SPA fallback and its link-preview tags."""

import pytest


@pytest.mark.asyncio
@pytest.mark.parametrize("path", [
    "/",
    "/settings/whatever",
    "/e/doesnotexist",
    "/e/abc/edit",
    "/index.html",
    "/assets/missing.js",
])
async def test_fallback_always_returns_the_shell(client, events, path):
    r = await client.get(path)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert '<div id="app"></div>' in r.text
    assert "<title>Timeful</title>" in r.text
    assert "og:image" not in r.text


@pytest.mark.asyncio
async def test_event_link_gets_title_tags(client, events):
    r = await client.get("/e/abc123")
    assert r.status_code == 200
    assert "<title>Team Sync - Timeful (formerly Schej)</title>" in r.text
    assert 'content="Team Sync - Timeful (formerly Schej)"' in r.text
    assert "og:image" not in r.text


@pytest.mark.asyncio
async def test_when2meet_event_link_gets_preview_image(client, events):
    r = await client.get("/e/6512bd43d9caa6e02c990b0a")
    assert r.status_code == 200
    assert "<title>Imported Poll - Timeful (formerly Schej)</title>" in r.text
    assert '<meta property="og:image" content="/img/when2meetOgImage2.png" />' in r.text


@pytest.mark.asyncio
async def test_event_name_is_escaped(app, client):
    from timeful.models import Event

    async with app.state.context.session_factory() as session:
        session.add(Event(id="xss", name="<script>alert(1)</script>"))
        await session.commit()

    r = await client.get("/e/xss")
    assert "<script>alert(1)</script>" not in r.text
    assert "&lt;script&gt;" in r.text


@pytest.mark.asyncio
async def test_api_routes_take_precedence(client, events):
    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy"}

    r = await client.get("/api/events/teamsync")
    assert r.status_code == 200
    assert r.json()["id"] == "abc123"


@pytest.mark.asyncio
async def test_swagger_is_not_shadowed(client):
    r = await client.get("/swagger/index.html")
    assert r.status_code == 200
    assert "swagger-ui" in r.text

    r = await client.get("/swagger/doc.json")
    assert r.status_code == 200
    assert r.json()["info"]["title"] == "Timeful API"

    r = await client.get("/swagger", follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"] == "/swagger/index.html"


@pytest.mark.asyncio
async def test_head_request(client):
    r = await client.head("/settings")
    assert r.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def test_fallback_answers_every_method(client, method):
    r = await client.request(method, "/settings/whatever")
    assert r.status_code == 200
    assert '<div id="app"></div>' in r.text
