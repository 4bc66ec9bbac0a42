"""Tests for pages and paths API endpoints."""

from typing import Any

import httpx
import pytest
from aiohttp import web

from docspage.config import Config
from docspage.server import create_app


@pytest.fixture
def app(test_config: Config, transport: httpx.MockTransport) -> web.Application:
    return create_app(test_config, transport=transport)


class TestGetPage:
    """Tests for GET /api/pages/{slug}."""

    @pytest.mark.asyncio
    async def test__existing_page__returns_props(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file(
            "acme/widgets",
            "docs/guide.mdx",
            "---\ntitle: Guide\n---\n## Install\n\nThis is a guide.",
        )

        client = await aiohttp_client(app)
        response = await client.get("/api/pages/acme/widgets/guide")

        assert response.status == 200
        assert response.headers["Cache-Control"] == "public, s-maxage=30, stale-while-revalidate"
        data = await response.json()
        assert data["revalidate"] == 30
        props = data["props"]
        assert props["error"] is None
        assert "This is a guide." in props["source"]
        assert props["domain"] == "docs.example.com"
        assert props["properties"]["ref"] == "main"
        assert props["content"]["frontmatter"] == {"title": "Guide"}
        assert props["content"]["headings"] == [{"id": "install", "title": "Install", "rank": 2}]
        assert props["headings"] == []

    @pytest.mark.asyncio
    async def test__missing_repository__returns_404_props(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/pages/acme/missing")

        assert response.status == 404
        data = await response.json()
        assert data["revalidate"] == 30
        assert data["props"]["error"]["kind"] == "repositoryNotFound"
        assert data["props"]["source"] is None
        assert data["props"]["content"] is None

    @pytest.mark.asyncio
    async def test__missing_page__returns_404_props(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")

        client = await aiohttp_client(app)
        response = await client.get("/api/pages/acme/widgets/nope")

        assert response.status == 404
        data = await response.json()
        assert data["props"]["error"]["kind"] == "pageNotFound"

    @pytest.mark.asyncio
    async def test__redirect__returns_destination(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file("acme/widgets", "docs/old.mdx", "---\nredirect: /new\n---\n")

        client = await aiohttp_client(app)
        response = await client.get("/api/pages/acme/widgets/old")

        assert response.status == 200
        data = await response.json()
        assert data == {"redirect": {"destination": "/acme/widgets/new", "permanent": False}}

    @pytest.mark.asyncio
    async def test__frontmatter_date__serialized(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file("acme/widgets", "docs/index.mdx", "---\ndate: 2024-01-02\n---\nHi")

        client = await aiohttp_client(app)
        response = await client.get("/api/pages/acme/widgets")

        data = await response.json()
        assert data["props"]["content"]["frontmatter"] == {"date": "2024-01-02"}

    @pytest.mark.asyncio
    async def test__short_slug__returns_404(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/pages/acme")

        assert response.status == 404

    @pytest.mark.asyncio
    async def test__encoded_dot_segment__returns_404_without_fetching(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file("acme/widgets", "secret.mdx", "Top secret")

        client = await aiohttp_client(app)
        response = await client.get("/api/pages/acme/widgets/..%2Fsecret")

        assert response.status == 404
        data = await response.json()
        assert "Invalid slug segment" in data["error"]
        assert fake_github.requests == []


class TestGetPaths:
    """Tests for GET /api/paths."""

    @pytest.mark.asyncio
    async def test__development__empty_with_fallback(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/api/paths")

        assert response.status == 200
        assert await response.json() == {"paths": [], "fallback": True}

    @pytest.mark.asyncio
    async def test__production__lists_repositories(
        self, aiohttp_client: Any, test_config: Config, transport, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        app = create_app(test_config.with_overrides(environment="production"), transport=transport)

        client = await aiohttp_client(app)
        response = await client.get("/api/paths")

        data = await response.json()
        assert data["paths"] == [{"params": {"slug": ["acme", "widgets"]}}]
