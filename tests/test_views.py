"""Tests for server-rendered documentation pages."""

from typing import Any

import httpx
import pytest
from aiohttp import web

from docspage.config import Config
from docspage.core.content import HeadingNode, PageContent
from docspage.core.docs_config import parse_docs_config
from docspage.core.documentation import PageProps
from docspage.core.properties import SlugProperties
from docspage.core.types import DomainName
from docspage.server import create_app
from docspage.views import RenderContext, render_toc


@pytest.fixture
def app(test_config: Config, transport: httpx.MockTransport) -> web.Application:
    return create_app(test_config, transport=transport)


def make_props(domain: str | None = None) -> PageProps:
    content = PageContent(
        config=parse_docs_config('{"name": "Widgets"}'),
        frontmatter={},
        base_branch="main",
        markdown="",
        headings=[HeadingNode(id="install", title="Install", rank=2)],
    )
    return PageProps(
        domain=DomainName(domain) if domain else None,
        properties=SlugProperties(owner="acme", repository="widgets").with_base_ref("main"),
        source="<p>Hi</p>",
        content=content,
    )


class TestRenderContext:
    """Tests for RenderContext."""

    def test__from_props__carries_request_values(self) -> None:
        props = make_props()

        context = RenderContext.from_props(props)

        assert context.properties is props.properties
        assert context.content is props.content
        assert context.config["name"] == "Widgets"

    def test__href__repository_base_without_domain(self) -> None:
        context = RenderContext.from_props(make_props())

        assert context.href("/install") == "/acme/widgets/install"
        assert context.href("/") == "/acme/widgets"

    def test__href__root_relative_on_custom_domain(self) -> None:
        context = RenderContext.from_props(make_props("docs.example.com"), on_custom_domain=True)

        assert context.href("/install") == "/install"
        assert context.href("/") == "/"

    def test__href__repository_base_for_domain_repository_on_main_host(self) -> None:
        context = RenderContext.from_props(make_props("docs.example.com"))

        assert context.href("/install") == "/acme/widgets/install"
        assert context.href("/") == "/acme/widgets"

    def test__render_toc__lists_headings(self) -> None:
        context = RenderContext.from_props(make_props())

        assert render_toc(context) == '<ul><li class="rank-2"><a href="#install">Install</a></li></ul>'


class TestDocumentationView:
    """Tests for GET /{slug}."""

    @pytest.mark.asyncio
    async def test__page__renders_html(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file(
            "acme/widgets",
            "docs/index.mdx",
            "---\ntitle: Home\n---\n## Install\n\nRun it.",
        )

        client = await aiohttp_client(app)
        response = await client.get("/acme/widgets")

        assert response.status == 200
        assert "text/html" in response.headers["Content-Type"]
        text = await response.text()
        assert "<title>Home | acme/widgets</title>" in text
        assert '<h2 id="install">Install</h2>' in text
        assert '<a href="#install">Install</a>' in text
        assert '<script id="__PROPS__" type="application/json">' in text

    @pytest.mark.asyncio
    async def test__missing_page__renders_error(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")

        client = await aiohttp_client(app)
        response = await client.get("/acme/widgets/nope")

        assert response.status == 404
        text = await response.text()
        assert "docs/nope" in text

    @pytest.mark.asyncio
    async def test__redirect__responds_302(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file("acme/widgets", "docs/old.mdx", "---\nredirect: /new\n---\n")

        client = await aiohttp_client(app)
        response = await client.get("/acme/widgets/old", allow_redirects=False)

        assert response.status == 302
        assert response.headers["Location"] == "/acme/widgets/new"

    @pytest.mark.asyncio
    async def test__custom_domain__serves_repository(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file("acme/widgets", "docs/guide.mdx", "Custom domain guide")

        client = await aiohttp_client(app)
        response = await client.get("/guide", headers={"Host": "docs.example.com"})

        assert response.status == 200
        assert "Custom domain guide" in await response.text()

    @pytest.mark.asyncio
    async def test__root_without_domain__404(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/")

        assert response.status == 404

    @pytest.mark.asyncio
    async def test__domain_repository_on_main_host__links_repository_base(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file("acme/widgets", "docs/guide.mdx", "Guide")

        client = await aiohttp_client(app)
        response = await client.get("/acme/widgets/guide")

        assert response.status == 200
        assert '<header><a href="/acme/widgets">' in await response.text()

    @pytest.mark.asyncio
    async def test__custom_domain__links_root(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")
        fake_github.add_file("acme/widgets", "docs/guide.mdx", "Guide")

        client = await aiohttp_client(app)
        response = await client.get("/guide", headers={"Host": "docs.example.com"})

        assert response.status == 200
        assert '<header><a href="/">' in await response.text()

    @pytest.mark.asyncio
    async def test__dot_segments__404_without_fetching(
        self, aiohttp_client: Any, app: web.Application, fake_github
    ) -> None:
        fake_github.add_repository("acme/widgets")

        client = await aiohttp_client(app)
        response = await client.get("/acme/widgets/..%2F..%2Fvictim%2Fprivate")

        assert response.status == 404
        assert fake_github.requests == []
