"""Server-rendered documentation pages.

The page shell places the serialized source into the layout and embeds
the page props for client hydration.
"""

import json
from dataclasses import dataclass
from html import escape

from aiohttp import web

from docspage.api.pages import dumps, parse_slug
from docspage.app_keys import domains_key, github_key
from docspage.core.content import PageContent
from docspage.core.docs_config import DocsConfigDict
from docspage.core.documentation import PageProps, get_static_props
from docspage.core.domain import get_domain_repository
from docspage.core.errors import Redirect, RenderError
from docspage.core.html import get_head_tags
from docspage.core.properties import InvalidSlugError, SlugProperties
from docspage.core.types import DomainName

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
{head}
<style>:root {{ --theme-color: {theme}; }}</style>
</head>
<body>
<header><a href="{home}">{name}</a></header>
<nav class="toc">{toc}</nav>
<main>{body}</main>
<script id="__PROPS__" type="application/json">{props}</script>
</body>
</html>
"""


@dataclass(frozen=True)
class RenderContext:
    """Request-scoped values shared by everything rendering one page."""

    domain: DomainName | None
    config: DocsConfigDict
    properties: SlugProperties
    content: PageContent
    # Whether the request arrived through the custom domain
    on_custom_domain: bool = False

    @classmethod
    def from_props(cls, props: PageProps, *, on_custom_domain: bool = False) -> "RenderContext":
        if props.content is None:
            raise ValueError("Only props of a rendered page have a render context")
        return cls(
            domain=props.domain,
            config=props.content.config,
            properties=props.properties,
            content=props.content,
            on_custom_domain=on_custom_domain,
        )

    def href(self, path: str) -> str:
        """Link to a page of the same documentation.

        Custom domains serve the repository at their root, so links are
        root-relative only for requests made through the custom domain.
        """
        path = path if path.startswith("/") else f"/{path}"
        if self.on_custom_domain:
            return path
        return f"{self.properties.base}{path}".rstrip("/") or "/"


def render_toc(context: RenderContext) -> str:
    items = [
        f'<li class="rank-{heading.rank}"><a href="#{escape(heading.id)}">{escape(heading.title)}</a></li>'
        for heading in context.content.headings
    ]
    return f"<ul>{''.join(items)}</ul>" if items else ""


def render_page(context: RenderContext, source: str, props: PageProps) -> str:
    """Render the page shell around the serialized source."""
    return PAGE_TEMPLATE.format(
        head="\n".join(get_head_tags(context.properties, context.content)),
        theme=escape(str(context.config.get("theme", ""))),
        home=escape(context.href("/")),
        name=escape(str(context.config.get("name") or context.properties.full_name)),
        toc=render_toc(context),
        body=source,
        props=dumps(props.to_dict()).replace("</", "<\\/"),
    )


def render_error(error: RenderError, *, on_custom_domain: bool = False) -> str:
    title = escape(error.kind.value)
    return PAGE_TEMPLATE.format(
        head=f"<title>{error.status_code} | {title}</title>",
        theme="inherit",
        home="/" if on_custom_domain else escape(error.properties.base),
        name=escape(error.properties.full_name),
        toc="",
        body=f"<h1>{error.status_code}</h1><p>{escape(error.message)}</p>",
        props=json.dumps({"props": {"error": error.to_dict()}}).replace("</", "<\\/"),
    )


def create_view_routes() -> list[web.RouteDef]:
    return [web.get("/{slug:.*}", documentation)]


async def documentation(request: web.Request) -> web.Response:
    """Render a documentation page.

    Requests on a custom domain are resolved against its repository.
    """
    slug = parse_slug(request.match_info["slug"])
    repository = get_domain_repository(request.app[domains_key], request.host)
    if repository is not None:
        slug = [*repository, *slug]

    try:
        result = await get_static_props(request.app[github_key], request.app[domains_key], slug)
    except InvalidSlugError:
        raise web.HTTPNotFound() from None

    if isinstance(result, Redirect):
        raise web.HTTPFound(result.destination)

    if result.error is not None:
        return web.Response(
            text=render_error(result.error, on_custom_domain=repository is not None),
            status=result.error.status_code,
            content_type="text/html",
        )

    context = RenderContext.from_props(result, on_custom_domain=repository is not None)
    return web.Response(
        text=render_page(context, result.source or "", result),
        content_type="text/html",
        headers={"Cache-Control": f"public, s-maxage={result.revalidate}, stale-while-revalidate"},
    )
