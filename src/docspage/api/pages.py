"""Pages API endpoint.

Resolves a documentation slug and returns its page props as JSON.
"""

import json
from functools import partial

from aiohttp import web

from docspage.app_keys import domains_key, github_key
from docspage.core.documentation import REVALIDATE, get_static_props
from docspage.core.errors import Redirect
from docspage.core.properties import InvalidSlugError

# Frontmatter may hold YAML dates
dumps = partial(json.dumps, default=str)

CACHE_CONTROL = f"public, s-maxage={REVALIDATE}, stale-while-revalidate"


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/pages/{slug:.*}", get_page),
    ]


def parse_slug(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


async def get_page(request: web.Request) -> web.Response:
    slug = parse_slug(request.match_info["slug"])

    try:
        result = await get_static_props(request.app[github_key], request.app[domains_key], slug)
    except InvalidSlugError as e:
        return web.json_response({"error": str(e), "slug": slug}, status=404)

    if isinstance(result, Redirect):
        return web.json_response({"redirect": result.to_dict()}, dumps=dumps)

    status = result.error.status_code if result.error else 200
    return web.json_response(
        result.to_dict(),
        status=status,
        dumps=dumps,
        headers={"Cache-Control": CACHE_CONTROL},
    )
