"""Static paths API endpoint."""

from aiohttp import web

from docspage.app_keys import config_key, github_key
from docspage.core.documentation import get_static_paths


def create_paths_routes() -> list[web.RouteDef]:
    return [web.get("/api/paths", get_paths)]


async def get_paths(request: web.Request) -> web.Response:
    paths = await get_static_paths(request.app[github_key], request.app[config_key].site)
    return web.json_response(paths)
