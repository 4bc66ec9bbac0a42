"""aiohttp server for docspage.

Application factory and route registration.
"""

import logging
from typing import Any

from aiohttp import web

from docspage.api.pages import create_pages_routes
from docspage.api.paths import create_paths_routes
from docspage.app_keys import config_key, domains_key, github_key, http_client_key
from docspage.config import Config
from docspage.core.github import GitHubClient, create_http_client
from docspage.core.lists import get_domains_list
from docspage.lifecycle import RouteLifecycle, create_lifecycle_middleware
from docspage.views import create_view_routes

logger = logging.getLogger(__name__)


def create_app(
    config: Config,
    *,
    lifecycle: RouteLifecycle | None = None,
    **client_kwargs: Any,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        lifecycle: Route lifecycle callbacks (default: log requests)
        **client_kwargs: Extra httpx.AsyncClient arguments (e.g., transport)

    Returns:
        Configured aiohttp application
    """
    app = web.Application(
        middlewares=[create_lifecycle_middleware(lifecycle or RouteLifecycle())],
    )

    http_client = create_http_client(config.github, **client_kwargs)

    app[config_key] = config
    app[http_client_key] = http_client
    app[github_key] = GitHubClient(
        http_client,
        api_url=config.github.api_url,
        raw_url=config.github.raw_url,
    )
    app[domains_key] = get_domains_list(config.site.domains_file)

    # API routes (must be registered first to take precedence over page routes)
    app.router.add_routes(create_pages_routes())
    app.router.add_routes(create_paths_routes())
    app.router.add_routes(create_view_routes())

    app.on_cleanup.append(_close_http_client)

    return app


async def _close_http_client(app: web.Application) -> None:
    """Close the shared GitHub HTTP client on application cleanup."""
    await app[http_client_key].aclose()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Serving {len(app[domains_key])} custom domains ({config.site.environment})")
    web.run_app(app, host=config.server.host, port=config.server.port)
