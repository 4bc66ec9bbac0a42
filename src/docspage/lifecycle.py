"""Route lifecycle callbacks.

Callbacks are passed to create_app and installed once as a middleware of
that application. Every routed request calls on_start, then exactly one
of on_complete or on_error.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from aiohttp import web

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _log_start(request: web.Request) -> None:
    logger.debug(f"{request.method} {request.path} started")


def _log_complete(request: web.Request, response: web.StreamResponse) -> None:
    logger.debug(f"{request.method} {request.path} completed with {response.status}")


def _log_error(request: web.Request, error: BaseException) -> None:
    logger.error(f"{request.method} {request.path} failed: {error!r}")


@dataclass(frozen=True)
class RouteLifecycle:
    """Callbacks invoked around every routed request."""

    on_start: Callable[[web.Request], None] = _log_start
    on_complete: Callable[[web.Request, web.StreamResponse], None] = _log_complete
    on_error: Callable[[web.Request, BaseException], None] = _log_error


def create_lifecycle_middleware(lifecycle: RouteLifecycle) -> Callable[..., Awaitable[web.StreamResponse]]:
    """Wrap lifecycle callbacks in an aiohttp middleware.

    HTTP exceptions (redirects, 404s) count as completed requests.
    """

    @web.middleware
    async def lifecycle_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        lifecycle.on_start(request)
        try:
            response = await handler(request)
        except web.HTTPException as e:
            lifecycle.on_complete(request, e)
            raise
        except Exception as e:
            lifecycle.on_error(request, e)
            raise
        lifecycle.on_complete(request, response)
        return response

    return lifecycle_middleware
