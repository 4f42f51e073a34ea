"""Starlette wiring: the descriptor middleware and the Swagger UI mount."""
from __future__ import annotations

import inspect
import logging
import re
from typing import Any, Awaitable, Callable, Mapping

from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from .config import SwaggerConfig, coerce_config
from .generator import descriptor_url, generate
from .registry import DescriptorRegistry
from .utils.errors import ErrorCode, envelope_error

log = logging.getLogger(__name__)

Dispatch = Callable[[Request, RequestResponseEndpoint], Awaitable[Response]]


def _prefix_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile("^" + re.escape(prefix) + "(/.*)?$")


def make_descriptor_dispatch(registry: DescriptorRegistry, config: SwaggerConfig) -> Dispatch:
    """Return a ``BaseHTTPMiddleware`` dispatch serving the descriptor.

    Requests under the descriptor URL get the merged descriptor; everything
    else is handed to the next handler.
    """

    pattern = _prefix_pattern(descriptor_url(config))

    async def dispatch(request: Request, call_next: RequestResponseEndpoint) -> Response:
        if pattern.match(request.url.path) is None:
            return await call_next(request)

        if registry.paths is None:
            log.warning("descriptor.missing", extra={"path": request.url.path})
            return JSONResponse(envelope_error(ErrorCode.NOT_FOUND), status_code=404)

        response = JSONResponse(registry.build())
        if callable(config.middleware):
            outcome = config.middleware(request, response)
            if inspect.isawaitable(outcome):
                await outcome
        log.debug("descriptor.serve", extra={"path": request.url.path})
        return response

    return dispatch


def mount_swagger_ui(app: Starlette, config: SwaggerConfig) -> None:
    """Serve ``swagger_ui`` under ``swagger_url``, redirecting the bare prefix to ``prefix/``."""

    prefix = (config.swagger_url or "").rstrip("/")
    if not prefix:
        log.warning("ui.disabled", extra={"reason": "swagger_url not configured"})
        return

    static = StaticFiles(directory=str(config.swagger_ui), html=True)

    async def redirect(request: Request) -> RedirectResponse:
        location = request.url.path + "/"
        if request.url.query:
            location = f"{location}?{request.url.query}"
        return RedirectResponse(location, status_code=302)

    app.router.routes.extend(
        [
            Route(prefix, redirect, methods=["GET"], name="swagger_ui_redirect"),
            Mount(prefix, app=static, name="swagger_ui"),
        ]
    )
    log.info("ui.mounted", extra={"prefix": prefix, "directory": str(config.swagger_ui)})


def init(app: Starlette, options: SwaggerConfig | Mapping[str, Any]) -> Dispatch:
    """Generate the descriptor, mount the UI on *app*, and return the middleware dispatch.

    Usage::

        app.add_middleware(BaseHTTPMiddleware, dispatch=init(app, options))
    """

    config = coerce_config(options)
    registry = generate(config)
    mount_swagger_ui(app, config)
    return make_descriptor_dispatch(registry, config)


def build_docs_app(options: SwaggerConfig | Mapping[str, Any], *, debug: bool = False) -> Starlette:
    """Factory for a standalone documentation server."""

    app = Starlette(debug=debug)
    app.add_middleware(BaseHTTPMiddleware, dispatch=init(app, options))
    return app


__all__ = [
    "Dispatch",
    "build_docs_app",
    "init",
    "make_descriptor_dispatch",
    "mount_swagger_ui",
]
