"""
Locale Redirect Middleware

Sends visitors of unprefixed URLs to a locale-prefixed path, chosen from:
  1. the locale cookie written on an earlier visit (when still configured)
  2. the Accept-Language header (priority order, best match per tag)
  3. the default locale (fallback)

Locale roots without a trailing slash get a permanent redirect. Static
assets and internal paths always pass through. Requests that pass get
request.state.locale ("" when the URL has no locale prefix) and
request.state.locale_path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

from i18n_router.config import settings
from i18n_router.constants import COOKIE_PATH
from i18n_router.i18n.redirect import (
    PermanentRedirect,
    PreferenceSignals,
    TemporaryRedirect,
    decide_redirect,
    is_internal_path,
)
from i18n_router.i18n.routing import RouteCodec

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from i18n_router.i18n.path_map import LocalePathMap

logger = logging.getLogger(__name__)

REDIRECTED_METHODS = frozenset({"GET", "HEAD"})


def request_target(request: Request) -> str:
    """Return the path and query as the client sent them, still percent-encoded.

    ``request.url.path`` is already decoded, so an encoded ``%23`` or
    ``%3F`` in a page name would read as a fragment or query delimiter.
    """
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1").split("?", 1)[0] if raw_path else quote(request.url.path)
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


class LocaleRedirectMiddleware(BaseHTTPMiddleware):
    """Redirect to locale-prefixed URLs and expose the request locale.

    The path map is built once at startup and only read here, so one
    instance serves concurrent requests without locking.
    """

    def __init__(
        self,
        app: ASGIApp,
        path_map: LocalePathMap,
        cookie_name: str | None = None,
        cookie_max_age: int | None = None,
        is_internal: Callable[[str], bool] = is_internal_path,
    ):
        super().__init__(app)
        self.codec = RouteCodec(path_map)
        self.cookie_name = cookie_name or settings.cookie_name
        self.cookie_max_age = cookie_max_age if cookie_max_age is not None else settings.cookie_max_age
        self.is_internal = is_internal

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method not in REDIRECTED_METHODS:
            return await call_next(request)

        raw_url = request_target(request)

        route = self.codec.decode(raw_url)
        signals = PreferenceSignals.from_headers(
            request.cookies.get(self.cookie_name),
            request.headers.get("Accept-Language"),
        )
        action = decide_redirect(self.codec, raw_url, signals, route=route, is_internal=self.is_internal)

        if isinstance(action, PermanentRedirect):
            return RedirectResponse(action.location, status_code=action.status_code)

        if isinstance(action, TemporaryRedirect):
            response = RedirectResponse(action.location, status_code=action.status_code)
            response.set_cookie(
                self.cookie_name,
                action.locale,
                max_age=self.cookie_max_age,
                path=COOKIE_PATH,
                samesite="lax",
            )
            return response

        request.state.locale = action.locale
        request.state.locale_path = unquote(route.path) if action.locale else ""
        return await call_next(request)
