"""
Locale Routes

locales_router  (prefix: /__i18n)
    GET    /config       → normalized client config snapshot
    GET    /alternates   → URL of a page in every configured locale
    GET    /routes       → language switcher entries for a page
    GET    /switch       → URL of a page in one other locale

The /__ prefix is an internal path, so the redirect middleware never
rewrites these requests.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request

from i18n_router.config import NormalizedConfig
from i18n_router.i18n.routing import RouteCodec
from i18n_router.schemas.locale import AlternatesResponse, ClientConfigSnapshot, LocaleRoute, SwitchResponse

locales_router = APIRouter(tags=["Locales"])
logger = logging.getLogger(__name__)


# ── Dependencies ───────────────────────────────────────────────────────────────


def get_locale_config(request: Request) -> NormalizedConfig:
    return request.app.state.locale_config


def get_codec(request: Request) -> RouteCodec:
    return request.app.state.route_codec


# ── Endpoints ──────────────────────────────────────────────────────────────────


@locales_router.get("/config", response_model=ClientConfigSnapshot, response_model_by_alias=True)
async def read_client_config(request: Request) -> ClientConfigSnapshot:
    return request.app.state.client_config


@locales_router.get("/alternates", response_model=AlternatesResponse)
async def read_alternates(
    url: str = Query("/", description="Page URL, with or without locale prefix"),
    codec: RouteCodec = Depends(get_codec),
) -> AlternatesResponse:
    return AlternatesResponse(url=url, locale=codec.decode(url).locale, alternates=codec.alternates(url))


@locales_router.get("/routes", response_model=list[LocaleRoute])
async def read_locale_routes(
    url: str = Query("/", description="Page URL, with or without locale prefix"),
    codec: RouteCodec = Depends(get_codec),
    config: NormalizedConfig = Depends(get_locale_config),
) -> list[LocaleRoute]:
    return codec.locale_routes(url, names=config.locale_names)


@locales_router.get("/switch", response_model=SwitchResponse)
async def switch_locale(
    locale: str = Query(..., description="Target locale id"),
    url: str = Query("/", description="Current page URL"),
    codec: RouteCodec = Depends(get_codec),
) -> SwitchResponse:
    # UnknownLocaleError propagates to the 404 error handler
    target = codec.switch_locale(url, locale)
    logger.debug("Switching %s to %s: %s", url, locale, target)
    return SwitchResponse(url=target, locale=codec.path_map.canonical_locale(locale) or locale)
