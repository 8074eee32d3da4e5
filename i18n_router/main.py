import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from i18n_router.config import I18nRouterConfig, Settings, normalize_config
from i18n_router.config import settings as default_settings
from i18n_router.exception_handlers import register_exception_handlers
from i18n_router.i18n.routing import RouteCodec
from i18n_router.middleware.language import LocaleRedirectMiddleware
from i18n_router.middleware.logging import StructuredLoggingMiddleware
from i18n_router.routes.locales import locales_router
from i18n_router.services.config_artifact import build_client_config

logger = logging.getLogger(__name__)


def create_app(
    config: I18nRouterConfig | Mapping[str, Any] | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create the FastAPI application serving a multi-locale static site.

    The locale config is validated here, before any request is served;
    a ConfigError propagates to the caller.
    """
    settings = settings or default_settings
    locale_config = normalize_config(config if config is not None else settings.router_config())

    app = FastAPI(
        title=settings.app_name,
        description="Locale-prefixed routing for static multi-language sites",
        debug=settings.debug,
        version=settings.app_version,
    )

    # Built once, read-only for the process lifetime
    app.state.locale_config = locale_config
    app.state.route_codec = RouteCodec(locale_config.path_map)
    app.state.client_config = build_client_config(
        locale_config,
        cookie_name=settings.cookie_name,
        storage_key=settings.storage_key,
    )

    # Starlette runs middleware LIFO: logging wraps the redirect middleware
    app.add_middleware(
        LocaleRedirectMiddleware,
        path_map=locale_config.path_map,
        cookie_name=settings.cookie_name,
        cookie_max_age=settings.cookie_max_age,
    )
    app.add_middleware(StructuredLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(locales_router, prefix="/__i18n")

    if settings.site_dir:
        site_dir = Path(settings.site_dir)
        app.mount("/", StaticFiles(directory=site_dir, html=True), name="site")
        logger.info(f"Serving static site from {site_dir}")

    logger.info(
        f"Locale routing ready: {', '.join(locale_config.locales)} (default {locale_config.default_locale})"
    )
    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
    return app
