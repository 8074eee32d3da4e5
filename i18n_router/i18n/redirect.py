"""
Redirect policy

Pure decision function behind the locale redirect middleware. Given a
request URL and the visitor's preference signals it returns one of:

- ``PermanentRedirect`` (301): a locale root requested without its
  trailing slash, e.g. ``/en`` → ``/en/``.
- ``TemporaryRedirect`` (302): no locale prefix; send the visitor to the
  best locale. Temporary because the preference may change later.
- ``PassThrough``: serve the request as is.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from i18n_router.i18n.locale import match_language_tags, parse_accept_language
from i18n_router.i18n.routing import ParsedRoute, split_url

if TYPE_CHECKING:
    from i18n_router.i18n.path_map import LocalePathMap
    from i18n_router.i18n.routing import RouteCodec

logger = logging.getLogger(__name__)

# ── Asset / internal path classifier ──────────────────────────────────────────

STATIC_ASSET_RE = re.compile(
    r"\.(js|mjs|css|map|json|png|jpg|jpeg|gif|svg|webp|ico|woff|woff2|ttf|eot|txt|xml)$",
    re.IGNORECASE,
)
INTERNAL_PREFIXES = ("/@", "/__")


def is_internal_path(path: str) -> bool:
    """Return True for static assets and build-tool internal paths.

    These are never redirected: file extensions of static assets, dev
    server paths (``/@vite/...``, ``/__i18n/...``) and generator
    internals under ``/.vitepress/``.
    """
    return bool(STATIC_ASSET_RE.search(path)) or path.startswith(INTERNAL_PREFIXES) or "/.vitepress/" in path


# ── Actions ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PermanentRedirect:
    location: str
    status_code: ClassVar[int] = 301


@dataclass(frozen=True)
class TemporaryRedirect:
    location: str
    locale: str
    source: str = "default"
    status_code: ClassVar[int] = 302


@dataclass(frozen=True)
class PassThrough:
    locale: str = ""


RedirectAction = PermanentRedirect | TemporaryRedirect | PassThrough


# ── Preference signals ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PreferenceSignals:
    """What the visitor told us about their language, highest priority first.

    ``stored`` is an explicit earlier choice (cookie or local storage);
    ``languages`` are advertised tags (Accept-Language, navigator
    languages) in the client's priority order.
    """

    stored: str | None = None
    languages: Sequence[str] = field(default_factory=tuple)

    @classmethod
    def from_headers(cls, stored: str | None, accept_language: str | None) -> PreferenceSignals:
        return cls(stored=stored or None, languages=tuple(parse_accept_language(accept_language)))


def resolve_target_locale(path_map: LocalePathMap, signals: PreferenceSignals) -> tuple[str, str]:
    """Collapse preference signals into one configured locale.

    Order: a stored preference naming a configured locale, then the
    advertised languages in priority order, then the default locale.
    Stored values naming a locale that is no longer configured are
    ignored.

    Returns:
        ``(locale, source)`` where source is "stored", "language" or "default".
    """
    stored = path_map.canonical_locale(signals.stored)
    if stored:
        return stored, "stored"

    matched = match_language_tags(signals.languages, path_map.all_locales())
    if matched:
        return matched, "language"

    return path_map.default_locale, "default"


# ── Decision ──────────────────────────────────────────────────────────────────


def decide_redirect(
    codec: RouteCodec,
    raw_url: str,
    signals: PreferenceSignals,
    route: ParsedRoute | None = None,
    is_internal: Callable[[str], bool] = is_internal_path,
) -> RedirectAction:
    """Decide how to answer a request for ``raw_url``.

    Args:
        codec:       Route codec of the site.
        raw_url:     Requested path, query string included.
        signals:     Visitor preference signals.
        route:       Already decoded route for ``raw_url``, if available.
        is_internal: Classifier for asset/internal paths that always pass.

    Returns:
        The action to take.
    """
    path, suffix = split_url(raw_url)
    if is_internal(path):
        return PassThrough()

    if route is None:
        route = codec.decode(raw_url)

    if route.locale:
        if route.path == "/" and not path.endswith("/"):
            location = codec.encode(route.locale, "/") + suffix
            logger.debug("Canonicalizing %s → %s", raw_url, location)
            return PermanentRedirect(location=location)
        return PassThrough(locale=route.locale)

    locale, source = resolve_target_locale(codec.path_map, signals)
    location = codec.encode(locale, path) + suffix
    logger.debug("Redirecting %s → %s (locale %s from %s)", raw_url, location, locale, source)
    return TemporaryRedirect(location=location, locale=locale, source=source)
