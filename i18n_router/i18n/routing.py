"""
Route codec

Single source of truth for the localized URL shape ``"/" + segment + path``:
decoding incoming URLs into (locale, path) and generating URLs back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from i18n_router.exceptions import UnknownLocaleError
from i18n_router.i18n.locale import get_locale_name
from i18n_router.schemas.locale import LocaleRoute

if TYPE_CHECKING:
    from collections.abc import Mapping

    from i18n_router.i18n.path_map import LocalePathMap


@dataclass(frozen=True)
class ParsedRoute:
    """A decoded URL. ``locale`` is empty when no locale prefix was recognized."""

    locale: str
    path: str

    @property
    def has_locale(self) -> bool:
        return bool(self.locale)


def split_url(url: str) -> tuple[str, str]:
    """Split ``url`` into its path and the ``?query#fragment`` suffix.

    Absolute URLs are reduced to their path component.
    """
    if "://" in url:
        parts = urlsplit(url)
        suffix = ""
        if parts.query:
            suffix += "?" + parts.query
        if parts.fragment:
            suffix += "#" + parts.fragment
        return parts.path or "/", suffix

    cut = len(url)
    for marker in ("?", "#"):
        index = url.find(marker)
        if index != -1:
            cut = min(cut, index)
    return url[:cut], url[cut:]


class RouteCodec:
    """Parse and generate locale-prefixed URLs against a LocalePathMap."""

    def __init__(self, path_map: LocalePathMap):
        self.path_map = path_map

    def decode(self, url: str) -> ParsedRoute:
        """Extract the locale and the remaining path from ``url``.

        Query string and fragment are dropped. The first path component
        must equal a configured path segment exactly, and be followed by
        ``/`` or the end of the path; anything else yields an empty locale
        and the whole cleaned path. A percent-encoded first component is
        compared in its decoded form, so raw request paths still match
        non-ASCII segments.
        """
        clean, _ = split_url(url)
        if clean.startswith("/"):
            segment, sep, rest = clean[1:].partition("/")
            locale = self.path_map.locale_of(segment)
            if locale is None and "%" in segment:
                locale = self.path_map.locale_of(unquote(segment))
            if locale is not None:
                return ParsedRoute(locale=locale, path="/" + rest if sep else "/")
        return ParsedRoute(locale="", path=clean)

    def encode(self, locale: str, path: str) -> str:
        """Generate the URL serving ``path`` in ``locale``.

        Raises:
            UnknownLocaleError: ``locale`` is not configured.
        """
        segment = self.path_map.path_of(locale)
        if segment is None:
            raise UnknownLocaleError(locale, available=self.path_map.all_locales())

        normalized = path if path.startswith("/") else f"/{path}"
        if normalized == "/":
            return f"/{segment}/"
        return f"/{segment}{normalized}"

    def alternates(self, url: str) -> dict[str, str]:
        """Return ``{locale: url}`` for the page at ``url`` in every configured locale."""
        path = self.decode(url).path
        return {locale: self.encode(locale, path) for locale in self.path_map.all_locales()}

    def locale_routes(self, url: str, names: Mapping[str, str] | None = None) -> list[LocaleRoute]:
        """Language switcher entries for the page at ``url``, in config order."""
        route = self.decode(url)
        return [
            LocaleRoute(
                locale=locale,
                name=get_locale_name(locale, names),
                url=self.encode(locale, route.path),
                active=locale == route.locale,
            )
            for locale in self.path_map.all_locales()
        ]

    def switch_locale(self, url: str, target_locale: str) -> str:
        """Return the URL of the current page in ``target_locale``.

        The query string and fragment of ``url`` are kept.

        Raises:
            UnknownLocaleError: ``target_locale`` is not configured.
        """
        path, suffix = split_url(url)
        return self.encode(target_locale, self.decode(path).path) + suffix
