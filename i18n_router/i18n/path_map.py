"""
Locale ↔ path segment mapping

A LocalePathMap is built once from user configuration and never mutated
afterwards, so a single instance can be shared by the request middleware,
the route codec and the client tracker.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from i18n_router.exceptions import ConfigError
from i18n_router.i18n.locale import find_best_match

logger = logging.getLogger(__name__)

LocalesInput = Sequence[str] | Mapping[str, str]


class LocalePathMap:
    """Bidirectional, validated mapping between locale ids and URL path segments.

    Locale ids are case-preserving but looked up case-insensitively.
    Path segments are compared as exact strings.
    """

    __slots__ = ("_locale_to_path", "_path_to_locale", "_canonical", "_default_locale")

    def __init__(self, pairs: Sequence[tuple[str, str]], default_locale: str):
        locale_to_path: dict[str, str] = {}
        path_to_locale: dict[str, str] = {}
        canonical: dict[str, str] = {}

        if not pairs:
            raise ConfigError("At least one locale must be configured", field="locales")

        for locale, path in pairs:
            if not isinstance(locale, str) or not locale.strip():
                raise ConfigError("Locale ids must be non-empty strings", field="locales", value=locale)
            if not isinstance(path, str) or not path.strip():
                raise ConfigError(f"Locale '{locale}' has an empty path segment", field="locales", value=path)
            if "/" in path:
                raise ConfigError(f"Path segment '{path}' must not contain '/'", field="locales", value=path)
            if locale.lower() in canonical:
                raise ConfigError(f"Locale '{locale}' is configured more than once", field="locales", value=locale)
            if path in path_to_locale:
                raise ConfigError(
                    f"Path segment '{path}' is used by both '{path_to_locale[path]}' and '{locale}'",
                    field="locales",
                    value=path,
                )
            locale_to_path[locale] = path
            path_to_locale[path] = locale
            canonical[locale.lower()] = locale

        if not isinstance(default_locale, str) or not default_locale:
            raise ConfigError("Default locale must be specified", field="default_locale")
        if default_locale.lower() not in canonical:
            raise ConfigError(
                "Default locale must be one of the configured locales",
                field="default_locale",
                value=default_locale,
            )

        self._locale_to_path = locale_to_path
        self._path_to_locale = path_to_locale
        self._canonical = canonical
        self._default_locale = canonical[default_locale.lower()]

    @classmethod
    def build(cls, locales: LocalesInput, default_locale: str) -> LocalePathMap:
        """Build a map from a list of locale ids or a ``{locale: path}`` mapping.

        A plain list maps every locale to itself ("en-US" → "/en-US/").

        Raises:
            ConfigError: empty locale set, duplicate path segment or locale,
                blank entries, or a default locale outside the set.
        """
        if isinstance(locales, Mapping):
            pairs = list(locales.items())
        elif isinstance(locales, Sequence) and not isinstance(locales, str):
            pairs = [(locale, locale) for locale in locales]
        else:
            raise ConfigError("Locales must be a list or a mapping", field="locales", value=repr(locales))

        path_map = cls(pairs, default_locale)
        logger.info(
            "Built locale path map with %d locale(s), default '%s'",
            len(path_map),
            path_map.default_locale,
        )
        return path_map

    # ── Lookups ──────────────────────────────────────────────────────────────

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def canonical_locale(self, locale: str | None) -> str | None:
        """Return the configured spelling of ``locale`` ("zh-cn" → "zh-CN"), or None."""
        if not locale:
            return None
        return self._canonical.get(locale.lower())

    def path_of(self, locale: str | None) -> str | None:
        """Return the path segment for ``locale``, or None when it is not configured."""
        canonical = self.canonical_locale(locale)
        return self._locale_to_path[canonical] if canonical else None

    def locale_of(self, path_segment: str | None) -> str | None:
        """Return the locale served under ``path_segment``, or None."""
        if path_segment is None:
            return None
        return self._path_to_locale.get(path_segment)

    def is_valid_locale(self, locale: str | None) -> bool:
        return self.canonical_locale(locale) is not None

    def is_valid_path(self, path_segment: str | None) -> bool:
        return path_segment in self._path_to_locale

    def all_locales(self) -> list[str]:
        """Configured locale ids in configuration order."""
        return list(self._locale_to_path)

    def all_path_segments(self) -> list[str]:
        """Configured path segments in configuration order."""
        return list(self._locale_to_path.values())

    @property
    def locale_to_path(self) -> dict[str, str]:
        return dict(self._locale_to_path)

    @property
    def path_to_locale(self) -> dict[str, str]:
        return dict(self._path_to_locale)

    def find_best_match(self, tag: str) -> str | None:
        """Best configured locale for a language tag (exact, family, simple)."""
        return find_best_match(tag, self.all_locales())

    def __len__(self) -> int:
        return len(self._locale_to_path)

    def __contains__(self, locale: object) -> bool:
        return isinstance(locale, str) and self.is_valid_locale(locale)

    def __repr__(self) -> str:
        return f"LocalePathMap({self._locale_to_path!r}, default_locale={self._default_locale!r})"
