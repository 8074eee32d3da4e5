"""
Locale routing core

Provides the locale ↔ path mapping, language matching, URL parsing and
generation, and the redirect policy shared by the server middleware and
the client-side tracker.
"""

from .locale import (
    LANGUAGE_NAMES,
    find_best_match,
    get_locale_name,
    match_accept_language,
    match_language_tags,
    parse_accept_language,
)
from .path_map import LocalePathMap
from .redirect import (
    PassThrough,
    PermanentRedirect,
    PreferenceSignals,
    RedirectAction,
    TemporaryRedirect,
    decide_redirect,
    is_internal_path,
    resolve_target_locale,
)
from .routing import ParsedRoute, RouteCodec

__all__ = [
    "LANGUAGE_NAMES",
    "LocalePathMap",
    "ParsedRoute",
    "PassThrough",
    "PermanentRedirect",
    "PreferenceSignals",
    "RedirectAction",
    "RouteCodec",
    "TemporaryRedirect",
    "decide_redirect",
    "find_best_match",
    "get_locale_name",
    "is_internal_path",
    "match_accept_language",
    "match_language_tags",
    "parse_accept_language",
    "resolve_target_locale",
]
