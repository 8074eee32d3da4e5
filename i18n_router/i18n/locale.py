"""
Language matching helpers

Pure functions for picking a configured locale from a requested
language tag:
- Accept-Language header splitting (priority order, q-values ignored)
- Three-tier best match: exact, language family, simple language
- Display-name lookup for language switchers
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

# ── Constants ─────────────────────────────────────────────────────────────────

# Human-readable names used when the config does not name a locale
LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "fr": "Français",
    "de": "Deutsch",
    "es": "Español",
    "ar": "العربية",
    "zh": "中文",
    "zh-CN": "简体中文",
    "zh-TW": "繁體中文",
    "ja": "日本語",
    "ko": "한국어",
    "pt": "Português",
    "ru": "Русский",
    "it": "Italiano",
    "nl": "Nederlands",
}


# ── Public helpers ────────────────────────────────────────────────────────────


def normalize_tag(tag: str) -> str:
    """Normalize a raw language tag: trim it and use ``-`` as separator.

    Casing is preserved; every comparison below is case-insensitive.
    """
    return tag.strip().replace("_", "-")


def primary_subtag(tag: str) -> str:
    """Return the lower-cased primary language subtag ("zh-HK" → "zh")."""
    return normalize_tag(tag).lower().split("-")[0]


def find_best_match(tag: str, locales: Sequence[str]) -> str | None:
    """Return the configured locale that best serves a requested language tag.

    Tiers, first match wins, each tier scanning ``locales`` in order:
    1. Exact: case-insensitive equality ("zh_cn" → "zh-CN").
    2. Family: a configured locale with a region subtag whose primary
       subtag equals the tag's ("zh-HK" → "zh-CN").
    3. Simple: a configured bare locale equal to the tag's primary
       subtag ("zh-HK" → "zh").

    Args:
        tag:     Raw language tag, any casing, ``_`` or ``-`` separated.
        locales: Configured locale ids in configuration order.

    Returns:
        The matching locale id as configured, or None.
    """
    normalized = normalize_tag(tag)
    if not normalized:
        return None
    lowered = normalized.lower()

    # 1. Exact match
    for locale in locales:
        if locale.lower() == lowered:
            return locale

    # 2. Language family match
    prefix = lowered.split("-")[0]
    for locale in locales:
        if locale.lower().startswith(prefix + "-"):
            return locale

    # 3. Simple language match
    for locale in locales:
        if locale.lower() == prefix:
            return locale

    return None


def parse_accept_language(header: str | None) -> list[str]:
    """Split an Accept-Language header into language tags.

    Tags keep the order they appear in the header, which is the
    client's priority order. ``q=`` weights and the ``*`` wildcard are
    dropped.

    Args:
        header: Value of the Accept-Language HTTP header, e.g.
                "zh-CN,zh;q=0.9,en;q=0.8".

    Returns:
        List of raw tags, possibly empty.
    """
    if not header:
        return []

    tags: list[str] = []
    for part in header.split(","):
        tag = part.split(";", 1)[0].strip()
        if not tag or tag == "*":
            continue
        tags.append(tag)
    return tags


def match_language_tags(tags: Iterable[str], locales: Sequence[str]) -> str | None:
    """Run :func:`find_best_match` per tag in order; the first hit wins."""
    for tag in tags:
        match = find_best_match(tag, locales)
        if match:
            return match
    return None


def match_accept_language(header: str | None, locales: Sequence[str]) -> str | None:
    """Return the best configured locale for an Accept-Language header, or None."""
    return match_language_tags(parse_accept_language(header), locales)


def get_locale_name(locale: str, names: Mapping[str, str] | None = None) -> str:
    """Return a display name for ``locale``.

    Lookup order: the configured ``names``, the built-in table by full
    tag, the built-in table by primary subtag, and finally the locale
    id itself.
    """
    if names and locale in names:
        return names[locale]
    if locale in LANGUAGE_NAMES:
        return LANGUAGE_NAMES[locale]
    return LANGUAGE_NAMES.get(primary_subtag(locale), locale)
