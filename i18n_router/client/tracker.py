"""
Client-side locale tracker

Runs once per page lifecycle inside the page host. It remembers the
locale of the page being viewed and sends a visitor who lands on the
unprefixed site root to their preferred locale, exactly once.

The host environment (storage, cookies, navigation, router hooks) is
passed in as a ``ClientHost`` so the tracker runs without a browser.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from urllib.parse import urlsplit

from i18n_router.constants import COOKIE_MAX_AGE, COOKIE_NAME, COOKIE_PATH, STORAGE_KEY
from i18n_router.i18n.path_map import LocalePathMap
from i18n_router.i18n.redirect import PreferenceSignals, resolve_target_locale
from i18n_router.i18n.routing import RouteCodec

if TYPE_CHECKING:
    from i18n_router.schemas.locale import ClientConfigSnapshot

logger = logging.getLogger(__name__)

ASSET_MARKER_RE = re.compile(r"/(assets/|vp-icons\.css)")


class ClientHost(Protocol):
    """What the tracker needs from the page it runs in."""

    def current_path(self) -> str: ...

    def asset_urls(self) -> Iterable[str]: ...

    def languages(self) -> Sequence[str]: ...

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def set_cookie(self, cookie: str) -> None: ...

    def navigate(self, url: str) -> None: ...

    def on_after_route_change(self, callback: Callable[[str], None]) -> None: ...


# ── Base path helpers ─────────────────────────────────────────────────────────


def detect_base_path(asset_urls: Iterable[str]) -> str:
    """Detect the deployed root path from the URLs of emitted assets.

    Generated pages always reference ``/assets/...`` (or
    ``/vp-icons.css``) under the deployed root, so everything before
    that marker is the base. Returns "/" when no asset URL qualifies.
    """
    for url in asset_urls:
        if not url:
            continue
        pathname = urlsplit(url).path
        match = ASSET_MARKER_RE.search(pathname)
        if match is None:
            continue
        if match.start() > 0:
            return pathname[: match.start() + 1]
        return "/"
    return "/"


def strip_base(path: str, base: str) -> str:
    """Remove the deployed root from ``path``, keeping the leading slash."""
    if base == "/":
        return path
    if path.startswith(base):
        return path[len(base) - 1 :]
    if path == base.rstrip("/"):
        return "/"
    return path


def join_base(base: str, url: str) -> str:
    if base == "/":
        return url
    return base.rstrip("/") + url


# ── Tracker ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TrackerResult:
    locale: str | None = None
    redirected_to: str | None = None


class ClientLocaleTracker:
    """Persist the active locale and redirect unprefixed root visits once."""

    def __init__(
        self,
        path_map: LocalePathMap,
        host: ClientHost,
        resolve_base: Callable[[], str] | None = None,
        storage_key: str = STORAGE_KEY,
        cookie_name: str = COOKIE_NAME,
        cookie_max_age: int = COOKIE_MAX_AGE,
    ):
        self.path_map = path_map
        self.codec = RouteCodec(path_map)
        self.host = host
        self.resolve_base = resolve_base or (lambda: detect_base_path(host.asset_urls()))
        self.storage_key = storage_key
        self.cookie_name = cookie_name
        self.cookie_max_age = cookie_max_age
        self.base = "/"
        self._result: TrackerResult | None = None

    @classmethod
    def from_snapshot(
        cls,
        snapshot: ClientConfigSnapshot,
        host: ClientHost,
        resolve_base: Callable[[], str] | None = None,
    ) -> ClientLocaleTracker:
        """Build a tracker from the emitted client config artifact."""
        return cls(
            LocalePathMap.build(snapshot.locale_to_path, snapshot.default_locale),
            host,
            resolve_base=resolve_base,
            storage_key=snapshot.storage_key,
            cookie_name=snapshot.cookie_name,
        )

    def start(self) -> TrackerResult:
        """Lifecycle entry point; the host calls this after its own setup.

        Calling it again returns the first result without side effects.
        """
        if self._result is not None:
            return self._result

        self.base = self.resolve_base()
        path = strip_base(self.host.current_path(), self.base)
        route = self.codec.decode(path)

        if route.locale:
            self.persist(route.locale)
            self.host.on_after_route_change(self.on_route_change)
            self._result = TrackerResult(locale=route.locale)
            return self._result

        if path in ("", "/"):
            signals = PreferenceSignals(stored=self.read_stored(), languages=tuple(self.host.languages()))
            locale, source = resolve_target_locale(self.path_map, signals)
            target = join_base(self.base, self.codec.encode(locale, "/"))
            logger.debug("Root visit, navigating to %s (locale %s from %s)", target, locale, source)
            self._result = TrackerResult(locale=locale, redirected_to=target)
            # Full reload: the page's router state is not initialized yet.
            self.host.navigate(target)
            return self._result

        self.host.on_after_route_change(self.on_route_change)
        self._result = TrackerResult()
        return self._result

    def on_route_change(self, to: str) -> None:
        """Post-navigation hook: remember the locale of the new page."""
        route = self.codec.decode(strip_base(to, self.base))
        if route.locale:
            self.persist(route.locale)

    def read_stored(self) -> str | None:
        try:
            return self.host.get_item(self.storage_key)
        except Exception as e:
            logger.debug("Stored locale unavailable: %s", e)
            return None

    def persist(self, locale: str) -> None:
        """Write ``locale`` to storage and the cookie; failures are ignored."""
        try:
            self.host.set_item(self.storage_key, locale)
        except Exception as e:
            logger.debug("Could not store locale %s: %s", locale, e)
        try:
            self.host.set_cookie(f"{self.cookie_name}={locale};path={COOKIE_PATH};max-age={self.cookie_max_age}")
        except Exception as e:
            logger.debug("Could not set locale cookie %s: %s", locale, e)
