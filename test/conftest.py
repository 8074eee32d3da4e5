"""
Pytest configuration and fixtures for i18n router tests
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from i18n_router.i18n.path_map import LocalePathMap  # noqa: E402
from i18n_router.i18n.routing import RouteCodec  # noqa: E402
from i18n_router.main import create_app  # noqa: E402

# zh-CN served under /zh/, en-US under /en/
MAPPED_LOCALES = {"zh-CN": "zh", "en-US": "en"}
# Locale ids used as path segments: /zh-CN/, /en-US/
IDENTITY_LOCALES = ["zh-CN", "en-US"]


@pytest.fixture
def path_map() -> LocalePathMap:
    return LocalePathMap.build(MAPPED_LOCALES, "zh-CN")


@pytest.fixture
def identity_map() -> LocalePathMap:
    return LocalePathMap.build(IDENTITY_LOCALES, "en-US")


@pytest.fixture
def codec(path_map) -> RouteCodec:
    return RouteCodec(path_map)


@pytest.fixture
def identity_codec(identity_map) -> RouteCodec:
    return RouteCodec(identity_map)


@pytest.fixture
def app():
    return create_app(
        {
            "locales": IDENTITY_LOCALES,
            "defaultLocale": "en-US",
            "localeNames": {"zh-CN": "简体中文", "en-US": "English"},
        }
    )


@pytest.fixture
def client(app):
    """Test client that does not follow redirects"""
    return TestClient(app, follow_redirects=False)
