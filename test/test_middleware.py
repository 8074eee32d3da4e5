"""
Tests for middleware modules
"""

import json
import logging

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from i18n_router.i18n.path_map import LocalePathMap
from i18n_router.middleware.language import LocaleRedirectMiddleware
from i18n_router.middleware.logging import StructuredFormatter, StructuredLoggingMiddleware, request_id_var


def make_app(locales=None, default_locale="en-US", **middleware_kwargs) -> FastAPI:
    """App echoing the locale the middleware attached to the request"""
    app = FastAPI()

    @app.api_route("/{path:path}", methods=["GET", "HEAD", "POST"])
    async def echo(request: Request, path: str):
        return {
            "locale": request.state.locale if hasattr(request.state, "locale") else None,
            "locale_path": getattr(request.state, "locale_path", None),
        }

    path_map = LocalePathMap.build(locales or ["zh-CN", "en-US"], default_locale)
    app.add_middleware(LocaleRedirectMiddleware, path_map=path_map, **middleware_kwargs)
    return app


class TestLocaleRedirectMiddleware:
    """Test redirects and request.state.locale"""

    def test_root_redirects_by_accept_language(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.get("/", headers={"Accept-Language": "zh-CN,en;q=0.8"})

        assert response.status_code == 302
        assert response.headers["location"] == "/zh-CN/"

    def test_temporary_redirect_sets_cookie(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.get("/", headers={"Accept-Language": "zh-CN"})

        set_cookie = response.headers["set-cookie"]
        assert "vitepress-locale=zh-CN" in set_cookie
        assert "Max-Age=31536000" in set_cookie
        assert "Path=/" in set_cookie

    def test_cookie_preference_wins(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.get(
            "/",
            headers={"Accept-Language": "zh-CN", "Cookie": "vitepress-locale=en-US"},
        )

        assert response.status_code == 302
        assert response.headers["location"] == "/en-US/"

    def test_stale_cookie_is_ignored(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.get("/", headers={"Accept-Language": "zh-CN", "Cookie": "vitepress-locale=fr"})

        assert response.headers["location"] == "/zh-CN/"

    def test_default_locale_without_signals(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.get("/")

        assert response.status_code == 302
        assert response.headers["location"] == "/en-US/"

    def test_unprefixed_page_keeps_path_and_query(self):
        client = TestClient(make_app({"zh-CN": "zh", "en-US": "en"}), follow_redirects=False)
        response = client.get("/guide/intro?tab=2", headers={"Accept-Language": "en-GB"})

        assert response.status_code == 302
        assert response.headers["location"] == "/en/guide/intro?tab=2"

    def test_locale_root_without_slash_is_permanent(self):
        client = TestClient(make_app({"zh-CN": "zh", "en-US": "en"}), follow_redirects=False)
        response = client.get("/en")

        assert response.status_code == 301
        assert response.headers["location"] == "/en/"
        assert "set-cookie" not in response.headers

    def test_encoded_hash_stays_in_redirect_path(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.get("/guide%23intro", headers={"Accept-Language": "en-US"})

        assert response.status_code == 302
        assert response.headers["location"] == "/en-US/guide%23intro"

    def test_encoded_question_mark_is_not_a_locale_root(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.get("/en-US%3Fx")

        assert response.status_code == 302
        assert response.headers["location"] == "/en-US/en-US%3Fx"

    def test_encoded_query_marker_keeps_real_query(self):
        client = TestClient(make_app({"zh-CN": "zh", "en-US": "en"}), follow_redirects=False)
        response = client.get("/faq%3F?tab=1", headers={"Accept-Language": "zh"})

        assert response.headers["location"] == "/zh/faq%3F?tab=1"

    def test_non_ascii_segment_matches_encoded_request(self):
        client = TestClient(make_app({"zh-CN": "中文", "en-US": "en"}), follow_redirects=False)
        response = client.get("/中文/指南")

        assert response.status_code == 200
        assert response.json() == {"locale": "zh-CN", "locale_path": "/指南"}

    def test_localized_request_passes_with_state(self):
        client = TestClient(make_app({"zh-CN": "zh", "en-US": "en"}), follow_redirects=False)
        response = client.get("/zh/guide/intro")

        assert response.status_code == 200
        assert response.json() == {"locale": "zh-CN", "locale_path": "/guide/intro"}

    def test_redirect_target_passes(self):
        client = TestClient(make_app(), follow_redirects=False)
        first = client.get("/", headers={"Accept-Language": "zh-CN,en;q=0.8"})
        second = client.get(first.headers["location"], headers={"Accept-Language": "zh-CN,en;q=0.8"})

        assert second.status_code == 200
        assert second.json()["locale"] == "zh-CN"

    def test_assets_pass_through(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.get("/assets/app.js")

        assert response.status_code == 200
        assert response.json()["locale"] == ""

    def test_post_is_not_redirected(self):
        client = TestClient(make_app(), follow_redirects=False)
        response = client.post("/")

        assert response.status_code == 200
        assert response.json()["locale"] is None

    def test_custom_cookie_name(self):
        client = TestClient(make_app(cookie_name="site-lang", cookie_max_age=60), follow_redirects=False)
        response = client.get("/", headers={"Cookie": "site-lang=zh-CN"})

        assert response.headers["location"] == "/zh-CN/"
        assert "site-lang=zh-CN" in response.headers["set-cookie"]
        assert "Max-Age=60" in response.headers["set-cookie"]


class TestStructuredLogging:
    """Test structured logging middleware and formatter"""

    def test_request_id_header(self):
        app = make_app()
        app.add_middleware(StructuredLoggingMiddleware)
        client = TestClient(app, follow_redirects=False)

        response = client.get("/en-US/", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self):
        app = make_app()
        app.add_middleware(StructuredLoggingMiddleware)
        client = TestClient(app, follow_redirects=False)

        response = client.get("/")

        assert len(response.headers["X-Request-ID"]) > 0

    def test_redirect_is_logged_with_location(self, caplog):
        app = make_app()
        app.add_middleware(StructuredLoggingMiddleware)
        client = TestClient(app, follow_redirects=False)

        with caplog.at_level(logging.INFO, logger="i18n_router.access"):
            client.get("/", headers={"Accept-Language": "zh-CN"})

        records = [r for r in caplog.records if r.name == "i18n_router.access"]
        assert records
        assert records[-1].status_code == 302
        assert records[-1].location == "/zh-CN/"

    def test_locale_is_logged(self, caplog):
        app = make_app()
        app.add_middleware(StructuredLoggingMiddleware)
        client = TestClient(app, follow_redirects=False)

        with caplog.at_level(logging.INFO, logger="i18n_router.access"):
            client.get("/en-US/guide/")

        records = [r for r in caplog.records if r.name == "i18n_router.access"]
        assert records[-1].locale == "en-US"

    def test_formatter_outputs_json(self):
        token = request_id_var.set("req-1")
        try:
            record = logging.LogRecord("i18n_router.access", logging.INFO, __file__, 1, "GET /", None, None)
            record.request_id = request_id_var.get()
            record.status_code = 302
            record.location = "/en/"

            data = json.loads(StructuredFormatter().format(record))
        finally:
            request_id_var.reset(token)

        assert data["message"] == "GET /"
        assert data["level"] == "INFO"
        assert data["request_id"] == "req-1"
        assert data["status_code"] == 302
        assert data["location"] == "/en/"
        assert "timestamp" in data
