"""
Tests for the route codec: decode, encode, alternates and switcher helpers
"""

import pytest

from i18n_router.exceptions import UnknownLocaleError
from i18n_router.i18n.path_map import LocalePathMap
from i18n_router.i18n.routing import ParsedRoute, RouteCodec, split_url


class TestDecode:
    def test_locale_with_path(self, identity_codec):
        route = identity_codec.decode("/en-US/guide/intro?x=1#y")
        assert route == ParsedRoute(locale="en-US", path="/guide/intro")

    def test_locale_root_with_slash(self, codec):
        assert codec.decode("/zh/") == ParsedRoute(locale="zh-CN", path="/")

    def test_locale_root_without_slash(self, codec):
        assert codec.decode("/en") == ParsedRoute(locale="en-US", path="/")

    def test_mapped_segment_resolves_to_locale(self, codec):
        assert codec.decode("/zh/guide/").locale == "zh-CN"

    def test_locale_id_is_not_a_segment_when_mapped(self, codec):
        """With {"zh-CN": "zh"} the URL /zh-CN/ carries no locale."""
        assert codec.decode("/zh-CN/") == ParsedRoute(locale="", path="/zh-CN/")

    def test_no_locale(self, codec):
        route = codec.decode("/guide/intro?x=1")
        assert route == ParsedRoute(locale="", path="/guide/intro")
        assert not route.has_locale

    def test_segment_prefix_is_not_a_match(self, codec):
        assert codec.decode("/english/").locale == ""
        assert codec.decode("/en-GB/").locale == ""

    def test_segment_comparison_is_exact(self, codec):
        assert codec.decode("/EN/").locale == ""

    def test_root(self, codec):
        assert codec.decode("/") == ParsedRoute(locale="", path="/")

    def test_fragment_only(self, codec):
        assert codec.decode("/en#top") == ParsedRoute(locale="en-US", path="/")

    def test_absolute_url(self, codec):
        route = codec.decode("https://docs.example.com/zh/guide/?a=b")
        assert route == ParsedRoute(locale="zh-CN", path="/guide/")

    def test_percent_encoded_segment(self):
        codec = RouteCodec(LocalePathMap.build({"zh-CN": "中文", "en-US": "en"}, "en-US"))
        route = codec.decode("/%E4%B8%AD%E6%96%87/guide")
        assert route == ParsedRoute(locale="zh-CN", path="/guide")

    def test_encoded_delimiters_stay_in_path(self, codec):
        assert codec.decode("/en%3Fx") == ParsedRoute(locale="", path="/en%3Fx")
        assert codec.decode("/zh/faq%23top") == ParsedRoute(locale="zh-CN", path="/faq%23top")


class TestEncode:
    def test_root(self, codec):
        assert codec.encode("zh-CN", "/") == "/zh/"

    def test_path(self, codec):
        assert codec.encode("en-US", "/guide/intro") == "/en/guide/intro"

    def test_path_without_leading_slash(self, codec):
        assert codec.encode("en-US", "guide/intro") == "/en/guide/intro"

    def test_empty_path_is_root(self, codec):
        assert codec.encode("en-US", "") == "/en/"

    def test_locale_is_case_insensitive(self, codec):
        assert codec.encode("en-us", "/") == "/en/"

    def test_unknown_locale_raises(self, codec):
        with pytest.raises(UnknownLocaleError) as exc_info:
            codec.encode("fr", "/")
        assert exc_info.value.status_code == 404
        assert exc_info.value.details["available"] == ["zh-CN", "en-US"]

    @pytest.mark.parametrize("config", [{"zh-CN": "zh", "en-US": "en"}, ["zh-CN", "en-US"], {"ja": "日本"}])
    @pytest.mark.parametrize("path", ["/", "/guide/intro"])
    def test_decode_reverses_encode(self, config, path):
        path_map = LocalePathMap.build(config, next(iter(config)))
        codec = RouteCodec(path_map)
        for locale in path_map.all_locales():
            route = codec.decode(codec.encode(locale, path))
            assert route.locale == locale
            assert route.path == path


class TestAlternates:
    def test_alternates_for_localized_page(self, codec):
        assert codec.alternates("/zh/guide/intro") == {
            "zh-CN": "/zh/guide/intro",
            "en-US": "/en/guide/intro",
        }

    def test_alternates_for_unprefixed_page(self, codec):
        assert codec.alternates("/guide/") == {"zh-CN": "/zh/guide/", "en-US": "/en/guide/"}

    def test_alternates_follow_config_order(self):
        codec = RouteCodec(LocalePathMap.build(["de", "ja", "en"], "en"))
        assert list(codec.alternates("/")) == ["de", "ja", "en"]


class TestLocaleRoutes:
    def test_switcher_entries(self, codec):
        routes = codec.locale_routes("/en/guide/", names={"zh-CN": "中文"})
        assert [r.locale for r in routes] == ["zh-CN", "en-US"]
        assert [r.url for r in routes] == ["/zh/guide/", "/en/guide/"]
        assert [r.active for r in routes] == [False, True]
        assert routes[0].name == "中文"
        assert routes[1].name == "English"

    def test_no_active_entry_without_locale(self, codec):
        assert not any(r.active for r in codec.locale_routes("/guide/"))


class TestSwitchLocale:
    def test_switch_keeps_path(self, codec):
        assert codec.switch_locale("/zh/guide/intro", "en-US") == "/en/guide/intro"

    def test_switch_keeps_query_and_fragment(self, codec):
        assert codec.switch_locale("/zh/guide?tab=2#setup", "en-US") == "/en/guide?tab=2#setup"

    def test_switch_from_root(self, codec):
        assert codec.switch_locale("/en/", "zh-CN") == "/zh/"

    def test_switch_to_unknown_locale(self, codec):
        with pytest.raises(UnknownLocaleError):
            codec.switch_locale("/en/", "fr")


class TestSplitUrl:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/a/b", ("/a/b", "")),
            ("/a?x=1", ("/a", "?x=1")),
            ("/a#frag", ("/a", "#frag")),
            ("/a#frag?not-a-query", ("/a", "#frag?not-a-query")),
            ("http://host", ("/", "")),
        ],
    )
    def test_split(self, url, expected):
        assert split_url(url) == expected
