"""Tests for deeplink.links — query decoding, path normalization, URI parsing."""

import pytest

from deeplink._internal.paths import normalize_path
from deeplink.config import LinkConfig
from deeplink.links.parser import LinkParser, parse_incoming_url
from deeplink.links.query import parse_query
from deeplink.routing.registry import RouteRegistry
from deeplink.routing.route import RouteEntry


class TestParseQuery:
    def test_empty(self) -> None:
        assert parse_query("") == {}

    def test_pairs(self) -> None:
        assert parse_query("ref=push&utm_source=ios") == {"ref": "push", "utm_source": "ios"}

    def test_decoding(self) -> None:
        assert parse_query("q=hello+world%21&na%20me=x") == {"q": "hello world!", "na me": "x"}

    def test_value_containing_equals(self) -> None:
        assert parse_query("token=abc==") == {"token": "abc=="}

    def test_flag_and_blank_pairs(self) -> None:
        assert parse_query("a&&=orphan&b=") == {"a": "", "b": ""}

    def test_last_value_wins(self) -> None:
        assert parse_query("a=1&a=2") == {"a": "2"}

    def test_no_nesting(self) -> None:
        assert parse_query("a[b]=1") == {"a[b]": "1"}


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("settings/blocked", "/settings/blocked"),
            ("  /u/mike/  ", "/u/mike"),
            ("/u/mike///", "/u/mike"),
            ("", "/"),
            ("/", "/"),
            ("//", "/"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_path(raw) == expected


class TestExampleScenarios:
    def test_universal_profile_link(self) -> None:
        parsed = parse_incoming_url("https://dvntlive.app/u/mikevocalz")
        assert parsed is not None
        assert parsed.path == "/u/mikevocalz"
        assert parsed.requires_auth is True
        assert parsed.router_path == "/(protected)/profile/mikevocalz"
        assert parsed.params == {"username": "mikevocalz"}
        assert parsed.original_url == "https://dvntlive.app/u/mikevocalz"

    def test_app_scheme_post_link(self) -> None:
        parsed = parse_incoming_url("dvnt://p/abc123?ref=push")
        assert parsed is not None
        assert parsed.path == "/p/abc123"
        assert parsed.params == {"ref": "push", "id": "abc123"}
        assert parsed.router_path == "/(protected)/post/abc123"

    def test_disallowed_host(self) -> None:
        assert parse_incoming_url("https://evil.example.com/u/mikevocalz") is None

    def test_root(self) -> None:
        assert parse_incoming_url("https://dvntlive.app/") is None
        assert parse_incoming_url("https://dvntlive.app") is None
        assert parse_incoming_url("dvnt://") is None

    def test_bare_settings_path(self) -> None:
        parsed = parse_incoming_url("settings/blocked")
        assert parsed is not None
        assert parsed.path == "/settings/blocked"
        assert parsed.requires_auth is True
        assert parsed.router_path == "/settings/blocked"


class TestSchemeInvariance:
    @pytest.mark.parametrize(
        "url",
        [
            "https://dvntlive.app/p/abc123?ref=push",
            "https://www.dvntlive.app/p/abc123?ref=push",
            "http://dvntlive.app/p/abc123?ref=push",
            "http://localhost:8081/p/abc123?ref=push",
            "dvnt://p/abc123?ref=push",
            "dvnt:///p/abc123?ref=push",
            "exp://192.168.1.1:8081/--/p/abc123?ref=push",
            "/p/abc123?ref=push",
            "p/abc123?ref=push",
        ],
    )
    def test_same_path_and_params(self, url: str) -> None:
        parsed = parse_incoming_url(url)
        assert parsed is not None
        assert parsed.path == "/p/abc123"
        assert parsed.params == {"ref": "push", "id": "abc123"}
        assert parsed.router_path == "/(protected)/post/abc123"

    def test_fragment_ignored_everywhere(self) -> None:
        a = parse_incoming_url("https://dvntlive.app/p/1#top")
        b = parse_incoming_url("dvnt://p/1#top")
        c = parse_incoming_url("p/1#top")
        assert a is not None and b is not None and c is not None
        assert a.path == b.path == c.path == "/p/1"


class TestParserEdgeCases:
    def test_lookalike_host_rejected(self) -> None:
        assert parse_incoming_url("https://dvntlive.app.evil.com/u/x") is None

    def test_unsupported_scheme_rejected(self) -> None:
        assert parse_incoming_url("ftp://dvntlive.app/u/x") is None

    def test_scheme_case_insensitive(self) -> None:
        parsed = parse_incoming_url("HTTPS://DVNTLIVE.APP/u/mike")
        assert parsed is not None
        assert parsed.path == "/u/mike"

    def test_trailing_slash(self) -> None:
        parsed = parse_incoming_url("https://dvntlive.app/u/mike/")
        assert parsed is not None
        assert parsed.path == "/u/mike"

    def test_dev_uri_without_marker(self) -> None:
        parsed = parse_incoming_url("exp://192.168.1.1:8081/messages")
        assert parsed is not None
        assert parsed.path == "/messages"

    def test_unmatched_defaults(self) -> None:
        parsed = parse_incoming_url("https://dvntlive.app/unknown-route?x=1")
        assert parsed is not None
        assert parsed.requires_auth is True
        assert parsed.router_path == "/unknown-route"
        assert parsed.params == {"x": "1"}

    def test_public_route_with_query_token(self) -> None:
        parsed = parse_incoming_url("https://dvntlive.app/auth/reset?token=abc123")
        assert parsed is not None
        assert parsed.requires_auth is False
        assert parsed.router_path == "/(auth)/reset-password"
        assert parsed.params == {"token": "abc123"}

    def test_public_route_missing_token_fails_closed(self) -> None:
        parsed = parse_incoming_url("https://dvntlive.app/auth/reset")
        assert parsed is not None
        assert parsed.requires_auth is True
        assert parsed.router_path == "/auth/reset"

    def test_captures_override_query(self) -> None:
        parsed = parse_incoming_url("dvnt://u/mike?username=someone-else")
        assert parsed is not None
        assert parsed.params == {"username": "mike"}
        assert parsed.router_path == "/(protected)/profile/mike"

    @pytest.mark.parametrize("value", [None, 42, "", "   "])
    def test_non_navigable_input(self, value: object) -> None:
        assert parse_incoming_url(value) is None  # type: ignore[arg-type]

    def test_never_raises(self) -> None:
        assert parse_incoming_url("https://[broken/u/x") is None

    def test_custom_config_and_registry(self) -> None:
        registry = RouteRegistry([RouteEntry("/x/:id", "/inner/:id", "public", "X")])
        parser = LinkParser(LinkConfig(domain="example.app", scheme="ex"), registry, clock=lambda: 5.0)

        parsed = parser.parse("https://example.app/x/9")
        assert parsed is not None
        assert parsed.router_path == "/inner/9"
        assert parsed.requires_auth is False
        assert parsed.timestamp == 5.0

        assert parser.parse("ex://x/9") is not None
        assert parser.parse("https://dvntlive.app/x/9") is None

    def test_parsed_link_is_frozen(self) -> None:
        parsed = parse_incoming_url("/messages")
        assert parsed is not None
        with pytest.raises(AttributeError):
            parsed.path = "/other"  # type: ignore[misc]

    def test_params_are_read_only(self) -> None:
        parsed = parse_incoming_url("dvnt://p/abc123?ref=push")
        assert parsed is not None
        with pytest.raises(TypeError):
            parsed.params["ref"] = "email"  # type: ignore[index]


class TestPercentDecoding:
    def test_capture_and_query_decode_alike(self) -> None:
        parsed = parse_incoming_url("dvnt://p/a%20b?x=a%20b")
        assert parsed is not None
        assert parsed.params == {"x": "a b", "id": "a b"}

    def test_encoded_slash_stays_in_capture(self) -> None:
        parsed = parse_incoming_url("https://dvntlive.app/p/a%2Fb")
        assert parsed is not None
        assert parsed.path == "/p/a%2Fb"
        assert parsed.params == {"id": "a/b"}
        assert parsed.router_path == "/(protected)/post/a%2Fb"

    def test_username_outside_slug_fails_closed(self) -> None:
        parsed = parse_incoming_url("dvnt://u/mike%20v")
        assert parsed is not None
        assert parsed.requires_auth is True
        assert parsed.router_path == "/u/mike%20v"
