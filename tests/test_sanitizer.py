"""Tests for single-URL sanitization (tracking params + Amazon referral paths)."""

from __future__ import annotations

import pytest

from linkclean.models import SanitizedUrl
from linkclean.sanitizer import (
    TRACKING_PARAMS,
    _remove_dot_segments,
    sanitize_url,
    should_remove_param,
    strip_amazon_ref_path,
)


# ---------------------------------------------------------------------------
# should_remove_param
# ---------------------------------------------------------------------------

class TestShouldRemoveParam:
    @pytest.mark.parametrize("key", sorted(TRACKING_PARAMS))
    def test_listed_keys_removed(self, key: str) -> None:
        assert should_remove_param(key) is True

    @pytest.mark.parametrize("key", ["utm_source", "utm_whatever", "UTM_Campaign", "utm_"])
    def test_utm_prefix_removed(self, key: str) -> None:
        assert should_remove_param(key) is True

    def test_match_is_case_insensitive(self) -> None:
        assert should_remove_param("linkCode") is True
        assert should_remove_param("FBCLID") is True

    @pytest.mark.parametrize("key", ["t", "q", "keywords", "referrer", "utm", "tags", "sig"])
    def test_other_keys_kept(self, key: str) -> None:
        assert should_remove_param(key) is False


# ---------------------------------------------------------------------------
# strip_amazon_ref_path
# ---------------------------------------------------------------------------

class TestStripAmazonRefPath:
    def test_cuts_at_marker(self) -> None:
        assert strip_amazon_ref_path("www.amazon.de", "/dp/B09XYZ1234/ref=sr_1_1") == "/dp/B09XYZ1234"

    def test_host_match_is_case_insensitive(self) -> None:
        assert strip_amazon_ref_path("WWW.AMAZON.COM", "/dp/X/ref=a") == "/dp/X"

    def test_other_hosts_untouched(self) -> None:
        assert strip_amazon_ref_path("example.com", "/dp/X/ref=a") is None

    def test_no_marker(self) -> None:
        assert strip_amazon_ref_path("amazon.com", "/dp/X") is None

    def test_empty_result_is_skipped(self) -> None:
        assert strip_amazon_ref_path("amazon.com", "/ref=nav_logo") is None


# ---------------------------------------------------------------------------
# sanitize_url
# ---------------------------------------------------------------------------

class TestSanitizeUrl:
    def test_returns_sanitized_url_tuple(self) -> None:
        result = sanitize_url("https://example.com/a?utm_source=x")
        assert isinstance(result, SanitizedUrl)
        assert result == ("https://example.com/a", True, 1)

    def test_removes_all_utm_params(self) -> None:
        result = sanitize_url(
            "https://example.com/landing?utm_source=newsletter&utm_medium=email"
            "&utm_campaign=spring&utm_content=button"
        )
        assert result == SanitizedUrl("https://example.com/landing", True, 4)

    def test_keeps_other_params_in_order(self) -> None:
        result = sanitize_url("https://www.google.com/maps/place/Berlin/?utm_source=share&api=1&query=Berlin")
        assert result.url == "https://www.google.com/maps/place/Berlin/?api=1&query=Berlin"
        assert result.params_removed == 1

    def test_duplicate_keys_preserved(self) -> None:
        result = sanitize_url("https://example.com/?a=1&gclid=x&a=2")
        assert result.url == "https://example.com/?a=1&a=2"

    def test_duplicate_tracking_keys_each_counted(self) -> None:
        result = sanitize_url("https://example.com/?si=1&si=2&x=3")
        assert result == SanitizedUrl("https://example.com/?x=3", True, 2)

    def test_amazon_path_and_query(self) -> None:
        result = sanitize_url(
            "https://www.amazon.de/dp/B09XYZ1234/ref=sr_1_1?tag=mytag-21&keywords=foo"
        )
        assert result == SanitizedUrl("https://www.amazon.de/dp/B09XYZ1234?keywords=foo", True, 1)

    def test_amazon_path_only_counts_as_modified_without_removals(self) -> None:
        result = sanitize_url("https://www.amazon.com/dp/B000/ref=cm_sw_r")
        assert result == SanitizedUrl("https://www.amazon.com/dp/B000", True, 0)

    def test_amazon_path_that_would_be_empty_is_kept(self) -> None:
        url = "https://www.amazon.com/ref=nav_logo"
        assert sanitize_url(url) == SanitizedUrl(url, False, 0)

    def test_fragment_preserved(self) -> None:
        result = sanitize_url("https://example.com/page?utm_source=a#section-2")
        assert result.url == "https://example.com/page#section-2"

    def test_empty_fragment_marker_preserved(self) -> None:
        result = sanitize_url("https://example.com/page?fbclid=a#")
        assert result.url == "https://example.com/page#"

    def test_empty_path_serializes_as_slash(self) -> None:
        result = sanitize_url("https://example.com?utm_source=x")
        assert result.url == "https://example.com/"

    def test_kept_values_are_form_encoded(self) -> None:
        result = sanitize_url("https://example.com/s?q=a%20b&utm_source=x")
        assert result.url == "https://example.com/s?q=a+b"

    def test_userinfo_and_port_survive(self) -> None:
        result = sanitize_url("https://user@example.com:8443/p?ref=x&id=7")
        assert result.url == "https://user@example.com:8443/p?id=7"

    def test_clean_url_returned_verbatim(self) -> None:
        url = "https://EXAMPLE.com/page?keywords=foo%2fbar&"
        assert sanitize_url(url) == SanitizedUrl(url, False, 0)

    def test_empty_query_marker_untouched(self) -> None:
        url = "https://example.com/page?"
        assert sanitize_url(url) == SanitizedUrl(url, False, 0)

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "https://",
            "https://:80/x?utm_source=a",
            "https://exa mple.com/?utm_source=a",
            "https://example.com:99999/?utm_source=a",
            "https://example.com:port/?utm_source=a",
            "http://[::1/?utm_source=a",
            "https://ex<am>ple.com/?utm_source=a",
            "mailto:someone@example.com?utm_source=a",
        ],
    )
    def test_unparseable_passes_through(self, raw: str) -> None:
        assert sanitize_url(raw) == SanitizedUrl(raw, False, 0)

    def test_ipv6_host_is_sanitized(self) -> None:
        result = sanitize_url("http://[::1]:8080/x?utm_source=a")
        assert result.url == "http://[::1]:8080/x"

    def test_already_clean_output_is_stable(self) -> None:
        first = sanitize_url("https://x.com/u/status/1?ref_src=twsrc%5Etfw&t=20")
        assert first.url == "https://x.com/u/status/1?t=20"
        assert sanitize_url(first.url) == SanitizedUrl(first.url, False, 0)


# ---------------------------------------------------------------------------
# Serialization of rewritten URLs
# ---------------------------------------------------------------------------

class TestRemoveDotSegments:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("", "/"),
            ("/", "/"),
            ("/a/b/", "/a/b/"),
            ("/a/../b", "/b"),
            ("/a/./b", "/a/b"),
            ("/a/..", "/"),
            ("/../../x", "/x"),
            ("/a/%2E%2e/b", "/b"),
            ("/a//b", "/a//b"),
        ],
    )
    def test_resolves(self, path: str, expected: str) -> None:
        assert _remove_dot_segments(path) == expected


class TestSerialization:
    def test_non_ascii_path_is_percent_encoded(self) -> None:
        result = sanitize_url("https://de.wikipedia.org/wiki/Köln?utm_source=x")
        assert result.url == "https://de.wikipedia.org/wiki/K%C3%B6ln"

    def test_host_lowercased_default_port_and_dots_dropped(self) -> None:
        result = sanitize_url("https://EXAMPLE.com:443/a/../b?utm_source=x")
        assert result == SanitizedUrl("https://example.com/b", True, 1)

    def test_http_default_port_dropped(self) -> None:
        assert sanitize_url("http://a.b:80/x?si=1").url == "http://a.b/x"

    def test_non_default_port_kept(self) -> None:
        assert sanitize_url("http://a.b:443/x?si=1").url == "http://a.b:443/x"

    def test_unicode_host_is_idna_encoded(self) -> None:
        result = sanitize_url("https://bücher.de/?utm_source=x")
        assert result.url == "https://xn--bcher-kva.de/"

    def test_backslashes_act_as_slashes(self) -> None:
        result = sanitize_url("https://a.b\\x?utm_source=1")
        assert result == SanitizedUrl("https://a.b/x", True, 1)

    def test_amazon_rule_sees_resolved_path(self) -> None:
        result = sanitize_url("https://www.amazon.com/dp/B0/x/../ref=sr_1")
        assert result.url == "https://www.amazon.com/dp/B0"

    def test_form_encoding_of_kept_values(self) -> None:
        result = sanitize_url("https://a.b/?q=a~b*c&si=1")
        assert result.url == "https://a.b/?q=a%7Eb*c"

    def test_untouched_url_keeps_its_spelling(self) -> None:
        url = "https://EXAMPLE.com:443/a/../Köln?q=a~b"
        assert sanitize_url(url) == SanitizedUrl(url, False, 0)


class TestUnencodableInput:
    def test_lone_surrogate_in_kept_value(self) -> None:
        result = sanitize_url("https://a.b/?q=\ud800&si=1")
        assert result == SanitizedUrl("https://a.b/?q=%ED%A0%80", True, 1)

    def test_lone_surrogate_in_path_passes_through(self) -> None:
        url = "https://a.b/\ud800?si=1"
        assert sanitize_url(url) == SanitizedUrl(url, False, 0)
