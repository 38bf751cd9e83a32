"""Тесты URL и header утилит."""

import pytest

from http_kit.core.exceptions import InvalidURLError
from http_kit.utils.urls import canonical_header_key, join_url, mask_url


class TestJoinURL:

    @pytest.mark.parametrize("base,path,expected", [
        ("https://api.example.com", "/users/1", "https://api.example.com/users/1"),
        ("https://api.example.com/v1", "users", "https://api.example.com/v1/users"),
        ("https://api.example.com/v1/", "/users/", "https://api.example.com/v1/users/"),
        ("https://api.example.com", "/a/./b//c", "https://api.example.com/a/b/c"),
        ("mock://hostname", "/a/../b", "mock://hostname/b"),
        ("mock://hostname", "", "mock://hostname"),
        ("mock://hostname", None, "mock://hostname"),
        ("https://api.example.com", "/a b", "https://api.example.com/a%20b"),
    ])
    def test_join(self, base, path, expected):
        assert join_url(base, path) == expected

    def test_question_mark_escaped(self):
        """'?' в path экранируется и не начинает query string."""
        assert join_url("http://example.com", "/path?query=string") == (
            "http://example.com/path%3Fquery=string"
        )

    @pytest.mark.parametrize("base,path", [
        (":foo", "/x"),
        ("http://[::1", "/"),
        ("http://example.com:port", "/"),
        ("https://api.example.com", "/bad\x7fpath"),
        ("https://api.example.com\n", "/"),
    ])
    def test_invalid(self, base, path):
        with pytest.raises(InvalidURLError):
            join_url(base, path)


class TestCanonicalHeaderKey:

    @pytest.mark.parametrize("key,expected", [
        ("content-type", "Content-Type"),
        ("x-API-key", "X-Api-Key"),
        ("ACCEPT", "Accept"),
        ("bad key", "bad key"),
        ("", ""),
    ])
    def test_canonical(self, key, expected):
        assert canonical_header_key(key) == expected


class TestMaskURL:

    def test_masks_sensitive_params(self):
        assert mask_url("https://api.example.com/data?token=abc&page=2") == (
            "https://api.example.com/data?token=REDACTED&page=2"
        )

    def test_case_insensitive_param_names(self):
        assert "API_KEY=REDACTED" in mask_url("https://api.example.com/?API_KEY=x")

    @pytest.mark.parametrize("url", [None, "", "https://api.example.com/data"])
    def test_unchanged(self, url):
        assert mask_url(url) == url
