# tests/test_url_paths.py

import pytest

from core.url_paths import create_path_from_uri, normalize_url, strip_context_path


@pytest.mark.parametrize(
    "url, expected",
    [
        ("/en/products//about.html", "/en/products/about.html"),
        ("//about.html", "/about.html"),
        ("/en/./products/../contact", "/en/contact"),
        ("/en/products/", "/en/products/"),
        ("/../..", "/"),
        ("", "/"),
        ("https://cdn.example.com//media//logo.png", "https://cdn.example.com/media/logo.png"),
        ("https://cdn.example.com", "https://cdn.example.com"),
    ],
)
def test_normalize_url(url, expected):
    assert normalize_url(url) == expected


@pytest.mark.parametrize(
    "uri, level, expected",
    [
        ("/en/products/123", 2, "/en/products"),
        ("/en/products/123", 1, "/en"),
        ("/en", 3, "/en"),
        ("/en/index.html", 2, "/en"),
        ("/en/products/", 2, "/en/products"),
        ("/en/products/123?page=2#top", 2, "/en/products"),
        ("/en/products/123", 0, "/"),
    ],
)
def test_create_path_from_uri(uri, level, expected):
    assert create_path_from_uri(uri, level) == expected


class TestStripContextPath:
    def test_strips_prefix(self):
        assert strip_context_path("/app/en/products", "/app") == "/en/products"

    def test_exact_context_path_becomes_empty(self):
        assert strip_context_path("/app", "/app/") == ""

    def test_requires_segment_boundary(self):
        assert strip_context_path("/application/en", "/app") == "/application/en"

    def test_empty_context_path(self):
        assert strip_context_path("/en", "") == "/en"
