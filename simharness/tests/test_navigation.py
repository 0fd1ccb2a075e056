"""
Tests for simulated locations and link classification.
"""

import pytest

from simharness.core.errors import ConstructionError, NavigationError
from simharness.navigation import External, Internal, Location, resolve_href


def test_parse_defaults_path():
    loc = Location.parse("http://localhost:3000")
    assert loc.origin == "http://localhost:3000"
    assert loc.path == "/"
    assert loc.full == "http://localhost:3000/"


def test_parse_keeps_query_and_fragment():
    loc = Location.parse("https://example.com/a/b?q=1#top")
    assert loc.origin == "https://example.com"
    assert loc.path == "/a/b?q=1#top"


@pytest.mark.parametrize("url", ["/relative", "example.com", ""])
def test_parse_rejects_non_absolute(url):
    with pytest.raises(ConstructionError, match="not an absolute URL"):
        Location.parse(url)


def test_navigate():
    loc = Location.parse("https://example.com/path")
    assert loc.navigate("/next").full == "https://example.com/next"
    assert loc.navigate("sibling").full == "https://example.com/sibling"


BASE = Location.parse("http://localhost:3000/Main.elm")


def test_root_relative_is_internal():
    assert resolve_href(BASE, "/settings") == Internal("http://localhost:3000/settings")


def test_relative_and_fragment_are_internal():
    assert resolve_href(BASE, "other") == Internal("http://localhost:3000/other")
    assert resolve_href(BASE, "#top") == Internal("http://localhost:3000/Main.elm#top")


def test_same_origin_absolute_is_internal():
    assert resolve_href(BASE, "http://localhost:3000/x") == Internal("http://localhost:3000/x")


def test_other_origin_is_external():
    assert resolve_href(BASE, "https://example.com/link") == External("https://example.com/link")
    assert resolve_href(BASE, "http://localhost:4000/") == External("http://localhost:4000/")
    assert resolve_href(BASE, "mailto:a@example.com") == External("mailto:a@example.com")


def test_no_location_absolute_is_external():
    assert resolve_href(None, "https://example.com/link") == External("https://example.com/link")


def test_no_location_relative_fails():
    with pytest.raises(NavigationError, match="cannot resolve relative href '/settings'"):
        resolve_href(None, "/settings")
