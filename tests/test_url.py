"""Tests for URL parsing and URL inputs."""

from __future__ import annotations

import pytest

from debouncer import DataInput, QueryParamInput, Url, UrlInput, parse_url


class TestParseUrl:
    def test_absolute_url(self) -> None:
        url = parse_url("https://tracker.example/go?url=https://dest.example/")
        assert url is not None
        assert url.raw == "https://tracker.example/go?url=https://dest.example/"
        assert str(url) == url.raw

    def test_query_items_in_order(self) -> None:
        url = parse_url("https://a.example/p?x=1&y&z=%41&x=2")
        assert url is not None
        assert url.query_items == (("x", "1"), ("y", None), ("z", "A"), ("x", "2"))

    def test_no_query(self) -> None:
        url = parse_url("https://a.example/p")
        assert url is not None
        assert url.query_items == ()

    def test_fragment_not_part_of_query(self) -> None:
        url = parse_url("https://a.example/?u=1#frag")
        assert url is not None
        assert url.query_param("u") == "1"

    def test_plus_is_not_a_space(self) -> None:
        url = parse_url("https://a.example/?q=a+b/c==")
        assert url is not None
        assert url.query_param("q") == "a+b/c=="

    def test_relative_reference_accepted(self) -> None:
        assert parse_url("/path?x=1") is not None

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "not a url",
            "https://a.example/<script>",
            "https://a.example/%zz",
            "https://a.example/é",
            "https://a.example/\n",
            "http://[::1",
            "http://host:port/",
        ],
    )
    def test_invalid(self, text: str) -> None:
        assert parse_url(text) is None

    def test_non_string(self) -> None:
        assert parse_url(None) is None  # type: ignore[arg-type]


class TestQueryParam:
    def test_first_occurrence_wins(self) -> None:
        url = parse_url("https://a.example/?u=first&u=second")
        assert url is not None
        assert url.query_param("u") == "first"

    def test_name_is_case_sensitive(self) -> None:
        url = parse_url("https://a.example/?URL=x")
        assert url is not None
        assert url.query_param("url") is None

    def test_item_without_value(self) -> None:
        url = parse_url("https://a.example/?u&u=later")
        assert url is not None
        assert url.query_param("u") is None

    def test_empty_value(self) -> None:
        url = parse_url("https://a.example/?u=")
        assert url is not None
        assert url.query_param("u") == ""


class TestInputs:
    def test_url_input(self) -> None:
        url = Url(raw="https://a.example/")
        assert UrlInput().get(url) == "https://a.example/"

    def test_query_param_input(self) -> None:
        url = parse_url("https://a.example/?u=1")
        assert QueryParamInput("u").get(url) == "1"
        assert QueryParamInput("v").get(url) is None

    def test_protocol(self) -> None:
        assert isinstance(UrlInput(), DataInput)
        assert isinstance(QueryParamInput("u"), DataInput)
