import dataclasses

import pytest

from cacheheaders import Headers, HttpMessage, HttpRequest, HttpResponse, Request, Response


def test_response_with_header_returns_a_copy() -> None:
    response = Response(200, Headers({"ETag": '"foo"'}))

    updated = response.with_header("Cache-Control", "max-age=60")

    assert updated.get_header_line("cache-control") == "max-age=60"
    assert updated.get_header_line("ETag") == '"foo"'
    assert not response.has_header("Cache-Control")


def test_with_header_replaces_all_values() -> None:
    request = Request("GET", "/", Headers({"If-None-Match": ['"foo"', '"bar"']}))

    updated = request.with_header("if-none-match", '"baz"')

    assert updated.get_header_line("If-None-Match") == '"baz"'
    assert request.get_header_line("If-None-Match") == '"foo", "bar"'


def test_without_header() -> None:
    response = Response(200, Headers({"ETag": '"foo"'}))

    assert not response.without_header("etag").has_header("ETag")
    assert response.has_header("ETag")


def test_missing_header_line_is_empty() -> None:
    assert Response().get_header_line("Age") == ""
    assert not Response().has_header("Age")


def test_models_are_frozen() -> None:
    response = Response()

    with pytest.raises(dataclasses.FrozenInstanceError):
        response.status_code = 304  # type: ignore[misc]


def test_models_implement_the_protocols() -> None:
    assert isinstance(Request(), HttpRequest)
    assert isinstance(Response(), HttpResponse)
    assert isinstance(Response(), HttpMessage)
    assert not isinstance(object(), HttpMessage)


def test_defaults() -> None:
    assert Request() == Request(method="GET", url="/", headers=Headers())
    assert Response().status_code == 200
