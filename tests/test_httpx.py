import httpx

from cacheheaders import CacheUtil, Headers, Request, Response
from cacheheaders.httpx import HttpxRequest, HttpxResponse, httpx_to_internal, internal_to_httpx


def test_httpx_to_internal_request() -> None:
    request = httpx.Request("GET", "https://example.com/resource", headers={"If-None-Match": '"foo"'})

    internal = httpx_to_internal(request)

    assert internal.method == "GET"
    assert internal.url == "https://example.com/resource"
    assert internal.get_header_line("If-None-Match") == '"foo"'


def test_httpx_to_internal_response_keeps_repeated_headers() -> None:
    response = httpx.Response(200, headers=[("Cache-Control", "public"), ("Cache-Control", "max-age=60")])

    internal = httpx_to_internal(response)

    assert internal.status_code == 200
    assert internal.headers.get_list("cache-control") == ["public", "max-age=60"]
    assert CacheUtil().get_lifetime(internal) == 60


def test_internal_to_httpx() -> None:
    response = internal_to_httpx(Response(304, Headers({"ETag": '"foo"'})))
    request = internal_to_httpx(Request("HEAD", "https://example.com/", Headers({"Accept": "text/html"})))

    assert response.status_code == 304
    assert response.headers["etag"] == '"foo"'
    assert request.method == "HEAD"
    assert request.headers["accept"] == "text/html"


def test_httpx_response_with_header_keeps_the_body() -> None:
    original = httpx.Response(200, headers={"ETag": '"foo"'}, content=b"hello")

    updated = HttpxResponse(original).with_header("Cache-Control", "max-age=60")

    assert updated.response.headers["cache-control"] == "max-age=60"
    assert updated.response.headers["etag"] == '"foo"'
    assert updated.response.content == b"hello"
    assert "cache-control" not in original.headers


def test_httpx_response_keeps_the_request() -> None:
    request = httpx.Request("GET", "https://example.com/")
    original = httpx.Response(200, content=b"hello", request=request)

    updated = HttpxResponse(original).with_header("ETag", '"foo"')

    assert updated.response.request is request


def test_cache_util_with_httpx_messages() -> None:
    util = CacheUtil()
    response = util.with_etag(HttpxResponse(httpx.Response(200, content=b"hello")), "foo")
    response = util.with_cache(response, public=True, lifetime=60)

    assert response.response.headers["cache-control"] == "public, max-age=60"
    assert util.is_cacheable(response)
    assert util.get_lifetime(response) == 60

    request = HttpxRequest(httpx.Request("GET", "https://example.com/", headers={"If-None-Match": '"foo"'}))
    assert util.is_not_modified(request, response)


def test_httpx_request_with_header() -> None:
    original = HttpxRequest(httpx.Request("GET", "https://example.com/"))

    updated = original.with_header("Cache-Control", "no-cache")

    assert updated.method == "GET"
    assert updated.get_header_line("Cache-Control") == "no-cache"
    assert not original.has_header("Cache-Control")
