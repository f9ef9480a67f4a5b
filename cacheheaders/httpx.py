from __future__ import annotations

from dataclasses import dataclass
from typing import Union, overload

try:
    import httpx
except ImportError as e:
    raise ImportError(
        "httpx is required to use cacheheaders.httpx module. "
        "Please install cacheheaders with the 'httpx' extra, "
        "e.g., 'pip install cacheheaders[httpx]'."
    ) from e

from cacheheaders._core._headers import Headers
from cacheheaders._core.models import Request, Response

__all__ = ("HttpxRequest", "HttpxResponse", "httpx_to_internal", "internal_to_httpx")


@overload
def httpx_to_internal(
    value: httpx.Request,
) -> Request: ...


@overload
def httpx_to_internal(
    value: httpx.Response,
) -> Response: ...


def httpx_to_internal(
    value: Union[httpx.Request, httpx.Response],
) -> Union[Request, Response]:
    """
    Convert httpx.Request/httpx.Response to internal Request/Response.

    Only the parts needed for cache handling are kept, bodies are dropped.
    """
    headers = Headers(_headers_dict(value.headers))

    if isinstance(value, httpx.Request):
        return Request(method=value.method, url=str(value.url), headers=headers)
    return Response(status_code=value.status_code, headers=headers)


@overload
def internal_to_httpx(
    value: Request,
) -> httpx.Request: ...


@overload
def internal_to_httpx(
    value: Response,
) -> httpx.Response: ...


def internal_to_httpx(
    value: Union[Request, Response],
) -> Union[httpx.Request, httpx.Response]:
    """
    Convert internal Request/Response to httpx.Request/httpx.Response without a body.
    """
    headers = [(key, item) for key in value.headers for item in value.headers.get_list(key) or []]

    if isinstance(value, Request):
        return httpx.Request(method=value.method, url=value.url, headers=headers)
    return httpx.Response(status_code=value.status_code, headers=headers)


def _headers_dict(headers: httpx.Headers) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {}
    for key, item in headers.multi_items():
        result.setdefault(key, []).append(item)
    return result


def _replaced_headers(headers: httpx.Headers, name: str, value: str) -> httpx.Headers:
    headers = headers.copy()
    headers[name] = value
    return headers


@dataclass(frozen=True)
class HttpxRequest:
    """
    Exposes an httpx.Request to `CacheUtil`.
    """

    request: httpx.Request

    @property
    def method(self) -> str:
        return self.request.method

    def get_header_line(self, name: str) -> str:
        return ", ".join(self.request.headers.get_list(name))

    def has_header(self, name: str) -> bool:
        return name in self.request.headers

    def with_header(self, name: str, value: str) -> "HttpxRequest":
        request = httpx.Request(
            method=self.request.method,
            url=self.request.url,
            headers=_replaced_headers(self.request.headers, name, value),
            stream=self.request.stream,
            extensions=self.request.extensions,
        )
        return HttpxRequest(request)


@dataclass(frozen=True)
class HttpxResponse:
    """
    Exposes an httpx.Response to `CacheUtil`.

    `with_header` builds a new httpx.Response. When the body of the original
    response has already been read, the copy holds the decoded body, so its
    Content-Encoding and Content-Length headers are dropped.
    """

    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def get_header_line(self, name: str) -> str:
        return ", ".join(self.response.headers.get_list(name))

    def has_header(self, name: str) -> bool:
        return name in self.response.headers

    def with_header(self, name: str, value: str) -> "HttpxResponse":
        headers = _replaced_headers(self.response.headers, name, value)

        try:
            content = self.response.content
        except httpx.ResponseNotRead:
            response = httpx.Response(
                status_code=self.response.status_code,
                headers=headers,
                stream=self.response.stream,
                extensions=self.response.extensions,
            )
        else:
            for key in ("Content-Encoding", "Content-Length"):
                if key.lower() != name.lower() and key in headers:
                    del headers[key]
            response = httpx.Response(
                status_code=self.response.status_code,
                headers=headers,
                content=content,
                extensions=self.response.extensions,
            )

        try:
            response.request = self.response.request
        except RuntimeError:
            # the response is not bound to a request
            pass
        return HttpxResponse(response)
