from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Protocol, runtime_checkable

from typing_extensions import Self

from cacheheaders._core._headers import Headers


@runtime_checkable
class HttpMessage(Protocol):
    """
    The part of an HTTP message that cache handling relies on.

    Implementations never change in place: `with_header` returns a copy.
    """

    def get_header_line(self, name: str) -> str:
        """Return all values of the header joined by ", ", or "" when absent."""
        ...

    def has_header(self, name: str) -> bool: ...

    def with_header(self, name: str, value: str) -> Self: ...


@runtime_checkable
class HttpRequest(HttpMessage, Protocol):
    method: str


@runtime_checkable
class HttpResponse(HttpMessage, Protocol):
    status_code: int


class _HeaderAccess:
    headers: Headers

    def get_header_line(self, name: str) -> str:
        return self.headers.get_line(name)

    def has_header(self, name: str) -> bool:
        return name in self.headers

    def with_header(self, name: str, value: str) -> Self:
        return replace(self, headers=self.headers.replaced(name, value))  # type: ignore[type-var]

    def without_header(self, name: str) -> Self:
        return replace(self, headers=self.headers.removed(name))  # type: ignore[type-var]


@dataclass(frozen=True)
class Request(_HeaderAccess):
    method: str = "GET"
    url: str = "/"
    headers: Headers = field(default_factory=Headers)


@dataclass(frozen=True)
class Response(_HeaderAccess):
    status_code: int = 200
    headers: Headers = field(default_factory=Headers)
