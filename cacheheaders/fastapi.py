from __future__ import annotations

import typing as t

from cacheheaders._core._cache_control import ResponseCacheControl
from cacheheaders._utils import generate_http_date

try:
    import fastapi
except ImportError as e:
    raise ImportError(
        "fastapi is required to use cacheheaders.fastapi module. "
        "Please install cacheheaders with the 'fastapi' extra, "
        "e.g., 'pip install cacheheaders[fastapi]'."
    ) from e

__all__ = ("cache",)


def _with_field_names(control: ResponseCacheControl, name: str, value: bool | list[str]) -> ResponseCacheControl:
    if isinstance(value, list):
        return control.with_directive(name, ", ".join(value) if value else None)
    return control.with_flag(name, value)


def cache(
    *,
    max_age: int | None = None,
    s_maxage: int | None = None,
    public: bool = False,
    private: bool | list[str] = False,
    no_cache: bool | list[str] = False,
    no_store: bool = False,
    no_transform: bool = False,
    must_revalidate: bool = False,
    proxy_revalidate: bool = False,
    immutable: bool = False,
    stale_while_revalidate: int | None = None,
    stale_if_error: int | None = None,
) -> t.Any:
    """
    Add HTTP Cache-Control headers to FastAPI responses.

    Args:
        max_age: Maximum time in seconds a response can be cached.
            [RFC 7234, Section 5.2.2.8]

        s_maxage: Maximum time in seconds for shared caches (proxies, CDNs).
            [RFC 7234, Section 5.2.2.9]

        public: Marks response as cacheable by any cache.
            [RFC 7234, Section 5.2.2.5]

        private: Marks response as cacheable only by private caches (browsers).
            [RFC 7234, Section 5.2.2.6]
            Can be True or a list of field names, e.g. private=["Set-Cookie"]
            adds 'private="Set-Cookie"'.

        no_cache: Response can be cached but MUST be revalidated before use.
            [RFC 7234, Section 5.2.2.2]
            Can be True or a list of field names.

        no_store: Response MUST NOT be stored in any cache.
            [RFC 7234, Section 5.2.2.3]

        no_transform: Prohibits any transformations to the response.
            [RFC 7234, Section 5.2.2.4]

        must_revalidate: Cache MUST revalidate stale responses.
            [RFC 7234, Section 5.2.2.1]

        proxy_revalidate: Like must_revalidate but only for shared caches.
            [RFC 7234, Section 5.2.2.7]

        immutable: Response body will never change.
            [RFC 8246]

        stale_while_revalidate: Allow stale response while revalidating in background.
            [RFC 5861, Section 3]

        stale_if_error: Allow stale response if origin server returns error.
            [RFC 5861, Section 4]

    Returns:
        A dependency that adds the Date and Cache-Control headers to the response.

    Examples:
        >>> from fastapi import FastAPI
        >>> from cacheheaders.fastapi import cache
        >>>
        >>> app = FastAPI()
        >>>
        >>> @app.get("/static/logo.png")
        >>> async def get_logo(
        ...     _: None = cache(max_age=31536000, public=True, immutable=True)
        ... ):
        ...     return {"image": "logo.png"}
    """
    control = (
        ResponseCacheControl()
        .with_max_age(max_age)
        .with_shared_max_age(s_maxage)
        .with_stale_while_revalidate(stale_while_revalidate)
        .with_stale_if_error(stale_if_error)
        .with_public(public)
    )
    control = _with_field_names(control, "private", private)
    control = _with_field_names(control, "no-cache", no_cache)
    control = (
        control.with_no_store(no_store)
        .with_no_transform(no_transform)
        .with_must_revalidate(must_revalidate)
        .with_proxy_revalidate(proxy_revalidate)
        .with_immutable(immutable)
    )
    header = str(control)

    def add_cache_headers(response: fastapi.Response) -> t.Any:
        """Add Cache-Control headers to the response."""
        response.headers["Date"] = generate_http_date()

        if header:
            response.headers["Cache-Control"] = header

    return fastapi.Depends(add_cache_headers)
