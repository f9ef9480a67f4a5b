from cacheheaders._cache_util import (
    CACHEABLE_STATUS_CODES as CACHEABLE_STATUS_CODES,
    SAFE_METHODS as SAFE_METHODS,
    CacheOptions as CacheOptions,
    CacheUtil as CacheUtil,
)
from cacheheaders._core import (
    CacheControl as CacheControl,
    DirectiveHandler as DirectiveHandler,
    DirectiveValue as DirectiveValue,
    Headers as Headers,
    HttpMessage as HttpMessage,
    HttpRequest as HttpRequest,
    HttpResponse as HttpResponse,
    Request as Request,
    RequestCacheControl as RequestCacheControl,
    Response as Response,
    ResponseCacheControl as ResponseCacheControl,
)
from cacheheaders._exceptions import ArgumentError as ArgumentError, CacheHeadersError as CacheHeadersError
from cacheheaders._utils import BaseClock as BaseClock, Clock as Clock

__all__ = (
    # Cache util
    "CacheUtil",
    "CacheOptions",
    "CACHEABLE_STATUS_CODES",
    "SAFE_METHODS",
    ## Clocks
    "BaseClock",
    "Clock",
    # Directives
    "CacheControl",
    "RequestCacheControl",
    "ResponseCacheControl",
    "DirectiveHandler",
    "DirectiveValue",
    # Models
    "Headers",
    "HttpMessage",
    "HttpRequest",
    "HttpResponse",
    "Request",
    "Response",
    # Exceptions
    "CacheHeadersError",
    "ArgumentError",
)

__version__ = "0.1.0"
