from cacheheaders._core._cache_control import (
    CacheControl as CacheControl,
    DirectiveHandler as DirectiveHandler,
    DirectiveValue as DirectiveValue,
    RequestCacheControl as RequestCacheControl,
    ResponseCacheControl as ResponseCacheControl,
)
from cacheheaders._core._headers import Headers as Headers
from cacheheaders._core.models import (
    HttpMessage as HttpMessage,
    HttpRequest as HttpRequest,
    HttpResponse as HttpResponse,
    Request as Request,
    Response as Response,
)

__all__ = (
    ## Directives
    "CacheControl",
    "RequestCacheControl",
    "ResponseCacheControl",
    "DirectiveHandler",
    "DirectiveValue",
    ## Headers
    "Headers",
    ## Models
    "HttpMessage",
    "HttpRequest",
    "HttpResponse",
    "Request",
    "Response",
)
