from __future__ import annotations

import logging
import typing as tp
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

from cacheheaders._core._cache_control import CacheControl, RequestCacheControl, ResponseCacheControl
from cacheheaders._core.models import HttpMessage, HttpRequest, HttpResponse
from cacheheaders._exceptions import ArgumentError
from cacheheaders._utils import BaseClock, Clock, format_http_date, parse_date

logger = logging.getLogger("cacheheaders.cache_util")

CACHEABLE_STATUS_CODES = (200, 203, 204, 206, 300, 301, 404, 405, 410, 414, 501)
SAFE_METHODS = ("GET", "HEAD")

TResponse = tp.TypeVar("TResponse", bound=HttpResponse)
TimeValue = tp.Union[int, float, str, date, datetime]

__all__ = ("CacheOptions", "CacheUtil", "CACHEABLE_STATUS_CODES", "SAFE_METHODS")


@dataclass
class CacheOptions:
    """
    Configuration options for `CacheUtil`.

    Attributes:
    ----------
    shared : bool
        When True, freshness is computed for a shared cache (proxy, CDN) and
        the s-maxage directive takes precedence over max-age.
        When False, s-maxage is ignored as a private cache (browser) would.

        Default: True

    cacheable_status_codes : tuple[int, ...]
        Status codes of responses that may be cached at all.

        Default: 200, 203, 204, 206, 300, 301, 404, 405, 410, 414, 501

    safe_methods : tuple[str, ...]
        Request methods for which If-Modified-Since is evaluated.

        Default: ("GET", "HEAD")
    """

    shared: bool = True
    cacheable_status_codes: tp.Tuple[int, ...] = field(default_factory=lambda: CACHEABLE_STATUS_CODES)
    safe_methods: tp.Tuple[str, ...] = field(default_factory=lambda: SAFE_METHODS)


def _strip_etag(etag: str) -> str:
    etag = etag.strip()
    if etag[:2] in ("W/", "w/"):
        etag = etag[2:]
    return etag.strip('"')


class CacheUtil:
    """
    Reads and writes the caching headers of HTTP messages.

    Messages are never changed in place, every `with_*` method returns the
    message produced by its `with_header`. Any object implementing the
    `HttpRequest` / `HttpResponse` protocols can be used.

    Examples:
        >>> from cacheheaders import CacheUtil, Response
        >>> util = CacheUtil()
        >>> response = util.with_cache(Response(200), public=True, lifetime=3600)
        >>> response.get_header_line("Cache-Control")
        'public, max-age=3600'
        >>> util.get_lifetime(response)
        3600
    """

    def __init__(
        self,
        options: tp.Optional[CacheOptions] = None,
        clock: tp.Optional[BaseClock] = None,
    ) -> None:
        self._options = options if options is not None else CacheOptions()
        self._clock = clock if clock is not None else Clock()

    def with_cache(self, response: TResponse, public: bool = False, lifetime: int = 600) -> TResponse:
        """
        Allows the response to be cached for `lifetime` seconds.

        By default only private caches (browsers) may store the response,
        pass `public=True` to allow shared caches as well.
        """
        control = ResponseCacheControl()
        control = control.with_public() if public else control.with_private()
        control = control.with_max_age(lifetime)

        return self.with_cache_control(response, control)

    def with_cache_prevention(self, response: TResponse) -> TResponse:
        return self.with_cache_control(response, "no-cache, no-store, must-revalidate")

    def with_cache_control(self, response: TResponse, control: tp.Union[str, CacheControl]) -> TResponse:
        return response.with_header("Cache-Control", str(control))

    def with_expires(self, response: TResponse, time: TimeValue) -> TResponse:
        return response.with_header("Expires", format_http_date(self.get_time_from_value(time)))

    def with_relative_expires(self, response: TResponse, seconds: int) -> TResponse:
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise ArgumentError(
                f"Expected an integer with the number of seconds, received {type(seconds).__name__}."
            )
        if seconds < 0:
            raise ArgumentError(f"Expected a non-negative number of seconds, received {seconds}.")

        return self.with_expires(response, self._clock.now() + seconds)

    def with_etag(self, response: TResponse, etag: str, weak: bool = False) -> TResponse:
        if not (len(etag) >= 2 and etag.startswith('"') and etag.endswith('"')):
            etag = f'"{etag}"'
        if weak:
            etag = f"W/{etag}"

        return response.with_header("ETag", etag)

    def with_last_modified(self, response: TResponse, time: TimeValue) -> TResponse:
        return response.with_header("Last-Modified", format_http_date(self.get_time_from_value(time)))

    def is_not_modified(self, request: HttpRequest, response: HttpResponse) -> bool:
        """
        Checks whether the client's copy of the response is still valid.

        If-None-Match takes precedence: when the request carries it, only the
        entity tags decide. Otherwise If-Modified-Since is compared with the
        Last-Modified date of the response, for safe methods only.

        See also (https://www.rfc-editor.org/rfc/rfc7232#section-6).
        """
        if_none_match = request.get_header_line("If-None-Match")

        if if_none_match:
            etag = _strip_etag(response.get_header_line("ETag"))

            for candidate in if_none_match.split(","):
                candidate = candidate.strip()
                if candidate == "*" or (etag and _strip_etag(candidate) == etag):
                    logger.debug(f"Considering the response as not modified since the entity tag {candidate} matches.")
                    return True

            logger.debug("Considering the response as modified since none of the entity tags match.")
            return False

        if request.method.upper() not in self._options.safe_methods:
            logger.debug(
                f"Considering the response as modified since the request method ({request.method}) is not safe."
            )
            return False

        modified_since = parse_date(request.get_header_line("If-Modified-Since"))
        last_modified = parse_date(response.get_header_line("Last-Modified"))

        if modified_since is None or last_modified is None:
            return False

        return modified_since >= last_modified

    def is_cacheable(self, response: HttpResponse) -> bool:
        """
        Determines whether the response may be stored by a cache.

        The status code has to be cacheable by default (RFC 7231 Section 6.1)
        and the Cache-Control header, if any, must neither contain `private`
        nor `no-store`.
        """
        if response.status_code not in self._options.cacheable_status_codes:
            logger.debug(
                f"Considering the response as not cacheable since its status code ({response.status_code})"
                " is not in the list of cacheable status codes."
            )
            return False

        if not response.has_header("Cache-Control"):
            return True

        control = self.get_cache_control(response)

        if control.is_private():
            logger.debug("Considering the response as not cacheable since it contains the private directive.")
            return False

        if control.has_no_store():
            logger.debug("Considering the response as not cacheable since it contains the no-store directive.")
            return False

        return True

    def is_fresh(self, response: HttpResponse) -> tp.Optional[bool]:
        """
        Checks whether the age of the response is still within its lifetime.

        Returns None when the lifetime cannot be determined.
        """
        lifetime = self.get_lifetime(response)

        if lifetime is None:
            return None

        age = self.get_age(response)

        if age is None:
            age = 0

        fresh = lifetime > 0 and age < lifetime
        logger.debug(
            f"Considering the response as {'fresh' if fresh else 'stale'} "
            f"since its age ({age}) and freshness lifetime ({lifetime}) are known."
        )
        return fresh

    def get_lifetime(self, response: HttpResponse) -> tp.Optional[int]:
        """
        Calculates the freshness lifetime of the response in seconds.

        When the response has a Cache-Control header, only its s-maxage and
        max-age directives are considered. Otherwise the Expires header is
        used, relative to the current time.

        See also (https://www.rfc-editor.org/rfc/rfc7234#section-4.2.1).
        """
        if response.has_header("Cache-Control"):
            control = self.get_cache_control(response)

            if self._options.shared and control.get_shared_max_age() is not None:
                return control.get_shared_max_age()

            return control.get_max_age()

        expires = response.get_header_line("Expires")

        if expires:
            expires_timestamp = parse_date(expires)

            if expires_timestamp is None:
                logger.debug(f"Could not parse the Expires header ({expires}).")
                return None

            return max(0, expires_timestamp - self._clock.now())

        return None

    def get_age(self, response: HttpResponse) -> tp.Optional[int]:
        """
        Calculates the age of the response in seconds.

        The Age header is used when present, otherwise the apparent age
        is derived from the Date header.
        """
        age = response.get_header_line("Age").strip()

        if age:
            if age.isascii() and age.isdigit():
                return int(age)
            logger.debug(f"Ignoring the Age header since {age!r} is not a number of seconds.")

        date_value = response.get_header_line("Date")

        if date_value:
            date_timestamp = parse_date(date_value)

            if date_timestamp is None:
                logger.debug(f"Could not parse the Date header ({date_value}).")
                return None

            return max(0, self._clock.now() - date_timestamp)

        return None

    def has_state_validator(self, response: HttpResponse) -> bool:
        return response.has_header("ETag") or response.has_header("Last-Modified")

    def get_cache_control(self, response: HttpMessage) -> ResponseCacheControl:
        return tp.cast(ResponseCacheControl, ResponseCacheControl.from_string(response.get_header_line("Cache-Control")))

    def get_request_cache_control(self, request: HttpMessage) -> RequestCacheControl:
        return tp.cast(RequestCacheControl, RequestCacheControl.from_string(request.get_header_line("Cache-Control")))

    def get_time_from_value(self, value: TimeValue) -> int:
        """
        Converts a timestamp, a date string or a date/datetime to a UTC timestamp.

        Strings may be HTTP-dates or ISO 8601 dates. Values without a time zone
        are read as UTC.
        """
        if isinstance(value, bool):
            raise ArgumentError(f"Could not create a valid date from {type(value).__name__}.")

        if isinstance(value, (int, float)):
            try:
                datetime.fromtimestamp(value, tz=timezone.utc)
            except (OverflowError, ValueError, OSError):
                raise ArgumentError(f"Could not create a valid date from {type(value).__name__}.") from None
            return int(value)

        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return int(value.timestamp())

        if isinstance(value, date):
            return int(datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp())

        if isinstance(value, str):
            timestamp = parse_date(value)
            if timestamp is not None:
                return timestamp

            text = value.strip()
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                raise ArgumentError("Could not create a valid date from string.") from None
            return self.get_time_from_value(parsed)

        raise ArgumentError(f"Could not create a valid date from {type(value).__name__}.")
