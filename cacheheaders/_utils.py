from __future__ import annotations

import time
import typing as tp
from email.utils import formatdate, mktime_tz, parsedate_tz


class BaseClock:
    def now(self) -> int:
        raise NotImplementedError()


class Clock(BaseClock):
    def now(self) -> int:
        return int(time.time())


def parse_date(date: str) -> tp.Optional[int]:
    """
    Parse an HTTP-date into a unix timestamp.

    All three formats allowed by RFC 7231 Section 7.1.1.1 are accepted
    (IMF-fixdate, RFC 850 and asctime). A date without a zone is read as GMT.

    Examples:
        >>> parse_date("Mon, 10 Aug 2015 18:30:12 GMT")
        1439231412
        >>> parse_date("not a date") is None
        True
    """
    parsed = parsedate_tz(date)
    if parsed is None:
        return None
    try:
        return int(mktime_tz(parsed))
    except (ValueError, OverflowError):
        return None


def format_http_date(timestamp: tp.Union[int, float]) -> str:
    """
    Format a unix timestamp as an IMF-fixdate.

    Example output: 'Mon, 10 Aug 2015 18:30:12 GMT'
    """
    return formatdate(timeval=timestamp, localtime=False, usegmt=True)


def generate_http_date() -> str:
    """
    Generate a Date header value for HTTP responses.
    Returns date in RFC 1123 format (required by HTTP/1.1).

    Example output: 'Sun, 26 Oct 2025 12:34:56 GMT'
    """
    return formatdate(timeval=None, localtime=False, usegmt=True)
