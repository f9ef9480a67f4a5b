from freezegun import freeze_time

from cacheheaders._utils import Clock, format_http_date, generate_http_date, parse_date


def test_parse_date() -> None:
    date = "Mon, 25 Aug 2015 12:00:00 GMT"
    timestamp = parse_date(date)
    assert timestamp == 1440504000


def test_parse_date_with_offset() -> None:
    assert parse_date("Mon, 25 Aug 2015 14:00:00 +0200") == 1440504000


def test_parse_rfc850_date() -> None:
    assert parse_date("Monday, 25-Aug-15 12:00:00 GMT") == 1440504000


def test_parse_asctime_date() -> None:
    assert parse_date("Mon Aug 25 12:00:00 2015") == 1440504000


def test_parse_invalid_date() -> None:
    date = "0"
    timestamp = parse_date(date)
    assert timestamp is None


def test_parse_empty_date() -> None:
    assert parse_date("") is None


def test_format_http_date() -> None:
    assert format_http_date(1439231412) == "Mon, 10 Aug 2015 18:30:12 GMT"


@freeze_time("Mon, 25 Aug 2015 12:00:00 GMT")
def test_generate_http_date() -> None:
    assert generate_http_date() == "Mon, 25 Aug 2015 12:00:00 GMT"


@freeze_time("Mon, 25 Aug 2015 12:00:00 GMT")
def test_clock() -> None:
    assert Clock().now() == 1440504000


def test_parse_out_of_range_date() -> None:
    assert parse_date("Mon, 10 Aug 99999 18:30:12 GMT") is None
