from __future__ import annotations

import logging
import re
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    FrozenSet,
    Mapping,
    Optional,
    Union,
)

from typing_extensions import Self

from cacheheaders._core._headers import (
    http_quote,
    http_unquote,
    is_token_string,
    split_header_value,
)
from cacheheaders._exceptions import ArgumentError

__all__ = (
    "CacheControl",
    "DirectiveHandler",
    "DirectiveValue",
    "RequestCacheControl",
    "ResponseCacheControl",
)

logger = logging.getLogger("cacheheaders.cache_control")

DirectiveValue = Union[bool, int, str]

DirectiveHandler = Callable[[Any, Optional[str]], Any]
"""
Called by `from_string` with the control parsed so far and the raw value of the
directive (`None` for a bare flag). Returning a `CacheControl` continues
parsing with it; any other value is returned from `from_string` directly.
"""

_INTEGER = re.compile(r"^[+-]?\d+$")


def unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == '"':
        eaten, result = http_unquote(value)
        if eaten == len(value):
            return result
    return value


def parse_seconds(value: Optional[str]) -> Optional[int]:
    """Parse a delta-seconds value, return None if invalid."""
    if value is None:
        return None
    value = unquote(value.strip())
    if not _INTEGER.match(value):
        return None
    return int(value)


def _seconds_handler(name: str) -> DirectiveHandler:
    def handler(control: "CacheControl", value: Optional[str]) -> "CacheControl":
        seconds = parse_seconds(value)
        if seconds is None:
            logger.debug(f"Ignoring the '{name}' directive since {value!r} is not a number of seconds.")
            return control
        return control.with_directive(name, seconds)

    return handler


def _flag_handler(name: str) -> DirectiveHandler:
    def handler(control: "CacheControl", value: Optional[str]) -> "CacheControl":
        return control.with_flag(name, True)

    return handler


def _field_names_handler(name: str) -> DirectiveHandler:
    # no-cache and private may carry a list of header field names
    def handler(control: "CacheControl", value: Optional[str]) -> "CacheControl":
        if value is None:
            return control.with_flag(name, True)
        return control.with_directive(name, unquote(value.strip()))

    return handler


class CacheControl:
    """
    An ordered set of Cache-Control directives.

    Each directive maps to `True` (a flag such as `no-store`), a non-negative
    integer (`max-age=600`) or a string (an extension or a list of field
    names). Instances are immutable: every `with_*` method returns a new
    instance and leaves the receiver untouched.

    Subclasses describe the directives of one message direction, see
    `RequestCacheControl` and `ResponseCacheControl`.

    Examples:
        >>> control = ResponseCacheControl().with_public().with_max_age(600)
        >>> str(control)
        'public, max-age=600'
        >>> ResponseCacheControl.from_string("no-cache, max-age=0").get_max_age()
        0
    """

    directive_handlers: ClassVar[Dict[str, DirectiveHandler]] = {
        "max-age": _seconds_handler("max-age"),
        "no-cache": _field_names_handler("no-cache"),
        "no-store": _flag_handler("no-store"),
        "no-transform": _flag_handler("no-transform"),
    }

    # field-name lists are always sent as quoted-strings (RFC 7234 Section 5.2.2)
    quoted_directives: ClassVar[FrozenSet[str]] = frozenset({"no-cache", "private"})

    def __init__(self, directives: Optional[Mapping[str, DirectiveValue]] = None) -> None:
        self._directives: Dict[str, DirectiveValue] = {}
        for name, value in (directives or {}).items():
            self._store(name, value)

    @classmethod
    def from_string(cls, value: str) -> Any:
        """
        Parse a Cache-Control header value.

        Directives registered in `directive_handlers` are passed to their
        handler. Everything else follows the default rules: a bare name is a
        flag, a quoted value is stored as a string and an unquoted value is
        stored as an integer when it is one, as a string otherwise.
        """
        control = cls()

        for directive in split_header_value(value):
            name, sep, raw_value = directive.partition("=")
            name = name.strip().lower()
            if not name:
                continue

            handler = cls.directive_handlers.get(name)
            if handler is not None:
                result = handler(control, raw_value.strip() if sep else None)
                if not isinstance(result, CacheControl):
                    return result
                control = result
                continue

            if not sep:
                control = control.with_flag(name, True)
                continue

            raw_value = raw_value.strip()
            if raw_value.startswith('"'):
                control = control.with_directive(name, unquote(raw_value))
            elif _INTEGER.match(raw_value):
                control = control.with_directive(name, int(raw_value))
            else:
                control = control.with_directive(name, raw_value)

        return control

    @property
    def directives(self) -> Dict[str, DirectiveValue]:
        return dict(self._directives)

    def with_flag(self, name: str, present: bool = True) -> Self:
        return self.with_directive(name, True if present else None)

    def has_flag(self, name: str) -> bool:
        return name.lower() in self._directives

    def with_directive(self, name: str, value: Optional[DirectiveValue]) -> Self:
        clone = self._copy()
        clone._store(name, value)
        return clone

    def get_directive(self, name: str) -> Optional[DirectiveValue]:
        return self._directives.get(name.lower())

    def with_max_age(self, seconds: Optional[int]) -> Self:
        return self.with_directive("max-age", _to_int(seconds))

    def get_max_age(self) -> Optional[int]:
        return self._get_int("max-age")

    def with_no_cache(self, flag: bool = True) -> Self:
        return self.with_flag("no-cache", flag)

    def has_no_cache(self) -> bool:
        return self.has_flag("no-cache")

    def with_no_store(self, flag: bool = True) -> Self:
        return self.with_flag("no-store", flag)

    def has_no_store(self) -> bool:
        return self.has_flag("no-store")

    def with_no_transform(self, flag: bool = True) -> Self:
        return self.with_flag("no-transform", flag)

    def has_no_transform(self) -> bool:
        return self.has_flag("no-transform")

    def with_extension(self, name: str, value: str) -> Self:
        if not isinstance(name, str) or not isinstance(value, str):
            raise ArgumentError("Name and value of the extension must be strings.")
        return self.with_directive(name, unquote(value.strip()))

    def get_extension(self, name: str) -> Optional[DirectiveValue]:
        return self.get_directive(name)

    def to_string(self) -> str:
        parts = []
        for name, value in self._directives.items():
            if value is True:
                parts.append(name)
            elif isinstance(value, int) or (name not in self.quoted_directives and is_token_string(value)):
                parts.append(f"{name}={value}")
            else:
                parts.append(f"{name}={http_quote(value)}")
        return ", ".join(parts)

    def _get_int(self, name: str) -> Optional[int]:
        value = self._directives.get(name)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def _copy(self) -> Self:
        clone = object.__new__(type(self))
        clone._directives = dict(self._directives)
        return clone

    def _store(self, name: str, value: Optional[DirectiveValue]) -> None:
        name = name.lower()
        if value is None or value is False:
            self._directives.pop(name, None)
        elif value is True or isinstance(value, str):
            self._directives[name] = value
        else:
            self._directives[name] = max(0, int(value))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.to_string()!r}>"

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and self._directives == other._directives


def _to_int(seconds: Optional[Union[int, str]]) -> Optional[int]:
    return None if seconds is None else int(seconds)


class ResponseCacheControl(CacheControl):
    """Cache-Control directives sent with a response (RFC 7234 Section 5.2.2)."""

    directive_handlers: ClassVar[Dict[str, DirectiveHandler]] = {
        **CacheControl.directive_handlers,
        "public": _flag_handler("public"),
        "private": _field_names_handler("private"),
        "s-maxage": _seconds_handler("s-maxage"),
        "must-revalidate": _flag_handler("must-revalidate"),
        "proxy-revalidate": _flag_handler("proxy-revalidate"),
        "immutable": _flag_handler("immutable"),
        "stale-while-revalidate": _seconds_handler("stale-while-revalidate"),
        "stale-if-error": _seconds_handler("stale-if-error"),
    }

    def with_public(self, flag: bool = True) -> Self:
        return self.with_flag("public", flag)

    def is_public(self) -> bool:
        return self.has_flag("public")

    def with_private(self, flag: bool = True) -> Self:
        return self.with_flag("private", flag)

    def is_private(self) -> bool:
        return self.has_flag("private")

    def with_shared_max_age(self, seconds: Optional[int]) -> Self:
        return self.with_directive("s-maxage", _to_int(seconds))

    def get_shared_max_age(self) -> Optional[int]:
        return self._get_int("s-maxage")

    def with_must_revalidate(self, flag: bool = True) -> Self:
        return self.with_flag("must-revalidate", flag)

    def has_must_revalidate(self) -> bool:
        return self.has_flag("must-revalidate")

    def with_proxy_revalidate(self, flag: bool = True) -> Self:
        return self.with_flag("proxy-revalidate", flag)

    def has_proxy_revalidate(self) -> bool:
        return self.has_flag("proxy-revalidate")

    def with_immutable(self, flag: bool = True) -> Self:
        return self.with_flag("immutable", flag)

    def has_immutable(self) -> bool:
        return self.has_flag("immutable")

    def with_stale_while_revalidate(self, seconds: Optional[int]) -> Self:
        return self.with_directive("stale-while-revalidate", _to_int(seconds))

    def get_stale_while_revalidate(self) -> Optional[int]:
        return self._get_int("stale-while-revalidate")

    def with_stale_if_error(self, seconds: Optional[int]) -> Self:
        return self.with_directive("stale-if-error", _to_int(seconds))

    def get_stale_if_error(self) -> Optional[int]:
        return self._get_int("stale-if-error")


def _max_stale_handler(control: "RequestCacheControl", value: Optional[str]) -> "RequestCacheControl":
    # a bare max-stale accepts a stale response of any age
    if value is None:
        return control.with_max_stale()
    seconds = parse_seconds(value)
    if seconds is None:
        logger.debug(f"Ignoring the 'max-stale' directive since {value!r} is not a number of seconds.")
        return control
    return control.with_max_stale(seconds)


class RequestCacheControl(CacheControl):
    """Cache-Control directives sent with a request (RFC 7234 Section 5.2.1)."""

    directive_handlers: ClassVar[Dict[str, DirectiveHandler]] = {
        **CacheControl.directive_handlers,
        "max-stale": _max_stale_handler,
        "min-fresh": _seconds_handler("min-fresh"),
        "only-if-cached": _flag_handler("only-if-cached"),
    }

    def with_max_stale(self, seconds: Optional[int] = None) -> Self:
        """
        Accept a response that is stale by at most `seconds`.

        Without `seconds` the bare directive is sent, accepting any staleness.
        """
        if seconds is None:
            return self.with_flag("max-stale", True)
        return self.with_directive("max-stale", int(seconds))

    def without_max_stale(self) -> Self:
        return self.with_directive("max-stale", None)

    def has_max_stale(self) -> bool:
        return self.has_flag("max-stale")

    def get_max_stale(self) -> Optional[int]:
        return self._get_int("max-stale")

    def with_min_fresh(self, seconds: Optional[int]) -> Self:
        return self.with_directive("min-fresh", _to_int(seconds))

    def get_min_fresh(self) -> Optional[int]:
        return self._get_int("min-fresh")

    def with_only_if_cached(self, flag: bool = True) -> Self:
        return self.with_flag("only-if-cached", flag)

    def has_only_if_cached(self) -> bool:
        return self.has_flag("only-if-cached")
