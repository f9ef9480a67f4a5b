from __future__ import annotations

from typing import (
    Any,
    Iterator,
    List,
    Mapping,
    Optional,
    Union,
)

"""
HTTP token and quoted-string parsing utilities.

These functions implement RFC 7230 parsing rules for HTTP/1.1 tokens
and quoted strings.
"""


def is_char(c: str) -> bool:
    """
    Check if character is a valid ASCII character (0-127).

    Per RFC 7230: CHAR = any US-ASCII character (octets 0 - 127)
    """
    if not c:
        return False
    return ord(c) <= 127


def is_ctl(c: str) -> bool:
    """
    Check if character is a control character.

    Per RFC 7230: CTL = control characters (0-31 and 127)
    """
    if not c:
        return False
    b = ord(c)
    return b <= 31 or b == 127


def is_separator(c: str) -> bool:
    """
    Check if character is an HTTP separator.

    Per RFC 2616 Section 2.2:
    separators = "(" | ")" | "<" | ">" | "@"
               | "," | ";" | ":" | "\" | <">
               | "/" | "[" | "]" | "?" | "="
               | "{" | "}" | SP | HT
    """
    if not c:
        return False
    return c in '()<>@,;:\\"/[]?={} \t'


def is_token(c: str) -> bool:
    """
    Check if character is valid in an HTTP token.

    Per RFC 7230 Section 3.2.6:
    token = 1*tchar
    tchar = "!" / "#" / "$" / "%" / "&" / "'" / "*"
          / "+" / "-" / "." / "0"-"9" / "A"-"Z"
          / "^" / "_" / "`" / "a"-"z" / "|" / "~"

    Implementation: token chars are CHAR but not CTL or separators

    Examples:
        >>> is_token('a')
        True
        >>> is_token('-')
        True
        >>> is_token(' ')
        False
        >>> is_token(',')
        False
    """
    return is_char(c) and not is_ctl(c) and not is_separator(c)


def is_token_string(value: str) -> bool:
    """
    Check if a whole string can be sent as an unquoted token.

    Examples:
        >>> is_token_string('bar')
        True
        >>> is_token_string('Set-Cookie, Authorization')
        False
        >>> is_token_string('')
        False
    """
    return bool(value) and all(is_token(c) for c in value)


def is_qd_text(c: str) -> bool:
    r"""
    Check if character is valid in quoted-text.

    Per RFC 7230 Section 3.2.6:
    quoted-string = DQUOTE *( qdtext / quoted-pair ) DQUOTE
    qdtext = HTAB / SP / %x21 / %x23-5B / %x5D-7E / obs-text
    obs-text = %x80-FF
    """
    if not c:
        return False

    b = ord(c)
    return (
        b == 0x09  # HTAB
        or b == 0x20  # SP
        or b == 0x21  # !
        or (0x23 <= b <= 0x5B)  # # to [ (skips " which is 0x22)
        or (0x5D <= b <= 0x7E)  # ] to ~ (skips \ which is 0x5C)
        or b >= 0x80
    )  # obs-text


def http_unquote_pair(c: str) -> str:
    """
    Unquote a single escaped character from a quoted-pair.

    Per RFC 7230 Section 3.2.6:
    quoted-pair = "\" ( HTAB / SP / VCHAR / obs-text )

    Invalid characters are replaced with '?'
    """
    if not c:
        return "?"

    b = ord(c)
    if b == 0x09 or b == 0x20 or (0x21 <= b <= 0x7E) or b >= 0x80:
        return c
    return "?"


def http_unquote(raw: str) -> tuple[int, str]:
    """
    Unquote an HTTP quoted-string.

    The raw string must begin with a double quote ("). Only the first
    quoted string is parsed. The function returns the number of characters
    consumed and the unquoted result.

    Returns:
        Tuple of (eaten, result) where:
        - eaten: number of characters consumed, or -1 on failure
        - result: the unquoted string, or empty string on failure

    Examples:
        >>> http_unquote('"hello"')
        (7, 'hello')
        >>> http_unquote('"hello\\"world"')
        (14, 'hello"world')
        >>> http_unquote('"test')
        (-1, '')
    """
    if not raw or raw[0] != '"':
        return -1, ""

    buf: list[str] = []
    i = 1  # Start after opening quote

    while i < len(raw):
        b = raw[i]

        if b == '"':
            return i + 1, "".join(buf)

        elif b == "\\":
            if i + 1 >= len(raw):
                # Backslash at end of string - invalid
                return -1, ""

            buf.append(http_unquote_pair(raw[i + 1]))
            i += 2

        else:
            if is_qd_text(b):
                buf.append(b)
            else:
                buf.append("?")
            i += 1

    # Reached end without finding closing quote - invalid
    return -1, ""


def http_quote(value: str) -> str:
    """
    Quote a string as an HTTP quoted-string, escaping quotes and backslashes.

    Examples:
        >>> http_quote('Set-Cookie, Authorization')
        '"Set-Cookie, Authorization"'
        >>> http_quote('say "hi"')
        '"say \\\\"hi\\\\""'
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def split_header_value(value: str) -> List[str]:
    """
    Split a comma-separated header value, keeping commas inside quoted strings.

    Segments are stripped of surrounding whitespace and empty ones are dropped.

    Examples:
        >>> split_header_value('no-cache, max-age=60')
        ['no-cache', 'max-age=60']
        >>> split_header_value('private="Set-Cookie, Authorization", max-age=60')
        ['private="Set-Cookie, Authorization"', 'max-age=60']
    """
    parts: List[str] = []
    buf: List[str] = []
    in_quotes = False
    escaped = False

    for c in value:
        if escaped:
            escaped = False
        elif in_quotes and c == "\\":
            escaped = True
        elif c == '"':
            in_quotes = not in_quotes
        elif c == "," and not in_quotes:
            parts.append("".join(buf))
            buf = []
            continue
        buf.append(c)
    parts.append("".join(buf))

    return [part.strip() for part in parts if part.strip()]


class Headers(Mapping[str, str]):
    """
    Case-insensitive, immutable collection of header fields.

    Reading a name returns all of its values joined with ", ".
    """

    def __init__(self, headers: Optional[Mapping[str, Union[str, List[str]]]] = None) -> None:
        self._headers = {k.lower(): ([v] if isinstance(v, str) else v[:]) for k, v in (headers or {}).items()}

    def get_list(self, key: str) -> Optional[List[str]]:
        values = self._headers.get(key.lower(), None)
        return values[:] if values is not None else None

    def get_line(self, key: str) -> str:
        return self[key] if key in self else ""

    def replaced(self, key: str, value: Union[str, List[str]]) -> "Headers":
        headers = Headers(self._headers)
        headers._headers[key.lower()] = [value] if isinstance(value, str) else value[:]
        return headers

    def removed(self, key: str) -> "Headers":
        headers = Headers(self._headers)
        headers._headers.pop(key.lower(), None)
        return headers

    def __getitem__(self, key: str) -> str:
        return ", ".join(self._headers[key.lower()])

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._headers

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return repr(self._headers)

    def __str__(self) -> str:
        return str(self._headers)

    def __eq__(self, other_headers: Any) -> bool:
        return isinstance(other_headers, Headers) and self._headers == other_headers._headers
