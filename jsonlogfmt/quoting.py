"""
String quoting for logfmt values.

Simple tokens are written as-is. Everything else is wrapped in double quotes
with backslash escapes:

    "  -> \\"        \\ -> \\\\
    BEL -> \\a  BS -> \\b  FF -> \\f  LF -> \\n  CR -> \\r  TAB -> \\t  VT -> \\v

Remaining non-printable characters become \\xNN (below U+0080), \\uNNNN (BMP)
or \\UNNNNNNNN. Printable non-ASCII characters are kept as-is.
"""

import re

SIMPLE_PATTERN = re.compile(r'[-+_/:|@.a-zA-Z0-9]+')

_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\a': '\\a',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\v': '\\v',
}

_UNESCAPES = {escaped[1]: char for char, escaped in _ESCAPES.items()}

_HEX_WIDTHS = {'x': 2, 'u': 4, 'U': 8}


def is_simple(s: str) -> bool:
    """Return True if s can be written without quotes"""
    return SIMPLE_PATTERN.fullmatch(s) is not None


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char.isprintable():
        return char

    code = ord(char)
    if code < 0x80:
        return f'\\x{code:02x}'
    if code <= 0xFFFF:
        return f'\\u{code:04x}'
    return f'\\U{code:08x}'


def quote(s: str) -> str:
    """
    Quote a string using the logfmt escape table.

    Args:
        s: String to quote

    Returns:
        Double-quoted, escaped representation of s
    """
    return '"' + ''.join(_escape_char(c) for c in s) + '"'


def unquote(quoted: str) -> str:
    """
    Reverse quote().

    Args:
        quoted: A string produced by quote()

    Returns:
        The original string

    Raises:
        ValueError: If quoted is not a well-formed quoted string
    """
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        raise ValueError(f"not a quoted string: {quoted!r}")

    body = quoted[1:-1]
    chars = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == '"':
            raise ValueError(f"unescaped quote at offset {i + 1}")
        if char != '\\':
            chars.append(char)
            i += 1
            continue

        if i + 1 >= len(body):
            raise ValueError("trailing backslash")

        marker = body[i + 1]
        if marker in _UNESCAPES:
            chars.append(_UNESCAPES[marker])
            i += 2
        elif marker in _HEX_WIDTHS:
            width = _HEX_WIDTHS[marker]
            digits = body[i + 2:i + 2 + width]
            if len(digits) != width or not all(d in '0123456789abcdefABCDEF' for d in digits):
                raise ValueError(f"invalid \\{marker} escape at offset {i + 1}")
            chars.append(chr(int(digits, 16)))
            i += 2 + width
        else:
            raise ValueError(f"unknown escape \\{marker} at offset {i + 1}")

    return ''.join(chars)


def format_string(s: str) -> str:
    """Render a string as a logfmt token, quoting only when necessary"""
    if is_simple(s):
        return s
    return quote(s)
