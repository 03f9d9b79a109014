"""Decoding of Go literal tokens into exact Python values.

Integers become `int`, floating-point literals become `Fraction` so that
untyped constant arithmetic stays exact, and string literals become the
`bytes` they denote. Byte escapes (`\\x..`, `\\ooo`) inside strings may produce
invalid UTF-8; that is only an error once the value is used as enum text.
"""
from __future__ import annotations

import re
from fractions import Fraction
from typing import Iterator, Tuple

from constenum.semantics.ast_builder.exceptions import InvalidLiteralError


_SIMPLE_ESCAPES = {
    'a': 0x07, 'b': 0x08, 'f': 0x0C, 'n': 0x0A, 'r': 0x0D, 't': 0x09, 'v': 0x0B,
    '\\': 0x5C, "'": 0x27, '"': 0x22,
}

_HEX_FLOAT = re.compile(r'0[xX]([0-9a-fA-F]*)(?:\.([0-9a-fA-F]*))?[pP]([+-]?\d+)')

_OCTAL_DIGITS = frozenset('01234567')
_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')


def parse_int(literal: str) -> int:
    """Parse a Go integer literal, including legacy `0777` octal."""
    text = literal.replace('_', '')
    try:
        if len(text) > 1 and text[0] == '0':
            prefix = text[1].lower()
            if prefix == 'x':
                return int(text[2:], 16)
            if prefix == 'b':
                return int(text[2:], 2)
            if prefix == 'o':
                return int(text[2:], 8)
            return int(text[1:], 8)
        return int(text, 10)
    except ValueError:
        raise InvalidLiteralError("invalid digit in integer literal") from None


def parse_float(literal: str) -> Fraction:
    """Parse a Go floating-point literal exactly."""
    text = literal.replace('_', '')
    m = _HEX_FLOAT.fullmatch(text)
    if m:
        whole, frac, exp = m.group(1), m.group(2) or '', int(m.group(3))
        if not whole and not frac:
            raise InvalidLiteralError("hexadecimal mantissa requires a digit")
        mantissa = Fraction(int(whole + frac, 16), 16 ** len(frac))
        return mantissa * Fraction(2) ** exp
    if text[:2] in ('0x', '0X'):
        raise InvalidLiteralError("hexadecimal mantissa requires a 'p' exponent")
    try:
        return Fraction(text)
    except ValueError:
        raise InvalidLiteralError("malformed floating-point literal") from None


def _fixed_digits(body: str, start: int, count: int, digits: frozenset, base: int) -> int:
    chunk = body[start:start + count]
    if len(chunk) != count or any(c not in digits for c in chunk):
        raise InvalidLiteralError("invalid character in escape sequence")
    return int(chunk, base)


def _unescape(body: str, quote: str) -> Iterator[Tuple[int, bool]]:
    """Yield (value, is_byte) for every character of a quoted literal body.

    `is_byte` is True for octal and hex escapes, which denote single bytes
    rather than code points.
    """
    i = 0
    while i < len(body):
        c = body[i]
        if c != '\\':
            yield ord(c), False
            i += 1
            continue

        if i + 1 >= len(body):
            raise InvalidLiteralError("escape sequence not terminated")
        e = body[i + 1]

        if e in _SIMPLE_ESCAPES:
            if e in '\'"' and e != quote:
                raise InvalidLiteralError("unknown escape sequence")
            yield _SIMPLE_ESCAPES[e], False
            i += 2
        elif e in _OCTAL_DIGITS:
            value = _fixed_digits(body, i + 1, 3, _OCTAL_DIGITS, 8)
            if value > 255:
                raise InvalidLiteralError("octal escape value > 255")
            yield value, True
            i += 4
        elif e == 'x':
            yield _fixed_digits(body, i + 2, 2, _HEX_DIGITS, 16), True
            i += 4
        elif e in 'uU':
            count = 4 if e == 'u' else 8
            value = _fixed_digits(body, i + 2, count, _HEX_DIGITS, 16)
            if value > 0x10FFFF or 0xD800 <= value < 0xE000:
                raise InvalidLiteralError("escape sequence is invalid Unicode code point")
            yield value, False
            i += 2 + count
        else:
            raise InvalidLiteralError("unknown escape sequence")


def decode_string(literal: str) -> bytes:
    """Decode an interpreted string literal, quotes included."""
    out = bytearray()
    for value, is_byte in _unescape(literal[1:-1], '"'):
        if is_byte:
            out.append(value)
        else:
            out += chr(value).encode('utf-8')
    return bytes(out)


def decode_raw_string(literal: str) -> bytes:
    """Decode a raw string literal; carriage returns are discarded."""
    return literal[1:-1].replace('\r', '').encode('utf-8')


def decode_rune(literal: str) -> int:
    """Decode a rune literal to its value."""
    chars = list(_unescape(literal[1:-1], "'"))
    if not chars:
        raise InvalidLiteralError("empty rune literal or unescaped ' in rune literal")
    if len(chars) > 1:
        raise InvalidLiteralError("more than one character in rune literal")
    return chars[0][0]
