"""Go literal spelling for generated code."""
from __future__ import annotations
from typing import Union

_ESCAPES = {
    "\a": "\\a", "\b": "\\b", "\f": "\\f", "\n": "\\n",
    "\r": "\\r", "\t": "\\t", "\v": "\\v", "\\": "\\\\", '"': '\\"',
}


def go_quote(s: str) -> str:
    """Quote `s` as a Go interpreted string literal, like strconv.Quote."""
    out = ['"']
    for c in s:
        if c in _ESCAPES:
            out.append(_ESCAPES[c])
        elif c.isprintable():
            out.append(c)
        elif ord(c) < 0x80:
            out.append(f"\\x{ord(c):02x}")
        elif ord(c) < 0x10000:
            out.append(f"\\u{ord(c):04x}")
        else:
            out.append(f"\\U{ord(c):08x}")
    out.append('"')
    return "".join(out)


def byte_element(b: int) -> str:
    """Spell one element of a []byte composite literal."""
    if b in (0x27, 0x5C):
        return f"'\\{chr(b)}'"
    if 0x20 <= b < 0x7F:
        return f"'{chr(b)}'"
    return f"0x{b:02x}"


def bytes_literal(s: str) -> str:
    """Spell the UTF-8 bytes of `s` as a []byte composite literal."""
    return "[]byte{" + ", ".join(byte_element(b) for b in s.encode("utf-8")) + "}"


def value_literal(value: Union[int, str]) -> str:
    """Spell a raw enum value as an untyped Go constant."""
    if isinstance(value, str):
        return go_quote(value)
    return str(value)
