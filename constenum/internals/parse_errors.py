"""Conversion of lark parse exceptions into generator errors."""
from __future__ import annotations

from lark import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from constenum.internals import errors as er
from constenum.internals.report import Span


def describe_parse_error(exc: UnexpectedInput) -> str:
    """Describe a parse failure the way the Go compiler words it."""
    if isinstance(exc, UnexpectedToken):
        token = exc.token
        if token.type == "$END":
            return "unexpected EOF"
        if token.type == "_SEMI":
            return "unexpected newline" if token.value == "\n" else "unexpected semicolon"
        return f"unexpected {token.value}"
    if isinstance(exc, UnexpectedCharacters):
        return f"invalid character {exc.char!r}"
    if isinstance(exc, UnexpectedEOF):
        return "unexpected EOF"
    return str(exc)


def source_load_error(exc: UnexpectedInput, filename: str) -> er.SourceLoadError:
    line = getattr(exc, "line", -1)
    column = getattr(exc, "column", -1)
    span = Span(line, column, line, column) if isinstance(line, int) and line > 0 else None
    return er.SourceLoadError(er.ERR.CE1002, span, filename, message=describe_parse_error(exc))
