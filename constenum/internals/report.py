from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from lark import Token


class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    CYAN  = "\x1b[36m"
    GRAY  = "\x1b[90m"


@dataclass(frozen=True)
class Span:
    line: int
    col: int
    end_line: int
    end_col: int


@dataclass(frozen=True, order=True)
class Position:
    """Location of a token in a source file.

    Ordering is by (filename, offset), which is the declaration order used
    throughout the package model.
    """
    filename: str
    offset: int
    line: int
    column: int

    @property
    def span(self) -> Span:
        return Span(self.line, self.column, self.line, self.column)

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None
    filename: Optional[str] = None


def span_of(t: Any) -> Optional[Span]:
    m = getattr(t, "meta", None)
    if m is not None and not getattr(m, "empty", True):
        return Span(m.line, m.column, m.end_line, m.end_column)
    if isinstance(t, Token):
        line = getattr(t, "line", None)
        col = getattr(t, "column", None)
        end_line = getattr(t, "end_line", None)
        end_col = getattr(t, "end_column", None)
        if line is not None and col is not None:
            return Span(line, col, end_line or line, end_col or col)
    return None


class Reporter:
    def __init__(self, source: Optional[str] = None, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span], filename: Optional[str] = None):
        self.items.append(Diagnostic("error", code, msg, span, filename=filename or self.filename))

    def _source_lines(self, filename: str) -> Optional[List[str]]:
        if filename == self.filename and self.source is not None:
            return self.source.splitlines()
        try:
            return Path(filename).read_text(encoding="utf-8").splitlines()
        except OSError:
            return None

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        """Render all diagnostics.

        use_color   → ANSI colorize location/kind/markers
        use_unicode → use │ / ╰ guides around the source line
        """
        out: List[str] = []

        for d in self.items:
            filename = d.filename or self.filename
            loc = f"{filename}:{d.span.line}:{d.span.col}" if d.span else filename
            message = d.message if d.message.endswith('.') else f"{d.message}."

            if use_color:
                color = C.RED
                head = f"{C.CYAN}{loc}{C.RESET}: {C.BOLD}{color}{d.kind}{C.RESET} [{C.DIM}{d.code}{C.RESET}]: {message}"
            else:
                head = f"{loc}: {d.kind} [{d.code}]: {message}"

            lines = self._source_lines(filename) if d.span else None
            if not lines or not (0 < d.span.line <= len(lines)):
                out.append(head)
                continue

            line_text = lines[d.span.line - 1]
            start = max(1, d.span.col)

            if use_unicode:
                guide = (lambda s: f"{C.GRAY}{s}{C.RESET}") if use_color else (lambda s: s)
                out.append(f"{guide('  ╭──┤ ')}{head}")
                out.append(f"{guide('  │')}  {line_text}")
                out.append(f"{guide('  │')}  {' ' * (start - 1)}┯")
                out.append(f"{guide('  ╰' + '─' * (start + 1))}╯")
            else:
                out.append(head)
                out.append(f"  | {line_text}")
                out.append(f"  ` {' ' * (start - 1)}^")

        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color and unicode guides are auto-enabled for a TTY unless NO_COLOR,
        NO_UNICODE or TERM=dumb say otherwise.
        """
        stream = stream or sys.stderr
        is_tty = getattr(stream, "isatty", lambda: False)()
        dumb = os.getenv("TERM") == "dumb"

        if use_color is None:
            use_color = bool(is_tty and os.getenv("NO_COLOR") is None and not dumb)
        if use_unicode is None:
            use_unicode = bool(is_tty and os.getenv("NO_UNICODE") is None and not dumb)

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)
