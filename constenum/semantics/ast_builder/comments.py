"""Comment text extraction.

Mirrors what `go/ast.CommentGroup.Text` returns for a single comment, then
trimmed: comment markers are removed and directive comments such as
`//go:generate` or `//line` yield no text at all.
"""
from __future__ import annotations

import re

_DIRECTIVE = re.compile(r'(line |extern |export |[a-z0-9]+:[a-z0-9])')


def is_directive(raw: str) -> bool:
    return raw.startswith('//') and _DIRECTIVE.match(raw, 2) is not None


def comment_text(raw: str) -> str:
    if raw.startswith('//'):
        if is_directive(raw):
            return ''
        return raw[2:].strip()
    lines = [line.rstrip() for line in raw[2:-2].split('\n')]
    return '\n'.join(lines).strip()
