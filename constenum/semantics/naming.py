# semantics/naming.py
"""Naming Resolver: the display string of each enum member.

A member's display string is the text of a trailing comment on its line, or
else its identifier passed through the configured naming strategy.

The strategies split identifiers into words like the go-strcase package:
`_`, `-` and space are delimiters, and a word starts at an upper-case letter
following a lower-case one, or at the last capital of an acronym that is
followed by a lower-case letter (`HTTPServer` is `http` + `server`). Digits
never start a word. Only ASCII letters change case.
"""
from __future__ import annotations
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from constenum.internals import errors as er
from constenum.internals.report import Position
from constenum.semantics.ast import Comment
from constenum.semantics.model import ConstantBinding, NamedConstant

_DELIMITERS = frozenset("_- ")


def _is_delimiter(c: str) -> bool:
    return c in _DELIMITERS


def _is_upper(c: str) -> bool:
    return "A" <= c <= "Z" and len(c) == 1


def _is_lower(c: str) -> bool:
    return "a" <= c <= "z" and len(c) == 1


def _to_upper(c: str) -> str:
    return c.upper() if _is_lower(c) else c


def _to_lower(c: str) -> str:
    return c.lower() if _is_upper(c) else c


def _neighbours(s: str) -> Iterator[Tuple[str, str, str]]:
    """Yield (previous, current, next) characters; missing ones are ''."""
    for i, c in enumerate(s):
        yield (s[i - 1] if i else ""), c, (s[i + 1] if i + 1 < len(s) else "")


def _delimited(s: str, delimiter: str, upper: bool) -> str:
    adjust = _to_upper if upper else _to_lower
    out: List[str] = []
    for prev, curr, nxt in _neighbours(s.strip()):
        if _is_delimiter(curr):
            if not _is_delimiter(prev):
                out.append(delimiter)
            continue
        if _is_upper(curr) and (_is_lower(prev) or (_is_upper(prev) and _is_lower(nxt))):
            out.append(delimiter)
        out.append(adjust(curr))
    return "".join(out)


def _camel(s: str, upper: bool) -> str:
    out: List[str] = []
    for prev, curr, nxt in _neighbours(s.strip()):
        if _is_delimiter(curr):
            continue
        if _is_delimiter(prev) or (upper and prev == ""):
            out.append(_to_upper(curr))
        elif _is_lower(prev):
            out.append(curr)
        elif _is_upper(prev) and _is_upper(curr) and _is_lower(nxt):
            # The "R" of "XRequest" starts a new word
            out.append(curr)
        else:
            out.append(_to_lower(curr))
    return "".join(out)


class NamingStrategy(str, Enum):
    IDENTITY = "none"
    CAMEL = "camelCase"
    PASCAL = "PascalCase"
    SNAKE = "snake_case"
    UPPER_SNAKE = "UPPER_SNAKE_CASE"
    KEBAB = "kebab-case"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "NamingStrategy":
        """Parse a strategy name, ignoring case, `-`, `_` and spaces.

        Raises:
            ConfigError: the name matches no strategy.
        """
        key = "".join(c for c in text.lower() if not _is_delimiter(c))
        try:
            return _ALIASES[key]
        except KeyError:
            raise er.ConfigError(er.ERR.CE5003, value=text,
                                 choices=", ".join(s.value for s in cls)) from None

    def apply(self, identifier: str) -> str:
        if self is NamingStrategy.CAMEL:
            return _camel(identifier, upper=False)
        if self is NamingStrategy.PASCAL:
            return _camel(identifier, upper=True)
        if self is NamingStrategy.SNAKE:
            return _delimited(identifier, "_", upper=False)
        if self is NamingStrategy.UPPER_SNAKE:
            return _delimited(identifier, "_", upper=True)
        if self is NamingStrategy.KEBAB:
            return _delimited(identifier, "-", upper=False)
        return identifier


_ALIASES = {
    "none": NamingStrategy.IDENTITY,
    "identity": NamingStrategy.IDENTITY,
    "camelcase": NamingStrategy.CAMEL,
    "lowercamelcase": NamingStrategy.CAMEL,
    "pascalcase": NamingStrategy.PASCAL,
    "uppercamelcase": NamingStrategy.PASCAL,
    "snakecase": NamingStrategy.SNAKE,
    "uppersnakecase": NamingStrategy.UPPER_SNAKE,
    "screamingsnakecase": NamingStrategy.UPPER_SNAKE,
    "kebabcase": NamingStrategy.KEBAB,
}


def find_override(comments: Iterable[Comment], group_position: Position, position: Position) -> Optional[str]:
    """Return the text of the first comment on `position`'s line.

    Comments before the `const` keyword at `group_position` are skipped, and
    so are comments without text (including directives).
    """
    for comment in comments:
        if comment.pos.offset < group_position.offset:
            continue
        if comment.pos.line != position.line:
            continue
        if comment.text:
            return comment.text
    return None


def resolve_name(binding: ConstantBinding, comments: Iterable[Comment], strategy: NamingStrategy) -> NamedConstant:
    override = find_override(comments, binding.group_position, binding.position)
    if override is not None:
        return NamedConstant(binding, override, overridden=True)
    return NamedConstant(binding, strategy.apply(binding.name), overridden=False)
