"""Identifiers chosen for the generated methods."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Set

GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
})

# Names the generated code refers to and must not shadow.
REFERENCED_NAMES = frozenset({
    "fmt", "encoding", "string", "byte", "rune", "bool", "error", "nil",
    "true", "false", "new",
})


def safe_ident(want: str, taken: Iterable[str] = ()) -> str:
    """Prefix `want` with `_` until it is neither a keyword nor taken."""
    taken = set(taken)
    while want in GO_KEYWORDS or want in taken:
        want = "_" + want
    return want


def unexported_name(name: str) -> str:
    """Return `name` with its first character lower-cased."""
    if not name:
        return name
    return name[0].lower() + name[1:]


def default_receiver(type_name: str) -> str:
    return unexported_name(type_name[:1])


@dataclass(frozen=True)
class LocalNames:
    receiver: str
    scan_state: str
    verb: str
    token: str
    err: str
    x: str

    @classmethod
    def choose(cls, type_name: str, members: Iterable[str], receiver: Optional[str] = None) -> "LocalNames":
        """Pick the receiver and local variable names.

        Each name is made distinct from Go keywords, the member identifiers,
        the type name, the names the generated code refers to and every name
        picked before it.
        """
        taken: Set[str] = set(REFERENCED_NAMES) | set(members) | {type_name}
        picked = []
        for want in (receiver or default_receiver(type_name), "scanState", "verb", "token", "err", "x"):
            name = safe_ident(want, taken)
            taken.add(name)
            picked.append(name)
        return cls(*picked)
