from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from constenum.internals.report import Position


class ValueKind(str, Enum):
    TEXT = "text"
    INTEGRAL = "integral"
    FLOAT = "float"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BasicType:
    """A predeclared Go type, or the type of an untyped constant."""
    name: str
    kind: ValueKind
    bits: int = 0                    # 0 for string, bool and untyped types
    signed: bool = True
    untyped: bool = False
    rank: int = 0                    # Untyped numeric ordering: int < rune < float

    def __str__(self) -> str:
        return self.name

    @property
    def bounds(self) -> Optional[Tuple[int, int]]:
        """Inclusive value range of a typed integer type, else None."""
        if self.kind != ValueKind.INTEGRAL or self.untyped:
            return None
        if self.signed:
            return -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        return 0, (1 << self.bits) - 1

    def representable(self, value: int) -> bool:
        bounds = self.bounds
        return bounds is None or bounds[0] <= value <= bounds[1]


@dataclass(frozen=True)
class NamedType:
    """A declared named type.

    `underlying` is None when the underlying type is not a basic type, or is
    declared in another package (`package` is set for the latter).
    """
    name: str
    underlying: Optional[BasicType]
    pos: Optional[Position] = None
    package: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

    @property
    def kind(self) -> Optional[ValueKind]:
        return self.underlying.kind if self.underlying else None


Type = Union[BasicType, NamedType]


def _int(name: str, bits: int, signed: bool = True) -> BasicType:
    return BasicType(name, ValueKind.INTEGRAL, bits, signed)


BOOL = BasicType("bool", ValueKind.BOOL)
STRING = BasicType("string", ValueKind.TEXT)
INT = _int("int", 64)
UINT8 = _int("uint8", 8, signed=False)
INT32 = _int("int32", 32)

# `int`, `uint` and `uintptr` are taken to be 64 bits wide.
BASIC_TYPES: Dict[str, BasicType] = {
    t.name: t for t in (
        BOOL, STRING, INT, UINT8, INT32,
        _int("int8", 8), _int("int16", 16), _int("int64", 64),
        _int("uint", 64, False), _int("uint16", 16, False), _int("uint32", 32, False),
        _int("uint64", 64, False), _int("uintptr", 64, False),
        BasicType("float32", ValueKind.FLOAT, 32),
        BasicType("float64", ValueKind.FLOAT, 64),
    )
}
BASIC_TYPES["byte"] = UINT8
BASIC_TYPES["rune"] = INT32

UNTYPED_BOOL = BasicType("untyped bool", ValueKind.BOOL, untyped=True)
UNTYPED_INT = BasicType("untyped int", ValueKind.INTEGRAL, untyped=True, rank=1)
UNTYPED_RUNE = BasicType("untyped rune", ValueKind.INTEGRAL, untyped=True, rank=2)
UNTYPED_FLOAT = BasicType("untyped float", ValueKind.FLOAT, untyped=True, rank=3)
UNTYPED_STRING = BasicType("untyped string", ValueKind.TEXT, untyped=True)


def underlying(t: Optional[Type]) -> Optional[BasicType]:
    if isinstance(t, NamedType):
        return t.underlying
    return t


def is_untyped(t: Optional[Type]) -> bool:
    return isinstance(t, BasicType) and t.untyped


def is_integer(t: Optional[Type]) -> bool:
    ul = underlying(t)
    return ul is not None and ul.kind == ValueKind.INTEGRAL
