# semantics/model.py
"""Records passed between the generator stages. All are immutable."""
from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple, Union

from constenum.internals.report import Position
from constenum.semantics.typesys import NamedType, ValueKind

RawValue = Union[int, str, Fraction, bool]


@dataclass(frozen=True)
class TargetType:
    name: str
    kind: Optional[ValueKind]        # None until inferred from the constants' values
    position: Position
    named: NamedType

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ConstantBinding:
    name: str
    value: RawValue
    position: Position
    group_position: Position         # Position of the enclosing `const` keyword
    target: TargetType               # Non-owning back reference

    @property
    def kind(self) -> ValueKind:
        if isinstance(self.value, str):
            return ValueKind.TEXT
        if isinstance(self.value, bool):
            return ValueKind.BOOL
        if isinstance(self.value, Fraction):
            return ValueKind.FLOAT
        return ValueKind.INTEGRAL


@dataclass(frozen=True)
class NamedConstant:
    binding: ConstantBinding
    display: str
    overridden: bool = False

    @property
    def name(self) -> str:
        return self.binding.name

    @property
    def value(self) -> RawValue:
        return self.binding.value


@dataclass(frozen=True)
class EnumSpec:
    target: TargetType
    kind: ValueKind
    members: Tuple[NamedConstant, ...]
