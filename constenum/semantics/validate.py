# semantics/validate.py
"""Uniqueness Validator: build an EnumSpec only from a consistent member set."""
from __future__ import annotations
from typing import Dict, Sequence

from constenum.internals import errors as er
from constenum.semantics.model import EnumSpec, NamedConstant, RawValue, TargetType
from constenum.semantics.typesys import ValueKind

SUPPORTED_KINDS = (ValueKind.TEXT, ValueKind.INTEGRAL)


def _fail(em: er.ErrorMessage, member: NamedConstant, **kwargs) -> er.ValidationError:
    pos = member.binding.position
    return er.ValidationError(em, pos.span, pos.filename, **kwargs)


def _show(value: RawValue) -> str:
    return f'"{value}"' if isinstance(value, str) else str(value)


def validate(target: TargetType, kind: ValueKind, members: Sequence[NamedConstant]) -> EnumSpec:
    """Check the member invariants in order and return the EnumSpec.

    For each member in turn: its identifier, display string and raw value
    must not have been seen before, and its display string must not be the
    identifier of another member. The first violation is raised.

    Raises:
        EmitError: `members` is empty.
        ValidationError: a uniqueness rule is violated, or `kind` cannot be
            generated.
    """
    if not members:
        raise er.EmitError(er.ERR.CE3002, type=target.name)
    if kind not in SUPPORTED_KINDS:
        raise er.ValidationError(er.ERR.CE4005, target.position.span, target.position.filename,
                                 type=target.name, kind=kind)

    identifiers = {m.name: m for m in members}
    seen_names: Dict[str, NamedConstant] = {}
    seen_displays: Dict[str, NamedConstant] = {}
    seen_values: Dict[RawValue, NamedConstant] = {}

    for member in members:
        if member.name in seen_names:
            raise _fail(er.ERR.CE4001, member, name=member.name)
        seen_names[member.name] = member

        other = seen_displays.get(member.display)
        if other is not None:
            raise _fail(er.ERR.CE4002, member, display=member.display, name=member.name, other=other.name)
        seen_displays[member.display] = member

        other = seen_values.get(member.value)
        if other is not None:
            raise _fail(er.ERR.CE4003, member, value=_show(member.value), name=member.name, other=other.name)
        seen_values[member.value] = member

        other = identifiers.get(member.display)
        if other is not None and other.name != member.name:
            raise _fail(er.ERR.CE4004, member, display=member.display, name=member.name, other=other.name)

    return EnumSpec(target, kind, tuple(members))
