# semantics/discovery.py
"""Constant Discovery: collect the constants declared with the target type."""
from __future__ import annotations
from typing import List, Optional, Tuple

from constenum.internals import errors as er
from constenum.semantics.const_eval import ConstantValue
from constenum.semantics.model import ConstantBinding, RawValue, TargetType
from constenum.semantics.source_model import ConstSite, PackageModel
from constenum.semantics.typesys import ValueKind

BLANK = "_"


def discover(model: PackageModel, target: TargetType) -> Tuple[List[ConstantBinding], Optional[ValueKind]]:
    """Return the target's constants in (filename, offset) order and their kind.

    The kind is None only when nothing was found and the target's underlying
    type does not determine it.

    Raises:
        ConsistencyError: two constants have values of different kinds.
        SourceLoadError: a constant of the target type cannot be evaluated.
    """
    found: List[ConstantBinding] = []
    for site in model.const_sites:
        if site.name.name == BLANK:
            continue
        if model.constant_type(site) != target.named:
            continue
        cv = model.constant_value(site)
        found.append(ConstantBinding(
            site.name.name,
            _raw_value(cv, site),
            site.position,
            site.decl.pos,
            target,
        ))

    kind = target.kind
    first: Optional[ConstantBinding] = None
    for binding in found:
        if kind is None:
            kind = binding.kind
        if first is None:
            first = binding
        if binding.kind != kind:
            raise er.ConsistencyError(
                er.ERR.CE3001, binding.position.span, binding.position.filename,
                type=target.name, first=first.name, first_kind=kind,
                name=binding.name, kind=binding.kind,
            )
    return found, kind


def _raw_value(cv: ConstantValue, site: ConstSite) -> RawValue:
    if isinstance(cv.value, bytes):
        try:
            return cv.value.decode("utf-8")
        except UnicodeDecodeError:
            raise er.SourceLoadError(er.ERR.CE1011, site.name.loc, site.filename, value=str(cv)) from None
    return cv.value
