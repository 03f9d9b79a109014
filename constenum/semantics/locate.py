# semantics/locate.py
"""Type Locator: find the named type to generate an enum for."""
from __future__ import annotations
from typing import Optional

from constenum.internals import errors as er
from constenum.semantics.model import TargetType
from constenum.semantics.source_model import Binding, BindingKind, PackageModel
from constenum.semantics.typesys import NamedType


def locate_by_name(model: PackageModel, name: str) -> TargetType:
    """Return the first type declared as `name` in source order."""
    for binding in model.bindings:
        if binding.kind == BindingKind.TYPE and binding.name == name:
            return _target(model, binding)
    raise er.ResolutionError(er.ERR.CE2001, name=name, package=model.package)


def locate_by_position(model: PackageModel, filename: str, line: int) -> TargetType:
    """Return the type declared closest after `line` in `filename`.

    Bindings on the same minimal line are scanned in offset order and the
    first type declaration among them wins. If that line holds no type
    declaration, the first binding on it is reported.
    """
    candidates = [
        b for b in model.bindings
        if b.position.filename == filename and b.position.line >= line
    ]
    if not candidates:
        raise er.ResolutionError(er.ERR.CE2002, None, filename, file=filename, line=line)

    closest = min(b.position.line for b in candidates)
    on_line = [b for b in candidates if b.position.line == closest]
    for binding in on_line:
        if binding.kind == BindingKind.TYPE:
            return _target(model, binding)

    first = on_line[0]
    raise er.ResolutionError(er.ERR.CE2003, first.position.span, filename,
                             file=filename, line=line, name=first.name)


def locate(model: PackageModel, type_name: Optional[str], filename: str, line: int) -> TargetType:
    if type_name:
        return locate_by_name(model, type_name)
    return locate_by_position(model, filename, line)


def _target(model: PackageModel, binding: Binding) -> TargetType:
    resolved = model.lookup_type(binding.name)
    if not isinstance(resolved, NamedType) or resolved.pos is None:
        raise er.ResolutionError(er.ERR.CE2004, binding.position.span, binding.position.filename,
                                 name=binding.name)
    return TargetType(resolved.name, resolved.kind, resolved.pos, resolved)
