"""
Go backend orchestrator for constenum.

This module turns a validated EnumSpec into the Go source file giving the
enum type its methods, coordinating the emitters for each method family.

API:
    from constenum.backend.codegen_go import GoEnumCodegen
    cg = GoEnumCodegen(spec, package="example", command="constenum --input=...")
    source = cg.build()

The output is gofmt-formatted and depends only on the constructor arguments.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from constenum.backend.go_writer import GoWriter
from constenum.backend.identifiers import LocalNames
from constenum.backend.methods import GuardEmitter, IterationEmitter, ScanningEmitter, StringerEmitter
from constenum.backend.methods.guards import TOOL_NAME
from constenum.internals import errors as er
from constenum.semantics.model import EnumSpec, NamedConstant
from constenum.semantics.typesys import ValueKind


class GoEnumCodegen:
    """Main Go backend orchestrator."""

    def __init__(self, spec: EnumSpec, package: str, command: str, receiver: Optional[str] = None) -> None:
        """Initialize the code generator with its emitters.

        Args:
            spec: Validated members of the enum type.
            package: Package name for the `package` clause.
            command: Command line reproducing this output, for the header.
            receiver: Requested receiver name; defaults to the type's initial.
        """
        if spec.kind not in (ValueKind.TEXT, ValueKind.INTEGRAL):
            er.raise_internal_error("CE0002", kind=spec.kind, type=spec.target.name)

        self.spec = spec
        self.package = package
        self.command = command
        self.type_name = spec.target.name
        self.members: Tuple[NamedConstant, ...] = spec.members
        self.names = LocalNames.choose(self.type_name, [m.name for m in self.members], receiver)
        self.writer: Optional[GoWriter] = None

        self.stringer = StringerEmitter(self)
        self.iteration = IterationEmitter(self)
        self.scanning = ScanningEmitter(self)
        self.guards = GuardEmitter(self)

    @property
    def is_text(self) -> bool:
        return self.spec.kind == ValueKind.TEXT

    @property
    def dispatched(self) -> List[NamedConstant]:
        """Members String and Bytes must name explicitly.

        Integral members always need a case. A text member only needs one if
        its display string differs from its value.
        """
        if not self.is_text:
            return list(self.members)
        return [m for m in self.members if m.display != m.value]

    def build(self) -> str:
        """Render the complete Go source file."""
        w = self.writer = GoWriter()
        w.comment(f"Code generated by {TOOL_NAME}; DO NOT EDIT.")
        w.comment(f"Command: {self.command}")
        w.line()
        w.line(f"package {self.package}")
        w.line()
        with w.parens("import"):
            w.line('"encoding"')
            w.line('"fmt"')

        for emit in (
            self.stringer.emit_string,
            self.stringer.emit_bytes,
            self.iteration.emit_defined,
            self.scanning.emit_scan,
            self.iteration.emit_next,
            self.guards.emit_staleness_guard,
            self.scanning.emit_marshal_text,
            self.scanning.emit_unmarshal_text,
            self.guards.emit_assertions,
        ):
            w.line()
            emit()

        return w.render()
