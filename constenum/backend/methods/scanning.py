"""Scan, MarshalText and UnmarshalText methods."""
from __future__ import annotations
from typing import TYPE_CHECKING

from constenum.backend.literals import go_quote

if TYPE_CHECKING:
    from constenum.backend.codegen_go import GoEnumCodegen


class ScanningEmitter:
    def __init__(self, codegen: "GoEnumCodegen"):
        self.codegen = codegen

    def emit_scan(self) -> None:
        cg = self.codegen
        w = cg.writer
        n = cg.names
        w.comment(f"Scan implements [fmt.Scanner]. Use [fmt.Scan] to parse strings into {cg.type_name} values")
        with w.block(f"func ({n.receiver} *{cg.type_name}) Scan({n.scan_state} fmt.ScanState, {n.verb} rune) error"):
            w.line(f"{n.token}, {n.err} := {n.scan_state}.Token(true, nil)")
            with w.block(f"if {n.err} != nil"):
                w.line(f"return {n.err}")
            w.line()
            with w.switch(f"string({n.token})"):
                for member in cg.members:
                    with w.case(go_quote(member.display)):
                        w.line(f"*{n.receiver} = {member.name}")
                with w.default():
                    w.line(f'return fmt.Errorf("unknown {cg.type_name} value: %s", {n.token})')
            w.line("return nil")

    def emit_marshal_text(self) -> None:
        cg = self.codegen
        w = cg.writer
        r = cg.names.receiver
        w.comment("MarshalText implements [encoding.TextMarshaler]")
        with w.block(f"func ({r} {cg.type_name}) MarshalText() ([]byte, error)"):
            w.line(f"return {r}.Bytes(), nil")

    def emit_unmarshal_text(self) -> None:
        cg = self.codegen
        w = cg.writer
        n = cg.names
        w.comment("UnmarshalText implements [encoding.TextUnmarshaler]")
        with w.block(f"func ({n.receiver} *{cg.type_name}) UnmarshalText({n.x} []byte) error"):
            with w.switch(f"string({n.x})"):
                for member in cg.members:
                    with w.case(go_quote(member.display)):
                        w.line(f"*{n.receiver} = {member.name}")
                        w.line("return nil")
                with w.default():
                    w.line(f'return fmt.Errorf("failed to parse value %q into %T", {n.x}, *{n.receiver})')
