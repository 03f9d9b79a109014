"""Compile-time staleness guard and interface assertions."""
from __future__ import annotations
from typing import TYPE_CHECKING

from constenum.backend.literals import go_quote

if TYPE_CHECKING:
    from constenum.backend.codegen_go import GoEnumCodegen

TOOL_NAME = "constenum"


class GuardEmitter:
    def __init__(self, codegen: "GoEnumCodegen"):
        self.codegen = codegen

    def emit_staleness_guard(self) -> None:
        """Write `func _()`, which stops compiling once a member's value changes.

        Integral members index a one-element array with `Name - value`, which
        is out of range unless the difference is zero. Text members build a
        map keyed by `false` and `Name == "value"`; a changed value makes the
        second key `false` as well, a duplicate constant key.
        """
        cg = self.codegen
        w = cg.writer
        x = cg.names.x
        with w.block("func _()"):
            if cg.is_text:
                w.comment('A "duplicate key" compiler error signifies that the constant values have changed.')
                w.comment(f"Re-run the {TOOL_NAME} command to generate them again.")
                for member in cg.members:
                    w.line(f"_ = map[bool]struct{{}}{{false: {{}}, {member.name} == {go_quote(member.value)}: {{}}}}")
                return
            w.line(f"var {x} [1]struct{{}}")
            w.comment('An "invalid array index" compiler error signifies that the constant values have changed.')
            w.comment(f"Re-run the {TOOL_NAME} command to generate them again.")
            for member in cg.members:
                value = member.value
                offset = f"({value})" if value < 0 else str(value)
                w.line(f"_ = {x}[{member.name}-{offset}]")

    def emit_assertions(self) -> None:
        cg = self.codegen
        w = cg.writer
        zero = f'{cg.type_name}("")' if cg.is_text else f"{cg.type_name}(0)"
        pointer = f"new({cg.type_name})"
        with w.parens("var"):
            w.aligned([
                ["_", "fmt.Stringer", "=", zero],
                ["_", "fmt.Scanner", "=", pointer],
                ["_", "encoding.TextMarshaler", "=", zero],
                ["_", "encoding.TextUnmarshaler", "=", pointer],
            ])
