"""Defined and Next methods."""
from __future__ import annotations
from typing import TYPE_CHECKING

from constenum.backend.literals import value_literal

if TYPE_CHECKING:
    from constenum.backend.codegen_go import GoEnumCodegen


class IterationEmitter:
    def __init__(self, codegen: "GoEnumCodegen"):
        self.codegen = codegen

    def emit_defined(self) -> None:
        cg = self.codegen
        w = cg.writer
        r = cg.names.receiver
        w.comment(f"Defined returns true if {r} holds a defined value.")
        with w.block(f"func ({r} {cg.type_name}) Defined() bool"):
            with w.switch(r):
                with w.case(", ".join(value_literal(m.value) for m in cg.members)):
                    w.line("return true")
                with w.default():
                    w.line("return false")

    def emit_next(self) -> None:
        cg = self.codegen
        w = cg.writer
        r = cg.names.receiver
        members = cg.members
        first = members[0].name

        w.comment(f"Next returns the next defined {cg.type_name}. If {r} is not defined, then Next returns "
                  f"the first defined value.")
        w.comment("Next() can be used to loop through all values of an enum.")
        w.comment()
        w.comment(f"\t{r} := {first}")
        w.comment("\tfor {")
        w.comment(f"\t\tfmt.Println({r})")
        w.comment(f"\t\t{r} = {r}.Next()")
        w.comment(f"\t\tif {r} == {first} {{")
        w.comment("\t\t\tbreak")
        w.comment("\t\t}")
        w.comment("\t}")
        w.comment()
        w.comment("The exact order that values are returned when looping should not be relied upon.")
        with w.block(f"func ({r} {cg.type_name}) Next() {cg.type_name}"):
            with w.switch(r):
                for i, member in enumerate(members):
                    with w.case(member.name):
                        w.line(f"return {members[(i + 1) % len(members)].name}")
                with w.default():
                    w.line(f"return {first}")
