"""String and Bytes methods."""
from __future__ import annotations
from typing import TYPE_CHECKING, Callable

from constenum.backend.literals import bytes_literal, go_quote
from constenum.semantics.model import NamedConstant

if TYPE_CHECKING:
    from constenum.backend.codegen_go import GoEnumCodegen


class StringerEmitter:
    def __init__(self, codegen: "GoEnumCodegen"):
        self.codegen = codegen

    def emit_string(self) -> None:
        cg = self.codegen
        r = cg.names.receiver
        cg.writer.comment(f"String implements [fmt.Stringer]. If !{r}.Defined(), then a generated string "
                          f"is returned based on {r}'s value.")
        fallback = f"string({r})" if cg.is_text else f'fmt.Sprintf("{cg.type_name}(%d)", {r})'
        self._dispatch("String", "string", lambda m: go_quote(m.display), fallback)

    def emit_bytes(self) -> None:
        cg = self.codegen
        r = cg.names.receiver
        cg.writer.comment(f"Bytes returns a byte-level representation of String(). If !{r}.Defined(), then a "
                          f"generated string is returned based on {r}'s value.")
        fallback = f"[]byte({r})" if cg.is_text else f'[]byte(fmt.Sprintf("{cg.type_name}(%d)", {r}))'
        self._dispatch("Bytes", "[]byte", lambda m: bytes_literal(m.display), fallback)

    def _dispatch(self, method: str, result: str, spell: Callable[[NamedConstant], str], fallback: str) -> None:
        """Write a method returning `spell(member)` per member, else `fallback`.

        Text members whose display string is their own value need no case;
        when none is left the switch is omitted.
        """
        cg = self.codegen
        w = cg.writer
        r = cg.names.receiver
        members = cg.dispatched
        with w.block(f"func ({r} {cg.type_name}) {method}() {result}"):
            if not members:
                w.line(f"return {fallback}")
                return
            with w.switch(r):
                for member in members:
                    with w.case(member.name):
                        w.line(f"return {spell(member)}")
                with w.default():
                    w.line(f"return {fallback}")
