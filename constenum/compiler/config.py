"""Invocation parameters for one generator run."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from constenum.backend.literals import go_quote
from constenum.backend.methods.guards import TOOL_NAME
from constenum.semantics.naming import NamingStrategy

STDOUT = "<STDOUT>"
STDERR = "<STDERR>"


@dataclass(frozen=True)
class GenerateConfig:
    """Resolved parameters, built once by the CLI and never mutated.

    `package` is None when the input file's package clause decides it.
    `line` is 0 when unset. `output` is None until the type is known, and
    then defaults to `<unexported type name>_enum.go`.
    """
    input: str
    package: Optional[str] = None
    type_name: Optional[str] = None
    line: int = 0
    receiver: Optional[str] = None
    naming_strategy: NamingStrategy = NamingStrategy.IDENTITY
    output: Optional[str] = None
    verbose: bool = False

    def command_line(self) -> str:
        """The command that reproduces this run, for the generated header."""
        parts = [TOOL_NAME, f"--input={go_quote(self.input)}"]
        if self.package:
            parts.append(f"--pkg={go_quote(self.package)}")
        if self.type_name:
            parts.append(f"--type={self.type_name}")
        if self.line > 0:
            parts.append(f"--line={self.line}")
        if self.receiver:
            parts.append(f"--receiver={self.receiver}")
        if self.naming_strategy is not NamingStrategy.IDENTITY:
            parts.append(f"--naming-strategy={self.naming_strategy}")
        return " ".join(parts)
