"""Line-oriented writer producing gofmt-formatted Go source."""
from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, List


class GoWriter:
    """Accumulates Go source lines with tab indentation.

    Blocks are written through context managers so that braces always
    balance. `switch` bodies follow gofmt: `case` labels sit at the depth of
    the `switch` keyword and their statements one level deeper.
    """

    def __init__(self) -> None:
        self.lines: List[str] = []
        self.depth = 0

    def line(self, text: str = "") -> None:
        self.lines.append("\t" * self.depth + text if text else "")

    def comment(self, text: str = "") -> None:
        """Write a `//` comment; a leading tab marks a doc comment code block."""
        if not text:
            self.line("//")
        elif text.startswith("\t"):
            self.line("//" + text)
        else:
            self.line("// " + text)

    @contextmanager
    def block(self, header: str) -> Iterator[None]:
        self.line(header + " {")
        self.depth += 1
        yield
        self.depth -= 1
        self.line("}")

    @contextmanager
    def parens(self, keyword: str) -> Iterator[None]:
        """A parenthesized declaration group such as `import (...)`."""
        self.line(keyword + " (")
        self.depth += 1
        yield
        self.depth -= 1
        self.line(")")

    @contextmanager
    def switch(self, subject: str) -> Iterator[None]:
        self.line(f"switch {subject} {{")
        yield
        self.line("}")

    @contextmanager
    def case(self, labels: str) -> Iterator[None]:
        self.line(f"case {labels}:")
        self.depth += 1
        yield
        self.depth -= 1

    @contextmanager
    def default(self) -> Iterator[None]:
        self.line("default:")
        self.depth += 1
        yield
        self.depth -= 1

    def aligned(self, rows: List[List[str]]) -> None:
        """Write rows of cells, padding every column but the last like gofmt."""
        if not rows:
            return
        widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]) - 1)]
        for row in rows:
            cells = [cell.ljust(width) for cell, width in zip(row, widths)] + [row[-1]]
            self.line(" ".join(cells))

    def render(self) -> str:
        return "\n".join(self.lines) + "\n"
