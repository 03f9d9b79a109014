# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from fractions import Fraction
from typing import List, Optional, Union

from constenum.internals.report import Position, Span

# === Core node base ===

@dataclass
class Node:
    pos: Position

    @property
    def loc(self) -> Span:
        return self.pos.span

@dataclass
class Ident(Node):
    name: str

@dataclass
class Comment(Node):
    raw: str                         # Comment exactly as written, markers included
    text: str                        # Comment text with markers removed and whitespace trimmed

# === Expressions ===

@dataclass
class Expr(Node):
    pass

@dataclass
class IntLit(Expr):
    value: int
    literal: str

@dataclass
class FloatLit(Expr):
    value: Fraction
    literal: str

@dataclass
class ImagLit(Expr):
    literal: str

@dataclass
class RuneLit(Expr):
    value: int                       # Code point
    literal: str

@dataclass
class StringLit(Expr):
    value: bytes                     # Decoded bytes; not necessarily valid UTF-8
    literal: str

@dataclass
class Name(Expr):
    id: str

@dataclass
class Selector(Expr):
    operand: Expr
    attr: str

@dataclass
class Call(Expr):
    callee: Expr
    args: List[Expr]

@dataclass
class BinaryOp(Expr):
    op: str
    left: Expr
    right: Expr

@dataclass
class UnaryOp(Expr):
    op: str
    expr: Expr

@dataclass
class Paren(Expr):
    expr: Expr

@dataclass
class ArrayType(Expr):
    elem: str                        # Element type as written, e.g. "int" or "pkg.T"

@dataclass
class CompositeLit(Expr):
    type: Expr                       # Literal elements are not kept

# === Declarations ===

@dataclass
class TypeRef(Node):
    name: str
    package: Optional[str] = None    # Set for qualified names like time.Duration

    def __str__(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name

@dataclass
class ImportDecl(Node):
    path: str
    alias: Optional[str] = None

@dataclass
class ConstSpec(Node):
    names: List[Ident]
    type_ref: Optional[TypeRef]
    values: List[Expr]
    iota: int                        # Index of the spec within its group
    implicit: bool = False           # True if type and values repeat the previous spec

@dataclass
class ConstDecl(Node):
    """A `const` declaration; `pos` is the position of the keyword."""
    specs: List[ConstSpec]

@dataclass
class TypeDecl(Node):
    name: Ident
    is_alias: bool
    underlying: Optional[TypeRef]    # None for composite or generic type bodies

@dataclass
class VarDecl(Node):
    names: List[Ident]

@dataclass
class FuncDecl(Node):
    name: Ident
    is_method: bool = False

Decl = Union[ImportDecl, ConstDecl, TypeDecl, VarDecl, FuncDecl]

@dataclass
class SourceFile:
    filename: str
    package: Ident
    imports: List[ImportDecl] = field(default_factory=list)
    consts: List[ConstDecl] = field(default_factory=list)
    types: List[TypeDecl] = field(default_factory=list)
    vars: List[VarDecl] = field(default_factory=list)
    funcs: List[FuncDecl] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
