"""ASTBuilder: turns the lark parse tree of one Go file into a SourceFile.

Const declarations are built in full, with implicit repetition resolved here:
a spec without values receives the previous spec's type and expressions, and
every spec carries its `iota`. Type, var and func declarations only keep the
names, positions and (for types) a reference to a simple underlying type.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Union

from lark import Token, Tree

from constenum.internals import errors as er
from constenum.internals.report import Position, span_of
from constenum.semantics.ast import (
    SourceFile, Ident, Comment, ImportDecl, ConstDecl, ConstSpec, TypeDecl,
    TypeRef, VarDecl, FuncDecl, Expr, IntLit, FloatLit, ImagLit, RuneLit,
    StringLit, Name, Selector, Call, BinaryOp, UnaryOp, Paren, ArrayType,
    CompositeLit,
)
from constenum.semantics.ast_builder.comments import comment_text
from constenum.semantics.ast_builder.exceptions import InvalidLiteralError
from constenum.semantics.ast_builder import literals


Node = Union[Tree, Token]


class ASTBuilder:
    def __init__(self, filename: str):
        self.filename = filename

    # ------------------------
    # Positions and errors
    # ------------------------

    def _pos(self, node: Node) -> Position:
        if isinstance(node, Token):
            return Position(self.filename, node.start_pos, node.line, node.column)
        meta = node.meta
        return Position(self.filename, meta.start_pos, meta.line, meta.column)

    def _error(self, em: er.ErrorMessage, node: Node, **kwargs) -> er.SourceLoadError:
        return er.SourceLoadError(em, span_of(node), self.filename, **kwargs)

    # ------------------------
    # File level
    # ------------------------

    def build(self, tree: Tree, comments: Sequence[Token] = ()) -> SourceFile:
        if not isinstance(tree, Tree) or tree.data != "start":
            er.raise_internal_error("CE0001", node=getattr(tree, "data", type(tree).__name__))
        clause = tree.children[0]
        name_tok = clause.children[0]
        result = SourceFile(self.filename, Ident(self._pos(name_tok), str(name_tok)))

        for node in tree.children[1:]:
            if node.data == "import_decl":
                result.imports.extend(self._import_spec(spec) for spec in node.children)
            elif node.data == "const_decl":
                result.consts.append(self._const_decl(node))
            elif node.data == "type_decl":
                result.types.extend(self._type_spec(spec) for spec in node.children[1:])
            elif node.data == "var_decl":
                result.vars.extend(self._var_spec(spec) for spec in node.children[1:])
            elif node.data == "func_decl":
                result.funcs.append(self._func_decl(node))
            else:
                er.raise_internal_error("CE0001", node=node.data)

        result.comments = [
            Comment(self._pos(tok), str(tok), comment_text(str(tok))) for tok in comments
        ]
        return result

    def _import_spec(self, node: Tree) -> ImportDecl:
        *alias, path = node.children
        path_value = self._string_value(path).decode("utf-8", errors="replace")
        return ImportDecl(self._pos(node), path_value, str(alias[0]) if alias else None)

    # ------------------------
    # Constants
    # ------------------------

    def _const_decl(self, node: Tree) -> ConstDecl:
        keyword, *spec_nodes = node.children
        specs: List[ConstSpec] = []
        previous: Optional[ConstSpec] = None

        for iota, spec_node in enumerate(spec_nodes):
            spec = self._const_spec(spec_node, iota, previous)
            specs.append(spec)
            if not spec.implicit:
                previous = spec

        return ConstDecl(self._pos(keyword), specs)

    def _const_spec(self, node: Tree, iota: int, previous: Optional[ConstSpec]) -> ConstSpec:
        ids_node = node.children[0]
        names = [Ident(self._pos(tok), str(tok)) for tok in ids_node.children]
        type_ref: Optional[TypeRef] = None
        values: List[Expr] = []

        for child in node.children[1:]:
            if child.data == "type_name":
                type_ref = self._type_ref(child)
            elif child.data == "expression_list":
                values = [self._expr(e) for e in child.children]

        implicit = not values
        if implicit:
            if previous is None:
                raise self._error(er.ERR.CE1012, node, name=names[0].name)
            type_ref, values = previous.type_ref, previous.values

        if len(values) < len(names):
            raise self._error(er.ERR.CE1012, node, name=names[len(values)].name)
        if len(values) > len(names):
            raise self._error(er.ERR.CE1014, node, name=names[-1].name)

        return ConstSpec(self._pos(node), names, type_ref, values, iota, implicit)

    def _type_ref(self, node: Tree) -> TypeRef:
        names = [tok for tok in node.children if tok.type == "NAME"]
        if len(names) == 2:
            return TypeRef(self._pos(node), str(names[1]), package=str(names[0]))
        return TypeRef(self._pos(node), str(names[0]))

    # ------------------------
    # Types, variables, functions
    # ------------------------

    def _type_spec(self, node: Tree) -> TypeDecl:
        name_tok, body = node.children
        parts = list(body.children)
        is_alias = isinstance(parts[0], Token) and parts[0].value == "="
        if is_alias:
            parts = parts[1:]
        return TypeDecl(self._pos(name_tok), Ident(self._pos(name_tok), str(name_tok)),
                        is_alias, self._simple_type(parts))

    def _simple_type(self, parts: List[Node]) -> Optional[TypeRef]:
        """Return a TypeRef if `parts` spell `T` or `pkg.T`, else None."""
        if not all(isinstance(p, Token) for p in parts):
            return None
        kinds = [p.type for p in parts]
        if kinds == ["NAME"]:
            return TypeRef(self._pos(parts[0]), str(parts[0]))
        if kinds == ["NAME", "DOT", "NAME"]:
            return TypeRef(self._pos(parts[0]), str(parts[2]), package=str(parts[0]))
        return None

    def _var_spec(self, node: Tree) -> VarDecl:
        children = node.children
        names = [Ident(self._pos(children[0]), str(children[0]))]
        i = 1
        while (i + 1 < len(children) and isinstance(children[i], Token) and children[i].value == ","
               and isinstance(children[i + 1], Token) and children[i + 1].type == "NAME"):
            names.append(Ident(self._pos(children[i + 1]), str(children[i + 1])))
            i += 2
        return VarDecl(self._pos(node), names)

    def _func_decl(self, node: Tree) -> FuncDecl:
        is_method = any(isinstance(c, Tree) and c.data == "receiver" for c in node.children[:2])
        name_tok = next(c for c in node.children[1:] if isinstance(c, Token) and c.type == "NAME")
        return FuncDecl(self._pos(node), Ident(self._pos(name_tok), str(name_tok)), is_method)

    # ------------------------
    # Expressions
    # ------------------------

    def _expr(self, node: Node) -> Expr:
        if not isinstance(node, Tree):
            er.raise_internal_error("CE0001", node=getattr(node, "type", type(node).__name__))
        handler = getattr(self, f"_expr_{node.data}", None)
        if handler is None:
            er.raise_internal_error("CE0001", node=node.data)
        return handler(node)

    def _literal(self, node: Tree, decode):
        tok = node.children[0]
        try:
            return decode(str(tok)), str(tok)
        except InvalidLiteralError as e:
            raise self._error(er.ERR.CE1004, node, literal=str(tok), reason=e.reason) from None

    def _string_value(self, tok: Token) -> bytes:
        decode = literals.decode_raw_string if tok.type == "RAW_STRING" else literals.decode_string
        try:
            return decode(str(tok))
        except InvalidLiteralError as e:
            raise self._error(er.ERR.CE1004, tok, literal=str(tok), reason=e.reason) from None

    def _expr_int_lit(self, node: Tree) -> IntLit:
        value, text = self._literal(node, literals.parse_int)
        return IntLit(self._pos(node), value, text)

    def _expr_float_lit(self, node: Tree) -> FloatLit:
        value, text = self._literal(node, literals.parse_float)
        return FloatLit(self._pos(node), value, text)

    def _expr_imag_lit(self, node: Tree) -> ImagLit:
        return ImagLit(self._pos(node), str(node.children[0]))

    def _expr_rune_lit(self, node: Tree) -> RuneLit:
        value, text = self._literal(node, literals.decode_rune)
        return RuneLit(self._pos(node), value, text)

    def _expr_string_lit(self, node: Tree) -> StringLit:
        value, text = self._literal(node, literals.decode_string)
        return StringLit(self._pos(node), value, text)

    def _expr_raw_string_lit(self, node: Tree) -> StringLit:
        value, text = self._literal(node, literals.decode_raw_string)
        return StringLit(self._pos(node), value, text)

    def _expr_name(self, node: Tree) -> Name:
        return Name(self._pos(node), str(node.children[0]))

    def _expr_paren(self, node: Tree) -> Paren:
        return Paren(self._pos(node), self._expr(node.children[0]))

    def _expr_selector(self, node: Tree) -> Selector:
        operand, _dot, attr = node.children
        return Selector(self._pos(node), self._expr(operand), str(attr))

    def _expr_call(self, node: Tree) -> Call:
        callee, *rest = node.children
        args = [self._expr(a) for a in rest[0].children] if rest else []
        return Call(self._pos(node), self._expr(callee), args)

    def _expr_binary(self, node: Tree) -> BinaryOp:
        left, op, right = node.children
        return BinaryOp(self._pos(node), str(op.children[0]), self._expr(left), self._expr(right))

    def _expr_unary(self, node: Tree) -> UnaryOp:
        op, operand = node.children
        return UnaryOp(self._pos(node), str(op.children[0]), self._expr(operand))

    def _expr_composite_lit(self, node: Tree) -> CompositeLit:
        return CompositeLit(self._pos(node), self._expr(node.children[0]))

    def _expr_array_type(self, node: Tree) -> ArrayType:
        elem = node.children[-1]
        return ArrayType(self._pos(node), "".join(str(tok) for tok in elem.children))
