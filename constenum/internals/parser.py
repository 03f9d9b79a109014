"""Lark parser setup and AST construction."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from lark import Lark, UnexpectedInput

from constenum.internals.parse_errors import source_load_error
from constenum.internals.semicolons import SemicolonInserter
from constenum.semantics.ast import SourceFile
from constenum.semantics.ast_builder import ASTBuilder

GRAMMAR_PATH = Path(__file__).parent.parent / "go.lark"

_PARSER: Optional[Tuple[Lark, SemicolonInserter]] = None


def get_parser() -> Tuple[Lark, SemicolonInserter]:
    """Return the shared parser and the postlexer collecting its comments.

    The grammar is compiled on first use only.
    """
    global _PARSER
    if _PARSER is None:
        postlex = SemicolonInserter()
        parser = Lark.open(
            str(GRAMMAR_PATH),
            parser="lalr",
            propagate_positions=True,
            maybe_placeholders=False,
            postlex=postlex,
            lexer="basic",
        )
        _PARSER = (parser, postlex)
    return _PARSER


def parse_source(src: str, filename: str) -> SourceFile:
    """Parse the text of one Go file into a SourceFile.

    Raises:
        SourceLoadError: the text is not syntactically valid Go, or holds an
            invalid literal.
    """
    parser, postlex = get_parser()
    try:
        tree = parser.parse(src)
    except UnexpectedInput as e:
        raise source_load_error(e, filename) from None

    return ASTBuilder(filename).build(tree, list(postlex.comments))
