"""
AST Builder module for constenum.

Exports:
    ASTBuilder: Main class for building the Go declaration AST from Lark parse trees
    Exceptions: Custom exceptions for AST building errors
"""
from constenum.semantics.ast_builder.builder import ASTBuilder
from constenum.semantics.ast_builder.exceptions import InvalidLiteralError

__all__ = [
    'ASTBuilder',
    'InvalidLiteralError',
]
