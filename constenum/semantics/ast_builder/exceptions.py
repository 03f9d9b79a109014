"""Exceptions raised while building the AST from a parse tree."""


class InvalidLiteralError(Exception):
    """A literal token that the lexer accepted is not a valid Go literal."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
