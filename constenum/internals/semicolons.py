# internals/semicolons.py
"""
Postlexer implementing Go's automatic semicolon insertion.

Problem:
--------
Go source rarely spells out the semicolons its grammar requires. The lexer is
expected to insert one after a line's final token when that token is:

1. an identifier
2. an integer, floating-point, imaginary, rune or string literal
3. one of the keywords break, continue, fallthrough or return
4. one of the operators and punctuation ++, --, ), ] or }

Solution:
---------
The basic lark lexer emits NEWLINE and COMMENT tokens (both listed in
`always_accept` so lark keeps them). This postlexer tracks the last significant
token and turns a NEWLINE into a `_SEMI` when that token qualifies, dropping it
otherwise. A block comment spanning several lines counts as a newline, and the
end of input counts as one too.

Comments never reach the parser. They are recorded, in file order, on
`self.comments` so the package model can look up trailing line comments.
"""

from lark import Token


SEMI_TYPE = '_SEMI'

_LITERAL_TYPES = frozenset({'NAME', 'INT', 'FLOAT', 'IMAG', 'RUNE', 'STRING', 'RAW_STRING'})
_TERMINATING_VALUES = frozenset({'break', 'continue', 'fallthrough', 'return', '++', '--', ')', ']', '}'})


def ends_statement(token: Token) -> bool:
    """Return True if a newline after `token` terminates the statement."""
    if token.type in _LITERAL_TYPES:
        return True
    return token.value in _TERMINATING_VALUES


class SemicolonInserter:
    """Postlexer that inserts `_SEMI` tokens and collects comments."""

    always_accept = ('NEWLINE', 'COMMENT')

    def __init__(self):
        self.comments: list[Token] = []

    def process(self, stream):
        """
        Process the token stream.

        Strategy:
        - Record COMMENT tokens; a multi-line block comment acts as a newline
        - Replace NEWLINE with `_SEMI` when the previous token ends a statement
        - Emit a final `_SEMI` at end of input under the same rule
        """
        self.comments = []
        last = None

        for token in stream:
            if token.type == 'COMMENT':
                self.comments.append(token)
                if '\n' in token.value and last is not None and ends_statement(last):
                    yield Token.new_borrow_pos(SEMI_TYPE, '\n', token)
                    last = None
                continue

            if token.type == 'NEWLINE':
                if last is not None and ends_statement(last):
                    yield Token.new_borrow_pos(SEMI_TYPE, '\n', token)
                last = None
                continue

            last = token
            yield token

        if last is not None and ends_statement(last):
            yield Token.new_borrow_pos(SEMI_TYPE, '\n', last)
