"""Lexical tokens of the configuration syntax."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["Token"]


class Token(IntEnum):
    """A lexical token of the configuration syntax."""

    ILLEGAL = 0
    EOF = 1
    COMMENT = 2

    # Identifiers and basic literals.
    IDENT = 4  # section-name, variable-name
    STRING = 5  # "subsection-name", variable value

    # Operators and delimiters.
    ASSIGN = 8  # =
    LBRACK = 9  # [
    RBRACK = 10  # ]
    EOL = 11  # \n

    def __str__(self) -> str:
        """Return the operator text for operators, the constant name otherwise."""
        return _OPERATOR_TEXT.get(self, self.name)

    def is_literal(self) -> bool:
        """Return True for identifiers and basic literals."""
        return self in _LITERALS

    def is_operator(self) -> bool:
        """Return True for operators and delimiters."""
        return self in _OPERATORS


_OPERATOR_TEXT = {
    Token.ASSIGN: "=",
    Token.LBRACK: "[",
    Token.RBRACK: "]",
    Token.EOL: "\n",
}

_LITERALS = frozenset({Token.IDENT, Token.STRING})
_OPERATORS = frozenset(_OPERATOR_TEXT)