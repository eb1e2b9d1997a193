"""Análisis léxico de expresiones ya reescritas."""

import re
from enum import Enum
from typing import Iterator, NamedTuple, Optional

from calculator_errors import LexError


class TokenKind(Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    END = "end"


class Token(NamedTuple):
    kind: TokenKind
    lexeme: str
    position: int
    value: Optional[float] = None


OPERATORS = frozenset("+-*/^")

_STRUCTURAL = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

_NUMBER_RE = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+\-]?\d+)?")
_IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")


def tokenize(text: str) -> Iterator[Token]:
    """Genera los tokens de ``text`` de forma perezosa.

    El último token siempre es END. Un carácter no reconocido (incluido
    un punto decimal aislado) lanza LexError al llegar a él.
    """
    pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]

        if char.isspace():
            pos += 1
            continue

        match = _NUMBER_RE.match(text, pos)
        if match:
            lexeme = match.group(0)
            yield Token(TokenKind.NUMBER, lexeme, pos, float(lexeme))
            pos = match.end()
            continue

        match = _IDENTIFIER_RE.match(text, pos)
        if match:
            yield Token(TokenKind.IDENTIFIER, match.group(0), pos)
            pos = match.end()
            continue

        if char in OPERATORS:
            yield Token(TokenKind.OPERATOR, char, pos)
        elif char in _STRUCTURAL:
            yield Token(_STRUCTURAL[char], char, pos)
        else:
            raise LexError(pos, char)
        pos += 1

    yield Token(TokenKind.END, "", length)
