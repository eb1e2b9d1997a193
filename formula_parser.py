"""Parser descendente recursivo para las expresiones de la calculadora.

Gramática, de menor a mayor precedencia::

    expression     := additive
    argument       := additive [("deg" | "rad")]
    additive       := multiplicative (("+" | "-") multiplicative)*
    multiplicative := unary (("*" | "/") unary)*
    unary          := ("-" | "+")* power
    power          := primary ["^" unary]
    primary        := NUMBER | NAME | NAME "(" argument ")" | "(" expression ")"

No hay multiplicación implícita: ``2pi`` es un error de sintaxis. Los
nombres desconocidos son válidos aquí y se resuelven al evaluar. El
marcador angular solo se admite como sufijo del argumento de una
función, que es donde lo coloca la reescritura de sin/cos/tan.
"""

from typing import Iterable

from calculator_errors import FormulaSyntaxError
from formula_nodes import BinaryOp, Call, Literal, Node, Reference, UnaryOp
from formula_rewriter import ANGLE_MARKERS
from formula_tokenizer import Token, TokenKind, tokenize

# Niveles de paréntesis, llamadas y exponentes encadenados
MAX_NESTING = 64


class _Parser:
    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._current = self._next_token()
        self._depth = 0

    # ── Flujo de tokens ──────────────────────────────────────────

    def _next_token(self) -> Token:
        try:
            return next(self._tokens)
        except StopIteration:
            # Secuencias construidas a mano pueden omitir END
            return Token(TokenKind.END, "", -1)

    def _advance(self) -> Token:
        token = self._current
        if token.kind is not TokenKind.END:
            self._current = self._next_token()
        return token

    def _at_operator(self, *ops: str) -> bool:
        return self._current.kind is TokenKind.OPERATOR and self._current.lexeme in ops

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        if self._current.kind is not kind:
            raise FormulaSyntaxError(self._current.position, expected)
        return self._advance()

    def _enter(self, position: int):
        self._depth += 1
        if self._depth > MAX_NESTING:
            raise FormulaSyntaxError(
                position, f"como mucho {MAX_NESTING} niveles de anidamiento"
            )

    def _leave(self):
        self._depth -= 1

    # ── Reglas ───────────────────────────────────────────────────

    def parse(self) -> Node:
        node = self._additive()
        if self._current.kind is not TokenKind.END:
            raise FormulaSyntaxError(self._current.position, "fin de la expresión")
        return node

    def _argument(self) -> Node:
        node = self._additive()
        if (
            self._current.kind is TokenKind.IDENTIFIER
            and self._current.lexeme in ANGLE_MARKERS
        ):
            node = UnaryOp(self._advance().lexeme, node)
        return node

    def _additive(self) -> Node:
        node = self._multiplicative()
        while self._at_operator("+", "-"):
            op = self._advance().lexeme
            node = BinaryOp(op, node, self._multiplicative())
        return node

    def _multiplicative(self) -> Node:
        node = self._unary()
        while self._at_operator("*", "/"):
            op = self._advance().lexeme
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        signs = []
        while self._at_operator("-", "+"):
            signs.append(self._advance().lexeme)

        node = self._power()
        if not signs:
            return node
        # Una cadena de signos se reduce a uno solo
        negative = signs.count("-") % 2 == 1
        return UnaryOp("-" if negative else "+", node)

    def _power(self) -> Node:
        base = self._primary()
        if self._at_operator("^"):
            self._enter(self._advance().position)
            exponent = self._unary()
            self._leave()
            return BinaryOp("^", base, exponent)
        return base

    def _primary(self) -> Node:
        token = self._current

        if token.kind is TokenKind.NUMBER:
            self._advance()
            return Literal(token.value, token.lexeme)

        if token.kind is TokenKind.IDENTIFIER:
            self._advance()
            if self._current.kind is TokenKind.LPAREN:
                return self._call(token.lexeme)
            return Reference(token.lexeme)

        if token.kind is TokenKind.LPAREN:
            self._enter(self._advance().position)
            node = self._additive()
            self._expect(TokenKind.RPAREN, "')'")
            self._leave()
            return node

        raise FormulaSyntaxError(token.position, "un operando")

    def _call(self, name: str) -> Node:
        self._enter(self._expect(TokenKind.LPAREN, "'('").position)
        argument = self._argument()
        if self._current.kind is TokenKind.COMMA:
            raise FormulaSyntaxError(
                self._current.position, f"')': {name} admite un solo argumento"
            )
        self._expect(TokenKind.RPAREN, "')'")
        self._leave()
        return Call(name, argument)


def parse(tokens: Iterable[Token]) -> Node:
    """Construye el árbol de expresión a partir de una secuencia de tokens."""
    return _Parser(tokens).parse()


def parse_expression(text: str) -> Node:
    return parse(tokenize(text))
