"""Evaluación del árbol de expresión sobre un proveedor matemático."""

import math

from calculator_errors import (
    ArithmeticDomainError,
    ExpressionTooDeep,
    NonFiniteResult,
    UnknownFunction,
    UnknownReference,
)
from formula_nodes import BinaryOp, Call, Literal, Node, Reference, UnaryOp


class PythonMathProvider:
    """Provee números, funciones y constantes de punto flotante."""

    def number(self, text: str, value: float):
        return float(value) if value is not None else float(text)

    def constants(self) -> dict:
        return {
            "pi": math.pi,
            "e": math.e,
        }

    def functions(self) -> dict:
        # "log" es el logaritmo natural (botón ln) y "log10" el decimal (botón log)
        return {
            "sin": math.sin,
            "cos": math.cos,
            "tan": math.tan,
            "log": math.log,
            "log10": math.log10,
            "sqrt": math.sqrt,
            "exp": math.exp,
            "abs": abs,
        }

    @staticmethod
    def power(base, exponent):
        return math.pow(base, exponent)

    @staticmethod
    def radians(x):
        return math.radians(x)

    @staticmethod
    def isfinite(x) -> bool:
        return math.isfinite(x)

    @staticmethod
    def is_integer(x) -> bool:
        return float(x).is_integer()


# Predicados de dominio para funciones reales
_DOMAINS = {
    "sqrt": lambda x: x >= 0,
    "log": lambda x: x > 0,
    "log10": lambda x: x > 0,
}


class Evaluator:
    """Recorre el árbol y produce un número real finito.

    No modifica los registros: solo lee ``ans``. Actualizar la última
    respuesta es tarea de quien invoca.
    """

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._constants = self._provider.constants()
        self._functions = self._provider.functions()

    @property
    def provider(self):
        return self._provider

    def evaluate(self, node: Node, registers=None):
        try:
            return self._eval(node, registers)
        except RecursionError as exc:
            raise ExpressionTooDeep() from exc

    # ── Nodos ────────────────────────────────────────────────────

    def _eval(self, node: Node, registers):
        if isinstance(node, Literal):
            value = self._provider.number(node.text, node.value)
        elif isinstance(node, Reference):
            value = self._resolve(node.name, registers)
        elif isinstance(node, UnaryOp):
            value = self._unary(node.op, self._eval(node.operand, registers))
        elif isinstance(node, BinaryOp):
            left = self._eval(node.left, registers)
            right = self._eval(node.right, registers)
            value = self._binary(node.op, left, right)
        elif isinstance(node, Call):
            value = self._call(node.name, self._eval(node.argument, registers))
        else:
            raise TypeError(f"Nodo no soportado: {type(node).__name__}")

        if not self._provider.isfinite(value):
            raise NonFiniteResult()
        return value

    def _resolve(self, name: str, registers):
        if name in self._constants:
            return self._constants[name]
        if name == "ans":
            return registers.read_last_answer() if registers is not None else 0
        raise UnknownReference(name)

    def _unary(self, op: str, value):
        if op == "-":
            return -value
        if op in ("+", "rad"):
            return value
        if op == "deg":
            return self._provider.radians(value)
        raise ValueError(f"Operador unario desconocido: {op}")

    def _binary(self, op: str, left, right):
        if op == "+":
            return left + right
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op == "/":
            if right == 0:
                raise ArithmeticDomainError("/", (left, right))
            return left / right
        if op == "^":
            return self._power(left, right)
        raise ValueError(f"Operador desconocido: {op}")

    def _power(self, base, exponent):
        if base < 0 and not self._provider.is_integer(exponent):
            raise ArithmeticDomainError("^", (base, exponent))
        if base == 0 and exponent < 0:
            raise ArithmeticDomainError("^", (base, exponent))
        try:
            return self._provider.power(base, exponent)
        except OverflowError as exc:
            raise NonFiniteResult("Potencia demasiado grande") from exc
        except (ValueError, ZeroDivisionError) as exc:
            raise ArithmeticDomainError("^", (base, exponent)) from exc

    def _call(self, name: str, argument):
        fn = self._functions.get(name)
        if fn is None:
            raise UnknownFunction(name)

        in_domain = _DOMAINS.get(name)
        if in_domain is not None and not in_domain(argument):
            raise ArithmeticDomainError(name, (argument,))

        try:
            return fn(argument)
        except OverflowError as exc:
            raise NonFiniteResult(f"{name} desborda") from exc
        except ValueError as exc:
            raise ArithmeticDomainError(name, (argument,)) from exc


def evaluate(node: Node, registers=None, provider=None):
    return Evaluator(provider).evaluate(node, registers)
