"""Errores del núcleo de evaluación de la calculadora.

Todas las etapas del pipeline (reescritura, tokenización, parseo y
evaluación) fallan con una subclase de CalculatorError. Cada una hereda
también de la excepción estándar que la interfaz ya sabe capturar.
"""


class CalculatorError(Exception):
    """Base de todos los fallos de evaluación."""


class LexError(CalculatorError, ValueError):
    """Carácter no reconocido en la expresión."""

    def __init__(self, position: int, char: str):
        self.position = position
        self.char = char
        super().__init__(f"Carácter inválido {char!r} en la posición {position}")


class FormulaSyntaxError(CalculatorError, ValueError):
    """Secuencia de tokens estructuralmente inválida."""

    def __init__(self, position: int, expected: str):
        self.position = position
        self.expected = expected
        super().__init__(f"Error de sintaxis en la posición {position}: se esperaba {expected}")


class UnknownReference(CalculatorError, ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Desconocido: {name}")


class UnknownFunction(CalculatorError, ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Función desconocida: {name}")


class ArithmeticDomainError(CalculatorError, ArithmeticError):
    """Operación matemáticamente indefinida (división por cero, raíz negativa...)."""

    def __init__(self, op: str, operands: tuple):
        self.op = op
        self.operands = tuple(operands)
        shown = ", ".join(str(v) for v in self.operands)
        super().__init__(f"Operación indefinida: {op}({shown})")


class NonFiniteResult(CalculatorError, OverflowError):
    def __init__(self, message: str = "Resultado no finito"):
        super().__init__(message)


class ExpressionTooDeep(CalculatorError, ValueError):
    """El árbol supera la profundidad que el evaluador puede recorrer."""

    def __init__(self):
        super().__init__("Expresión demasiado larga o anidada")
