"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, que encadena el pipeline
reescritura → tokenización → parseo → evaluación sobre números de punto
flotante. Puede reemplazarse por implementaciones alternativas
(e.g., ArbitraryPrecisionCalculatorEngine).

Contrato de interfaz:
    - compute(expression: str, registers) -> número finito
    - format_result(value) -> str
    - evaluate(expression: str, registers=None) -> str
"""

import logging

from formula_evaluator import Evaluator, PythonMathProvider
from formula_parser import parse
from formula_rewriter import rewrite
from formula_tokenizer import tokenize

logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Evalúa expresiones matemáticas con funciones científicas."""

    def __init__(self):
        self._provider = PythonMathProvider()
        self._evaluator = Evaluator(self._provider)

    # ── Evaluación principal ─────────────────────────────────────

    def compute(self, expression: str, registers=None):
        """Evalúa la expresión y devuelve el valor numérico.

        No modifica ``registers``; solo lee la última respuesta.

        Raises:
            CalculatorError: cualquier fallo de las etapas del pipeline.
        """
        rewritten = rewrite(expression)
        logger.debug("Reescrito %r -> %r", expression, rewritten)
        tree = parse(tokenize(rewritten))
        return self._evaluator.evaluate(tree, registers)

    def evaluate(self, expression: str, registers=None) -> str:
        return self.format_result(self.compute(expression, registers))

    # ── Formato del resultado ────────────────────────────────────

    def format_result(self, value) -> str:
        return self._format_result(value)

    @staticmethod
    def _format_result(value) -> str:
        if isinstance(value, float):
            if value == int(value) and abs(value) < 1e15:
                return str(int(value))
            return f"{value:.15g}"

        return str(value)
