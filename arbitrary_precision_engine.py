"""Motor de cálculo con precisión arbitraria y expansión progresiva."""

from __future__ import annotations

import logging

from formula_evaluator import Evaluator
from formula_parser import parse
from formula_rewriter import rewrite
from formula_tokenizer import tokenize
from registers import Registers

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc

logger = logging.getLogger(__name__)


class MPMathProvider:
    """Proveedor matemático basado en mpmath.

    Los literales se construyen desde su texto para no arrastrar el
    redondeo binario de float.
    """

    def number(self, text: str, value):
        return mp.mpf(text) if text else mp.mpf(value)

    def constants(self) -> dict:
        return {
            "pi": mp.mpf(mp.pi),
            "e": mp.mpf(mp.e),
        }

    def functions(self) -> dict:
        return {
            "sin": mp.sin,
            "cos": mp.cos,
            "tan": mp.tan,
            "log": mp.log,
            "log10": mp.log10,
            "sqrt": mp.sqrt,
            "exp": mp.exp,
            "abs": mp.fabs,
        }

    @staticmethod
    def power(base, exponent):
        return mp.power(base, exponent)

    @staticmethod
    def radians(x):
        return mp.radians(x)

    @staticmethod
    def isfinite(x) -> bool:
        return bool(mp.isfinite(x))

    @staticmethod
    def is_integer(x) -> bool:
        return bool(mp.isint(x))


class ArbitraryPrecisionCalculatorEngine:
    """Evalúa expresiones con precisión arbitraria y dígitos progresivos."""

    SCI_NOTATION_EXP_LIMIT = 12

    def __init__(self, initial_digits: int = 18, precision_step: int = 24):
        self._provider = MPMathProvider()

        self._initial_digits = max(8, initial_digits)
        self._precision_step = max(8, precision_step)

        self._working_digits = self._initial_digits
        self._last_expression: str | None = None
        self._last_registers: Registers | None = None

    @property
    def working_digits(self) -> int:
        return self._working_digits

    def compute(self, expression: str, registers=None):
        value = self._evaluate_with_digits(expression, registers, self._initial_digits)
        self._working_digits = self._initial_digits
        self._last_expression = expression
        # Copia: "ans" puede cambiar después de registrar este resultado
        self._last_registers = (
            Registers(*registers.snapshot()) if registers is not None else None
        )
        return value

    def evaluate(self, expression: str, registers=None) -> str:
        return self.format_result(self.compute(expression, registers))

    def can_expand_precision(self) -> bool:
        return self._last_expression is not None

    def request_more_precision(self) -> str:
        if not self._last_expression:
            raise ValueError("No hay cálculo previo")

        self._working_digits += self._precision_step
        logger.debug(
            "Reevaluando %r con %d dígitos", self._last_expression, self._working_digits
        )
        value = self._evaluate_with_digits(
            self._last_expression,
            self._last_registers,
            self._working_digits,
        )
        return self.format_result(value)

    def _evaluate_with_digits(self, expression: str, registers, digits: int):
        internal_dps = max(40, digits * 2 + 10)
        with mp.workdps(internal_dps):
            tree = parse(tokenize(rewrite(expression)))
            return Evaluator(self._provider).evaluate(tree, registers)

    def format_result(self, value) -> str:
        return self._format_result(value, self._working_digits)

    @staticmethod
    def _format_result(value, digits: int) -> str:
        if isinstance(value, int):
            return str(value)

        if isinstance(value, float):
            if value == int(value) and abs(value) < 1e15:
                return str(int(value))
            return f"{value:.15g}"

        if isinstance(value, mp.mpf):
            if value == 0:
                return "0"

            if mp.floor(value) == value and abs(value) < mp.mpf("1e18"):
                return str(int(value))

            exponent = int(mp.floor(mp.log10(abs(value))))
            if abs(exponent) >= ArbitraryPrecisionCalculatorEngine.SCI_NOTATION_EXP_LIMIT:
                return mp.nstr(value, n=digits, min_fixed=0, max_fixed=0)

            return mp.nstr(value, n=digits)

        return str(value)
