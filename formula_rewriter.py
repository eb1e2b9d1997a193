"""Reescritura textual previa al análisis léxico.

Convierte la sintaxis de la interfaz (símbolos ×, ÷, π, %, trigonometría
en grados) a la sintaxis que entiende el tokenizador. Las reglas se
aplican en orden y ninguna falla: una entrada mal formada pasa tal cual
y la rechaza el parser o el evaluador.
"""

import re
from typing import Callable, NamedTuple


class RewriteRule(NamedTuple):
    name: str
    apply: Callable[[str], str]


# ── Reglas ───────────────────────────────────────────────────────

_OPERATOR_SYMBOLS = {
    "÷": "/",
    "×": "*",
    "−": "-",
}

_CONSTANT_SYMBOLS = {
    "π": "pi",
}

DEGREE_MARKER = "deg"
ANGLE_MARKERS = ("deg", "rad")

_TRIG_CALL_RE = re.compile(r"(?<![A-Za-z])(sin|cos|tan)\(([^()]+)\)")


def replace_operator_symbols(expr: str) -> str:
    for symbol, canonical in _OPERATOR_SYMBOLS.items():
        expr = expr.replace(symbol, canonical)
    return expr


def replace_constant_symbols(expr: str) -> str:
    for symbol, name in _CONSTANT_SYMBOLS.items():
        expr = expr.replace(symbol, name)
    return expr


def wrap_trig_degrees(expr: str) -> str:
    """Marca en grados el argumento de sin/cos/tan sin paréntesis anidados.

    ``sin(90)`` pasa a ``sin(90 deg)``; un argumento que ya termina en
    ``deg`` o ``rad`` se deja igual.
    """

    def _wrap(match):
        fn, arg = match.group(1), match.group(2)
        if arg.strip().endswith(ANGLE_MARKERS):
            return match.group(0)
        return f"{fn}({arg} {DEGREE_MARKER})"

    return _TRIG_CALL_RE.sub(_wrap, expr)


def expand_percent(expr: str) -> str:
    # El % solo afecta al operando inmediatamente anterior: 200+10% -> 200+10/100
    return expr.replace("%", "/100")


REWRITE_RULES = [
    RewriteRule("operator_symbols", replace_operator_symbols),
    RewriteRule("constant_symbols", replace_constant_symbols),
    RewriteRule("degree_wrapping", wrap_trig_degrees),
    RewriteRule("percent", expand_percent),
]


# ── Punto de entrada ─────────────────────────────────────────────

def apply_rules(raw: str, rules) -> str:
    expr = raw
    for rule in rules:
        expr = rule.apply(expr)
    return expr


def rewrite(raw: str) -> str:
    return apply_rules(raw, REWRITE_RULES)
