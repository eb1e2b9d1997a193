"""
Sesión de la calculadora: buffer editable, registros e historial.

Reúne los comandos que la interfaz dispara (teclas, botones científicos,
memoria) y el paso de evaluación. La sesión no dibuja nada; la capa de
presentación lee ``buffer``, ``display`` e ``history.recent()``.
"""

import logging
import re

from calculator_engine import CalculatorEngine
from calculator_errors import CalculatorError
from registers import Registers

logger = logging.getLogger(__name__)

ERROR_TEXT = "Error"

_LEADING_NUMBER_RE = re.compile(r"\s*([+\-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+\-]?\d+)?)")


class History:
    """Registro ordenado de cálculos; solo los últimos ``limit`` se muestran."""

    def __init__(self, limit: int = 4):
        self.limit = limit
        self._entries: list[tuple[str, str]] = []

    def append(self, expression: str, result: str):
        self._entries.append((expression, result))

    def entries(self) -> list[tuple[str, str]]:
        return list(self._entries)

    def recent(self) -> list[str]:
        tail = self._entries[-self.limit:] if self.limit > 0 else []
        return [f"{expr} = {result}" for expr, result in tail]

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)


class CalculatorSession:
    """Controlador de una sesión de cálculo."""

    # ── Etiquetas de botón que insertan texto ────────────────────
    #  El botón "ln" inserta log( (logaritmo natural) y el botón "log"
    #  inserta log10(.

    FUNCTION_PREFIXES = {
        "√": "sqrt(",
        "sqrt": "sqrt(",
        "sin": "sin(",
        "cos": "cos(",
        "tan": "tan(",
        "ln": "log(",
        "log": "log10(",
        "exp": "exp(",
    }

    CONSTANTS = {
        "π": "π",
        "pi": "π",
        "e": "e",
        "ans": "ans",
    }

    def __init__(self, engine=None, registers=None, history_size: int = 4):
        self.engine = engine if engine is not None else CalculatorEngine()
        self.registers = registers if registers is not None else Registers()
        self.history = History(history_size)
        self.buffer = ""
        self.display = ""

        self._commands = {
            "C": self.clear_all,
            "⌫": self.delete_last_char,
            "±": self.toggle_sign,
            "=": self.evaluate,
            "MC": self.memory_clear,
            "MR": self.memory_recall,
            "MS": self.memory_store,
        }

    # ── Edición del buffer ───────────────────────────────────────

    def _set_buffer(self, text: str):
        self.buffer = text
        self.display = text

    def append_literal(self, text: str):
        self._set_buffer(self.buffer + text)

    def clear_all(self):
        self._set_buffer("")

    def delete_last_char(self):
        self._set_buffer(self.buffer[:-1])

    def toggle_sign(self):
        if not self.buffer:
            return
        if self.buffer.startswith("-"):
            self._set_buffer(self.buffer[1:])
        else:
            self._set_buffer("-" + self.buffer)

    def insert_constant(self, name: str):
        try:
            self.append_literal(self.CONSTANTS[name])
        except KeyError:
            raise ValueError(f"Constante desconocida: {name}") from None

    def insert_function_prefix(self, name: str):
        try:
            self.append_literal(self.FUNCTION_PREFIXES[name])
        except KeyError:
            raise ValueError(f"Función desconocida: {name}") from None

    def press(self, label: str):
        """Despacha la etiqueta de un botón como lo hace el teclado en pantalla."""
        if label in self._commands:
            self._commands[label]()
        elif label in self.FUNCTION_PREFIXES:
            self.insert_function_prefix(label)
        elif label in self.CONSTANTS:
            self.insert_constant(label)
        elif label == "%":
            self.append_literal("/100")
        else:
            self.append_literal(label)

    # ── Memoria ──────────────────────────────────────────────────

    def memory_store(self):
        match = _LEADING_NUMBER_RE.match(self.buffer)
        value = float(match.group(1)) if match else 0.0
        try:
            self.registers.set_memory(value)
        except CalculatorError:
            logger.warning("Valor no almacenable en memoria: %r", self.buffer)
            self.display = ERROR_TEXT

    def memory_recall(self):
        # Inserta el valor textual, no una referencia viva a la memoria
        self._set_buffer(self.engine.format_result(self.registers.read_memory()))

    def memory_clear(self):
        self.registers.clear_memory()

    # ── Evaluación ───────────────────────────────────────────────

    def evaluate(self) -> bool:
        """Evalúa el buffer actual.

        Si tiene éxito, registra la respuesta, agrega la entrada al
        historial y reemplaza el buffer por el resultado. Si falla, la
        pantalla muestra "Error" y nada más cambia; un buffer vacío
        también es un error de sintaxis.
        """
        expression = self.buffer
        try:
            value = self.engine.compute(expression, self.registers)
            self.registers.record_answer(value)
        except CalculatorError as exc:
            logger.warning("Fallo al evaluar %r: %s", expression, exc)
            self.display = ERROR_TEXT
            return False

        result = self.engine.format_result(value)
        self.history.append(expression, result)
        logger.info("%s = %s", expression, result)
        self._set_buffer(result)
        return True

    def clear_history(self):
        self.history.clear()
