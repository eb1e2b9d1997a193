"""Registros numéricos de la sesión: memoria y última respuesta."""

from mpmath import mp

from calculator_errors import NonFiniteResult


class Registers:
    """Memoria (MS/MR/MC) y última respuesta (ans).

    Siempre contienen un real finito. Una escritura con NaN o infinito
    se rechaza y deja el registro como estaba. Un solo hilo escribe; si
    se usa desde varios hilos, cada sesión debe tener sus propios
    registros.
    """

    def __init__(self, memory=0, last_answer=0):
        self._memory = self._checked(memory)
        self._last_answer = self._checked(last_answer)

    @staticmethod
    def _checked(value):
        if not mp.isfinite(value):
            raise NonFiniteResult(f"Valor de registro no finito: {value}")
        return value

    # ── Memoria ──────────────────────────────────────────────────

    def set_memory(self, value):
        self._memory = self._checked(value)

    def clear_memory(self):
        self._memory = 0

    def read_memory(self):
        return self._memory

    # ── Última respuesta ─────────────────────────────────────────

    def read_last_answer(self):
        return self._last_answer

    def record_answer(self, value):
        self._last_answer = self._checked(value)

    def snapshot(self) -> tuple:
        return (self._memory, self._last_answer)

    def __repr__(self):
        return f"Registers(memory={self._memory!r}, last_answer={self._last_answer!r})"
