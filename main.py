"""Punto de entrada de la calculadora científica (consola).

Uso:
    python main.py                    # sesión interactiva
    python main.py --eval "sin(30)"   # evalúa y termina
    python main.py --precise          # motor de precisión arbitraria
    python main.py --verbose          # trazas de depuración
"""

import logging
import sys

from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession


USE_ARBITRARY_PRECISION = False
AP_INITIAL_DIGITS = 30
AP_PRECISION_STEP = 30
HISTORY_SIZE = 4

PROMPT = "> "
HELP = (
    "Escribe una expresión y pulsa Enter. Comandos: "
    ":ms guarda en memoria, :mr recupera, :mc borra, "
    ":hist historial, :clear borra historial, :more más dígitos, :q salir"
)


def build_engine(precise: bool):
    if precise:
        from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine

        return ArbitraryPrecisionCalculatorEngine(
            initial_digits=AP_INITIAL_DIGITS,
            precision_step=AP_PRECISION_STEP,
        )
    return CalculatorEngine()


def run_command(session: CalculatorSession, line: str) -> bool:
    """Procesa una línea. Devuelve False cuando hay que salir."""
    if line in (":q", ":quit"):
        return False
    if line == ":ms":
        session.memory_store()
    elif line == ":mr":
        session.memory_recall()
    elif line == ":mc":
        session.memory_clear()
    elif line == ":hist":
        for entry in session.history.recent():
            print(entry)
        return True
    elif line == ":clear":
        session.clear_history()
        return True
    elif line == ":more":
        if not hasattr(session.engine, "request_more_precision"):
            print("El motor actual no admite más precisión")
            return True
        try:
            print(session.engine.request_more_precision())
        except ValueError as exc:
            print(f"Error: {exc}")
        return True
    elif line == ":help":
        print(HELP)
        return True
    else:
        session.clear_all()
        session.append_literal(line)
        session.evaluate()
    print(session.display)
    return True


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    logging.basicConfig(
        level=logging.DEBUG if "--verbose" in argv else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    precise = USE_ARBITRARY_PRECISION or "--precise" in argv
    session = CalculatorSession(build_engine(precise), history_size=HISTORY_SIZE)

    if "--eval" in argv:
        try:
            expr = argv[argv.index("--eval") + 1]
        except IndexError:
            raise SystemExit("Falta la expresión después de --eval")
        session.append_literal(expr)
        ok = session.evaluate()
        print(session.display)
        return 0 if ok else 1

    print(HELP)
    while True:
        try:
            line = input(PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if line and not run_command(session, line):
            break
    return 0


if __name__ == "__main__":
    sys.exit(main())
