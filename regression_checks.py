from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine
from calculator_engine import CalculatorEngine
from calculator_errors import ArithmeticDomainError, CalculatorError, UnknownFunction
from calculator_session import CalculatorSession
import math
import sys


def _raises(expr: str, error: type) -> bool:
	try:
		CalculatorEngine().compute(expr)
	except error:
		return True
	except CalculatorError:
		return False
	return False


def _close(expr: str, expected: float) -> bool:
	return math.isclose(CalculatorEngine().compute(expr), expected, rel_tol=1e-12, abs_tol=1e-12)


def collect_checks() -> tuple[list[tuple[str, bool]], list[tuple[str, str, str]]]:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	checks.append(("grouping 2*(3+4) is 14", _close("2*(3+4)", 14)))
	checks.append(("sin(90) is read in degrees", _close("sin(90)", 1)))
	checks.append(("cos(60) is read in degrees", _close("cos(60)", 0.5)))
	checks.append(("log is the natural logarithm", _close("log(e)", 1)))
	checks.append(("log10 is the decimal logarithm", _close("log10(100)", 2)))
	checks.append(("percent binds to the previous number", _close("200+10%", 200.1)))
	checks.append(("-2^2 is -(2^2)", _close("-2^2", -4)))
	checks.append(("power is right associative", _close("2^3^2", 512)))
	checks.append(("5/0 is a domain error", _raises("5/0", ArithmeticDomainError)))
	checks.append(("sqrt(-1) is a domain error", _raises("sqrt(-1)", ArithmeticDomainError)))
	checks.append(("(-8)^(1/3) is a domain error", _raises("(-8)^(1/3)", ArithmeticDomainError)))
	checks.append(("foo(2) is an unknown function", _raises("foo(2)", UnknownFunction)))

	session = CalculatorSession()
	session.append_literal("6*7")
	session.evaluate()
	session.append_literal("+ans")
	session.evaluate()
	expected_actual.append(("6*7 then 42+ans", "84", session.buffer))
	checks.append(("ans feeds the next expression", session.buffer == "84"))

	before = (session.registers.snapshot(), session.history.entries(), session.buffer)
	session.clear_all()
	session.append_literal("1/0")
	session.evaluate()
	session.evaluate()
	after = (session.registers.snapshot(), session.history.entries())
	checks.append(("failed evaluations leave state alone", after == before[:2]))
	checks.append(("failed evaluation shows Error", session.display == "Error"))
	checks.append(("failed evaluation keeps the buffer", session.buffer == "1/0"))

	precise = ArbitraryPrecisionCalculatorEngine(initial_digits=30, precision_step=30)
	expected_actual.append(("precise 1/3", "0." + "3" * 30, precise.evaluate("1/3")))
	expected_actual.append(("precise 0.1+0.2", "0.3", precise.evaluate("0.1+0.2")))
	expected_actual.append(("precise sin(30)", "0.5", precise.evaluate("sin(30)")))
	expected_actual.append(("precise 2^50", str(2 ** 50), precise.evaluate("2^50")))

	return checks, expected_actual


def run_regressions() -> None:
	checks, expected_actual = collect_checks()

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		if status == "FAIL":
			failed.append(label)
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "sin(30)+2^10"
	if "--inspect" in sys.argv:
		try:
			expr = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing expression after --inspect")

		from formula_parser import parse_expression
		from formula_rewriter import rewrite

		print(f"expr:      {expr}")
		print(f"rewritten: {rewrite(expr)}")
		print(f"tree:      {parse_expression(rewrite(expr))!r}")
		print(f"value:     {CalculatorEngine().evaluate(expr)}")
	else:
		run_regressions()
