import unittest
import sys
from pathlib import Path

from mpmath import mp

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine
from calculator_engine import CalculatorEngine
from calculator_errors import ArithmeticDomainError, FormulaSyntaxError, UnknownFunction
from registers import Registers


class TestCalculatorEngine(unittest.TestCase):
    def setUp(self):
        self.engine = CalculatorEngine()

    def test_evaluate_formats_integers(self):
        self.assertEqual(self.engine.evaluate("2*(3+4)"), "14")
        self.assertEqual(self.engine.evaluate("-0"), "0")

    def test_evaluate_formats_decimals(self):
        self.assertEqual(self.engine.evaluate("200+10%"), "200.1")
        self.assertEqual(self.engine.evaluate("0.1+0.2"), "0.3")
        self.assertEqual(self.engine.evaluate("1/3"), "0.333333333333333")

    def test_large_values_use_exponent(self):
        self.assertEqual(self.engine.evaluate("10^20"), "1e+20")

    def test_symbols(self):
        self.assertEqual(self.engine.evaluate("8÷2×3"), "12")
        self.assertEqual(self.engine.evaluate("sin(30)"), "0.5")

    def test_compute_reads_registers(self):
        registers = Registers(last_answer=42)
        self.assertEqual(self.engine.compute("ans+1", registers), 43.0)
        self.assertEqual(registers.read_last_answer(), 42)

    def test_errors(self):
        with self.assertRaises(ArithmeticDomainError):
            self.engine.evaluate("5/0")
        with self.assertRaises(UnknownFunction):
            self.engine.evaluate("foo(2)")
        with self.assertRaises(FormulaSyntaxError):
            self.engine.evaluate("")


class TestArbitraryPrecisionEngine(unittest.TestCase):
    def setUp(self):
        self.engine = ArbitraryPrecisionCalculatorEngine(initial_digits=20, precision_step=10)

    def test_exact_decimals(self):
        self.assertEqual(self.engine.evaluate("0.1+0.2"), "0.3")
        self.assertEqual(self.engine.evaluate("2^50"), str(2 ** 50))

    def test_degrees(self):
        self.assertEqual(self.engine.evaluate("sin(30)"), "0.5")

    def test_more_precision(self):
        self.assertEqual(self.engine.evaluate("1/3"), "0." + "3" * 20)
        self.assertTrue(self.engine.can_expand_precision())
        self.assertEqual(self.engine.request_more_precision(), "0." + "3" * 30)
        self.assertEqual(self.engine.working_digits, 30)

    def test_failed_compute_keeps_previous_precision_state(self):
        self.engine.evaluate("1/3")
        self.engine.request_more_precision()
        with self.assertRaises(ArithmeticDomainError):
            self.engine.compute("5/0")
        self.assertEqual(self.engine.working_digits, 30)
        self.assertEqual(self.engine.request_more_precision(), "0." + "3" * 40)

    def test_more_precision_without_previous(self):
        with self.assertRaises(ValueError):
            self.engine.request_more_precision()

    def test_more_precision_keeps_answer_snapshot(self):
        registers = Registers(last_answer=2)
        self.engine.compute("ans/3", registers)
        registers.record_answer(100)
        self.assertEqual(self.engine.request_more_precision(), "0." + "6" * 29 + "7")

    def test_compute_returns_mpf(self):
        self.assertIsInstance(self.engine.compute("pi"), mp.mpf)

    def test_domain_errors(self):
        for text in ("5/0", "sqrt(-4)", "(-8)^(1/3)", "log(0)"):
            with self.subTest(text=text):
                with self.assertRaises(ArithmeticDomainError):
                    self.engine.compute(text)

    def test_memory_value_formatting(self):
        self.assertEqual(self.engine.format_result(7.0), "7")


if __name__ == "__main__":
    unittest.main(verbosity=2)
