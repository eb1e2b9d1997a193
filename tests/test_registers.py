import unittest
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from calculator_errors import NonFiniteResult
from registers import Registers


class TestRegisters(unittest.TestCase):
    def test_defaults(self):
        registers = Registers()
        self.assertEqual(registers.read_memory(), 0)
        self.assertEqual(registers.read_last_answer(), 0)

    def test_memory_round_trip(self):
        registers = Registers()
        registers.set_memory(7)
        self.assertEqual(registers.read_memory(), 7)
        registers.clear_memory()
        self.assertEqual(registers.read_memory(), 0)

    def test_record_answer(self):
        registers = Registers()
        registers.record_answer(42.0)
        self.assertEqual(registers.read_last_answer(), 42.0)
        self.assertEqual(registers.snapshot(), (0, 42.0))

    def test_rejects_non_finite(self):
        registers = Registers(memory=1, last_answer=2)
        for bad in (float("inf"), float("-inf"), float("nan")):
            with self.subTest(value=bad):
                with self.assertRaises(NonFiniteResult):
                    registers.set_memory(bad)
                with self.assertRaises(NonFiniteResult):
                    registers.record_answer(bad)
        self.assertEqual(registers.snapshot(), (1, 2))

    def test_constructor_validates(self):
        with self.assertRaises(NonFiniteResult):
            Registers(memory=float("nan"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
