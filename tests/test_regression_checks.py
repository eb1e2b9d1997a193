import unittest
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from regression_checks import collect_checks


class TestRegressionChecks(unittest.TestCase):
    def test_all_checks_pass(self):
        checks, expected_actual = collect_checks()
        self.assertEqual([name for name, ok in checks if not ok], [])
        for label, expected, actual in expected_actual:
            with self.subTest(label=label):
                self.assertEqual(actual, expected)


if __name__ == "__main__":
    unittest.main(verbosity=2)
