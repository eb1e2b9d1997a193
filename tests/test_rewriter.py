import unittest
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from formula_rewriter import (
    REWRITE_RULES,
    apply_rules,
    expand_percent,
    replace_constant_symbols,
    replace_operator_symbols,
    rewrite,
    wrap_trig_degrees,
)


class TestRewriteRules(unittest.TestCase):
    def test_operator_symbols(self):
        self.assertEqual(replace_operator_symbols("8÷2×3−1"), "8/2*3-1")

    def test_constant_symbols(self):
        self.assertEqual(replace_constant_symbols("2*π"), "2*pi")
        self.assertEqual(replace_constant_symbols("e^2"), "e^2")

    def test_trig_gets_degree_marker(self):
        self.assertEqual(wrap_trig_degrees("sin(90)"), "sin(90 deg)")
        self.assertEqual(wrap_trig_degrees("cos(30+30)+tan(45)"), "cos(30+30 deg)+tan(45 deg)")

    def test_trig_existing_marker_is_kept(self):
        self.assertEqual(wrap_trig_degrees("sin(90 deg)"), "sin(90 deg)")
        self.assertEqual(wrap_trig_degrees("sin(pi/2 rad)"), "sin(pi/2 rad)")

    def test_trig_nested_parentheses_only_inner_call(self):
        self.assertEqual(wrap_trig_degrees("sin(cos(0))"), "sin(cos(0 deg))")
        self.assertEqual(wrap_trig_degrees("sin((30))"), "sin((30))")

    def test_other_functions_untouched(self):
        self.assertEqual(wrap_trig_degrees("sqrt(4)+asin(1)"), "sqrt(4)+asin(1)")

    def test_percent(self):
        self.assertEqual(expand_percent("50%"), "50/100")
        self.assertEqual(expand_percent("200+10%"), "200+10/100")


class TestRewritePipeline(unittest.TestCase):
    def test_rule_order(self):
        self.assertEqual(
            [rule.name for rule in REWRITE_RULES],
            ["operator_symbols", "constant_symbols", "degree_wrapping", "percent"],
        )

    def test_power_passes_through(self):
        self.assertEqual(rewrite("2^3"), "2^3")

    def test_full_rewrite(self):
        self.assertEqual(rewrite("sin(π÷2)×10%"), "sin(pi/2 deg)*10/100")

    def test_malformed_input_passes_through(self):
        self.assertEqual(rewrite("2+*)"), "2+*)")

    def test_apply_subset_of_rules(self):
        self.assertEqual(apply_rules("sin(π)", REWRITE_RULES[:1]), "sin(π)")


if __name__ == "__main__":
    unittest.main(verbosity=2)
