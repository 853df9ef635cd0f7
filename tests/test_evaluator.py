# test_evaluator.py
import math
import unittest
from exprtree.calculator import evaluate
from exprtree.errors import (
    DivisionByZeroError, EvaluationError, MismatchedParenthesesError, ModuloByZeroError,
    NullNodeError, UnknownIdentifierError, UnknownOperatorError,
)
from exprtree.evaluator import evaluate as evaluate_tree
from exprtree.math_ast import ExpressionTree, Leaf, OpNode, UnaryOpNode
from exprtree.operators import Operator


class TestEvaluateExpressions(unittest.TestCase):
    def test_literal(self):
        self.assertEqual(evaluate("42"), 42.0)
        self.assertEqual(evaluate("3.25"), 3.25)

    def test_precedence(self):
        self.assertEqual(evaluate("2+3*4"), 14)
        self.assertEqual(evaluate("(2+3)*4"), 20)

    def test_power_is_right_associative(self):
        self.assertEqual(evaluate("2^3^2"), 512)

    def test_unary_minus_before_power(self):
        # unary minus binds tighter than ^, so this is (-2)^2
        self.assertEqual(evaluate("-2^2"), 4)
        self.assertEqual(evaluate("-(2^2)"), -4)
        self.assertEqual(evaluate("2^-1"), 0.5)

    def test_left_associative(self):
        self.assertEqual(evaluate("10-4-3"), 3)
        self.assertEqual(evaluate("100/10/5"), 2)

    def test_unary_chains(self):
        self.assertEqual(evaluate("--3"), 3)
        self.assertEqual(evaluate("-+3"), -3)
        self.assertEqual(evaluate("2 - -3"), 5)

    def test_comparison_and_logic(self):
        self.assertEqual(evaluate("3<5"), 1)
        self.assertEqual(evaluate("3==5"), 0)
        self.assertEqual(evaluate("3 != 5"), 1)
        self.assertEqual(evaluate("2 <= 2 and 3 >= 4"), 0)
        self.assertEqual(evaluate("0 || 2"), 1)
        self.assertEqual(evaluate("!0"), 1)
        self.assertEqual(evaluate("not 1 == 0"), 1)

    def test_bitwise(self):
        self.assertEqual(evaluate("6&3"), 2)
        self.assertEqual(evaluate("6|1"), 7)
        self.assertEqual(evaluate("6 xor 3"), 5)
        self.assertEqual(evaluate("1 << 3 + 1"), 16)
        self.assertEqual(evaluate("~0"), -1)

    def test_modulo(self):
        self.assertEqual(evaluate("7 % 3"), 1)
        self.assertEqual(evaluate("-7 % 3"), -1)

    def test_division_by_zero(self):
        with self.assertRaises(DivisionByZeroError):
            evaluate("5/0")
        with self.assertRaises(DivisionByZeroError):
            evaluate("1/(2-2)")

    def test_modulo_by_zero(self):
        with self.assertRaises(ModuloByZeroError):
            evaluate("5%0")

    def test_overflow_feeds_later_operators(self):
        self.assertEqual(evaluate("10^200*10^200"), math.inf)
        with self.assertRaises(EvaluationError):
            evaluate("(10^200*10^200) % 2")
        with self.assertRaises(EvaluationError):
            evaluate("(10^200*10^200) | 1")

    def test_huge_shift_count(self):
        with self.assertRaises(EvaluationError):
            evaluate("1 << 10^20")
        self.assertEqual(evaluate("1 >> 10^20"), 0)
        self.assertEqual(evaluate("1 << 10"), 1024)

    def test_mismatched_parentheses(self):
        with self.assertRaises(MismatchedParenthesesError):
            evaluate("(1+2")
        with self.assertRaises(MismatchedParenthesesError):
            evaluate("1+2)")

    def test_identifier(self):
        with self.assertRaises(UnknownIdentifierError):
            evaluate("y * 2")


class TestEvaluateTree(unittest.TestCase):
    def test_manual_tree(self):
        tree = OpNode(Operator.MUL, UnaryOpNode(Operator.NEG, Leaf(3)), Leaf(4))
        self.assertEqual(evaluate_tree(tree), -12)
        self.assertEqual(evaluate_tree(ExpressionTree(tree)), -12)

    def test_repeated_evaluation(self):
        tree = ExpressionTree(OpNode(Operator.ADD, Leaf(1), Leaf(2)))
        self.assertEqual(evaluate_tree(tree), evaluate_tree(tree))

    def test_null_root(self):
        with self.assertRaises(NullNodeError):
            evaluate_tree(ExpressionTree())

    def test_null_child(self):
        with self.assertRaises(NullNodeError):
            evaluate_tree(OpNode(Operator.ADD, Leaf(1), None))
        with self.assertRaises(NullNodeError):
            evaluate_tree(UnaryOpNode(Operator.NEG, None))

    def test_unknown_operator(self):
        with self.assertRaises(UnknownOperatorError):
            evaluate_tree(OpNode('**', Leaf(1), Leaf(2)))
        with self.assertRaises(UnknownOperatorError):
            evaluate_tree(UnaryOpNode(Operator.ADD, Leaf(1)))
        with self.assertRaises(UnknownOperatorError):
            evaluate_tree(OpNode(Operator.NEG, Leaf(1), Leaf(2)))


if __name__ == '__main__':
    unittest.main()
