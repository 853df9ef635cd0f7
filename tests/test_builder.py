# test_builder.py
import unittest
from exprtree.builder import build_tree, parse_postfix, parse_prefix
from exprtree.errors import InvalidExpressionError, UnknownIdentifierError
from exprtree.math_ast import Leaf, OpNode, UnaryOpNode
from exprtree.operators import Operator
from exprtree.postfix import to_postfix
from exprtree.tokenizer import tokenize


def build(text):
    return build_tree(to_postfix(tokenize(text)))


class TestBuildTree(unittest.TestCase):
    def test_binary(self):
        node = build("1 + 2").root
        self.assertIsInstance(node, OpNode)
        self.assertEqual(node.op, Operator.ADD)
        self.assertEqual(node.left.value, 1)
        self.assertEqual(node.right.value, 2)

    def test_left_right_order(self):
        node = build("7 - 2").root
        self.assertEqual(node.left.value, 7)
        self.assertEqual(node.right.value, 2)

    def test_unary(self):
        node = build("-1--2").root
        self.assertEqual(node.op, Operator.SUB)
        self.assertIsInstance(node.left, UnaryOpNode)
        self.assertEqual(node.left.op, Operator.NEG)
        self.assertEqual(node.left.child.value, 1)
        self.assertEqual(node.right.child.value, 2)

    def test_depth(self):
        node = build("2 * (3 + 4)").root
        self.assertEqual(node.op, Operator.MUL)
        self.assertEqual(node.right.op, Operator.ADD)
        self.assertEqual(node.right.right.value, 4)

    def test_single_number(self):
        node = build("42").root
        self.assertIsInstance(node, Leaf)
        self.assertEqual(node.value, 42.0)

    def test_missing_operand_for_binary(self):
        with self.assertRaises(InvalidExpressionError) as cm:
            build("1 +")
        self.assertIn("binary operator", str(cm.exception))

    def test_missing_operand_for_unary(self):
        with self.assertRaises(InvalidExpressionError) as cm:
            build("~")
        self.assertIn("unary operator", str(cm.exception))

    def test_too_many_operands(self):
        with self.assertRaises(InvalidExpressionError):
            build("1 2")
        with self.assertRaises(InvalidExpressionError):
            build("(1)(2)")

    def test_empty_input(self):
        with self.assertRaises(InvalidExpressionError):
            build("")

    def test_identifier_rejected(self):
        with self.assertRaises(UnknownIdentifierError) as cm:
            build("x + 1")
        self.assertEqual(cm.exception.name, 'x')


class TestParseRenderings(unittest.TestCase):
    def test_parse_postfix(self):
        node = parse_postfix("2 3 4 * +").root
        self.assertEqual(node.op, Operator.ADD)
        self.assertEqual(node.right.op, Operator.MUL)

    def test_parse_postfix_neg(self):
        node = parse_postfix("2 neg 2 ^").root
        self.assertEqual(node.op, Operator.POW)
        self.assertEqual(node.left.op, Operator.NEG)

    def test_parse_prefix(self):
        node = parse_prefix("- 10 - 4 3").root
        self.assertEqual(node.op, Operator.SUB)
        self.assertEqual(node.left.value, 10)
        self.assertEqual(node.right.op, Operator.SUB)

    def test_parse_prefix_unary(self):
        node = parse_prefix("not < 1 2").root
        self.assertEqual(node.op, Operator.NOT)
        self.assertEqual(node.child.op, Operator.LT)
        self.assertEqual(node.child.left.value, 1)

    def test_negative_literal_word(self):
        node = parse_postfix("5 -3 -").root
        self.assertEqual(node.right.value, -3)

    def test_bad_word(self):
        with self.assertRaises(InvalidExpressionError):
            parse_postfix("1 2 plus")

    def test_malformed(self):
        with self.assertRaises(InvalidExpressionError):
            parse_postfix("1 +")
        with self.assertRaises(InvalidExpressionError):
            parse_prefix("+ 1 2 3")


if __name__ == '__main__':
    unittest.main()
