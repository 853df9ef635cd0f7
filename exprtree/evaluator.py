# evaluator.py

from typing import Optional, Union

from exprtree.errors import EvaluationError, NullNodeError, UnknownOperatorError
from exprtree.math_ast import ExpressionTree, Leaf, Node, OpNode, UnaryOpNode
from exprtree.operators import Operator


# ====== 評価 ======
def evaluate(tree: Union[ExpressionTree, Node, None]) -> float:
    if isinstance(tree, ExpressionTree):
        return evaluate_node(tree.root)
    return evaluate_node(tree)


def evaluate_node(node: Optional[Node]) -> float:
    if node is None:
        raise NullNodeError
    if isinstance(node, Leaf):
        return node.value
    if isinstance(node, UnaryOpNode):
        child = evaluate_node(node.child)
        return evaluate_unary(node, child)
    if isinstance(node, OpNode):
        left = evaluate_node(node.left)
        right = evaluate_node(node.right)
        return evaluate_binary(node, left, right)
    raise EvaluationError(f"Unknown node type: {type(node).__name__}")


def evaluate_unary(node: UnaryOpNode, child: float) -> float:
    if not isinstance(node.op, Operator) or not node.op.is_unary:
        raise UnknownOperatorError(f"Unknown unary operator '{node.op}'")
    return node.op.apply(child)


def evaluate_binary(node: OpNode, left: float, right: float) -> float:
    if not isinstance(node.op, Operator) or node.op.is_unary:
        raise UnknownOperatorError(f"Unknown binary operator '{node.op}'")
    return node.op.apply(left, right)
