# math_ast.py

from decimal import Decimal
from typing import List, Optional

from exprtree.operators import Operator


# ====== AST ======
class Node:
    pass


class Leaf(Node):
    def __init__(self, value: float):
        self.value = float(value)

    def __repr__(self) -> str:
        return f"Leaf({format_operand(self.value)})"


class UnaryOpNode(Node):
    def __init__(self, op: Operator, child: Node):
        self.op = op
        self.child = child

    def __repr__(self) -> str:
        return f"UnaryOpNode({self.op.word}, {self.child!r})"


class OpNode(Node):
    def __init__(self, op: Operator, left: Node, right: Node):
        self.op = op
        self.left = left
        self.right = right

    def __repr__(self) -> str:
        return f"OpNode({self.op.symbol}, {self.left!r}, {self.right!r})"


def format_operand(value: float) -> str:
    """Render a literal so that the tokenizer reads back the same float.

    Integral values print without a fractional part; everything else uses
    the shortest positional decimal (no exponent, which the tokenizer does
    not accept).
    """
    if value != value or value in (float('inf'), float('-inf')):
        return str(value)
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if 'e' in text or 'E' in text:
        text = format(Decimal(text), 'f')
    return text


# ====== 木 ======
class ExpressionTree:
    """Owns a single root node. Traversals only read the tree."""

    def __init__(self, root: Optional[Node] = None):
        self.root = root

    def __repr__(self) -> str:
        return f"ExpressionTree({self.root!r})"

    def is_empty(self) -> bool:
        return self.root is None

    def in_order(self) -> str:
        parts: List[str] = []
        _in_order(self.root, parts)
        return ''.join(parts)

    def pre_order(self) -> str:
        parts: List[str] = []
        _pre_order(self.root, parts)
        return ' '.join(parts)

    def post_order(self) -> str:
        parts: List[str] = []
        _post_order(self.root, parts)
        return ' '.join(parts)

    def display(self) -> str:
        """Sideways drawing: right subtree above its parent, four spaces per level."""
        lines: List[str] = []
        _display(self.root, 0, lines)
        return '\n'.join(lines)


def _in_order(node: Optional[Node], out: List[str]) -> None:
    if node is None:
        return
    if isinstance(node, Leaf):
        out.append(format_operand(node.value))
    elif isinstance(node, UnaryOpNode):
        # keyword operators need a space before their operand
        sep = ' ' if node.op.symbol.isalpha() else ''
        out.append(f"({node.op.symbol}{sep}")
        _in_order(node.child, out)
        out.append(')')
    else:
        out.append('(')
        _in_order(node.left, out)
        out.append(f" {node.op.symbol} ")
        _in_order(node.right, out)
        out.append(')')


def _pre_order(node: Optional[Node], out: List[str]) -> None:
    if node is None:
        return
    if isinstance(node, Leaf):
        out.append(format_operand(node.value))
    elif isinstance(node, UnaryOpNode):
        out.append(node.op.word)
        _pre_order(node.child, out)
    else:
        out.append(node.op.word)
        _pre_order(node.left, out)
        _pre_order(node.right, out)


def _post_order(node: Optional[Node], out: List[str]) -> None:
    if node is None:
        return
    if isinstance(node, Leaf):
        out.append(format_operand(node.value))
    elif isinstance(node, UnaryOpNode):
        _post_order(node.child, out)
        out.append(node.op.word)
    else:
        _post_order(node.left, out)
        _post_order(node.right, out)
        out.append(node.op.word)


def _display(node: Optional[Node], level: int, lines: List[str]) -> None:
    if node is None:
        return
    indent = ' ' * (level * 4)
    if isinstance(node, Leaf):
        lines.append(indent + format_operand(node.value))
    elif isinstance(node, UnaryOpNode):
        _display(node.child, level + 1, lines)
        lines.append(indent + node.op.word)
    else:
        _display(node.right, level + 1, lines)
        lines.append(indent + node.op.symbol)
        _display(node.left, level + 1, lines)
