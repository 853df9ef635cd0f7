# builder.py

import logging
from typing import List

from exprtree.errors import (
    ExpressionError,
    InvalidExpressionError,
    UnknownIdentifierError,
)
from exprtree.math_ast import ExpressionTree, Leaf, Node, OpNode, UnaryOpNode
from exprtree.operators import Operator, binary_operator, unary_operator
from exprtree.tokenizer import Token, TokenKind

logger = logging.getLogger(__name__)


def _push_operator(stack: List[Node], op: Operator) -> None:
    if op.is_unary:
        if not stack:
            raise InvalidExpressionError("Invalid expression syntax for unary operator")
        child = stack.pop()
        stack.append(UnaryOpNode(op, child))
        return
    if len(stack) < 2:
        raise InvalidExpressionError("Invalid expression syntax for binary operator")
    right = stack.pop()
    left = stack.pop()
    stack.append(OpNode(op, left, right))


def _single_root(stack: List[Node]) -> ExpressionTree:
    if len(stack) != 1:
        raise InvalidExpressionError("Invalid expression")
    return ExpressionTree(stack[0])


def build_tree(postfix: List[Token]) -> ExpressionTree:
    stack: List[Node] = []
    for token in postfix:
        if token.kind == TokenKind.NUMBER:
            stack.append(Leaf(token.value))
        elif token.kind == TokenKind.OPERATOR:
            _push_operator(stack, token.operator)
        elif token.kind == TokenKind.IDENTIFIER:
            raise UnknownIdentifierError(token.text)
        else:
            raise InvalidExpressionError(f"Unexpected token '{token.text}' in postfix sequence")
    tree = _single_root(stack)
    logger.debug("tree: %r", tree.root)
    return tree


# ====== テキスト表現からの復元 ======
def _word_operator(word: str) -> Operator:
    if word == 'neg':
        return Operator.NEG
    if word in ('~', '!', 'not'):
        return unary_operator(word)
    return binary_operator(word)


def _read_word(word: str):
    try:
        return _word_operator(word)
    except ExpressionError:
        pass
    try:
        return float(word)
    except ValueError:
        raise InvalidExpressionError(f"Unexpected word '{word}'") from None


def parse_postfix(text: str) -> ExpressionTree:
    """Rebuild a tree from the output of ``ExpressionTree.post_order``."""
    stack: List[Node] = []
    for word in text.split():
        item = _read_word(word)
        if isinstance(item, Operator):
            _push_operator(stack, item)
        else:
            stack.append(Leaf(item))
    return _single_root(stack)


def parse_prefix(text: str) -> ExpressionTree:
    """Rebuild a tree from the output of ``ExpressionTree.pre_order``.

    Scanning the words right to left turns prefix into postfix with the
    operands already on the stack in reverse order.
    """
    stack: List[Node] = []
    for word in reversed(text.split()):
        item = _read_word(word)
        if not isinstance(item, Operator):
            stack.append(Leaf(item))
        elif item.is_unary:
            if not stack:
                raise InvalidExpressionError("Invalid expression syntax for unary operator")
            stack.append(UnaryOpNode(item, stack.pop()))
        else:
            if len(stack) < 2:
                raise InvalidExpressionError("Invalid expression syntax for binary operator")
            left = stack.pop()
            right = stack.pop()
            stack.append(OpNode(item, left, right))
    return _single_root(stack)
