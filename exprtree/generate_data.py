# -*- coding: utf-8 -*-
# generate_data.py

import random
from dataclasses import dataclass, field
from typing import Iterator, Optional, Set

from exprtree.errors import ExpressionError
from exprtree.evaluator import evaluate
from exprtree.math_ast import Leaf, Node, OpNode, UnaryOpNode, format_operand
from exprtree.operators import Operator


# ====== コンフィグ ======
@dataclass
class GenConfig:
    max_depth_cap: int = 4
    min_digits: int = 1
    max_digits: int = 2
    operators: Set[Operator] = field(default_factory=lambda: {
        Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV, Operator.MOD,
        Operator.NEG, Operator.LT, Operator.EQ,
    })
    prob_decimal: float = 0.2      # 小数の葉の確率
    prob_negative: float = 0.2
    max_length: int = 2000
    seed: Optional[int] = None


@dataclass
class Sample:
    expr: str      # to_string で描画した式
    tree: Node


# ====== 生成 ======
def generate_leaf(cfg: GenConfig, rng: random.Random) -> Leaf:
    num_digits = rng.randint(cfg.min_digits, cfg.max_digits)
    lower_bound = 10**(num_digits - 1) if num_digits > 1 else 0
    upper_bound = 10**num_digits - 1
    value = float(rng.randint(lower_bound, upper_bound))
    if rng.random() < cfg.prob_decimal:
        value += rng.randint(1, 99) / 100
    if rng.random() < cfg.prob_negative:
        value = -value
    return Leaf(value)


def _nonzero_divisor(cfg: GenConfig, rng: random.Random, depth: int) -> Node:
    for _ in range(10):
        right = generate_tree(cfg, rng, depth)
        try:
            val = evaluate(right)
        except ExpressionError:
            continue
        if val != 0:
            return right
    return Leaf(1)


def generate_tree(cfg: GenConfig, rng: random.Random, current_depth: int = 0) -> Node:
    # 葉を生成
    if current_depth >= cfg.max_depth_cap or (current_depth > 0 and rng.random() < 0.5):
        return generate_leaf(cfg, rng)

    # sets of enum members iterate in hash order, so sort for reproducible seeds
    operators = sorted(cfg.operators, key=lambda o: o.name)
    op = rng.choice(operators)

    if op.is_unary:
        child = generate_tree(cfg, rng, current_depth + 1)
        return UnaryOpNode(op, child)

    left = generate_tree(cfg, rng, current_depth + 1)
    if op in (Operator.DIV, Operator.MOD):
        right = _nonzero_divisor(cfg, rng, current_depth + 1)
    else:
        right = generate_tree(cfg, rng, current_depth + 1)
    return OpNode(op, left, right)


# ====== 文字列化 ======
def to_string(node: Node, parent_prec: int = 0, is_right: bool = False) -> str:
    """Infix rendering with only the parentheses the precedence table requires."""
    if isinstance(node, Leaf):
        return format_operand(node.value)

    if isinstance(node, UnaryOpNode):
        sep = ' ' if node.op.symbol.isalpha() else ''
        child_str = to_string(node.child, node.op.precedence)
        return f"{node.op.symbol}{sep}{child_str}"

    prec = node.op.precedence
    left_str = to_string(node.left, prec, is_right=False)
    right_str = to_string(node.right, prec, is_right=True)
    s = f"{left_str} {node.op.symbol} {right_str}"
    if node.op.is_right_associative:
        against_grain = not is_right
    else:
        against_grain = is_right
    need_paren = prec < parent_prec or (prec == parent_prec and against_grain)
    return f"({s})" if need_paren else s


# ====== ストリーミング ======
def stream_samples(cfg: GenConfig) -> Iterator[Sample]:
    rng = random.Random(cfg.seed)
    while True:
        tree = generate_tree(cfg, rng)
        expr = to_string(tree)
        if len(expr) > cfg.max_length:
            continue
        yield Sample(expr=expr, tree=tree)
