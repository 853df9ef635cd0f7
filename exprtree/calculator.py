# calculator.py

import argparse
import logging
import math
import sys
from typing import Callable, List, Optional, Union

from tqdm import tqdm

from exprtree.builder import build_tree, parse_postfix, parse_prefix
from exprtree.config import CalculatorConfig
from exprtree.errors import ExpressionError
from exprtree.evaluator import evaluate as evaluate_tree
from exprtree.generate_data import GenConfig, stream_samples
from exprtree.math_ast import ExpressionTree, Node
from exprtree.postfix import to_postfix
from exprtree.tokenizer import tokenize

logger = logging.getLogger(__name__)


def build_expression_tree(expression: str) -> ExpressionTree:
    """Tokenize, reorder to postfix and build the tree. Raises ExpressionError on bad input."""
    tokens = tokenize(expression)
    postfix = to_postfix(tokens)
    return build_tree(postfix)


def evaluate(expression: Union[str, ExpressionTree, Node]) -> float:
    if isinstance(expression, str):
        expression = build_expression_tree(expression)
    return evaluate_tree(expression)


def format_result(value: float, config: Optional[CalculatorConfig] = None) -> str:
    if config is None:
        config = CalculatorConfig()
    if not math.isfinite(value):
        return str(value)
    nearest = round(value)
    if abs(value - nearest) < config.integer_tolerance:
        return str(int(nearest))
    return f"{value:.{config.decimal_places}f}"


def describe(expression: str, config: CalculatorConfig) -> List[str]:
    """Lines printed for one expression: the result plus any requested diagnostics."""
    tree = build_expression_tree(expression)
    lines = [f"Result: {format_result(evaluate_tree(tree), config)}"]
    if config.show_traversals:
        lines.append(f"Inorder: {tree.in_order()}")
        lines.append(f"Preorder: {tree.pre_order()}")
        lines.append(f"Postorder: {tree.post_order()}")
    if config.show_tree:
        lines.append("Expression Tree Structure:")
        lines.append(tree.display())
    return lines


# ====== 対話ループ ======
def run_repl(config: CalculatorConfig,
             input_fn: Callable[[str], str] = input,
             print_fn: Callable[..., None] = print) -> None:
    print_fn("Expression Tree Calculator")
    print_fn("Type an expression to evaluate, or 'exit' to quit.")
    print_fn("Examples: '5+3', '(5+3)*2', '10-4+7', '2^3^2', '6 xor 3'")
    print_fn()

    while True:
        try:
            line = input_fn(config.prompt)
        except EOFError:
            break
        expression = line.strip()
        if expression in config.exit_commands:
            break
        if not expression:
            continue
        try:
            for out in describe(expression, config):
                print_fn(out)
        except ExpressionError as e:
            print_fn(f"Error: {e}")
        print_fn()

    print_fn("Goodbye!")


# ====== 自己検査 ======
def _same(a, b) -> bool:
    if isinstance(a, float) and isinstance(b, float):
        if math.isnan(a) and math.isnan(b):
            return True
        return a == b
    return a == b


def _outcome(fn: Callable[[], float]):
    # the value, or the error class when evaluation fails
    try:
        return fn()
    except ExpressionError as e:
        return type(e)


def check_round_trip(expression: str, tree: Node) -> bool:
    """Render ``tree`` every way we know, parse each rendering back and compare results."""
    expected = _outcome(lambda: evaluate_tree(tree))
    rendered = ExpressionTree(tree)
    candidates = [
        lambda: evaluate(expression),
        lambda: evaluate(rendered.in_order()),
        lambda: evaluate_tree(parse_prefix(rendered.pre_order())),
        lambda: evaluate_tree(parse_postfix(rendered.post_order())),
    ]
    return all(_same(expected, _outcome(c)) for c in candidates)


def self_check(num_tests: int, cfg: GenConfig, print_result: bool = False) -> int:
    sampler = stream_samples(cfg)
    correct_count = 0
    for _ in tqdm(range(num_tests), disable=not sys.stderr.isatty()):
        sample = next(sampler)
        ok = check_round_trip(sample.expr, sample.tree)
        if ok:
            correct_count += 1
        if print_result or not ok:
            tqdm.write(f" {'OK' if ok else 'NG'} : expr {sample.expr}")
    return correct_count


def main(argv=None) -> int:
    args = argparse.ArgumentParser(description="Evaluate arithmetic and boolean expressions through an expression tree.")
    args.add_argument('expression', type=str, nargs='?', default=None, help="Expression to evaluate once. Starts the interactive loop when omitted.")
    args.add_argument('--traversals', default=False, action='store_true', help='Also print in-order, pre-order and post-order renderings.')
    args.add_argument('--tree', default=False, action='store_true', help='Also draw the expression tree.')
    args.add_argument('--decimals', type=int, default=6, help='Fractional digits for non-integer results (default: 6).')
    args.add_argument('--self-check', dest='self_check', type=int, default=0, help='Run N random render/re-parse checks instead of evaluating.')
    args.add_argument('--depth', type=int, default=4, help='Max depth of generated expressions for --self-check (default: 4).')
    args.add_argument('--digits', type=int, default=2, help='Max digits of numbers in generated expressions (default: 2).')
    args.add_argument('--seed', type=int, default=42, help='Random seed for generated expressions (default: 42).')
    args.add_argument('--verbose', default=False, action='store_true', help='Log every pipeline stage.')
    args = args.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    config = CalculatorConfig(
        decimal_places=args.decimals,
        show_traversals=args.traversals,
        show_tree=args.tree,
    )

    if args.self_check > 0:
        cfg = GenConfig(max_depth_cap=args.depth, min_digits=1, max_digits=args.digits, seed=args.seed)
        correct_count = self_check(args.self_check, cfg, print_result=args.verbose)
        print(f"Total: {args.self_check}, Correct: {correct_count}, Accuracy: {correct_count/args.self_check:.2%}")
        return 0 if correct_count == args.self_check else 1

    if args.expression is None:
        run_repl(config)
        return 0

    try:
        for line in describe(args.expression, config):
            print(line)
    except ExpressionError as e:
        logger.debug("evaluation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
