# postfix.py

import logging
from typing import List

from exprtree.errors import InvalidExpressionError, MismatchedParenthesesError
from exprtree.tokenizer import Token, TokenKind

logger = logging.getLogger(__name__)


def _should_pop(incoming: Token, top: Token) -> bool:
    if top.kind != TokenKind.OPERATOR:
        return False
    op, top_op = incoming.operator, top.operator
    if op.is_right_associative:
        return op.precedence < top_op.precedence
    return op.precedence <= top_op.precedence


def to_postfix(tokens: List[Token]) -> List[Token]:
    """Shunting-yard: reorder infix tokens into postfix (reverse Polish) order."""
    output: List[Token] = []
    stack: List[Token] = []

    for token in tokens:
        if token.kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER):
            output.append(token)
        elif token.kind == TokenKind.LPAREN:
            stack.append(token)
        elif token.kind == TokenKind.RPAREN:
            while stack and stack[-1].kind != TokenKind.LPAREN:
                output.append(stack.pop())
            if not stack:
                raise MismatchedParenthesesError(
                    f"Mismatched parentheses: unmatched ')' at position {token.position}"
                )
            stack.pop()
        elif token.kind == TokenKind.OPERATOR:
            if not token.operator.is_unary:
                while stack and _should_pop(token, stack[-1]):
                    output.append(stack.pop())
            stack.append(token)
        else:
            raise InvalidExpressionError(f"Unexpected token '{token.text}'")

    while stack:
        token = stack.pop()
        if token.kind == TokenKind.LPAREN:
            raise MismatchedParenthesesError(
                f"Mismatched parentheses: unclosed '(' at position {token.position}"
            )
        output.append(token)

    logger.debug("postfix: %s", ' '.join(str(t) for t in output))
    return output
