# tokenizer.py

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from exprtree.errors import ExpressionSyntaxError, InvalidExpressionError
from exprtree.operators import (
    KEYWORDS,
    MULTI_CHAR_SYMBOLS,
    SINGLE_CHAR_SYMBOLS,
    Operator,
    binary_operator,
    is_unary_symbol,
    unary_operator,
)

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    NUMBER = auto()
    OPERATOR = auto()
    LPAREN = auto()
    RPAREN = auto()
    IDENTIFIER = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    value: Optional[float] = None
    operator: Optional[Operator] = None
    position: int = 0

    def __str__(self) -> str:
        if self.kind == TokenKind.OPERATOR:
            return self.operator.word
        return self.text

    @property
    def is_operator(self) -> bool:
        return self.kind == TokenKind.OPERATOR

    @property
    def is_unary(self) -> bool:
        return self.is_operator and self.operator.is_unary

    @classmethod
    def number(cls, text: str, position: int = 0) -> 'Token':
        try:
            value = float(text)
        except ValueError:
            raise ExpressionSyntaxError(f"Malformed number '{text}' at position {position}") from None
        return cls(TokenKind.NUMBER, text, value=value, position=position)

    @classmethod
    def op(cls, operator: Operator, text: Optional[str] = None, position: int = 0) -> 'Token':
        return cls(TokenKind.OPERATOR, text or operator.symbol, operator=operator, position=position)


def _expects_operand(tokens: List[Token]) -> bool:
    # start of input, after '(' or after another operator
    if not tokens:
        return True
    last = tokens[-1]
    return last.kind == TokenKind.LPAREN or last.kind == TokenKind.OPERATOR


def _prefix_token(symbol: str, tokens: List[Token], pos: int) -> Token:
    if not _expects_operand(tokens):
        raise InvalidExpressionError(f"Prefix operator '{symbol}' cannot follow an operand at position {pos}")
    return Token.op(unary_operator(symbol), symbol, pos)


def tokenize(source: str) -> List[Token]:
    """Split ``source`` into number, operator, parenthesis and identifier tokens.

    A ``-`` or ``+`` in operand position is unary: ``-`` becomes
    ``Operator.NEG`` and ``+`` is dropped. ``~``, ``!`` and ``not`` are
    prefix-only and rejected right after an operand; ``and``/``or`` are
    spelled-out ``&&``/``||``.
    """
    tokens: List[Token] = []
    pos = 0
    n = len(source)

    while pos < n:
        ch = source[pos]

        if ch.isspace():
            pos += 1
            continue

        # 数値: digits with at most one decimal point
        if ch.isdigit() or ch == '.':
            end = pos
            seen_dot = False
            while end < n and (source[end].isdigit() or (source[end] == '.' and not seen_dot)):
                if source[end] == '.':
                    seen_dot = True
                end += 1
            tokens.append(Token.number(source[pos:end], pos))
            pos = end
            continue

        if ch == '(':
            tokens.append(Token(TokenKind.LPAREN, ch, position=pos))
            pos += 1
            continue
        if ch == ')':
            tokens.append(Token(TokenKind.RPAREN, ch, position=pos))
            pos += 1
            continue

        # multi-char operators before single-char ones
        symbol = next((s for s in MULTI_CHAR_SYMBOLS if source.startswith(s, pos)), None)
        if symbol is None and ch in SINGLE_CHAR_SYMBOLS:
            symbol = ch
        if symbol is not None:
            if is_unary_symbol(symbol):
                tokens.append(_prefix_token(symbol, tokens, pos))
            elif symbol in ('-', '+') and _expects_operand(tokens):
                if symbol == '-':
                    tokens.append(Token.op(Operator.NEG, symbol, pos))
            else:
                tokens.append(Token.op(binary_operator(symbol), symbol, pos))
            pos += len(symbol)
            continue

        if ch.isalpha():
            end = pos
            while end < n and (source[end].isalnum() or source[end] == '_'):
                end += 1
            word = source[pos:end]
            if is_unary_symbol(word):
                tokens.append(_prefix_token(word, tokens, pos))
            elif word in KEYWORDS:
                tokens.append(Token.op(binary_operator(word), word, pos))
            else:
                # reserved for variables; the builder rejects it
                tokens.append(Token(TokenKind.IDENTIFIER, word, position=pos))
            pos = end
            continue

        raise ExpressionSyntaxError(f"Unexpected character '{ch}' at position {pos}")

    logger.debug("tokens: %s", ' '.join(str(t) for t in tokens))
    return tokens
