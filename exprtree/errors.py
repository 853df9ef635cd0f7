# errors.py


class ExpressionError(ValueError):
    """Base class for every failure raised while parsing or evaluating an expression."""


# ====== 構文 ======
class ExpressionSyntaxError(ExpressionError):
    pass


class MismatchedParenthesesError(ExpressionSyntaxError):
    def __init__(self, message: str = "Mismatched parentheses"):
        super().__init__(message)


# ====== 構造 ======
class InvalidExpressionError(ExpressionError):
    pass


# ====== 評価 ======
class EvaluationError(ExpressionError):
    pass


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


class ModuloByZeroError(EvaluationError, ZeroDivisionError):
    def __init__(self, message: str = "Modulo by zero"):
        super().__init__(message)


class UnknownOperatorError(EvaluationError):
    pass


class UnknownIdentifierError(EvaluationError):
    def __init__(self, name: str):
        super().__init__(f"Unknown identifier '{name}'")
        self.name = name


class NullNodeError(EvaluationError):
    def __init__(self, message: str = "Null node encountered during evaluation"):
        super().__init__(message)
