"""
Error types for exprlang lexing, parsing, and evaluation.

Parse-time errors (ParseError and subclasses) and evaluation-time errors
(EvalError and subclasses) never mix: anything raised before the first
statement runs is a ParseError.
"""

from enum import Enum
from typing import Optional


class ExprError(Exception):
    """Base exception for all exprlang errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ======================================
# Parse-time
# ======================================

class ParseError(ExprError):
    """Raised when source text cannot be turned into a Program."""

    def __init__(self, message: str, pos: Optional[int] = None):
        self.pos = pos
        if pos is not None:
            message = f"{message} at position {pos}"
        super().__init__(message)


class LexError(ParseError):
    pass


class UnexpectedChar(LexError):
    def __init__(self, char: str, pos: int):
        self.char = char
        super().__init__(f"Unexpected character '{char}'", pos)


class UnexpectedToken(ParseError):
    def __init__(self, token: str, pos: int, expected: Optional[str] = None):
        self.token = token
        self.expected = expected
        msg = f"Unexpected token '{token}'"
        if expected:
            msg += f", expected {expected}"
        super().__init__(msg, pos)


class UnexpectedEof(ParseError):
    def __init__(self, expected: Optional[str] = None, pos: Optional[int] = None):
        self.expected = expected
        msg = "Unexpected end of input"
        if expected:
            msg += f", expected {expected}"
        super().__init__(msg, pos)


# ======================================
# Evaluation-time
# ======================================

class EvalError(ExprError):
    """Raised while executing a parsed Program."""


class DivisionByZero(EvalError):
    def __init__(self, op: str = "/"):
        self.op = op
        super().__init__("Modulo by zero" if op in ("%", "mod") else "Division by zero")


class NegativeSqrt(EvalError):
    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Square root of negative number: {value}")


class UndefinedVariable(EvalError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined variable: {name}")


class UnknownFunction(EvalError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown function: {name}")


class ArityMismatch(EvalError):
    def __init__(self, name: str, expected: int, got: int, variadic: bool = False):
        self.name = name
        self.expected = expected
        self.got = got
        self.variadic = variadic
        at_least = "at least " if variadic else ""
        super().__init__(f"{name}() expects {at_least}{expected} argument(s), got {got}")


class ReservedKind(str, Enum):
    CONSTANT = "constant"
    FUNCTION = "function"
    KEYWORD = "keyword"


class AssignToReserved(EvalError):
    def __init__(self, name: str, kind: ReservedKind):
        self.name = name
        self.kind = kind
        super().__init__(f"Cannot assign to reserved {kind.value} '{name}'")


class TypeMismatch(EvalError):
    """A function value was used where a number is required, or vice versa."""

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        super().__init__(message)


class DomainError(EvalError):
    def __init__(self, function: str, value: float):
        self.function = function
        self.value = value
        super().__init__(f"Logarithm of non-positive number in {function}(): {value}")
