from .lexing import Token, TokenizerConfig, tokenize, show_tokens
from .syntax import Program, to_dict, from_dict, to_json, from_json, show_program
from .parser import parse_program, parse_expression
from .prelude import list_builtins
from .runtime import Env, Closure, Evaluator
from .core import parse, eval_expr, parse_to_ast, eval_program, Context, eval_with_context
from .errors import (
    ExprError, ParseError, LexError, UnexpectedChar, UnexpectedToken, UnexpectedEof,
    EvalError, DivisionByZero, NegativeSqrt, UndefinedVariable, UnknownFunction,
    ArityMismatch, AssignToReserved, ReservedKind, TypeMismatch, DomainError,
)

__all__ = [
    "Token", "TokenizerConfig", "tokenize", "show_tokens",
    "Program", "to_dict", "from_dict", "to_json", "from_json", "show_program",
    "parse_program", "parse_expression",
    "list_builtins",
    "Env", "Closure", "Evaluator",
    "parse", "eval_expr", "parse_to_ast", "eval_program", "Context", "eval_with_context",
    "ExprError", "ParseError", "LexError", "UnexpectedChar", "UnexpectedToken", "UnexpectedEof",
    "EvalError", "DivisionByZero", "NegativeSqrt", "UndefinedVariable", "UnknownFunction",
    "ArityMismatch", "AssignToReserved", "ReservedKind", "TypeMismatch", "DomainError",
]
