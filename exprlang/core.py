from typing import Dict, List, Optional, TextIO
from .lexing import tokenize
from .syntax import ast
from .parser import parse_program, parse_expression
from .runtime import Closure, Env, Evaluator
from .runtime.evaluator import reserved_kind
from .errors import AssignToReserved, TypeMismatch

# ======================================
# Public entry points
# ======================================

def parse_to_ast(source: str, debug: bool = False) -> ast.Program:
    return parse_program(tokenize(source, debug=debug), debug=debug)

def parse(source: str, output: Optional[TextIO] = None, debug: bool = False) -> float:
    """Parse and evaluate a single expression in a fresh environment."""
    expr = parse_expression(tokenize(source, debug=debug), debug=debug)
    return Evaluator(output).eval_value(expr, Env.initial())

eval_expr = parse

def eval_program(source: str, output: Optional[TextIO] = None, debug: bool = False) -> float:
    """Parse and run a multi-statement program in a fresh environment."""
    program = parse_to_ast(source, debug=debug)
    return Evaluator(output).eval_program(program, Env.initial())


class Context:
    """A persistent root frame reused across eval_with_context calls."""

    def __init__(self, output: Optional[TextIO] = None):
        self.env = Env.initial()
        self.output = output

    def set(self, name: str, value: float) -> None:
        kind = reserved_kind(name)
        if kind is not None:
            raise AssignToReserved(name, kind)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatch(f"Context values must be numbers, got {type(value).__name__}", name)
        self.env.bind_name(name, float(value))

    def get(self, name: str) -> Optional[float]:
        val = self.env.values.get(name)
        if val is None or isinstance(val, Closure):
            return None
        return val

    def names(self) -> List[str]:
        return list(self.env)

    def snapshot(self) -> Dict[str, object]:
        return dict(self.env.values)

    def restore(self, saved: Dict[str, object]) -> None:
        self.env.values.clear()
        self.env.values.update(saved)

    def __contains__(self, name: str) -> bool:
        return self.env.has_local(name)

    def __repr__(self):
        return f"Context({', '.join(self.names())})"


def eval_with_context(source: str, ctx: Context, debug: bool = False) -> float:
    program = parse_to_ast(source, debug=debug)
    saved = ctx.snapshot()
    try:
        return Evaluator(ctx.output).eval_program(program, ctx.env)
    except BaseException:
        ctx.restore(saved)
        raise
