import sys
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO
from ..syntax import ast
from ..syntax.ast import BinaryOp
from .types import Value, Closure, Env, truthy, from_bool
from ..prelude import constants, keywords, builtins, eval_primitive, eval_arithmetic, eval_unary
from ..errors import (
    UndefinedVariable, UnknownFunction, ArityMismatch, AssignToReserved, ReservedKind, TypeMismatch,
)

DEBUG_EVAL = False

def log(msg: str):
    if DEBUG_EVAL:
        print(f"[EVAL] {msg}")

def reserved_kind(name: str) -> Optional[ReservedKind]:
    if name in constants: return ReservedKind.CONSTANT
    if name in builtins: return ReservedKind.FUNCTION
    if name in keywords: return ReservedKind.KEYWORD
    return None

# Each language call costs a handful of Python frames
RECURSION_LIMIT = 50_000

@contextmanager
def recursion_limit(limit: int = RECURSION_LIMIT) -> Iterator[None]:
    old = sys.getrecursionlimit()
    if old < limit:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(old)


class Evaluator:
    """Tree-walking interpreter over an Env chain.

    `output` is the sink `print` writes to; None means sys.stdout at call time.
    """

    def __init__(self, output: Optional[TextIO] = None):
        self.output = output

    # ======================================
    # Statements
    # ======================================

    def eval_program(self, program: ast.Program, env: Env) -> float:
        result: Value = 0.0
        with recursion_limit():
            for i, stmt in enumerate(program.statements):
                log(f"Evaluating stmt {i}: {stmt!r}")
                val = self.eval_stmt(stmt, env)
                # Definitions leave the current result alone
                if not isinstance(val, Closure) or isinstance(stmt, ast.ExprStmt):
                    result = val
        if isinstance(result, Closure):
            raise TypeMismatch(f"Program result is a function value {result}, expected a number", result.name)
        return result

    def eval_value(self, expr: ast.Expr, env: Env) -> float:
        with recursion_limit():
            return self.num(self.eval_expr(expr, env), "result")

    def eval_stmt(self, stmt: ast.Stmt, env: Env) -> Value:
        if isinstance(stmt, ast.ExprStmt):
            return self.eval_expr(stmt.expr, env)
        if isinstance(stmt, ast.Assign):
            val = self.eval_expr(stmt.value, env)
            kind = reserved_kind(stmt.name)
            if kind is not None:
                raise AssignToReserved(stmt.name, kind)
            if isinstance(val, Closure) and val.name is None:
                val.name = stmt.name
            log(f"  bind {stmt.name} = {val} (depth {env.depth()})")
            env.bind_name(stmt.name, val)
            return val
        raise RuntimeError(f"Unknown statement: {stmt!r}")

    # ======================================
    # Expressions
    # ======================================

    def eval_expr(self, expr: ast.Expr, env: Env) -> Value:
        if isinstance(expr, ast.Number):
            return expr.value

        if isinstance(expr, ast.Variable):
            if expr.name in constants:
                return constants[expr.name]
            val = env.lookup(expr.name, None)
            if val is None:
                raise UndefinedVariable(expr.name)
            return val

        if isinstance(expr, ast.Binary):
            left = self.num(self.eval_expr(expr.left, env), expr.op.symbol)
            # and / or only look at the right side when the left does not decide
            if expr.op is BinaryOp.AND and not truthy(left):
                return from_bool(False)
            if expr.op is BinaryOp.OR and truthy(left):
                return from_bool(True)
            right = self.num(self.eval_expr(expr.right, env), expr.op.symbol)
            return eval_arithmetic(expr.op, left, right)

        if isinstance(expr, ast.Unary):
            return eval_unary(expr.op, self.num(self.eval_expr(expr.operand, env), expr.op.symbol))

        if isinstance(expr, ast.Conditional):
            cond = self.num(self.eval_expr(expr.cond, env), "if")
            branch = expr.then_branch if truthy(cond) else expr.else_branch
            return self.eval_expr(branch, env)

        if isinstance(expr, ast.Call):
            return self.eval_call(expr, env)

        if isinstance(expr, ast.Lambda):
            for param in expr.params:
                kind = reserved_kind(param)
                if kind is not None:
                    raise AssignToReserved(param, kind)
            return Closure(expr.params, expr.body, env)

        raise RuntimeError(f"Unknown expression: {expr!r}")

    def eval_call(self, expr: ast.Call, env: Env) -> Value:
        name = expr.name
        if name in builtins:
            args = [self.num(self.eval_expr(a, env), name) for a in expr.args]
            log(f"  builtin {name}({', '.join(map(str, args))})")
            return eval_primitive(name, args, self.output)

        target = env.lookup(name, None)
        if not isinstance(target, Closure):
            raise UnknownFunction(name)
        return self.apply(target, [self.eval_expr(a, env) for a in expr.args], name)

    def apply(self, closure: Closure, args: List[Value], name: Optional[str] = None) -> Value:
        label = name or closure.name or "lambda"
        if len(args) != closure.arity:
            raise ArityMismatch(label, closure.arity, len(args))
        # Lexical scoping: the new frame hangs off the defining frame, not the caller's
        frame = closure.env.child(dict(zip(closure.params, args)))
        log(f"  call {label}({', '.join(map(str, args))}) depth={frame.depth()}")
        return self.eval_expr(closure.body, frame)

    @staticmethod
    def num(val: Value, where: str) -> float:
        if isinstance(val, Closure):
            raise TypeMismatch(f"Function value {val} used as a number in '{where}'", val.name)
        return val


def eval_program(program: ast.Program, env: Optional[Env] = None, output: Optional[TextIO] = None) -> float:
    return Evaluator(output).eval_program(program, env if env is not None else Env.initial())

def eval_expr(expr: ast.Expr, env: Optional[Env] = None, output: Optional[TextIO] = None) -> float:
    return Evaluator(output).eval_value(expr, env if env is not None else Env.initial())
