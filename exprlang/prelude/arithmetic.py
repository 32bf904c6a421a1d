import math
from typing import Callable
from ..syntax.ast import BinaryOp, UnaryOp
from .logic import truthy, from_bool
from ..errors import DivisionByZero

def ieee(fn: Callable[..., float], *args: float) -> float:
    # math raises where 64-bit float arithmetic would produce nan / inf
    try:
        return fn(*args)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf

def power(a: float, b: float) -> float:
    if a == 0.0 and b < 0.0:
        return math.inf
    try:
        return math.pow(a, b)
    except ValueError:
        return math.nan
    except OverflowError:
        odd = b == math.floor(b) and math.fmod(b, 2.0) != 0.0
        return -math.inf if a < 0.0 and odd else math.inf

def eval_arithmetic(op: BinaryOp, a: float, b: float) -> float:
    if op is BinaryOp.ADD: return a + b
    if op is BinaryOp.SUB: return a - b
    if op is BinaryOp.MUL: return a * b
    if op is BinaryOp.DIV:
        if b == 0.0: raise DivisionByZero("/")
        return a / b
    if op is BinaryOp.MOD:
        if b == 0.0: raise DivisionByZero("%")
        return ieee(math.fmod, a, b)
    if op is BinaryOp.POW: return power(a, b)

    # Comparisons and logic always produce exactly 0.0 or 1.0
    if op is BinaryOp.EQ: return from_bool(a == b)
    if op is BinaryOp.NE: return from_bool(a != b)
    if op is BinaryOp.LT: return from_bool(a < b)
    if op is BinaryOp.GT: return from_bool(a > b)
    if op is BinaryOp.LE: return from_bool(a <= b)
    if op is BinaryOp.GE: return from_bool(a >= b)
    if op is BinaryOp.AND: return from_bool(truthy(a) and truthy(b))
    if op is BinaryOp.OR: return from_bool(truthy(a) or truthy(b))
    raise RuntimeError(f"Unknown binary op: {op}")

def eval_unary(op: UnaryOp, a: float) -> float:
    if op is UnaryOp.NEG: return -a
    if op is UnaryOp.NOT: return from_bool(not truthy(a))
    raise RuntimeError(f"Unknown unary op: {op}")
