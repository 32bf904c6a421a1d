import math
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TextIO
from ..syntax.ast import format_number
from ..errors import ArityMismatch, NegativeSqrt, DomainError, DivisionByZero
from .arithmetic import ieee, power

@dataclass(frozen=True)
class Builtin:
    name: str
    fn: Callable[..., float]
    arity: int
    variadic: bool = False  # arity is then the minimum

    def check_arity(self, got: int):
        ok = got >= self.arity if self.variadic else got == self.arity
        if not ok:
            raise ArityMismatch(self.name, self.arity, got, variadic=self.variadic)

# ======================================
# Function bodies
# ======================================

def _sqrt(x: float) -> float:
    if x < 0.0: raise NegativeSqrt(x)
    return math.sqrt(x)

def _sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)

def _integral(fn: Callable[[float], int]) -> Callable[[float], float]:
    # floor / ceil / trunc of inf or nan is the value itself
    def wrapped(x: float) -> float:
        return float(fn(x)) if math.isfinite(x) else x
    return wrapped

def _round(x: float) -> float:
    # half away from zero, not banker's rounding
    if not math.isfinite(x): return x
    t = float(math.trunc(x))
    if abs(x - t) >= 0.5:
        t += math.copysign(1.0, x)
    return t

def _sign(x: float) -> float:
    if x > 0.0: return 1.0
    if x < 0.0: return -1.0
    return x

def _fract(x: float) -> float:
    return x - _integral(math.trunc)(x)

def _logarithm(name: str, fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if x <= 0.0: raise DomainError(name, x)
        return fn(x)
    return wrapped

def _log(x: float, base: float) -> float:
    if x <= 0.0: raise DomainError("log", x)
    if base <= 0.0: raise DomainError("log", base)
    num, den = math.log(x), math.log(base)
    if den == 0.0:
        return math.nan if num == 0.0 else math.copysign(math.inf, num)
    return num / den

def _mod(a: float, b: float) -> float:
    if b == 0.0: raise DivisionByZero("mod")
    return ieee(lambda x, y: x % y, a, b)

def _clamp(x: float, lo: float, hi: float) -> float:
    return min(max(x, lo), hi)

def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t

def _sum(*args: float) -> float:
    return math.fsum(args)

def _avg(*args: float) -> float:
    return math.fsum(args) / len(args)

def _print(x: float, output: Optional[TextIO] = None) -> float:
    out = output if output is not None else sys.stdout
    out.write(format_number(x) + "\n")
    return x

# ======================================
# Dispatch table
# ======================================

_unary: Dict[str, Callable[..., float]] = {
    "sin": lambda x: ieee(math.sin, x),
    "cos": lambda x: ieee(math.cos, x),
    "tan": lambda x: ieee(math.tan, x),
    "asin": lambda x: ieee(math.asin, x),
    "acos": lambda x: ieee(math.acos, x),
    "atan": math.atan,
    "sinh": _sinh,
    "cosh": lambda x: ieee(math.cosh, x),
    "tanh": math.tanh,
    "sqrt": _sqrt,
    "cbrt": math.cbrt,
    "floor": _integral(math.floor),
    "ceil": _integral(math.ceil),
    "round": _round,
    "trunc": _integral(math.trunc),
    "abs": abs,
    "sign": _sign,
    "fract": _fract,
    "ln": _logarithm("ln", math.log),
    "log2": _logarithm("log2", math.log2),
    "log10": _logarithm("log10", math.log10),
    "exp": lambda x: ieee(math.exp, x),
    "print": _print,
}

_binary: Dict[str, Callable[..., float]] = {
    "max": max,
    "min": min,
    "pow": power,
    "atan2": math.atan2,
    "hypot": math.hypot,
    "log": _log,
    "mod": _mod,
}

_ternary: Dict[str, Callable[..., float]] = {
    "clamp": _clamp,
    "lerp": _lerp,
}

builtins: Dict[str, Builtin] = {}
for _table, _arity in ((_unary, 1), (_binary, 2), (_ternary, 3)):
    for _name, _fn in _table.items():
        builtins[_name] = Builtin(_name, _fn, _arity)
builtins["sum"] = Builtin("sum", _sum, 1, variadic=True)
builtins["avg"] = Builtin("avg", _avg, 1, variadic=True)

# print is the only builtin that touches the outside world
SIDE_EFFECTING = frozenset({"print"})

def eval_primitive(name: str, args: List[float], output: Optional[TextIO] = None) -> float:
    builtin = builtins[name]
    builtin.check_arity(len(args))
    if name in SIDE_EFFECTING:
        return builtin.fn(*args, output=output)
    return float(builtin.fn(*args))

def describe() -> Dict[str, List[str]]:
    groups: Dict[str, List[str]] = {"unary": [], "binary": [], "ternary": [], "variadic": []}
    labels = {1: "unary", 2: "binary", 3: "ternary"}
    for b in builtins.values():
        groups["variadic" if b.variadic else labels[b.arity]].append(b.name)
    return groups
