import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

# ======================================
# Operators
# ======================================

class BinaryOp(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    POW = "pow"
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    GT = "gt"
    LE = "le"
    GE = "ge"
    AND = "and"
    OR = "or"

    @property
    def symbol(self) -> str:
        return _BINARY_SYMBOLS[self]

class UnaryOp(str, Enum):
    NEG = "neg"
    NOT = "not"

    @property
    def symbol(self) -> str:
        return "-" if self is UnaryOp.NEG else "not "

_BINARY_SYMBOLS = {
    BinaryOp.ADD: "+", BinaryOp.SUB: "-", BinaryOp.MUL: "*", BinaryOp.DIV: "/",
    BinaryOp.MOD: "%", BinaryOp.POW: "^",
    BinaryOp.EQ: "==", BinaryOp.NE: "!=", BinaryOp.LT: "<", BinaryOp.GT: ">",
    BinaryOp.LE: "<=", BinaryOp.GE: ">=",
    BinaryOp.AND: "and", BinaryOp.OR: "or",
}

# ======================================
# AST Nodes
# ======================================

class Expr: pass

@dataclass(frozen=True)
class Number(Expr):
    value: float
    def __repr__(self): return f"Number({self.value})"

@dataclass(frozen=True)
class Variable(Expr):
    name: str
    def __repr__(self): return f"Variable({self.name})"

@dataclass(frozen=True)
class Unary(Expr):
    op: UnaryOp
    operand: Expr
    def __repr__(self): return f"Unary({self.op.value}, {self.operand})"

@dataclass(frozen=True)
class Binary(Expr):
    op: BinaryOp
    left: Expr
    right: Expr
    def __repr__(self): return f"Binary({self.op.value}, {self.left}, {self.right})"

@dataclass(frozen=True)
class Conditional(Expr):
    cond: Expr
    then_branch: Expr
    else_branch: Expr
    def __repr__(self): return f"Conditional({self.cond}, {self.then_branch}, {self.else_branch})"

@dataclass(frozen=True)
class Call(Expr):
    name: str
    args: Tuple[Expr, ...] = ()
    def __repr__(self): return f"Call({self.name}, {list(self.args)})"

@dataclass(frozen=True)
class Lambda(Expr):
    params: Tuple[str, ...]
    body: Expr
    def __repr__(self): return f"Lambda({list(self.params)}, {self.body})"

class Stmt: pass

@dataclass(frozen=True)
class Assign(Stmt):
    name: str
    value: Expr
    def __repr__(self): return f"Assign({self.name}, {self.value})"

@dataclass(frozen=True)
class ExprStmt(Stmt):
    expr: Expr
    def __repr__(self): return f"ExprStmt({self.expr})"

@dataclass(frozen=True)
class Program:
    statements: Tuple[Stmt, ...] = ()

    def __len__(self):
        return len(self.statements)

Node = Union[Expr, Stmt, Program]

# ======================================
# Pretty printing
# ======================================

def format_number(value: float) -> str:
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)

def show_expr(expr: Expr) -> str:
    if isinstance(expr, Number): return format_number(expr.value)
    if isinstance(expr, Variable): return expr.name
    if isinstance(expr, Unary): return f"({expr.op.symbol}{show_expr(expr.operand)})"
    if isinstance(expr, Binary):
        return f"({show_expr(expr.left)} {expr.op.symbol} {show_expr(expr.right)})"
    if isinstance(expr, Conditional):
        return (f"(if {show_expr(expr.cond)} then {show_expr(expr.then_branch)} "
                f"else {show_expr(expr.else_branch)})")
    if isinstance(expr, Call):
        return f"{expr.name}({', '.join(map(show_expr, expr.args))})"
    if isinstance(expr, Lambda):
        return f"(({', '.join(expr.params)}) => {show_expr(expr.body)})"
    return str(expr)

def show_stmt(stmt: Stmt) -> str:
    if isinstance(stmt, Assign):
        if isinstance(stmt.value, Lambda):
            return f"def {stmt.name}({', '.join(stmt.value.params)}) = {show_expr(stmt.value.body)}"
        return f"{stmt.name} = {show_expr(stmt.value)}"
    if isinstance(stmt, ExprStmt):
        return show_expr(stmt.expr)
    return str(stmt)

def show_program(program: Program) -> str:
    return "; ".join(show_stmt(s) for s in program.statements)
