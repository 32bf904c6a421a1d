from .ast import (
    Expr, Stmt, Program, Number, Variable, Unary, Binary, Conditional, Call, Lambda,
    Assign, ExprStmt, BinaryOp, UnaryOp, show_expr, show_stmt, show_program, format_number,
)
from .serialize import to_dict, from_dict, to_json, from_json

__all__ = [
    "Expr", "Stmt", "Program",
    "Number", "Variable", "Unary", "Binary", "Conditional", "Call", "Lambda",
    "Assign", "ExprStmt", "BinaryOp", "UnaryOp",
    "show_expr", "show_stmt", "show_program", "format_number",
    "to_dict", "from_dict", "to_json", "from_json",
]
