"""
JSON form of the exprlang AST.

Every expression node becomes an object discriminated by its "type" field
("number", "variable", "unaryop", "binop", "call", "conditional",
"lambda"). Statements use "assignment" and "expression"; a program is
{"statements": [...]}. External tooling reads this shape, so field names
and operator spellings must stay as they are.
"""

import json
from typing import Any, Dict

from .ast import (
    Assign, Binary, BinaryOp, Call, Conditional, Expr, ExprStmt, Lambda,
    Node, Number, Program, Stmt, Unary, UnaryOp, Variable,
)


def to_dict(node: Node) -> Dict[str, Any]:
    if isinstance(node, Program):
        return {"statements": [to_dict(s) for s in node.statements]}
    if isinstance(node, Assign):
        return {"type": "assignment", "name": node.name, "value": to_dict(node.value)}
    if isinstance(node, ExprStmt):
        return {"type": "expression", "expr": to_dict(node.expr)}
    if isinstance(node, Number):
        return {"type": "number", "value": node.value}
    if isinstance(node, Variable):
        return {"type": "variable", "name": node.name}
    if isinstance(node, Unary):
        return {"type": "unaryop", "op": node.op.value, "expr": to_dict(node.operand)}
    if isinstance(node, Binary):
        return {
            "type": "binop",
            "op": node.op.value,
            "left": to_dict(node.left),
            "right": to_dict(node.right),
        }
    if isinstance(node, Call):
        return {"type": "call", "name": node.name, "args": [to_dict(a) for a in node.args]}
    if isinstance(node, Conditional):
        return {
            "type": "conditional",
            "condition": to_dict(node.cond),
            "then_branch": to_dict(node.then_branch),
            "else_branch": to_dict(node.else_branch),
        }
    if isinstance(node, Lambda):
        return {"type": "lambda", "params": list(node.params), "body": to_dict(node.body)}
    raise TypeError(f"Cannot serialize {type(node).__name__}")


def _field(data: Dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"AST node {data.get('type', '?')!r} is missing field {key!r}") from None


def expr_from_dict(data: Dict[str, Any]) -> Expr:
    if not isinstance(data, dict):
        raise ValueError(f"Expected an AST object, got {type(data).__name__}")
    kind = data.get("type")
    if kind == "number":
        return Number(float(_field(data, "value")))
    if kind == "variable":
        return Variable(_field(data, "name"))
    if kind == "unaryop":
        return Unary(UnaryOp(_field(data, "op")), expr_from_dict(_field(data, "expr")))
    if kind == "binop":
        return Binary(
            BinaryOp(_field(data, "op")),
            expr_from_dict(_field(data, "left")),
            expr_from_dict(_field(data, "right")),
        )
    if kind == "call":
        return Call(_field(data, "name"), tuple(expr_from_dict(a) for a in _field(data, "args")))
    if kind == "conditional":
        return Conditional(
            expr_from_dict(_field(data, "condition")),
            expr_from_dict(_field(data, "then_branch")),
            expr_from_dict(_field(data, "else_branch")),
        )
    if kind == "lambda":
        return Lambda(tuple(_field(data, "params")), expr_from_dict(_field(data, "body")))
    raise ValueError(f"Unknown expression type: {kind!r}")


def stmt_from_dict(data: Dict[str, Any]) -> Stmt:
    kind = data.get("type") if isinstance(data, dict) else None
    if kind == "assignment":
        return Assign(_field(data, "name"), expr_from_dict(_field(data, "value")))
    if kind == "expression":
        return ExprStmt(expr_from_dict(_field(data, "expr")))
    raise ValueError(f"Unknown statement type: {kind!r}")


def from_dict(data: Dict[str, Any]) -> Node:
    """Rebuild a Program, statement or expression from its dict form."""
    if isinstance(data, dict) and "statements" in data and "type" not in data:
        return Program(tuple(stmt_from_dict(s) for s in data["statements"]))
    if isinstance(data, dict) and data.get("type") in ("assignment", "expression"):
        return stmt_from_dict(data)
    return expr_from_dict(data)


def to_json(node: Node, pretty: bool = False) -> str:
    return json.dumps(to_dict(node), indent=2 if pretty else None)


def from_json(text: str) -> Node:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid AST JSON: {e}") from e
    return from_dict(data)
