from typing import List
from ..lexing import Token
from ..syntax import ast
from ..constraints import check_token_constraints
from .engine import Parser

def parse_program(tokens: List[Token], debug: bool = False) -> ast.Program:
    check_token_constraints(tokens)
    return Parser(tokens, debug=debug).parse_program()

def parse_expression(tokens: List[Token], debug: bool = False) -> ast.Expr:
    check_token_constraints(tokens)
    return Parser(tokens, debug=debug).parse_single()
