"""
Precedence-climbing parser for exprlang.

Grammar (binding power low to high):
    program     → stmt ((";" | NEWLINE)+ stmt)* EOF
    stmt        → "def" NAME "(" params ")" "=" expr
                | NAME "=" expr
                | expr
    expr        → or_expr
    or_expr     → and_expr (("or" | "||") and_expr)*
    and_expr    → equality (("and" | "&&") equality)*
    equality    → comparison (("==" | "!=") comparison)*
    comparison  → additive (("<" | ">" | "<=" | ">=") additive)*
    additive    → multiply (("+" | "-") multiply)*
    multiply    → power (("*" | "/" | "%") power)*
    power       → unary (("^" | "**") power)?          ; right-associative
    unary       → ("-" | "not" | "!") unary | primary
    primary     → NUMBER | NAME | NAME "(" args ")" | "(" expr ")"
                | "if" expr "then" expr "else" expr
                | NAME "=>" expr | "(" params ")" "=>" expr

Unary sits above power, so -2^2 parses as (-2)^2.
"""

from typing import List, Optional, Tuple, Type
from ..lexing import Token, Op, Ident, Keyword, Delim, Newline, Number as NumberTok, Eof
from ..syntax import ast
from ..errors import UnexpectedToken, UnexpectedEof

_OR_OPS = {"or": ast.BinaryOp.OR, "||": ast.BinaryOp.OR}
_AND_OPS = {"and": ast.BinaryOp.AND, "&&": ast.BinaryOp.AND}
_EQUALITY_OPS = {"==": ast.BinaryOp.EQ, "!=": ast.BinaryOp.NE}
_COMPARISON_OPS = {
    "<": ast.BinaryOp.LT, ">": ast.BinaryOp.GT,
    "<=": ast.BinaryOp.LE, ">=": ast.BinaryOp.GE,
}
_ADDITIVE_OPS = {"+": ast.BinaryOp.ADD, "-": ast.BinaryOp.SUB}
_MULTIPLY_OPS = {"*": ast.BinaryOp.MUL, "/": ast.BinaryOp.DIV, "%": ast.BinaryOp.MOD}
_POWER_OPS = {"^", "**"}


class Parser:
    def __init__(self, tokens: List[Token], debug: bool = False):
        if not tokens or not isinstance(tokens[-1], Eof):
            tokens = list(tokens) + [Eof(tokens[-1].pos + len(tokens[-1].lexeme) if tokens else 0)]
        self.tokens = tokens
        self.ptr = 0
        self.debug = debug

    def log(self, msg: str):
        if self.debug:
            print(f"[PARSE] {msg}")

    # -- Token cursor --

    @property
    def current(self) -> Token:
        return self.tokens[self.ptr]

    def peek(self, offset: int = 0) -> Token:
        idx = self.ptr + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]

    def advance(self) -> Token:
        tok = self.tokens[self.ptr]
        if self.ptr < len(self.tokens) - 1:
            self.ptr += 1
        return tok

    @staticmethod
    def is_(tok: Token, cls: Type[Token], lexeme: Optional[str] = None) -> bool:
        return isinstance(tok, cls) and (lexeme is None or tok.lexeme == lexeme)

    def error(self, expected: str):
        tok = self.current
        if isinstance(tok, Eof):
            return UnexpectedEof(expected, tok.pos)
        return UnexpectedToken(tok.lexeme, tok.pos, expected)

    def expect(self, cls: Type[Token], lexeme: Optional[str] = None, what: Optional[str] = None) -> Token:
        if not self.is_(self.current, cls, lexeme):
            raise self.error(what or f"'{lexeme}'")
        return self.advance()

    def match_op(self, table) -> Optional[str]:
        tok = self.current
        if isinstance(tok, (Op, Keyword)) and tok.lexeme in table:
            self.advance()
            return tok.lexeme
        return None

    def at_separator(self) -> bool:
        return isinstance(self.current, Newline) or self.is_(self.current, Delim, ";")

    def skip_separators(self):
        while self.at_separator():
            self.advance()

    # -- Program / statements --

    def parse_program(self) -> ast.Program:
        statements = []
        self.skip_separators()
        while not isinstance(self.current, Eof):
            stmt = self.parse_statement()
            self.log(f"Statement {len(statements)}: {stmt!r}")
            statements.append(stmt)
            if isinstance(self.current, Eof):
                break
            if not self.at_separator():
                raise self.error("';' or newline")
            self.skip_separators()
        return ast.Program(tuple(statements))

    def parse_single(self) -> ast.Expr:
        self.skip_separators()
        expr = self.parse_expr()
        self.skip_separators()
        if not isinstance(self.current, Eof):
            raise self.error("end of expression")
        self.log(f"Expression: {expr!r}")
        return expr

    def parse_statement(self) -> ast.Stmt:
        tok = self.current
        if self.is_(tok, Keyword, "def"):
            return self.parse_def()
        # NAME "=" or KEYWORD "=" is an assignment
        if isinstance(tok, (Ident, Keyword)) and self.is_(self.peek(1), Op, "="):
            self.advance()
            self.advance()
            return ast.Assign(tok.lexeme, self.parse_expr())
        return ast.ExprStmt(self.parse_expr())

    def parse_def(self) -> ast.Assign:
        self.expect(Keyword, "def")
        if not isinstance(self.current, (Ident, Keyword)):
            raise self.error("function name")
        name = self.advance().lexeme
        self.expect(Delim, "(")
        params = self.parse_params()
        self.expect(Op, "=")
        body = self.parse_expr()
        return ast.Assign(name, ast.Lambda(params, body))

    def parse_params(self) -> Tuple[str, ...]:
        """Parameter names after '(' up to and including ')'."""
        params: List[str] = []
        if not self.is_(self.current, Delim, ")"):
            params.append(self.expect(Ident, what="parameter name").lexeme)
            while self.is_(self.current, Delim, ","):
                self.advance()
                params.append(self.expect(Ident, what="parameter name").lexeme)
        self.expect(Delim, ")")
        return tuple(params)

    # -- Expressions --

    def parse_expr(self) -> ast.Expr:
        return self.parse_or()

    def _left_assoc(self, table, operand) -> ast.Expr:
        left = operand()
        while True:
            op = self.match_op(table)
            if op is None:
                return left
            left = ast.Binary(table[op], left, operand())

    def parse_or(self) -> ast.Expr:
        return self._left_assoc(_OR_OPS, self.parse_and)

    def parse_and(self) -> ast.Expr:
        return self._left_assoc(_AND_OPS, self.parse_equality)

    def parse_equality(self) -> ast.Expr:
        return self._left_assoc(_EQUALITY_OPS, self.parse_comparison)

    def parse_comparison(self) -> ast.Expr:
        return self._left_assoc(_COMPARISON_OPS, self.parse_additive)

    def parse_additive(self) -> ast.Expr:
        return self._left_assoc(_ADDITIVE_OPS, self.parse_multiply)

    def parse_multiply(self) -> ast.Expr:
        return self._left_assoc(_MULTIPLY_OPS, self.parse_power)

    def parse_power(self) -> ast.Expr:
        base = self.parse_unary()
        if self.match_op(_POWER_OPS):
            return ast.Binary(ast.BinaryOp.POW, base, self.parse_power())
        return base

    def parse_unary(self) -> ast.Expr:
        tok = self.current
        if self.is_(tok, Op, "-"):
            self.advance()
            return ast.Unary(ast.UnaryOp.NEG, self.parse_unary())
        if self.is_(tok, Keyword, "not") or self.is_(tok, Op, "!"):
            self.advance()
            return ast.Unary(ast.UnaryOp.NOT, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> ast.Expr:
        tok = self.current

        if isinstance(tok, NumberTok):
            self.advance()
            return ast.Number(tok.value)

        if self.is_(tok, Keyword, "if"):
            return self.parse_conditional()

        if isinstance(tok, Ident):
            nxt = self.peek(1)
            if self.is_(nxt, Op, "=>"):
                self.advance()
                self.advance()
                return ast.Lambda((tok.lexeme,), self.parse_expr())
            if self.is_(nxt, Delim, "("):
                return self.parse_call()
            self.advance()
            return ast.Variable(tok.lexeme)

        if self.is_(tok, Delim, "("):
            if self.lambda_params_ahead():
                self.advance()
                params = self.parse_params()
                self.expect(Op, "=>")
                return ast.Lambda(params, self.parse_expr())
            self.advance()
            inner = self.parse_expr()
            self.expect(Delim, ")")
            return inner

        raise self.error("expression")

    def parse_conditional(self) -> ast.Conditional:
        self.expect(Keyword, "if")
        cond = self.parse_expr()
        self.expect(Keyword, "then")
        then_branch = self.parse_expr()
        self.expect(Keyword, "else")
        else_branch = self.parse_expr()
        return ast.Conditional(cond, then_branch, else_branch)

    def parse_call(self) -> ast.Call:
        name = self.expect(Ident, what="function name").lexeme
        self.expect(Delim, "(")
        args: List[ast.Expr] = []
        if not self.is_(self.current, Delim, ")"):
            args.append(self.parse_expr())
            while self.is_(self.current, Delim, ","):
                self.advance()
                args.append(self.parse_expr())
        self.expect(Delim, ")")
        return ast.Call(name, tuple(args))

    def lambda_params_ahead(self) -> bool:
        """At '(': does a parameter list followed by '=>' start here?"""
        i = 1
        if self.is_(self.peek(i), Delim, ")"):
            return self.is_(self.peek(i + 1), Op, "=>")
        while True:
            if not isinstance(self.peek(i), Ident):
                return False
            i += 1
            if self.is_(self.peek(i), Delim, ","):
                i += 1
                continue
            if self.is_(self.peek(i), Delim, ")"):
                return self.is_(self.peek(i + 1), Op, "=>")
            return False
