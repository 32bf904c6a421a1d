from typing import List, Optional
from exprlang.lexing import Token, Delim, Eof
from exprlang.errors import UnexpectedToken, UnexpectedEof

# ======================================
# Token Constraints
# ======================================

delimiter_pairs = {
    "(": ")",
}

def check_delimiter_balance(tokens: List[Token]) -> bool:
    return find_unbalanced(tokens) is None

def find_unbalanced(tokens: List[Token]) -> Optional[Token]:
    """Returns the first closing delimiter without a partner, else the
    innermost opening delimiter left unclosed, else None."""
    stack: List[Token] = []
    close_chars = {v: k for k, v in delimiter_pairs.items()}

    for t in tokens:
        if isinstance(t, Delim):
            d = t.lexeme
            if d in delimiter_pairs:
                stack.append(t)
            elif d in close_chars:
                if not stack or stack[-1].lexeme != close_chars[d]:
                    return t
                stack.pop()

    return stack[-1] if stack else None

def check_token_constraints(tokens: List[Token]) -> None:
    """Raises a ParseError naming the offending delimiter when the token
    stream cannot possibly parse because of unbalanced parentheses."""
    offender = find_unbalanced(tokens)
    if offender is None:
        return
    eof_pos = tokens[-1].pos if tokens and isinstance(tokens[-1], Eof) else None
    if offender.lexeme in delimiter_pairs:
        raise UnexpectedEof(f"'{delimiter_pairs[offender.lexeme]}' to close '{offender.lexeme}' opened at {offender.pos}", eof_pos)
    raise UnexpectedToken(offender.lexeme, offender.pos)
