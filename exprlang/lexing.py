from typing import List, Tuple, Callable, Set, Dict, Optional
import re
from exprlang.errors import UnexpectedChar

# ======================================
# Token Definition
# ======================================

class Token:
    def __init__(self, s: str, pos: int = 0):
        self.s = s
        self.pos = pos

    @property
    def lexeme(self) -> str:
        return self.s

    def __repr__(self):
        return f"{self.__class__.__name__}({self.s!r})"

    # Position is bookkeeping, not identity
    def __eq__(self, other):
        return isinstance(other, self.__class__) and self.s == other.s

    def __hash__(self):
        return hash((self.__class__.__name__, self.s))

class Op(Token): pass
class Ident(Token): pass
class Keyword(Token): pass
class WS(Token): pass
class Delim(Token): pass
class Newline(Token): pass

class Number(Token):
    @property
    def value(self) -> float:
        return float(self.s)

class Eof(Token):
    def __init__(self, pos: int = 0):
        super().__init__("", pos)

    def __repr__(self):
        return "Eof"

# ======================================
# Tokenizer Config
# ======================================

class TokenizerConfig:
    def __init__(self, keywords: Set[str], operators: Set[str], delimiters: Set[str]):
        self.keywords = keywords
        self.operators = operators
        self.delimiters = delimiters

    @staticmethod
    def default() -> 'TokenizerConfig':
        return TokenizerConfig(
            keywords={"if", "then", "else", "def", "and", "or", "not"},
            operators={
                "+", "-", "*", "/", "%", "^", "**",
                "==", "!=", "<", ">", "<=", ">=",
                "=", "=>", "&&", "||", "!",
            },
            delimiters={"(", ")", ",", ";"},
        )

# ======================================
# Tokenizer Types and Constructors
# ======================================

# Tokenizer: (input_str, pos) -> List[Tuple[Token, next_pos]]
Tokenizer = Callable[[str, int], List[Tuple[Token, int]]]

def lex_regex_longest(pattern: str, converter: Callable[[str, int], Token]) -> Tokenizer:
    regex = re.compile(pattern)

    def tokenizer(input_str: str, pos: int) -> List[Tuple[Token, int]]:
        # match checks from pos only
        m = regex.match(input_str, pos)
        if m and m.group(0):
            sub = m.group(0)
            return [(converter(sub, pos), pos + len(sub))]
        return []

    return tokenizer

def lex_delim(delimiters: Set[str]) -> Tokenizer:
    def tokenizer(input_str: str, pos: int) -> List[Tuple[Token, int]]:
        matches = []
        for d in delimiters:
            if input_str.startswith(d, pos):
                matches.append((Delim(d, pos), pos + len(d)))
        return matches
    return tokenizer

def build_tokenizers(config: TokenizerConfig) -> List[Tokenizer]:
    ident_regex = r"[A-Za-z_][A-Za-z0-9_]*"
    ws_regex = r"([ \t\r\f\v]|#[^\n]*)+"
    newline_regex = r"\n"
    number_regex = r"[0-9]+(\.[0-9]*)?"

    # Longest first so "**" wins over "*" and "=>" over "="
    sorted_ops = sorted(config.operators, key=len, reverse=True)
    op_regex = "|".join(re.escape(k) for k in sorted_ops)

    return [
        lex_regex_longest(ws_regex, lambda s, p: WS(s, p)),
        lex_regex_longest(newline_regex, lambda s, p: Newline(s, p)),
        lex_regex_longest(number_regex, lambda s, p: Number(s, p)),
        lex_regex_longest(op_regex, lambda s, p: Op(s, p)),
        lex_regex_longest(ident_regex, lambda s, p:
            Keyword(s, p) if s in config.keywords else Ident(s, p)
        ),
        lex_delim(config.delimiters),
    ]

_default_tokenizers: Optional[List[Tokenizer]] = None

def _tokenizers_for(config: Optional[TokenizerConfig]) -> List[Tokenizer]:
    global _default_tokenizers
    if config is not None:
        return build_tokenizers(config)
    if _default_tokenizers is None:
        _default_tokenizers = build_tokenizers(TokenizerConfig.default())
    return _default_tokenizers

# ======================================
# Main Lexer
# ======================================

def tokenize(input_str: str, config: Optional[TokenizerConfig] = None, debug: bool = False) -> List[Token]:
    tokenizers = _tokenizers_for(config)
    tokens: List[Token] = []
    length = len(input_str)
    pos = 0
    depth = 0

    while pos < length:
        if debug:
            remaining = input_str[pos:min(pos + 10, length)] + "..."
            print(f"[DEBUG] pos={pos}: char='{input_str[pos]}' remaining='{remaining}'".replace("\n", "\\n").replace("\r", "\\r"))

        matched: Optional[Tuple[Token, int]] = None
        for tokenizer in tokenizers:
            matches = tokenizer(input_str, pos)
            if matches:
                matched = max(matches, key=lambda m: m[1])
                break

        if matched is None:
            raise UnexpectedChar(input_str[pos], pos)

        tok, next_pos = matched
        if debug:
            print(f"[DEBUG]   matched {tok!r}@{next_pos}".replace("\n", "\\n"))

        if isinstance(tok, Delim):
            if tok.lexeme == "(":
                depth += 1
            elif tok.lexeme == ")":
                depth = max(0, depth - 1)

        # Newlines only separate statements outside parentheses
        if isinstance(tok, WS) or (isinstance(tok, Newline) and depth > 0):
            pass
        else:
            tokens.append(tok)
        pos = next_pos

    tokens.append(Eof(length))
    return tokens

# ======================================
# Unlexer
# ======================================

def unlex_token(tok: Token) -> str:
    return tok.lexeme

def show_tokens(tokens: List[Token]) -> str:
    return " ".join(unlex_token(t) for t in tokens if not isinstance(t, Eof))
