import math
from ..lexing import TokenizerConfig

# A value is either a plain float or a Closure. Booleans are 0.0 / non-0.0.
TRUE = 1.0
FALSE = 0.0

def truthy(value: float) -> bool:
    return value != 0.0

def from_bool(b: bool) -> float:
    return TRUE if b else FALSE

# Named constants resolve before any variable lookup and cannot be assigned.
constants = {
    "pi": math.pi,
    "e": math.e,
    "tau": math.tau,
    "true": TRUE,
    "false": FALSE,
}

keywords = frozenset(TokenizerConfig.default().keywords)
