from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple, Union
from ..syntax import ast
from ..prelude.logic import truthy, from_bool

# ======================================
# Values & Environment
# ======================================

@dataclass(eq=False)
class Closure:
    params: Tuple[str, ...]
    body: ast.Expr
    env: 'Env'
    name: Optional[str] = None

    @property
    def arity(self) -> int:
        return len(self.params)

    def __str__(self):
        label = self.name or "lambda"
        return f"<{label}({', '.join(self.params)})>"

    def __repr__(self):
        return f"Closure({list(self.params)}, {self.body})"

Value = Union[float, Closure]

_MISSING = object()

@dataclass(eq=False)
class Env:
    """One scope frame. Frames are shared by reference: a Closure keeps the
    frame it was created in, and later writes to that frame are visible to it."""
    values: Dict[str, Value] = field(default_factory=dict)
    parent: Optional['Env'] = None  # set once, never reassigned

    def lookup(self, name: str, default=_MISSING):
        env: Optional[Env] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        if default is _MISSING:
            raise KeyError(name)
        return default

    def has_local(self, name: str) -> bool:
        return name in self.values

    def bind_name(self, name: str, val: Value) -> 'Env':
        # Mutates (or inserts into) this frame only, never an ancestor
        self.values[name] = val
        return self

    def child(self, bindings: Optional[Dict[str, Value]] = None) -> 'Env':
        return Env(dict(bindings or {}), self)

    def depth(self) -> int:
        n, env = 0, self.parent
        while env is not None:
            n, env = n + 1, env.parent
        return n

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    @staticmethod
    def initial() -> 'Env':
        return Env()
