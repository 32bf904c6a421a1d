from .types import Value, Closure, Env
from .evaluator import Evaluator, eval_program, eval_expr

__all__ = ["Value", "Closure", "Env", "Evaluator", "eval_program", "eval_expr"]
