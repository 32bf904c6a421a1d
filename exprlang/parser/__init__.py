from .engine import Parser
from .main import parse_program, parse_expression

__all__ = ["Parser", "parse_program", "parse_expression"]
