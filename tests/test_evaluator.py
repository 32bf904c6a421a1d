"""Tests for the tree-walking evaluator and its environment frames."""

import math
import sys

import pytest

from exprlang import eval_program, parse, parse_to_ast
from exprlang.runtime import Closure, Env, Evaluator
from exprlang.runtime import evaluator as evaluator_module
from exprlang.errors import (
    ArityMismatch, AssignToReserved, DivisionByZero, EvalError, NegativeSqrt, ReservedKind,
    TypeMismatch, UndefinedVariable, UnknownFunction,
)


# ============================================================================
# Arithmetic and logic
# ============================================================================


class TestArithmetic:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("2 + 3 * 4", 14.0),
            ("2 * 3 ^ 2", 18.0),
            ("2 ^ 3 ^ 2", 512.0),
            ("2 ** 10", 1024.0),
            ("(2 + 3) * 4", 20.0),
            ("10 / 4", 2.5),
            ("7 % 3", 1.0),
            ("-7 % 3", -1.0),
            ("--3", 3.0),
            ("1.5 * 2", 3.0),
        ],
    )
    def test_values(self, source: str, expected: float) -> None:
        assert parse(source) == expected

    def test_unary_minus_binds_tighter_than_power(self) -> None:
        assert parse("-2^2") == 4.0
        assert parse("-(2^2)") == -4.0

    def test_overflow_is_infinite(self) -> None:
        assert parse("10 ^ 400") == math.inf
        assert parse("0 ^ -1") == math.inf

    def test_invalid_power_is_nan(self) -> None:
        assert math.isnan(parse("(-8) ^ 0.5"))


class TestLogic:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("3 > 2", 1.0),
            ("3 < 2", 0.0),
            ("2 <= 2", 1.0),
            ("2 >= 3", 0.0),
            ("1 == 1", 1.0),
            ("1 != 1", 0.0),
            ("5 and 7", 1.0),
            ("0 or 0", 0.0),
            ("not 0", 1.0),
            ("!5", 0.0),
            ("true && false", 0.0),
            ("true || false", 1.0),
        ],
    )
    def test_results_are_zero_or_one(self, source: str, expected: float) -> None:
        assert parse(source) == expected

    def test_and_short_circuits(self) -> None:
        assert parse("0 and (1/0)") == 0.0

    def test_or_short_circuits(self) -> None:
        assert parse("1 or (1/0)") == 1.0

    def test_right_side_evaluated_when_needed(self) -> None:
        with pytest.raises(DivisionByZero):
            parse("1 and (1/0)")

    def test_conditional_only_evaluates_taken_branch(self) -> None:
        assert parse("if 1 then 2 else 1/0") == 2.0
        assert parse("if 0 then 1/0 else 3") == 3.0

    def test_constants(self) -> None:
        assert parse("pi") == math.pi
        assert parse("tau / 2") == math.pi
        assert parse("e") == math.e


# ============================================================================
# Programs, variables, functions
# ============================================================================


class TestPrograms:
    def test_statements(self) -> None:
        assert eval_program("x = 5; y = x + 3; y * 2") == 16.0

    def test_assignment_is_the_result(self) -> None:
        assert eval_program("x = 2 + 3") == 5.0

    def test_empty_program_is_zero(self) -> None:
        assert eval_program("") == 0.0

    def test_definitions_only_is_zero(self) -> None:
        assert eval_program("def f(x) = x") == 0.0

    def test_reassignment_mutates(self) -> None:
        assert eval_program("x = 1\nx = x + 1\nx") == 2.0

    def test_factorial(self) -> None:
        source = "def factorial(n) = if n <= 1 then 1 else n * factorial(n - 1); factorial(5)"
        assert eval_program(source) == 120.0

    def test_mutual_recursion(self) -> None:
        source = """
        def is_even(n) = if n == 0 then 1 else is_odd(n - 1)
        def is_odd(n) = if n == 0 then 0 else is_even(n - 1)
        is_even(10) + is_odd(7) * 10
        """
        assert eval_program(source) == 11.0

    def test_closure_sees_later_writes(self) -> None:
        source = "factor = 2; double = x => x * factor; a = double(5); factor = 3; b = double(5); a + b"
        assert eval_program(source) == 25.0

    def test_lexical_not_dynamic_scope(self) -> None:
        source = "k = 1; def get() = k; def shadow(k) = get(); shadow(100)"
        assert eval_program(source) == 1.0

    def test_parameters_shadow_outer_names(self) -> None:
        assert eval_program("x = 1; def f(x) = x * 10; f(2) + x") == 21.0

    def test_returned_closure_keeps_its_frame(self) -> None:
        source = "def adder(n) = x => x + n; add5 = adder(5); add9 = adder(9); add5(10) + add9(1)"
        assert eval_program(source) == 25.0

    def test_higher_order(self) -> None:
        assert eval_program("def twice(f, x) = f(f(x)); twice(y => y * 3, 2)") == 18.0

    def test_zero_arg_lambda(self) -> None:
        assert eval_program("seven = () => 7; seven() + 1") == 8.0

    def test_recursion_a_thousand_calls_deep(self) -> None:
        source = "def s(n) = if n <= 0 then 0 else n + s(n - 1); s(1000)"
        assert eval_program(source) == 500500.0

    def test_recursion_limit_is_restored(self) -> None:
        before = sys.getrecursionlimit()
        eval_program("def s(n) = if n <= 0 then 0 else s(n - 1); s(10)")
        assert sys.getrecursionlimit() == before

    def test_deep_recursion_hits_host_limit(self) -> None:
        with pytest.raises(RecursionError):
            eval_program("def down(n) = down(n + 1); down(0)")


# ============================================================================
# Errors
# ============================================================================


class TestEvalErrors:
    def test_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZero) as exc:
            parse("1/0")
        assert str(exc.value) == "Division by zero"

    def test_modulo_by_zero(self) -> None:
        with pytest.raises(DivisionByZero) as exc:
            parse("5 % 0")
        assert str(exc.value) == "Modulo by zero"

    def test_negative_sqrt(self) -> None:
        with pytest.raises(NegativeSqrt):
            parse("sqrt(-1)")

    def test_undefined_variable(self) -> None:
        with pytest.raises(UndefinedVariable) as exc:
            eval_program("y + 1")
        assert exc.value.name == "y"

    def test_unknown_function(self) -> None:
        with pytest.raises(UnknownFunction) as exc:
            eval_program("nope(1)")
        assert exc.value.name == "nope"

    def test_calling_a_number(self) -> None:
        with pytest.raises(UnknownFunction):
            eval_program("x = 3; x(2)")

    @pytest.mark.parametrize(
        "source,kind",
        [
            ("pi = 3", ReservedKind.CONSTANT),
            ("true = 0", ReservedKind.CONSTANT),
            ("sin = 1", ReservedKind.FUNCTION),
            ("def sqrt(x) = x", ReservedKind.FUNCTION),
            ("if = 1", ReservedKind.KEYWORD),
            ("def not(x) = x", ReservedKind.KEYWORD),
        ],
    )
    def test_assign_to_reserved(self, source: str, kind: ReservedKind) -> None:
        with pytest.raises(AssignToReserved) as exc:
            eval_program(source)
        assert exc.value.kind is kind

    @pytest.mark.parametrize(
        "source,name,kind",
        [
            ("def f(pi) = pi; f(5)", "pi", ReservedKind.CONSTANT),
            ("h = (a, e) => a", "e", ReservedKind.CONSTANT),
            ("g = sin => sin; g(1)", "sin", ReservedKind.FUNCTION),
        ],
    )
    def test_reserved_parameter_names(self, source: str, name: str, kind: ReservedKind) -> None:
        with pytest.raises(AssignToReserved) as exc:
            eval_program(source)
        assert exc.value.name == name
        assert exc.value.kind is kind

    def test_arity_mismatch(self) -> None:
        with pytest.raises(ArityMismatch) as exc:
            eval_program("def add(a, b) = a + b; add(1)")
        assert (exc.value.expected, exc.value.got) == (2, 1)
        assert exc.value.name == "add"

    def test_function_as_result(self) -> None:
        with pytest.raises(TypeMismatch):
            eval_program("f = x => x; f")

    def test_function_in_arithmetic(self) -> None:
        with pytest.raises(TypeMismatch) as exc:
            eval_program("def f(x) = x; f + 1")
        assert exc.value.name == "f"

    def test_function_passed_to_builtin(self) -> None:
        with pytest.raises(TypeMismatch):
            eval_program("def f(x) = x; abs(f)")

    def test_all_eval_errors_share_a_base(self) -> None:
        for source in ("1/0", "y", "pi = 1", "f(1)"):
            with pytest.raises(EvalError):
                eval_program(source)


# ============================================================================
# Evaluator and Env directly
# ============================================================================


class TestEnv:
    def test_lookup_walks_parents(self) -> None:
        root = Env({"a": 1.0})
        assert root.child({"b": 2.0}).lookup("a") == 1.0

    def test_bind_never_touches_parent(self) -> None:
        root = Env({"a": 1.0})
        child = root.child()
        child.bind_name("a", 5.0)
        assert root.lookup("a") == 1.0
        assert child.lookup("a") == 5.0

    def test_missing_name(self) -> None:
        with pytest.raises(KeyError):
            Env().lookup("nope")
        assert Env().lookup("nope", None) is None

    def test_depth(self) -> None:
        assert Env().child().child().depth() == 2

    def test_program_binds_into_given_env(self) -> None:
        env = Env.initial()
        Evaluator().eval_program(parse_to_ast("x = 4; def sq(v) = v * v"), env)
        assert env.lookup("x") == 4.0
        sq = env.lookup("sq")
        assert isinstance(sq, Closure)
        assert sq.name == "sq"
        assert sq.env is env

    def test_debug_trace(self, capsys, monkeypatch) -> None:
        monkeypatch.setattr(evaluator_module, "DEBUG_EVAL", True)
        eval_program("x = 1 + 1")
        assert "[EVAL] Evaluating stmt 0" in capsys.readouterr().out
