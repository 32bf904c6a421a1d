"""Tests for the token-stream delimiter checks."""

import pytest

from exprlang import tokenize
from exprlang.lexing import Delim
from exprlang.constraints import check_delimiter_balance, check_token_constraints, find_unbalanced
from exprlang.errors import UnexpectedEof, UnexpectedToken


class TestBalance:
    @pytest.mark.parametrize("source", ["1 + 2", "((1))", "f(g(1), (2))", "() => 1"])
    def test_balanced(self, source: str) -> None:
        tokens = tokenize(source)
        assert check_delimiter_balance(tokens)
        assert find_unbalanced(tokens) is None

    @pytest.mark.parametrize("source", ["(1", "1)", "((1)", ")("])
    def test_unbalanced(self, source: str) -> None:
        assert not check_delimiter_balance(tokenize(source))

    def test_reports_stray_close(self) -> None:
        tok = find_unbalanced(tokenize("1) + (2"))
        assert tok == Delim(")")
        assert tok.pos == 1

    def test_reports_innermost_open(self) -> None:
        tok = find_unbalanced(tokenize("(1 + (2"))
        assert tok.pos == 5


class TestConstraints:
    def test_passes_balanced_stream(self) -> None:
        check_token_constraints(tokenize("max(1, 2)"))

    def test_unclosed_open_is_eof(self) -> None:
        with pytest.raises(UnexpectedEof) as exc:
            check_token_constraints(tokenize("sqrt(4"))
        assert "opened at 4" in str(exc.value)
        assert exc.value.pos == 6

    def test_stray_close_is_token(self) -> None:
        with pytest.raises(UnexpectedToken) as exc:
            check_token_constraints(tokenize("4)"))
        assert exc.value.pos == 1
