"""Shared pytest fixtures for exprlang tests."""

import io
from pathlib import Path

import pytest

from exprlang import Context


@pytest.fixture
def output() -> io.StringIO:
    """Sink for print() so tests can inspect what a program wrote."""
    return io.StringIO()


@pytest.fixture
def ctx(output: io.StringIO) -> Context:
    return Context(output=output)


@pytest.fixture
def programs_dir() -> Path:
    return Path(__file__).parent / "programs"
