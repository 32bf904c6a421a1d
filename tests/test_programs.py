"""Runs every example program under tests/programs.

Each file starts with a `# expect: <number>` comment giving the value the
whole program evaluates to.
"""

import re
from pathlib import Path

import pytest

from exprlang import eval_program

PROGRAMS = sorted((Path(__file__).parent / "programs").glob("*.expr"))
EXPECT = re.compile(r"#\s*expect:\s*(\S+)")


def expected_value(source: str) -> float:
    m = EXPECT.match(source)
    assert m, "program is missing its '# expect:' header"
    return float(m.group(1))


def test_programs_present(programs_dir: Path) -> None:
    assert len(list(programs_dir.glob("*.expr"))) == len(PROGRAMS) > 0


@pytest.mark.parametrize("path", PROGRAMS, ids=lambda p: p.stem)
def test_program(path: Path, output) -> None:
    source = path.read_text(encoding="utf-8")
    assert eval_program(source, output=output) == pytest.approx(expected_value(source), rel=1e-9)
