"""Pytest fixtures for wire-schema tests."""

import pytest
from pathlib import Path

# Small CPU layout in canonical form
CPU_LAYOUT = """#wire-schema 1
C ram 0 p:-12,-23
C rom 1 p:-12,-10
C insFetch 3 p:-12,2
C id 2 p:3,4
C ls 8 p:26,4
C alu 4 p:26,15
C pc 5 p:3,11
C reg 6 p:3,23
W 3 ns:[13,6 p:id/rhsImm|22,6,0|22,12,1|33,12|33,12,2,3|22,28,2|33,7,3 p:ls/data|13,28,5 p:reg/outB|33,15,4 p:alu/rhs]
W 6 ns:[-12,3 p:insFetch/addr|-17,3,0]
W 7 ns:[-12,4 p:insFetch/data|-17,4,0]
W 10 ns:[3,26 p:reg/in|-1,26,0|-1,31,1|31,31,2|31,21,3 p:alu/result|38,31,3|38,6,5|36,6,6 p:ls/dataOut]
W 11 ns:[3,12 p:pc/in|-5,12,0]
W 13 ns:[29,10|29,15,0 p:alu/lhs|29,7,0 p:ls/addrBase|20,10,0|16,10,3|20,26,3|16,12,4|16,9,4|13,26,5 p:reg/outA|13,12,6 p:pc/out|-7,9,7|-7,5,10 p:insFetch/pc]
W 16 ns:[3,5 p:id/ins|0,5,0|0,3,1|-2,3,2 p:insFetch/ins]
"""

# Smallest file with one component and one two-node wire
SIMPLE_LAYOUT = "#wire-schema 1\nC ram 0 p:-12,-23\nW 3 ns:[13,6 p:id/rhsImm|22,6,0]\n"

# Hand-edited file: comments, blank lines, odd spacing
COMMENTED_LAYOUT = """#wire-schema 1
# memory
C ram 0 p:-12,-23

   C rom 1   p:-12,-10
# wires
W 6 ns:[-12,3 p:insFetch/addr|-17,3,0]
"""

# File with one problem of each recoverable kind
BROKEN_LAYOUT = """#wire-schema 1
C
C ram 0 p:-12,x
X what is this
W 3 ns:[13,6|22,6,0,7|oops]
C rom 1 p:-12,-10
"""


@pytest.fixture
def cpu_text() -> str:
    """The CPU layout in canonical form."""
    return CPU_LAYOUT


@pytest.fixture
def simple_text() -> str:
    """One component and one two-node wire."""
    return SIMPLE_LAYOUT


@pytest.fixture
def commented_text() -> str:
    """A valid layout with comments and uneven spacing."""
    return COMMENTED_LAYOUT


@pytest.fixture
def broken_text() -> str:
    """A layout with line and field errors."""
    return BROKEN_LAYOUT


@pytest.fixture
def cpu_layout_file(tmp_path: Path) -> Path:
    """Write the CPU layout to a file."""
    path = tmp_path / "cpu.wires"
    path.write_text(CPU_LAYOUT)
    return path


@pytest.fixture
def commented_layout_file(tmp_path: Path) -> Path:
    """Write the hand-edited layout to a file."""
    path = tmp_path / "commented.wires"
    path.write_text(COMMENTED_LAYOUT)
    return path


@pytest.fixture
def broken_layout_file(tmp_path: Path) -> Path:
    """Write the broken layout to a file."""
    path = tmp_path / "broken.wires"
    path.write_text(BROKEN_LAYOUT)
    return path


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch):
    """Run from an empty directory with no user config."""
    user_config = tmp_path / "user" / "config.toml"
    monkeypatch.setattr("wire_schema.config.USER_CONFIG_PATH", user_config)
    workdir = tmp_path / "work"
    workdir.mkdir()
    (workdir / ".git").mkdir()
    monkeypatch.chdir(workdir)
    return workdir
