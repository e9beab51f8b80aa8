"""
Shared fixtures for the foosball scheduler tests.
"""

import sys
from pathlib import Path

import pytest

# Add the package to the path
sys.path.append(str(Path(__file__).parent.parent))


@pytest.fixture
def cyclic_five():
    """A valid 5-player schedule using each of the 10 pairs exactly once."""
    return [
        tuple((k + offset) % 5 + 1 for offset in (1, 4, 2, 3))
        for k in range(5)
    ]


@pytest.fixture
def balanced_four():
    """A valid 4-player schedule pairing 1+2 / 3+4 and 1+4 / 2+3 only."""
    return [
        (1, 2, 3, 4),
        (3, 4, 1, 2),
        (4, 1, 2, 3),
        (2, 3, 4, 1),
    ]


@pytest.fixture
def players_csv(tmp_path):
    """Player table with eight players."""
    path = tmp_path / "players.csv"
    rows = ["name,elo"]
    for i, elo in enumerate([1850, 1720, 1600, 1540, 1480, 1410, 1300, 1210], start=1):
        rows.append(f"Player {i},{elo}")
    path.write_text("\n".join(rows) + "\n")
    return path
