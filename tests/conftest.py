"""Shared fixtures for the Black Box test suite."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path to import game modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from game.blackbox_game import BlackBoxGame
from game.blackbox_params import BlackBoxParams
from game.descriptor import encode_descriptor


def build_game(width, height, markers, minballs=None, maxballs=None):
    """Build a game from 0-based ball coordinates."""
    count = len(markers)
    params = BlackBoxParams(
        width,
        height,
        count if minballs is None else minballs,
        count if maxballs is None else maxballs,
    )
    return BlackBoxGame(params, encode_descriptor(width, height, markers))


@pytest.fixture
def make_game():
    """Factory fixture: make_game(width, height, markers, minballs=None, maxballs=None)."""
    return build_game


@pytest.fixture
def example_game():
    """5x5 puzzle with balls at arena (2,2) and (3,4), i.e. grid (3,3) and (4,5)."""
    return build_game(5, 5, [(2, 2), (3, 4)])


@pytest.fixture
def temp_dir(tmp_path):
    return str(tmp_path)
