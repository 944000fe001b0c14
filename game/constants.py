"""Game constants shared across modules.

Directions are numbered clockwise so that turning is plain modular
arithmetic: +1 turns clockwise, +3 (i.e. -1) turns counter-clockwise.
"""

import enum


class Direction(enum.IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def turned(self, quarter_turns):
        """Return the direction rotated clockwise by ``quarter_turns``."""
        return Direction((self + quarter_turns) % 4)


# (dx, dy) offsets, indexed by Direction
OFFSETS = ((0, -1), (1, 0), (0, 1), (-1, 0))

# Which way to look from the current cell
LOOK_LEFT = -1
LOOK_FORWARD = 0
LOOK_RIGHT = 1

# Default puzzle parameters
DEFAULT_WIDTH = 8
DEFAULT_HEIGHT = 8
DEFAULT_BALLS = 5

# Upper bound so that every coordinate fits into one descriptor byte
MAX_GRID_SIZE = 255


class ArenaFlag(enum.Enum):
    """Per-cell flags a renderer may read from an arena cell."""

    TRUE = enum.auto()
    GUESS = enum.auto()
    LOCK = enum.auto()


class PuzzlePhase(enum.Enum):
    """PLACING accepts moves; REVEALED is terminal."""

    PLACING = enum.auto()
    REVEALED = enum.auto()
