"""Mapping between perimeter indices and grid cells.

The grid is (W+2) x (H+2). The arena occupies (1..W, 1..H); the ring of
cells around it is the firing range. Perimeter indices run clockwise:

         0   1  ..  W-1
    2W+2H-1  +----------+  W
       ...   |  arena   |  ...
     2W+H    +----------+  W+H-1
        2W+H-1 ..  W+H+1  W+H

The four corner cells (0,0), (W+1,0), (W+1,H+1) and (0,H+1) are unused.
"""

from typing import NamedTuple

from game.constants import Direction


class PerimeterCell(NamedTuple):
    """A firing-range cell and the direction a probe fired from it travels."""

    x: int
    y: int
    direction: Direction


def perimeter_count(width, height):
    return 2 * (width + height)


def perimeter_to_grid(width, height, index):
    """Map a perimeter index to its grid cell and inward direction.

    Returns:
        PerimeterCell, or None if ``index`` is outside [0, 2(W+H)).
    """
    if index < 0:
        return None

    if index < width:
        # top row, left to right
        return PerimeterCell(index + 1, 0, Direction.DOWN)
    index -= width
    if index < height:
        # right-hand side, top to bottom
        return PerimeterCell(width + 1, index + 1, Direction.LEFT)
    index -= height
    if index < width:
        # bottom row, right to left
        return PerimeterCell(width - index, height + 1, Direction.UP)
    index -= width
    if index < height:
        # left-hand side, bottom to top
        return PerimeterCell(0, height - index, Direction.RIGHT)
    return None


def grid_to_perimeter(width, height, x, y):
    """Map a grid cell to its perimeter index.

    Returns:
        int, or None for arena cells, corners and coordinates off the grid.
    """
    x1, y1 = width + 1, height + 1

    if 0 < x < x1 and 0 < y < y1:
        return None  # arena
    if x < 0 or x > x1 or y < 0 or y > y1:
        return None  # off the grid
    if x in (0, x1) and y in (0, y1):
        return None  # corner

    if y == 0:
        return x - 1
    if x == x1:
        return width + y - 1
    if y == y1:
        return width + height + (width - x)
    return 2 * width + height + (height - y)


def is_arena(width, height, x, y):
    return 1 <= x <= width and 1 <= y <= height
