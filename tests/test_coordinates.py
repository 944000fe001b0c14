"""
Unit tests for the perimeter <-> grid coordinate mapping.
"""

import pytest

from game.constants import Direction
from game.coordinates import grid_to_perimeter, is_arena, perimeter_count, perimeter_to_grid

SIZES = [(2, 2), (5, 5), (8, 8), (3, 7), (10, 4)]


class TestPerimeterToGrid:
    """Test the perimeter index -> grid cell mapping."""

    def test_top_row_faces_down(self):
        assert perimeter_to_grid(5, 3, 0) == (1, 0, Direction.DOWN)
        assert perimeter_to_grid(5, 3, 4) == (5, 0, Direction.DOWN)

    def test_right_column_faces_left(self):
        assert perimeter_to_grid(5, 3, 5) == (6, 1, Direction.LEFT)
        assert perimeter_to_grid(5, 3, 7) == (6, 3, Direction.LEFT)

    def test_bottom_row_counts_backwards(self):
        assert perimeter_to_grid(5, 3, 8) == (5, 4, Direction.UP)
        assert perimeter_to_grid(5, 3, 12) == (1, 4, Direction.UP)

    def test_left_column_counts_backwards(self):
        assert perimeter_to_grid(5, 3, 13) == (0, 3, Direction.RIGHT)
        assert perimeter_to_grid(5, 3, 15) == (0, 1, Direction.RIGHT)

    @pytest.mark.parametrize("index", [-1, -20, 16, 100])
    def test_out_of_range_has_no_mapping(self, index):
        assert perimeter_to_grid(5, 3, index) is None


class TestGridToPerimeter:
    """Test the grid cell -> perimeter index mapping."""

    @pytest.mark.parametrize("x,y", [(1, 1), (3, 2), (5, 3)])
    def test_arena_cells_are_not_perimeter(self, x, y):
        assert grid_to_perimeter(5, 3, x, y) is None

    @pytest.mark.parametrize("x,y", [(0, 0), (6, 0), (6, 4), (0, 4)])
    def test_corners_are_unused(self, x, y):
        assert grid_to_perimeter(5, 3, x, y) is None

    @pytest.mark.parametrize("x,y", [(-1, 0), (7, 1), (2, -1), (2, 5), (7, 7)])
    def test_off_grid(self, x, y):
        assert grid_to_perimeter(5, 3, x, y) is None

    def test_non_square_right_column(self):
        """The right-hand column is at x = W+1 even when W > H."""
        assert grid_to_perimeter(10, 4, 11, 1) == 10
        assert grid_to_perimeter(10, 4, 11, 4) == 13


class TestRoundTrip:
    """The two mappings are inverses on the perimeter."""

    @pytest.mark.parametrize("width,height", SIZES)
    def test_index_round_trip(self, width, height):
        for index in range(perimeter_count(width, height)):
            x, y, _ = perimeter_to_grid(width, height, index)
            assert grid_to_perimeter(width, height, x, y) == index

    @pytest.mark.parametrize("width,height", SIZES)
    def test_cell_round_trip(self, width, height):
        seen = set()
        for x in range(width + 2):
            for y in range(height + 2):
                index = grid_to_perimeter(width, height, x, y)
                if index is None:
                    continue
                cell = perimeter_to_grid(width, height, index)
                assert (cell.x, cell.y) == (x, y)
                seen.add(index)
        assert seen == set(range(perimeter_count(width, height)))

    @pytest.mark.parametrize("width,height", SIZES)
    def test_direction_points_into_arena(self, width, height):
        for index in range(perimeter_count(width, height)):
            x, y, direction = perimeter_to_grid(width, height, index)
            dx, dy = {Direction.UP: (0, -1), Direction.RIGHT: (1, 0),
                      Direction.DOWN: (0, 1), Direction.LEFT: (-1, 0)}[direction]
            assert is_arena(width, height, x + dx, y + dy)
