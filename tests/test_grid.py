"""Tests for lattice coordinates and clamped neighbor moves."""

import pytest
from walk_grid import DIRECTION_NAMES, DIRECTIONS, lattice_coordinates, neighbor


class TestDirections:
    """Test the direction table."""

    def test_eight_distinct_unit_moves(self):
        """Test that there are eight directions and none of them stays put."""
        offsets = set(DIRECTIONS.values())

        assert len(DIRECTION_NAMES) == 8
        assert len(offsets) == 8
        assert (0, 0) not in offsets
        for dx, dy in offsets:
            assert dx in (-1, 0, 1)
            assert dy in (-1, 0, 1)


class TestNeighbor:
    """Test neighbor() clamping."""

    def test_interior_move(self):
        """Test that an interior move applies the offset unchanged."""
        assert neighbor((3, 3), "up_left", 10) == (2, 2)
        assert neighbor((3, 3), "down", 10) == (3, 4)
        assert neighbor((3, 3), (1, -1), 10) == (4, 2)

    def test_corner_absorbs_outward_move(self):
        """Test that moving out of a corner leaves the coordinate unchanged."""
        assert neighbor((0, 0), "up_left", 5) == (0, 0)
        assert neighbor((4, 4), "down_right", 5) == (4, 4)

    def test_diagonal_slides_along_wall(self):
        """Test that each axis is clamped independently."""
        assert neighbor((0, 2), "up_left", 5) == (0, 1)
        assert neighbor((2, 4), "down_right", 5) == (3, 4)

    @pytest.mark.parametrize("grid_count", [1, 2, 3, 7])
    def test_always_in_bounds(self, grid_count):
        """Test that every move from every cell stays on the lattice."""
        for coord in lattice_coordinates(grid_count):
            for name in DIRECTION_NAMES:
                x, y = neighbor(coord, name, grid_count)
                assert 0 <= x < grid_count
                assert 0 <= y < grid_count

    def test_returns_new_tuple_without_touching_input(self):
        """Test that neighbor() is side-effect free."""
        coord = (1, 1)
        neighbor(coord, "right", 3)

        assert coord == (1, 1)


class TestLatticeCoordinates:
    """Test lattice enumeration."""

    def test_covers_every_cell_once(self):
        """Test that all grid_count**2 coordinates are produced."""
        coords = lattice_coordinates(4)

        assert len(coords) == 16
        assert len(set(coords)) == 16
