"""Lattice coordinates and the eight compass moves between them.

A coordinate is a plain ``(x, y)`` tuple of ints, each in ``[0, grid_count - 1]``.
Tuples are immutable and compare component-wise, which is all the walk needs.
"""

# --- Directions ---
# (dx, dy) unit offsets, screen orientation: y grows downward.
# There is deliberately no "stay" entry.

DIRECTIONS = {
    "up_left": (-1, -1),
    "up": (0, -1),
    "up_right": (1, -1),
    "left": (-1, 0),
    "right": (1, 0),
    "down_left": (-1, 1),
    "down": (0, 1),
    "down_right": (1, 1),
}

DIRECTION_NAMES = list(DIRECTIONS.keys())


def clamp(value, low, high):
    return max(low, min(high, value))


def neighbor(coord, direction, grid_count):
    """Step from ``coord`` one cell in ``direction``, saturating at the edges.

    ``direction`` is either a name from DIRECTIONS or a raw (dx, dy) pair.
    Each axis is clamped on its own, so a diagonal move against a wall
    slides along it and a move into a corner stays put.
    """
    if isinstance(direction, str):
        direction = DIRECTIONS[direction]
    dx, dy = direction
    x, y = coord
    last = grid_count - 1
    return (clamp(x + dx, 0, last), clamp(y + dy, 0, last))


def lattice_coordinates(grid_count):
    """All grid_count**2 coordinates, column by column."""
    return [(x, y) for x in range(grid_count) for y in range(grid_count)]
