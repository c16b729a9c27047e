"""Boundary-clamped random walker.

Each draw picks one of the eight directions uniformly. At an edge or corner
some directions are fully absorbed by clamping and would leave the cursor
where it is; those draws are thrown away and redrawn.
"""

import numpy as np

from walk_grid import DIRECTION_NAMES, neighbor

# --- Retry cap ---
# From a corner 3 of 8 directions move, so 64 straight misses has odds of
# roughly (5/8)**64 ~ 1e-13.
MAX_DIRECTION_DRAWS = 64


def make_rng(seed=None):
    """Random source for the walk. A fixed seed replays the same path."""
    return np.random.default_rng(seed)


def random_direction(rng):
    return DIRECTION_NAMES[rng.integers(len(DIRECTION_NAMES))]


def next_coordinate(current, grid_count, rng, max_draws=MAX_DIRECTION_DRAWS):
    """Pick the next cell of the walk. Never returns ``current`` unless the
    lattice is a single cell, in which case there is nowhere else to go."""
    if grid_count <= 1:
        return current

    for _ in range(max_draws):
        candidate = neighbor(current, random_direction(rng), grid_count)
        if candidate != current:
            return candidate

    # Safety net: choose directly among the moves that go somewhere.
    moves = [neighbor(current, name, grid_count) for name in DIRECTION_NAMES]
    moves = [m for m in moves if m != current]
    return moves[rng.integers(len(moves))]
