"""Per-cell paint coverage and the completion test.

Accumulated opacity lives in a (grid_count, grid_count) float grid indexed
[y, x], the same orientation as the trail maps in the rendering code.
The last color painted on each cell is kept alongside it.
"""

import numpy as np


class CoverageTracker:
    def __init__(self, grid_count=1):
        self.reset(grid_count)

    def reset(self, grid_count):
        """Start over with grid_count**2 untouched cells."""
        self.grid_count = grid_count
        self.opacity = np.zeros((grid_count, grid_count), dtype=np.float64)
        self.colors = [[None] * grid_count for _ in range(grid_count)]

    def _grow(self, size):
        opacity = np.zeros((size, size), dtype=np.float64)
        opacity[: self.grid_count, : self.grid_count] = self.opacity
        colors = [[None] * size for _ in range(size)]
        for y, row in enumerate(self.colors):
            colors[y][: len(row)] = row
        self.grid_count = size
        self.opacity = opacity
        self.colors = colors

    def record(self, coord, color, increment):
        """Add one paint stroke to ``coord`` and return its new total."""
        x, y = coord
        if x < 0 or y < 0:
            # numpy would wrap these onto the opposite edge
            raise IndexError(f"coordinate {coord} is off the lattice")
        if x >= self.grid_count or y >= self.grid_count:
            self._grow(max(x, y) + 1)
        self.opacity[y, x] += increment
        self.colors[y][x] = color
        return float(self.opacity[y, x])

    def opacity_at(self, coord):
        x, y = coord
        return float(self.opacity[y, x])

    def color_at(self, coord):
        x, y = coord
        return self.colors[y][x]

    def minimum(self):
        return float(self.opacity.min())

    def cells_below(self, minimum_opacity):
        return int(np.count_nonzero(self.opacity < minimum_opacity))

    def is_complete(self, minimum_opacity):
        # inf is never reached; 0 is met by the fresh grid.
        return bool(np.all(self.opacity >= minimum_opacity))

    def __len__(self):
        return self.grid_count * self.grid_count
