"""Bounded trail of recently visited cells for "border" rendering.

Only the last ``path_limit`` visits stay on screen. When a visit falls off
the front it is reported back so the caller can erase it, unless the same
cell was visited again within the window and must stay painted.
"""

from collections import deque


class PathHistory:
    def __init__(self):
        self.cells = deque()

    def clear(self):
        self.cells.clear()

    def push(self, coord, path_limit):
        """Append ``coord``; return ``(evicted, still_present)``.

        ``evicted`` is None while the trail is within ``path_limit``.
        """
        self.cells.append(coord)
        if len(self.cells) <= path_limit:
            return None, False

        evicted = self.cells.popleft()
        return evicted, evicted in self.cells

    def first(self):
        return self.cells[0]

    def last(self):
        return self.cells[-1]

    def __len__(self):
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)
