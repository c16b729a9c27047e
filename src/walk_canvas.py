"""pygame drawing surface for the walk.

GridCanvas is the ``paint`` collaborator WalkDriver draws through. It keeps
its own per-pixel-alpha surface so translucent strokes build up on top of
each other, and composites it over a background only when displayed or saved.
"""

import numpy as np
import pygame
from PIL import Image

# --- Cell geometry ---
GAP = 1  # px inset used by "grid" cells and "border" erasing

BACKGROUND = (255, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


def hsla_to_rgba(color):
    """(hue, saturation%, lightness%, alpha 0-1) -> pygame.Color."""
    hue, saturation, lightness, alpha = color
    rgba = pygame.Color(0, 0, 0, 0)
    rgba.hsla = (
        hue % 360.0,
        min(100.0, max(0.0, saturation)),
        min(100.0, max(0.0, lightness)),
        min(100.0, max(0.0, alpha * 100.0)),
    )
    return rgba


class GridCanvas:
    def __init__(self, settings):
        self.surface = None
        self.configure(settings)

    def configure(self, settings):
        """Resize for new settings and wipe the canvas."""
        self.canvas_size = settings["canvas_size"]
        self.grid_count = settings["grid_count"]
        self.format = settings["format"]
        self.grid_size = self.canvas_size / self.grid_count
        self.surface = pygame.Surface((self.canvas_size, self.canvas_size), pygame.SRCALPHA)
        self.clear()

    def clear(self):
        self.surface.fill(TRANSPARENT)

    def cell_rect(self, coord, inset=0):
        x, y = coord
        left = round(x * self.grid_size)
        top = round(y * self.grid_size)
        right = round((x + 1) * self.grid_size)
        bottom = round((y + 1) * self.grid_size)
        return pygame.Rect(
            left + inset,
            top + inset,
            max(0, right - left - 2 * inset),
            max(0, bottom - top - 2 * inset),
        )

    def paint(self, coord, color):
        """Fill one cell, or erase it when ``color`` is None."""
        if self.format == "grid":
            rect = self.cell_rect(coord, GAP)
        elif color is None and self.format == "border":
            # Erasing only the inside leaves the 1px outline behind.
            rect = self.cell_rect(coord, GAP)
        else:
            rect = self.cell_rect(coord)

        if color is None:
            self.surface.fill(TRANSPARENT, rect)
            return
        if rect.width == 0 or rect.height == 0:
            return

        stroke = pygame.Surface(rect.size, pygame.SRCALPHA)
        stroke.fill(hsla_to_rgba(color))
        self.surface.blit(stroke, rect.topleft)

    # --- Output ---

    def composite(self, background=BACKGROUND):
        frame = pygame.Surface((self.canvas_size, self.canvas_size))
        frame.fill(background)
        frame.blit(self.surface, (0, 0))
        return frame

    def to_array(self, background=BACKGROUND):
        """(H, W, 3) uint8 image of the canvas over ``background``."""
        frame = pygame.surfarray.array3d(self.composite(background))
        # Pygame uses (width, height), images want (height, width)
        return np.ascontiguousarray(np.transpose(frame, (1, 0, 2)))

    def save_png(self, path, background=BACKGROUND):
        Image.fromarray(self.to_array(background), "RGB").save(path)
        return path
