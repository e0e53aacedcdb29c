"""
Paints projected column slices into the screen grid: shaded floor below the
wall band, edge glyphs on the band, hidden cells above it.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np
from .config import (
    DISTANCE_MULTIPLIER,
    FLOOR_SHADE_SCALE,
    SIDE_WALL_DARKEN,
)
from .projector import compute_slice
from .ray_caster import SurfaceAxis
from .screen import Glyph

if TYPE_CHECKING:
    from .projector import ColumnProjector
    from .screen import ScreenGrid


class Compositor:
    """Writes one column per projected ray into a ScreenGrid."""

    def __init__(
        self,
        screen: ScreenGrid,
        distance_multiplier: float = DISTANCE_MULTIPLIER,
        floor_shade_scale: float = FLOOR_SHADE_SCALE,
        side_wall_darken: float = SIDE_WALL_DARKEN,
    ) -> None:
        self.screen = screen
        self.distance_multiplier = distance_multiplier
        self.floor_shade_scale = floor_shade_scale
        self.side_wall_darken = side_wall_darken
        # Scratch buffers for building a column before committing it
        h = screen.height
        self._glyphs = np.empty(h, dtype=np.int8)
        self._shades = np.empty(h, dtype=np.float32)
        self._visible = np.empty(h, dtype=bool)

    def composite(self, projector: ColumnProjector) -> int:
        """Paint every column from the projector caches; returns changed cells."""
        changed = 0
        for i in range(self.screen.width):
            changed += self.composite_column(
                i, float(projector.distances[i]), projector.surface_axis(i)
            )
        return changed

    def composite_column(
        self, column: int, distance: float, axis: SurfaceAxis
    ) -> int:
        h = self.screen.height
        sl = compute_slice(distance, h, self.distance_multiplier)
        vo = sl.vertical_offset
        top = h - vo
        wall_shade = max(0.0, min(1.0, sl.depth))
        if axis == SurfaceAxis.VERTICAL:
            wall_shade *= self.side_wall_darken

        glyphs = self._glyphs
        shades = self._shades
        visible = self._visible
        for j in range(h):
            if j < vo:
                # Floor: brightest at the bottom row, fading toward the band
                glyphs[j] = Glyph.WALL_MID
                shades[j] = (vo - j) / vo * self.floor_shade_scale
                visible[j] = True
            elif j > top:
                glyphs[j] = Glyph.EMPTY
                shades[j] = 0.0
                visible[j] = False
            else:
                if j == top:
                    glyphs[j] = Glyph.WALL_TOP
                elif j == vo:
                    glyphs[j] = Glyph.WALL_BOTTOM
                else:
                    glyphs[j] = Glyph.WALL_MID
                shades[j] = wall_shade
                visible[j] = True
        return self.screen.write_column(column, glyphs, shades, visible)
