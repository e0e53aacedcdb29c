"""
Fixed-size glyph buffer written by the compositor and read by display sinks.
"""

from __future__ import annotations
import enum
from typing import TYPE_CHECKING, NamedTuple, Tuple
import numpy as np
from .config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    GLYPH_BLOCK,
    GLYPH_BLOCK_TOP,
    GLYPH_BLOCK_BOTTOM,
    GLYPH_EMPTY,
)

if TYPE_CHECKING:
    from .display import DisplaySink


class Glyph(enum.IntEnum):
    EMPTY = 0
    WALL_MID = 1
    WALL_TOP = 2
    WALL_BOTTOM = 3

    @property
    def char(self) -> str:
        return _GLYPH_CHARS[self]


_GLYPH_CHARS = {
    Glyph.EMPTY: GLYPH_EMPTY,
    Glyph.WALL_MID: GLYPH_BLOCK,
    Glyph.WALL_TOP: GLYPH_BLOCK_TOP,
    Glyph.WALL_BOTTOM: GLYPH_BLOCK_BOTTOM,
}


def gray(shade: float) -> Tuple[int, int, int]:
    """RGB gray triple for a shade in [0, 1]."""
    v = int(round(max(0.0, min(1.0, shade)) * 255))
    return (v, v, v)


class ScreenCell(NamedTuple):
    glyph: Glyph
    shade: float
    visible: bool

    @property
    def color(self) -> Tuple[int, int, int]:
        return gray(self.shade)


class ScreenGrid:
    """
    Row-major cell buffer, allocated once. Row 0 is the bottom of the view.
    Cells changed since the last flush are tracked in a dirty mask.
    """

    def __init__(
        self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid screen size {width}x{height}")
        self.width = width
        self.height = height
        size = width * height
        self.glyphs = np.full(size, Glyph.EMPTY, dtype=np.int8)
        self.shades = np.zeros(size, dtype=np.float32)
        self.visible = np.zeros(size, dtype=bool)
        # Every cell starts dirty so the first flush draws the whole screen
        self.dirty = np.ones(size, dtype=bool)

    def index(self, column: int, row: int) -> int:
        if not (0 <= column < self.width and 0 <= row < self.height):
            raise IndexError(
                f"Cell ({column}, {row}) outside "
                f"{self.width}x{self.height} screen"
            )
        return row * self.width + column

    def cell(self, column: int, row: int) -> ScreenCell:
        idx = self.index(column, row)
        return ScreenCell(
            Glyph(int(self.glyphs[idx])),
            float(self.shades[idx]),
            bool(self.visible[idx]),
        )

    def color(self, column: int, row: int) -> Tuple[int, int, int]:
        return gray(float(self.shades[self.index(column, row)]))

    def write(
        self, column: int, row: int, glyph: Glyph, shade: float, visible: bool
    ) -> bool:
        """Store one cell. Returns False when the cell was already identical."""
        idx = self.index(column, row)
        shade = np.float32(shade)
        if (
            self.glyphs[idx] == glyph
            and self.shades[idx] == shade
            and self.visible[idx] == visible
        ):
            return False
        self.glyphs[idx] = glyph
        self.shades[idx] = shade
        self.visible[idx] = visible
        self.dirty[idx] = True
        return True

    def write_column(
        self,
        column: int,
        glyphs: np.ndarray,
        shades: np.ndarray,
        visible: np.ndarray,
    ) -> int:
        """Commit a whole column at once; returns the number of changed cells."""
        if not 0 <= column < self.width:
            raise IndexError(f"Column {column} outside screen")
        sl = slice(column, None, self.width)
        shades = shades.astype(np.float32, copy=False)
        changed = (
            (self.glyphs[sl] != glyphs)
            | (self.shades[sl] != shades)
            | (self.visible[sl] != visible)
        )
        if changed.any():
            self.glyphs[sl] = np.where(changed, glyphs, self.glyphs[sl])
            self.shades[sl] = np.where(changed, shades, self.shades[sl])
            self.visible[sl] = np.where(changed, visible, self.visible[sl])
            self.dirty[sl] |= changed
        return int(changed.sum())

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return (self.glyphs.copy(), self.shades.copy(), self.visible.copy())

    def present(self, sink: DisplaySink) -> None:
        """Push every cell to the sink."""
        for idx in range(self.width * self.height):
            self._draw(sink, idx)
        self.dirty[:] = False

    def flush(self, sink: DisplaySink) -> int:
        """Push only cells changed since the last flush; returns the count."""
        indices = np.flatnonzero(self.dirty)
        for idx in indices:
            self._draw(sink, int(idx))
        self.dirty[:] = False
        return len(indices)

    def _draw(self, sink: DisplaySink, idx: int) -> None:
        row, column = divmod(idx, self.width)
        sink.draw(
            column,
            row,
            Glyph(int(self.glyphs[idx])).char,
            gray(float(self.shades[idx])),
            bool(self.visible[idx]),
        )

    def to_text(self) -> str:
        """Render as text, top row first; hidden cells become spaces."""
        lines = []
        for row in range(self.height - 1, -1, -1):
            chars = []
            for column in range(self.width):
                idx = row * self.width + column
                ch = Glyph(int(self.glyphs[idx])).char
                chars.append(ch if self.visible[idx] and ch else " ")
            lines.append("".join(chars))
        return "\n".join(lines)
