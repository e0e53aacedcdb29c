"""
Display sinks that receive composited cells as (column, row, glyph, color,
visible). Row 0 is the bottom of the view.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Protocol, Tuple
import pygame
from .config import CELL_SIZE


Color = Tuple[int, int, int]


class DisplaySink(Protocol):
    def draw(
        self, column: int, row: int, glyph: str, color: Color, visible: bool
    ) -> None: ...


class TextDisplay:
    """Keeps a character matrix, e.g. for terminal output or tests."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._chars: List[List[str]] = [
            [" "] * width for _ in range(height)
        ]
        self.colors: Dict[Tuple[int, int], Color] = {}

    def draw(
        self, column: int, row: int, glyph: str, color: Color, visible: bool
    ) -> None:
        self._chars[row][column] = glyph if visible and glyph else " "
        self.colors[(column, row)] = color

    def lines(self) -> List[str]:
        """Rows top to bottom."""
        return ["".join(row) for row in reversed(self._chars)]

    def render(self) -> str:
        return "\n".join(self.lines())


class PygameDisplay:
    """Draws glyph cells onto a pygame surface using a monospace font."""

    def __init__(
        self,
        surface: pygame.Surface,
        width: int,
        height: int,
        cell_size: int = CELL_SIZE,
        font: Optional[pygame.font.Font] = None,
    ) -> None:
        self.surface = surface
        self.width = width
        self.height = height
        self.cell_size = cell_size
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont("dejavusansmono", cell_size)
        self.font = font
        # Rendered glyph surfaces keyed by (glyph, color)
        self._cache: Dict[Tuple[str, Color], pygame.Surface] = {}

    def _glyph_surface(self, glyph: str, color: Color) -> pygame.Surface:
        key = (glyph, color)
        surf = self._cache.get(key)
        if surf is None:
            surf = self.font.render(glyph, True, color)
            self._cache[key] = surf
        return surf

    def draw(
        self, column: int, row: int, glyph: str, color: Color, visible: bool
    ) -> None:
        x = column * self.cell_size
        # Flip rows: row 0 is the bottom of the window
        y = (self.height - 1 - row) * self.cell_size
        self.surface.fill((0, 0, 0), (x, y, self.cell_size, self.cell_size))
        if visible and glyph:
            self.surface.blit(self._glyph_surface(glyph, color), (x, y))
