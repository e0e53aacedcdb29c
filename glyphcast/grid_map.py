"""
Static tile map parsed from text, plus the wall colliders derived from it.
"""

from __future__ import annotations
import enum
import logging
import os
from typing import FrozenSet, List, NamedTuple, Optional, Tuple
from .config import WORLD_FILE, MAP_WALL_SYMBOL, MAP_FLOOR_SYMBOL

logger = logging.getLogger(__name__)


class MapFormatError(ValueError):
    """Raised when map text has ragged rows or unknown symbols."""


class OutOfBounds(IndexError):
    """Raised when a cell lookup falls outside the map."""


class CellKind(enum.Enum):
    FLOOR = MAP_FLOOR_SYMBOL
    WALL = MAP_WALL_SYMBOL


class WallBox(NamedTuple):
    """Axis-aligned unit square occupied by one wall cell."""

    x: int
    y: int


class ColliderSet:
    """Read-only set of wall boxes within a width x height area."""

    def __init__(self, width: int, height: int, boxes: List[WallBox]) -> None:
        self.width = width
        self.height = height
        self.boxes: Tuple[WallBox, ...] = tuple(boxes)
        self._cells: FrozenSet[Tuple[int, int]] = frozenset(
            (b.x, b.y) for b in self.boxes
        )

    def __len__(self) -> int:
        return len(self.boxes)

    def contains_point(self, x: float, y: float) -> bool:
        """Return True if (x, y) lies inside the collider area."""
        return 0.0 <= x < self.width and 0.0 <= y < self.height

    def is_solid(self, cx: int, cy: int) -> bool:
        return (cx, cy) in self._cells


class GridMap:
    """Immutable rectangular grid of floor and wall cells."""

    def __init__(self, rows: List[List[CellKind]]) -> None:
        if not rows or not rows[0]:
            raise MapFormatError("Map must have at least one row and column")
        width = len(rows[0])
        for j, row in enumerate(rows):
            if len(row) != width:
                raise MapFormatError(
                    f"Row {j} has length {len(row)}, expected {width}"
                )
        self._rows: Tuple[Tuple[CellKind, ...], ...] = tuple(
            tuple(row) for row in rows
        )
        self.width = width
        self.height = len(rows)
        self._colliders: Optional[ColliderSet] = None

    def cell(self, x: int, y: int) -> CellKind:
        """Return the kind of cell (x, y), where y indexes text rows."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(
                f"Cell ({x}, {y}) outside {self.width}x{self.height} map"
            )
        return self._rows[y][x]

    def is_wall(self, x: int, y: int) -> bool:
        return self.cell(x, y) is CellKind.WALL

    def colliders(self) -> ColliderSet:
        """One box per wall cell; built on first use and cached."""
        if self._colliders is None:
            boxes = [
                WallBox(x, y)
                for x in range(self.width)
                for y in range(self.height)
                if self._rows[y][x] is CellKind.WALL
            ]
            self._colliders = ColliderSet(self.width, self.height, boxes)
        return self._colliders


def load(text: str) -> GridMap:
    """Parse newline-separated map text ('#' wall, '.' floor)."""
    lines = [line.rstrip("\r") for line in text.splitlines()]
    # Ignore blank lines at either end (trailing newline in files)
    while lines and not lines[-1]:
        lines.pop()
    while lines and not lines[0]:
        lines.pop(0)
    rows: List[List[CellKind]] = []
    for j, line in enumerate(lines):
        row = []
        for i, ch in enumerate(line):
            try:
                row.append(CellKind(ch))
            except ValueError:
                raise MapFormatError(
                    f"Invalid map symbol {ch!r} at column {i}, row {j}"
                ) from None
        rows.append(row)
    return GridMap(rows)


def load_file(path: Optional[str] = None) -> GridMap:
    """Load a map from a text file (defaults to the bundled map)."""
    if path is None:
        path = os.path.join(os.path.dirname(__file__), WORLD_FILE)
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            text = f.read()
    except OSError as e:
        raise RuntimeError(f"Failed to load map from {path}: {e}")
    grid_map = load(text)
    logger.info(
        "Loaded %dx%d map from %s", grid_map.width, grid_map.height, path
    )
    return grid_map
