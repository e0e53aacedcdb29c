"""
Per-column ray projection: one cast per screen column and the wall slice
derived from its distance.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING, List, NamedTuple, Tuple
import numpy as np
from .config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    DISTANCE_MULTIPLIER,
    RAYCAST_MAX_DISTANCE,
    RAYCAST_SPREAD,
    RAYCAST_LENGTH,
    RETAIN_ON_MISS,
)
from .ray_caster import SurfaceAxis

if TYPE_CHECKING:
    from .player import Pose
    from .ray_caster import RayCaster


class Slice(NamedTuple):
    # Projected wall height in rows; negative when the wall is out of sight
    height: float
    # Rows [0, vertical_offset) are floor; wall band is
    # [vertical_offset, screen_height - vertical_offset]
    vertical_offset: int
    # height / screen_height, the unclamped wall brightness
    depth: float


def compute_slice(
    distance: float,
    screen_height: int = SCREEN_HEIGHT,
    multiplier: float = DISTANCE_MULTIPLIER,
) -> Slice:
    """Convert a hit distance into a wall slice for one column."""
    height = screen_height - distance * multiplier
    # round() is half-to-even, matching the host engine's RoundToInt
    vertical_offset = int(round((screen_height - height) / 2.0))
    return Slice(height, vertical_offset, height / screen_height)


class ColumnProjector:
    """Casts one ray per screen column and caches the resulting distances."""

    def __init__(
        self,
        caster: RayCaster,
        screen_width: int = SCREEN_WIDTH,
        max_distance: float = RAYCAST_MAX_DISTANCE,
        spread: float = RAYCAST_SPREAD,
        ray_length: float = RAYCAST_LENGTH,
        retain_on_miss: bool = RETAIN_ON_MISS,
    ) -> None:
        self.caster = caster
        self.w = screen_width
        self.max_distance = max_distance
        self.spread = spread
        self.ray_length = ray_length
        self.retain_on_miss = retain_on_miss
        # Distance and surface axis per column, reused across frames
        self.distances = np.full(self.w, max_distance, dtype=np.float64)
        self.axes = np.full(self.w, SurfaceAxis.NONE, dtype=np.int8)

    def offset(self, column: int) -> float:
        """Lateral offset of a column; linear in the column index."""
        return (column - self.w / 2.0) * self.spread

    def direction(self, column: int, heading: float) -> Tuple[float, float]:
        """Un-normalized ray vector (offset, length) rotated by heading."""
        rad = math.radians(heading)
        cos_h = math.cos(rad)
        sin_h = math.sin(rad)
        ox = self.offset(column)
        oy = self.ray_length
        return (ox * cos_h - oy * sin_h, ox * sin_h + oy * cos_h)

    def directions(self, pose: Pose) -> List[Tuple[float, float]]:
        """Ray vectors for every column, e.g. for a debug overlay."""
        return [self.direction(i, pose.heading) for i in range(self.w)]

    def project(self, pose: Pose) -> None:
        """Cast every column ray from pose and update the caches."""
        origin = pose.position
        for i in range(self.w):
            result = self.caster.cast_safe(
                origin, self.direction(i, pose.heading), self.max_distance
            )
            if result.hit:
                self.distances[i] = result.distance
                self.axes[i] = result.surface_axis
            elif not self.retain_on_miss:
                self.distances[i] = self.max_distance
                self.axes[i] = SurfaceAxis.NONE

    def surface_axis(self, column: int) -> SurfaceAxis:
        return SurfaceAxis(int(self.axes[column]))
