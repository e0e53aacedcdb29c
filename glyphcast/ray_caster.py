"""
Exact grid ray caster (DDA) against the wall colliders of a map.
"""

from __future__ import annotations
import enum
import logging
import math
from typing import NamedTuple, Tuple
from .grid_map import ColliderSet

logger = logging.getLogger(__name__)


class GeometryError(ValueError):
    """Raised for casts from outside the map or along a degenerate direction."""


class SurfaceAxis(enum.IntEnum):
    NONE = 0
    # Face normal along Y (front/back faces)
    HORIZONTAL = 1
    # Face normal along X (side faces)
    VERTICAL = 2


class RayResult(NamedTuple):
    distance: float
    hit: bool
    surface_axis: SurfaceAxis

    @classmethod
    def miss(cls, max_distance: float) -> RayResult:
        return cls(max_distance, False, SurfaceAxis.NONE)


class RayCaster:
    """Casts rays through the map grid, visiting every cell boundary crossed."""

    def __init__(self, colliders: ColliderSet) -> None:
        self.colliders = colliders

    def cast(
        self,
        origin: Tuple[float, float],
        direction: Tuple[float, float],
        max_distance: float,
    ) -> RayResult:
        """
        Return the distance to the nearest wall along direction.
        direction need not be normalized. A ray that leaves the map or travels
        further than max_distance without striking a wall is a miss.
        """
        ox, oy = origin
        dir_x, dir_y = direction
        if not all(math.isfinite(v) for v in (ox, oy, dir_x, dir_y)):
            raise GeometryError(
                f"Non-finite ray: origin={origin}, direction={direction}"
            )
        if not math.isfinite(max_distance) or max_distance < 0:
            raise GeometryError(f"Invalid max_distance {max_distance}")
        length = math.hypot(dir_x, dir_y)
        if length == 0.0:
            raise GeometryError("Ray direction has zero length")
        if not self.colliders.contains_point(ox, oy):
            raise GeometryError(f"Ray origin {origin} is outside the map")
        dir_x /= length
        dir_y /= length

        map_x = int(ox)
        map_y = int(oy)
        if self.colliders.is_solid(map_x, map_y):
            # Starting inside a wall counts as an immediate hit
            return RayResult(0.0, True, SurfaceAxis.NONE)

        # DDA initialization
        delta_x = abs(1.0 / dir_x) if dir_x != 0 else 1e30
        delta_y = abs(1.0 / dir_y) if dir_y != 0 else 1e30
        if dir_x < 0:
            step_x = -1
            side_x = (ox - map_x) * delta_x
        else:
            step_x = 1
            side_x = (map_x + 1 - ox) * delta_x
        if dir_y < 0:
            step_y = -1
            side_y = (oy - map_y) * delta_y
        else:
            step_y = 1
            side_y = (map_y + 1 - oy) * delta_y

        width = self.colliders.width
        height = self.colliders.height
        while True:
            if side_x < side_y:
                dist = side_x
                side_x += delta_x
                map_x += step_x
                axis = SurfaceAxis.VERTICAL
            else:
                dist = side_y
                side_y += delta_y
                map_y += step_y
                axis = SurfaceAxis.HORIZONTAL
            if dist > max_distance:
                return RayResult.miss(max_distance)
            if map_x < 0 or map_y < 0 or map_x >= width or map_y >= height:
                return RayResult.miss(max_distance)
            if self.colliders.is_solid(map_x, map_y):
                return RayResult(dist, True, axis)

    def cast_safe(
        self,
        origin: Tuple[float, float],
        direction: Tuple[float, float],
        max_distance: float,
    ) -> RayResult:
        """Like cast, but a GeometryError is reported as a miss."""
        try:
            return self.cast(origin, direction, max_distance)
        except GeometryError as e:
            logger.debug("Cast treated as miss: %s", e)
            return RayResult.miss(max_distance)
