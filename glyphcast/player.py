from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple
from .config import MOVE_SPEED, TURN_SPEED, SAFETY_MARGIN, RAYCAST_MAX_DISTANCE
from .ray_caster import GeometryError

if TYPE_CHECKING:
    from .input_handler import InputState
    from .ray_caster import RayCaster

logger = logging.getLogger(__name__)


def wrap_heading(heading: float) -> float:
    """Wrap a heading in degrees into [0, 360)."""
    wrapped = heading % 360.0
    # -1e-18 % 360.0 rounds up to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


def forward_vector(heading: float) -> Tuple[float, float]:
    """Unit vector for a heading in degrees; heading 0 faces +Y."""
    rad = math.radians(heading)
    return (-math.sin(rad), math.cos(rad))


@dataclass
class Pose:
    """Viewer position in map units and heading in degrees."""

    x: float
    y: float
    heading: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def forward(self) -> Tuple[float, float]:
        return forward_vector(self.heading)


class PlayerController:
    """Player state and movement."""

    def __init__(
        self,
        pose: Pose,
        caster: RayCaster,
        move_speed: float = MOVE_SPEED,
        turn_speed: float = TURN_SPEED,
        safety_margin: float = SAFETY_MARGIN,
        probe_distance: float = RAYCAST_MAX_DISTANCE,
    ) -> None:
        """
        pose: starting pose, owned by the controller from now on.
        caster: ray caster used to probe for walls along the motion.
        move_speed: movement speed in map units per second.
        turn_speed: turn speed in degrees per second.
        safety_margin: minimum wall distance a move may end at.
        """
        self.pose = pose
        self.pose.heading = wrap_heading(pose.heading)
        self.caster = caster
        self.move_speed = move_speed
        self.turn_speed = turn_speed
        self.safety_margin = safety_margin
        self.probe_distance = probe_distance

    def snapshot(self) -> Pose:
        return Pose(self.pose.x, self.pose.y, self.pose.heading)

    def update(self, state: InputState, dt: float) -> None:
        """Apply one frame of turn and move input."""
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite value >= 0, got {dt}")
        if state.turn_left:
            self.turn(1, dt)
        elif state.turn_right:
            self.turn(-1, dt)
        if state.move_forward:
            self.move(1, dt)
        elif state.move_backward:
            self.move(-1, dt)

    def turn(self, direction: int, dt: float) -> None:
        """Turn left (direction=1) or right (direction=-1)."""
        self.pose.heading = wrap_heading(
            self.pose.heading + self.turn_speed * dt * direction
        )

    def move(self, direction: int, dt: float) -> bool:
        """
        Move forward (direction=1) or backward (direction=-1).
        The move is reverted if the new position is closer than the safety
        margin to a wall along the direction of motion, or if a wall lies
        between the old position and that margin. Returns True if the move
        was kept.
        """
        fx, fy = self.pose.forward
        dx = fx * direction
        dy = fy * direction
        step = self.move_speed * dt
        old_x, old_y = self.pose.x, self.pose.y
        blocked = self._sweep_blocked((dx, dy), step + self.safety_margin)
        self.pose.x = old_x + dx * step
        self.pose.y = old_y + dy * step
        if blocked or self._probe((dx, dy)) < self.safety_margin:
            logger.debug(
                "Move rejected at (%.3f, %.3f)", self.pose.x, self.pose.y
            )
            self.pose.x, self.pose.y = old_x, old_y
            return False
        return True

    def _probe(self, direction: Tuple[float, float]) -> float:
        try:
            result = self.caster.cast(
                self.pose.position, direction, self.probe_distance
            )
        except GeometryError:
            # Leaving the map is never allowed
            return 0.0
        return result.distance

    def _sweep_blocked(self, direction: Tuple[float, float], reach: float) -> bool:
        """True if a wall lies within reach of the current position."""
        try:
            result = self.caster.cast(self.pose.position, direction, reach)
        except GeometryError:
            return True
        return result.hit and result.distance < reach
