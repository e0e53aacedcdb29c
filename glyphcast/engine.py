"""
Frame-driven engine: Input -> Cast -> Composite, once per tick.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Tuple
from .config import EngineConfig
from .compositor import Compositor
from .grid_map import CellKind, GridMap, OutOfBounds, load_file
from .input_handler import InputState
from .player import Pose, PlayerController
from .projector import ColumnProjector
from .ray_caster import RayCaster
from .screen import ScreenGrid

logger = logging.getLogger(__name__)


class RaycastEngine:
    """Owns all engine state; the host calls tick() once per frame."""

    def __init__(self) -> None:
        self.config: Optional[EngineConfig] = None
        self._map: Optional[GridMap] = None
        self._caster: Optional[RayCaster] = None
        self._player: Optional[PlayerController] = None
        self._projector: Optional[ColumnProjector] = None
        self._compositor: Optional[Compositor] = None
        self._screen: Optional[ScreenGrid] = None

    @classmethod
    def from_file(
        cls, path: Optional[str] = None, config: Optional[EngineConfig] = None
    ) -> RaycastEngine:
        engine = cls()
        engine.initialize(load_file(path), config)
        return engine

    def initialize(
        self, grid_map: GridMap, config: Optional[EngineConfig] = None
    ) -> None:
        """Build colliders, the player, the projector and the screen buffer."""
        cfg = config or EngineConfig()
        try:
            start_cell = grid_map.cell(int(cfg.start_x), int(cfg.start_y))
        except OutOfBounds:
            raise ValueError(
                f"Start position ({cfg.start_x}, {cfg.start_y}) is outside the map"
            ) from None
        if start_cell is not CellKind.FLOOR:
            raise ValueError(
                f"Start position ({cfg.start_x}, {cfg.start_y}) is inside a wall"
            )
        self.config = cfg
        self._map = grid_map
        self._caster = RayCaster(grid_map.colliders())
        self._player = PlayerController(
            Pose(cfg.start_x, cfg.start_y, cfg.start_heading),
            self._caster,
            move_speed=cfg.move_speed,
            turn_speed=cfg.turn_speed,
            safety_margin=cfg.safety_margin,
            probe_distance=cfg.max_distance,
        )
        self._projector = ColumnProjector(
            self._caster,
            screen_width=cfg.screen_width,
            max_distance=cfg.max_distance,
            spread=cfg.spread,
            ray_length=cfg.ray_length,
            retain_on_miss=cfg.retain_on_miss,
        )
        self._screen = ScreenGrid(cfg.screen_width, cfg.screen_height)
        self._compositor = Compositor(
            self._screen,
            distance_multiplier=cfg.distance_multiplier,
            floor_shade_scale=cfg.floor_shade_scale,
            side_wall_darken=cfg.side_wall_darken,
        )
        logger.info(
            "Engine initialized: %dx%d screen, %d wall colliders",
            cfg.screen_width,
            cfg.screen_height,
            len(self._caster.colliders),
        )

    def _require_init(self) -> None:
        if self._screen is None:
            raise RuntimeError("RaycastEngine.initialize must be called first")

    def tick(self, state: InputState, dt: float) -> ScreenGrid:
        """Advance one frame and return the composited screen."""
        self._require_init()
        self._player.update(state, dt)
        self._projector.project(self._player.pose)
        self._compositor.composite(self._projector)
        return self._screen

    def render(self) -> ScreenGrid:
        """Re-cast and re-composite from the current pose without input."""
        return self.tick(InputState(), 0.0)

    @property
    def pose(self) -> Pose:
        self._require_init()
        return self._player.snapshot()

    @property
    def screen(self) -> ScreenGrid:
        self._require_init()
        return self._screen

    @property
    def grid_map(self) -> GridMap:
        self._require_init()
        return self._map

    @property
    def caster(self) -> RayCaster:
        self._require_init()
        return self._caster

    @property
    def projector(self) -> ColumnProjector:
        self._require_init()
        return self._projector

    @property
    def compositor(self) -> Compositor:
        self._require_init()
        return self._compositor

    def debug_rays(self) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
        """(origin, ray vector) per column for an external overlay."""
        self._require_init()
        pose = self._player.pose
        return [(pose.position, d) for d in self._projector.directions(pose)]
