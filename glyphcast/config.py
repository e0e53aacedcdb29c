from __future__ import annotations
from dataclasses import dataclass

# Screen settings (glyph cells)
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
# Pixel size of one glyph cell in the pygame window
CELL_SIZE = 12
FPS = 60
# Wall height shrinks by this many rows per map unit of distance
DISTANCE_MULTIPLIER = 1.3

# Glyphs
GLYPH_BLOCK = "■"
GLYPH_BLOCK_TOP = "▦"
GLYPH_BLOCK_BOTTOM = "▩"
GLYPH_EMPTY = ""

# Shading
# Floor rows are scaled down to this fraction of full brightness
FLOOR_SHADE_SCALE = 0.4
# Side-facing walls (hit face normal along X) are darkened by this factor
SIDE_WALL_DARKEN = 0.75

# Raycasting settings
RAYCAST_MAX_DISTANCE = 30.0
# Lateral offset per column; with RAYCAST_LENGTH controls the field of view
RAYCAST_SPREAD = 0.2
RAYCAST_LENGTH = 10.0
# Keep the previous distance for a column whose cast missed
RETAIN_ON_MISS = True

# Player settings
# Movement speed in map units per second
MOVE_SPEED = 3.0
# Turn speed in degrees per second
TURN_SPEED = 90.0
# Moves ending closer than this to a wall (along the motion) are rejected
SAFETY_MARGIN = 0.5
PLAYER_START_X = 15.5
PLAYER_START_Y = 7.5
PLAYER_START_HEADING = 0.0

# Map settings
MAP_WALL_SYMBOL = "#"
MAP_FLOOR_SYMBOL = "."
# Text map bundled with the package (one character per cell)
WORLD_FILE = "maps/default.txt"


@dataclass(frozen=True)
class EngineConfig:
    """Per-engine overrides of the module defaults."""

    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    distance_multiplier: float = DISTANCE_MULTIPLIER
    floor_shade_scale: float = FLOOR_SHADE_SCALE
    side_wall_darken: float = SIDE_WALL_DARKEN
    max_distance: float = RAYCAST_MAX_DISTANCE
    spread: float = RAYCAST_SPREAD
    ray_length: float = RAYCAST_LENGTH
    retain_on_miss: bool = RETAIN_ON_MISS
    move_speed: float = MOVE_SPEED
    turn_speed: float = TURN_SPEED
    safety_margin: float = SAFETY_MARGIN
    start_x: float = PLAYER_START_X
    start_y: float = PLAYER_START_Y
    start_heading: float = PLAYER_START_HEADING

    def __post_init__(self) -> None:
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError(
                f"Screen size must be positive, got "
                f"{self.screen_width}x{self.screen_height}"
            )
        if self.max_distance <= 0:
            raise ValueError("max_distance must be positive")
        if self.ray_length <= 0:
            raise ValueError("ray_length must be positive")
