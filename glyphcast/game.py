from __future__ import annotations
import logging
import pygame
from typing import Optional
from .config import FPS, CELL_SIZE, EngineConfig
from .display import PygameDisplay
from .engine import RaycastEngine
from .input_handler import InputHandler

logger = logging.getLogger(__name__)


class Game:
    """Host loop: owns the pygame window and drives the engine each frame."""

    def __init__(
        self,
        map_path: Optional[str] = None,
        config: Optional[EngineConfig] = None,
        clock: Optional[pygame.time.Clock] = None,
    ) -> None:
        pygame.init()
        self.engine = RaycastEngine.from_file(map_path, config)
        cfg = self.engine.config
        self.screen = pygame.display.set_mode(
            (cfg.screen_width * CELL_SIZE, cfg.screen_height * CELL_SIZE)
        )
        pygame.display.set_caption("Glyphcast")
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.display = PygameDisplay(
            self.screen, cfg.screen_width, cfg.screen_height, CELL_SIZE
        )
        self.input = InputHandler()
        self.running = True

    def handle_events(self) -> None:
        self.input.process_events()
        if self.input.should_quit():
            self.running = False

    def update(self, dt: float) -> None:
        """Advance the engine one frame and draw the changed cells."""
        grid = self.engine.tick(self.input.state(), dt)
        grid.flush(self.display)
        pygame.display.flip()

    def run(self) -> None:
        """Main loop: handle events, tick the engine, present."""
        logger.info("Starting main loop at %d FPS", self.fps)
        while self.running:
            # Cap the frame rate and compute delta time in seconds
            dt = self.clock.tick(self.fps) / 1000.0
            self.handle_events()
            self.update(dt)
        pygame.quit()
