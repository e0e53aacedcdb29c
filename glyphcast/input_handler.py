"""
Input handling abstraction to decouple Pygame input from engine logic.
"""

from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class InputState:
    """Directional signals sampled once per tick."""

    turn_left: bool = False
    turn_right: bool = False
    move_forward: bool = False
    move_backward: bool = False


class InputHandler:
    """
    Processes Pygame events and maps held keys to an InputState.
    A/Left and D/Right turn, W/Up and S/Down move.
    """

    def __init__(self) -> None:
        self._quit = False
        # Key state is refreshed in process_events()
        self._keys: Sequence[bool] = ()

    def process_events(self) -> None:
        """Poll Pygame events for quit requests and capture key states."""
        self._quit = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._quit = True
        self._keys = pygame.key.get_pressed()

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def state(self) -> InputState:
        """Return the directional input for the current frame."""
        keys = self._keys
        if not keys:
            return InputState()
        return InputState(
            turn_left=bool(keys[pygame.K_a] or keys[pygame.K_LEFT]),
            turn_right=bool(keys[pygame.K_d] or keys[pygame.K_RIGHT]),
            move_forward=bool(keys[pygame.K_w] or keys[pygame.K_UP]),
            move_backward=bool(keys[pygame.K_s] or keys[pygame.K_DOWN]),
        )
