from types import SimpleNamespace

import pygame
import pytest

from glyphcast.input_handler import InputHandler, InputState


class Keys(dict):
    """Key-state mapping where unlisted keys are released."""

    def __missing__(self, key):
        return False


@pytest.fixture
def handler(monkeypatch):
    monkeypatch.setattr(pygame.event, "get", lambda: [])
    return InputHandler()


def press(monkeypatch, *keys):
    monkeypatch.setattr(pygame.key, "get_pressed", lambda: Keys({k: True for k in keys}))


def test_state_before_polling_is_idle(handler):
    assert handler.state() == InputState()


@pytest.mark.parametrize(
    "key,expected",
    [
        (pygame.K_a, InputState(turn_left=True)),
        (pygame.K_LEFT, InputState(turn_left=True)),
        (pygame.K_d, InputState(turn_right=True)),
        (pygame.K_RIGHT, InputState(turn_right=True)),
        (pygame.K_w, InputState(move_forward=True)),
        (pygame.K_UP, InputState(move_forward=True)),
        (pygame.K_s, InputState(move_backward=True)),
        (pygame.K_DOWN, InputState(move_backward=True)),
    ],
)
def test_key_bindings(monkeypatch, handler, key, expected):
    press(monkeypatch, key)
    handler.process_events()
    assert handler.state() == expected
    assert not handler.should_quit()


def test_combined_keys(monkeypatch, handler):
    press(monkeypatch, pygame.K_a, pygame.K_w)
    handler.process_events()
    assert handler.state() == InputState(turn_left=True, move_forward=True)


@pytest.mark.parametrize(
    "event",
    [
        SimpleNamespace(type=pygame.QUIT),
        SimpleNamespace(type=pygame.KEYDOWN, key=pygame.K_ESCAPE),
    ],
)
def test_quit_events(monkeypatch, event):
    monkeypatch.setattr(pygame.event, "get", lambda: [event])
    press(monkeypatch)
    handler = InputHandler()
    handler.process_events()
    assert handler.should_quit()
    # Quit is per frame
    monkeypatch.setattr(pygame.event, "get", lambda: [])
    handler.process_events()
    assert not handler.should_quit()
