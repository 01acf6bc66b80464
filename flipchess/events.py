"""Tracking of keyboard, mouse and quit input between frames."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import pygame

# Arrow keys mapped to the attribute that records whether they are held.
_ARROW_KEYS: dict[int, str] = {
    pygame.K_LEFT: "left_pressed",
    pygame.K_RIGHT: "right_pressed",
    pygame.K_UP: "up_pressed",
}


@dataclass
class EventListener:
    """Input state built up from a stream of window events."""

    left_pressed: bool = False
    right_pressed: bool = False
    up_pressed: bool = False
    left_mouse_pressed: bool = False
    mouse_x: int = 0
    mouse_y: int = 0
    running: bool = True

    def listen(self, events: Iterable[Any] | None = None) -> bool:
        """Apply the events in order and return whether the program should keep running.

        Without an explicit event stream the pending window events are polled.
        """
        if events is None:
            events = pygame.event.get()

        for event in events:
            kind = event.type
            if kind == pygame.QUIT:
                self.running = False
            elif kind in (pygame.KEYDOWN, pygame.KEYUP):
                attribute = _ARROW_KEYS.get(event.key)
                if attribute is not None:
                    setattr(self, attribute, kind == pygame.KEYDOWN)
            elif kind in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                if event.button == pygame.BUTTON_LEFT:
                    self.left_mouse_pressed = kind == pygame.MOUSEBUTTONDOWN
            elif kind == pygame.MOUSEMOTION:
                self.mouse_x, self.mouse_y = event.pos

        return self.running