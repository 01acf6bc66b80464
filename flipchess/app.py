"""The game window and its frame loop."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

import pygame

from flipchess.board import SCREEN_HEIGHT, SCREEN_WIDTH, Board, initial_board
from flipchess.events import EventListener
from flipchess.handler import MoveHandler
from flipchess.render import Renderer, draw_board

DESIRED_FPS = 60
FRAME_DELAY_MS = 1000 // DESIRED_FPS
WINDOW_TITLE = "Gravity"


@dataclass
class FrameClock:
    """Frame timing: the time between ticks and the frames counted per second."""

    last_tick: int = 0
    elapsed: float = 0.0
    frame_count: int = 0
    current_fps: int = 0

    def tick(self, now_ms: int) -> float:
        """Record a frame starting at now_ms and return seconds since the last one."""
        delta = (now_ms - self.last_tick) / 1000.0
        self.last_tick = now_ms
        self.elapsed += delta
        self.frame_count += 1
        if self.elapsed >= 1.0:
            self.current_fps = self.frame_count
            self.frame_count = 0
            self.elapsed = 0.0
        return delta


def render_frame(
    board: Board, renderer: Renderer, handler: MoveHandler, listener: EventListener
) -> bool:
    """Clear, apply any click, draw the board and show it; return whether a move was made."""
    renderer.clear(255, 255, 255, 255)
    moved = handler.handle_click(board, listener)
    draw_board(board, renderer)
    renderer.present()
    return moved


def main(argv=None) -> int:
    """Open the window and run the game until it is closed."""
    argparse.ArgumentParser(prog="flipchess", description="Play chess on a flipping board.").parse_args(argv)

    pygame.init()
    try:
        try:
            pygame.display.init()
            window = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        except pygame.error as exc:
            print(f"Cannot open the window: {exc}", file=sys.stderr)
            return 1
        pygame.display.set_caption(WINDOW_TITLE)

        board = initial_board()
        listener = EventListener()
        handler = MoveHandler()
        renderer = Renderer(window)
        clock = FrameClock(last_tick=pygame.time.get_ticks())

        while listener.running:
            frame_start = pygame.time.get_ticks()
            clock.tick(frame_start)
            listener.listen()
            render_frame(board, renderer, handler, listener)
            frame_time = pygame.time.get_ticks() - frame_start
            if FRAME_DELAY_MS > frame_time:
                pygame.time.delay(FRAME_DELAY_MS - frame_time)
        return 0
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())