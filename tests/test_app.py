from unittest import mock

import pygame
import pytest

from flipchess.app import FrameClock, main, render_frame
from flipchess.board import Board, initial_board
from flipchess.events import EventListener
from flipchess.handler import MoveHandler
from flipchess.render import Renderer


def rgb(surface, point):
    colour = surface.get_at(point)
    return (colour.r, colour.g, colour.b)


def test_tick_returns_seconds_since_last_tick():
    clock = FrameClock(last_tick=1000)
    assert clock.tick(1250) == pytest.approx(0.25)
    assert clock.last_tick == 1250
    assert clock.frame_count == 1


def test_tick_counts_frames_per_second():
    clock = FrameClock(last_tick=0)
    for now in (250, 500, 750):
        clock.tick(now)
    assert clock.current_fps == 0
    clock.tick(1000)
    assert clock.current_fps == 4
    assert clock.frame_count == 0
    assert clock.elapsed == 0.0


def test_render_frame_without_click_draws_board():
    board = initial_board()
    before = board.copy()
    renderer = Renderer(pygame.Surface((800, 800)))
    moved = render_frame(board, renderer, MoveHandler(), EventListener())
    assert moved is False
    assert board == before
    assert rgb(renderer.surface, (1, 1)) == (0, 0, 0)
    assert rgb(renderer.surface, (101, 1)) == (255, 255, 255)
    assert renderer.frames_presented == 1


def test_render_frame_two_clicks_make_a_move():
    board = initial_board()
    renderer = Renderer(pygame.Surface((800, 800)))
    handler = MoveHandler()
    listener = EventListener(left_mouse_pressed=True, mouse_x=350, mouse_y=650)
    assert render_frame(board, renderer, handler, listener) is False
    listener.mouse_y = 450
    assert render_frame(board, renderer, handler, listener) is True
    assert board.moves_count == 1
    assert board.black_pawns & (1 << 36)
    assert not board.black_pawns & (1 << 52)


def test_render_frame_empty_board_keeps_tiles():
    renderer = Renderer(pygame.Surface((800, 800)))
    render_frame(Board(), renderer, MoveHandler(), EventListener())
    assert rgb(renderer.surface, (750, 750)) == (0, 0, 0)
    assert rgb(renderer.surface, (650, 750)) == (255, 255, 255)


def test_main_stops_on_quit(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    with mock.patch("pygame.event.get", return_value=[pygame.event.Event(pygame.QUIT)]):
        assert main([]) == 0


def test_main_reports_window_failure(monkeypatch, capsys):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    with mock.patch("pygame.display.set_mode", side_effect=pygame.error("no display")):
        assert main([]) == 1
    assert "no display" in capsys.readouterr().err