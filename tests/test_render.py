import pygame
import pytest

from flipchess.board import Board, initial_board
from flipchess.render import Renderer, Sprite, draw_board, load_texture


def rgb(surface, point):
    colour = surface.get_at(point)
    return (colour.r, colour.g, colour.b)


@pytest.fixture
def renderer():
    surface = pygame.Surface((200, 200))
    surface.fill((0, 0, 0))
    return Renderer(surface)


def test_clear_fills_everything(renderer):
    renderer.clear(10, 20, 30, 255)
    assert rgb(renderer.surface, (0, 0)) == (10, 20, 30)
    assert rgb(renderer.surface, (199, 199)) == (10, 20, 30)


def test_draw_rect_inside_and_outside(renderer):
    renderer.draw_rect(10, 10, 20, 30, 255, 0, 0, 255)
    assert rgb(renderer.surface, (10, 10)) == (255, 0, 0)
    assert rgb(renderer.surface, (29, 39)) == (255, 0, 0)
    assert rgb(renderer.surface, (30, 10)) == (0, 0, 0)
    assert rgb(renderer.surface, (10, 40)) == (0, 0, 0)


def test_draw_rect_blends_translucent_colour(renderer):
    renderer.draw_rect(0, 0, 10, 10, 255, 255, 255, 128)
    red, green, blue = rgb(renderer.surface, (5, 5))
    assert 0 < red < 255
    assert red == green == blue


def test_draw_line_covers_endpoints(renderer):
    renderer.draw_line(5, 5, 50, 5, 0, 255, 0, 255)
    assert rgb(renderer.surface, (5, 5)) == (0, 255, 0)
    assert rgb(renderer.surface, (50, 5)) == (0, 255, 0)
    assert rgb(renderer.surface, (5, 6)) == (0, 0, 0)


def test_draw_circle_outline_only(renderer):
    renderer.draw_circle(100, 100, 40, 0, 0, 255, 255)
    assert rgb(renderer.surface, (140, 100)) == (0, 0, 255)
    assert rgb(renderer.surface, (100, 100)) == (0, 0, 0)


def test_draw_filled_circle(renderer):
    renderer.draw_filled_circle(100, 100, 30, 255, 255, 0, 255)
    assert rgb(renderer.surface, (100, 100)) == (255, 255, 0)
    assert rgb(renderer.surface, (129, 100)) == (255, 255, 0)
    assert rgb(renderer.surface, (125, 125)) == (0, 0, 0)


def test_filled_rotated_rect_without_rotation_matches_rect(renderer):
    other = Renderer(pygame.Surface((200, 200)))
    other.surface.fill((0, 0, 0))
    renderer.draw_filled_rotated_rect(20, 30, 40, 10, 0, 20, 5, 9, 99, 199, 255)
    other.draw_rect(20, 30, 40, 10, 9, 99, 199, 255)
    for point in [(20, 30), (59, 39), (60, 30), (40, 41)]:
        assert rgb(renderer.surface, point) == rgb(other.surface, point)


def test_filled_rotated_rect_turns_clockwise_about_pivot(renderer):
    renderer.draw_filled_rotated_rect(50, 50, 20, 10, 90, 0, 0, 255, 0, 0, 255)
    assert rgb(renderer.surface, (45, 60)) == (255, 0, 0)
    assert rgb(renderer.surface, (60, 55)) == (0, 0, 0)


def test_draw_platform_marks_sector(renderer):
    renderer.draw_platform(100, 100, 20, 30, 0, 45, 255, 0, 255, 255)
    assert rgb(renderer.surface, (125, 100)) == (255, 0, 255)
    assert rgb(renderer.surface, (75, 100)) == (0, 0, 0)
    assert rgb(renderer.surface, (100, 100)) == (0, 0, 0)


def _two_tone_texture():
    texture = pygame.Surface((10, 10))
    texture.fill((255, 0, 0), pygame.Rect(0, 0, 5, 10))
    texture.fill((0, 0, 255), pygame.Rect(5, 0, 5, 10))
    return texture


@pytest.mark.parametrize("facing_right, expected", [(True, (255, 0, 0)), (False, (0, 0, 255))])
def test_draw_sprite_mirrors_when_facing_left(renderer, facing_right, expected):
    sprite = Sprite(
        texture=_two_tone_texture(),
        src_rect=pygame.Rect(0, 0, 10, 10),
        dst_rect=pygame.Rect(20, 20, 10, 10),
        pivot=(5, 5),
        facing_right=facing_right,
    )
    renderer.draw_sprite(sprite)
    assert rgb(renderer.surface, (21, 25)) == expected


def test_draw_sprite_scales_to_destination(renderer):
    sprite = Sprite(
        texture=_two_tone_texture(),
        src_rect=pygame.Rect(0, 0, 10, 10),
        dst_rect=pygame.Rect(20, 20, 20, 20),
        pivot=(10, 10),
    )
    renderer.draw_sprite(sprite)
    assert rgb(renderer.surface, (38, 25)) == (0, 0, 255)
    assert rgb(renderer.surface, (21, 38)) == (255, 0, 0)


def test_draw_sprite_half_turn(renderer):
    sprite = Sprite(
        texture=_two_tone_texture(),
        src_rect=pygame.Rect(0, 0, 10, 10),
        dst_rect=pygame.Rect(20, 20, 10, 10),
        pivot=(5, 5),
        angle=180,
    )
    renderer.draw_sprite(sprite)
    assert rgb(renderer.surface, (21, 25)) == (0, 0, 255)
    assert rgb(renderer.surface, (28, 25)) == (255, 0, 0)


def test_load_texture_round_trip(tmp_path):
    original = pygame.Surface((4, 2))
    original.fill((12, 34, 56))
    path = tmp_path / "texture.bmp"
    pygame.image.save(original, str(path))
    loaded = load_texture(path)
    assert loaded.get_size() == (4, 2)
    assert rgb(loaded, (3, 1)) == (12, 34, 56)


def test_load_texture_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_texture(tmp_path / "missing.bmp")


def test_present_counts_frames(renderer):
    renderer.present()
    renderer.present()
    assert renderer.frames_presented == 2


def test_draw_board_tiles_alternate():
    renderer = Renderer(pygame.Surface((800, 800)))
    draw_board(Board(), renderer)
    assert rgb(renderer.surface, (50, 50)) == (0, 0, 0)
    assert rgb(renderer.surface, (150, 50)) == (255, 255, 255)
    assert rgb(renderer.surface, (150, 150)) == (0, 0, 0)


def test_draw_board_side_to_move_is_light_at_bottom():
    renderer = Renderer(pygame.Surface((800, 800)))
    draw_board(initial_board(), renderer)
    assert rgb(renderer.surface, (50, 650)) == (205, 205, 205)
    assert rgb(renderer.surface, (350, 750)) == (205, 205, 205)
    assert rgb(renderer.surface, (350, 50)) == (50, 50, 50)
    assert rgb(renderer.surface, (50, 150)) == (50, 50, 50)


def test_draw_board_swaps_shades_on_odd_moves():
    board = initial_board()
    board.moves_count = 1
    renderer = Renderer(pygame.Surface((800, 800)))
    draw_board(board, renderer)
    assert rgb(renderer.surface, (50, 650)) == (50, 50, 50)
    assert rgb(renderer.surface, (350, 50)) == (205, 205, 205)