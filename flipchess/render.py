"""Drawing primitives on a pygame surface and the picture of a board."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import pygame

from flipchess.board import TILE_SIZE, Board

_LIGHT = (205, 205, 205)
_DARK = (50, 50, 50)

# Piece kinds other than the king, with the width and height of their marker.
_PIECE_SHAPES = (
    ("pawns", 30, 40),
    ("rooks", 40, 60),
    ("knights", 50, 50),
    ("bishops", 30, 70),
    ("queens", 40, 80),
)
_KING_THICKNESS = 20
_KING_MARGIN = 15
_KING_LENGTH = 70


def _squares(bitboard: int) -> Iterator[int]:
    """Yield the indices of the set bits of a bitboard in ascending order."""
    while bitboard:
        lowest = bitboard & -bitboard
        yield lowest.bit_length() - 1
        bitboard ^= lowest


@dataclass
class Sprite:
    """A region of a texture placed, rotated and optionally mirrored on screen."""

    texture: pygame.Surface
    src_rect: pygame.Rect
    dst_rect: pygame.Rect
    pivot: tuple[int, int]
    angle: float = 0.0
    facing_right: bool = True


def load_texture(path) -> pygame.Surface:
    """Load an image file as a surface; raise OSError when it cannot be read."""
    try:
        surface = pygame.image.load(str(path))
    except (pygame.error, OSError) as exc:
        raise OSError(f"cannot load texture {path}: {exc}") from exc
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        surface = surface.convert_alpha()
    return surface


class Renderer:
    """Immediate-mode drawing onto a surface, blending colours with alpha."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.frames_presented = 0

    def _paint(self, alpha: int, painter: Callable[[pygame.Surface], None]) -> None:
        """Run painter directly when opaque, otherwise through a blended overlay."""
        if alpha >= 255:
            painter(self.surface)
            return
        overlay = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        painter(overlay)
        self.surface.blit(overlay, (0, 0))

    def _plot(self, points: list[tuple[int, int]], colour: tuple[int, int, int, int]) -> None:
        def painter(target: pygame.Surface) -> None:
            for point in points:
                target.set_at(point, colour)

        self._paint(colour[3], painter)

    def _blit_rotated(
        self,
        image: pygame.Surface,
        x: int,
        y: int,
        angle: float,
        pivot: tuple[int, int],
    ) -> None:
        """Blit image with its top-left at (x, y), turned clockwise about pivot."""
        if angle % 360 == 0:
            self.surface.blit(image, (x, y))
            return
        width, height = image.get_size()
        offset = pygame.math.Vector2(pivot) - pygame.math.Vector2(width / 2, height / 2)
        world_pivot = pygame.math.Vector2(x, y) + pygame.math.Vector2(pivot)
        rotated = pygame.transform.rotate(image, -angle)
        centre = world_pivot - offset.rotate(angle)
        self.surface.blit(rotated, rotated.get_rect(center=(round(centre.x), round(centre.y))))

    def clear(self, r: int, g: int, b: int, a: int) -> None:
        """Fill the whole surface with one colour."""
        self.surface.fill((r, g, b, a))

    def draw_line(self, x1, y1, x2, y2, r, g, b, a) -> None:
        """Draw a one pixel wide line between two points."""
        colour = (r, g, b, a)
        self._paint(a, lambda target: pygame.draw.line(target, colour, (x1, y1), (x2, y2)))

    def draw_rect(self, x, y, w, h, r, g, b, a) -> None:
        """Fill an axis-aligned rectangle."""
        colour = (r, g, b, a)
        rect = pygame.Rect(x, y, w, h)
        rect.normalize()
        self._paint(a, lambda target: target.fill(colour, rect))

    def draw_circle(self, center_x, center_y, radius, r, g, b, a) -> None:
        """Outline a circle with one point per degree."""
        points = []
        for degree in range(360):
            angle = math.radians(degree)
            points.append(
                (
                    int(center_x + radius * math.cos(angle)),
                    int(center_y + radius * math.sin(angle)),
                )
            )
        self._plot(points, (r, g, b, a))

    def draw_filled_rotated_rect(
        self, x, y, w, h, angle_deg, pivot_x, pivot_y, r, g, b, a
    ) -> None:
        """Fill a rectangle turned clockwise by angle_deg about a pivot inside it."""
        if w <= 0 or h <= 0:
            return
        image = pygame.Surface((w, h), pygame.SRCALPHA)
        image.fill((r, g, b, a))
        self._blit_rotated(image, x, y, angle_deg, (pivot_x, pivot_y))

    def draw_filled_circle(self, center_x, center_y, radius, r, g, b, a) -> None:
        """Fill a circle with one horizontal line per row."""
        colour = (r, g, b, a)

        def painter(target: pygame.Surface) -> None:
            for dy in range(-radius, radius + 1):
                dx = int(math.sqrt(radius * radius - dy * dy))
                row = center_y + dy
                pygame.draw.line(target, colour, (center_x - dx, row), (center_x + dx, row))

        self._paint(a, painter)

    def draw_platform(
        self,
        center_x,
        center_y,
        inner_radius,
        outer_radius,
        start_angle_deg,
        end_angle_deg,
        r,
        g,
        b,
        a,
    ) -> None:
        """Fill a ring sector between two radii and two angles in degrees."""
        points = []
        angle = float(start_angle_deg)
        while angle <= end_angle_deg:
            theta = math.radians(angle)
            cos_t, sin_t = math.cos(theta), math.sin(theta)
            radius = float(inner_radius)
            while radius <= outer_radius:
                points.append(
                    (int(center_x + radius * cos_t), int(center_y + radius * sin_t))
                )
                radius += 1.0
            angle += 0.5
        self._plot(points, (r, g, b, a))

    def draw_sprite(self, sprite: Sprite) -> None:
        """Draw a sprite, mirrored when it faces left, then rotated about its pivot."""
        image = sprite.texture.subsurface(sprite.src_rect)
        size = (sprite.dst_rect.width, sprite.dst_rect.height)
        if image.get_size() != size:
            image = pygame.transform.scale(image, size)
        if not sprite.facing_right:
            image = pygame.transform.flip(image, True, False)
        self._blit_rotated(
            image, sprite.dst_rect.x, sprite.dst_rect.y, sprite.angle, sprite.pivot
        )

    def present(self) -> None:
        """Show the finished frame when drawing onto the window."""
        if pygame.display.get_init() and pygame.display.get_surface() is self.surface:
            pygame.display.flip()
        self.frames_presented += 1


def _tile_origin(square: int) -> tuple[int, int]:
    """Pixel origin of a square's tile; the board is drawn turned by 180 degrees."""
    return (7 - square % 8) * TILE_SIZE, (7 - square // 8) * TILE_SIZE


def _draw_pieces(bitboard: int, colour, width: int, height: int, renderer: Renderer) -> None:
    for square in _squares(bitboard):
        x, y = _tile_origin(square)
        renderer.draw_rect(
            x + (TILE_SIZE - width) // 2,
            y + (TILE_SIZE - height) // 2,
            width,
            height,
            *colour,
            255,
        )


def _draw_king(bitboard: int, colour, renderer: Renderer) -> None:
    thickness = _KING_THICKNESS
    for square in _squares(bitboard):
        x, y = _tile_origin(square)
        renderer.draw_rect(
            x + (TILE_SIZE - thickness) // 2,
            y + _KING_MARGIN,
            thickness,
            _KING_LENGTH,
            *colour,
            255,
        )
        renderer.draw_rect(
            x + _KING_MARGIN,
            y + (TILE_SIZE - thickness) // 2,
            _KING_LENGTH,
            thickness,
            *colour,
            255,
        )


def draw_board(board: Board, renderer: Renderer) -> None:
    """Draw the tiles and a marker for every piece.

    The side to move is stored as white; on even move counts it is drawn
    light, on odd ones dark.
    """
    for i in range(8):
        for j in range(8):
            shade = 0 if (i + j) % 2 == 0 else 255
            renderer.draw_rect(
                i * TILE_SIZE, j * TILE_SIZE, TILE_SIZE, TILE_SIZE, shade, shade, shade, 255
            )

    if board.moves_count % 2 == 0:
        colours = (("white", _LIGHT), ("black", _DARK))
    else:
        colours = (("white", _DARK), ("black", _LIGHT))

    for side, colour in colours:
        for kind, width, height in _PIECE_SHAPES:
            _draw_pieces(getattr(board, f"{side}_{kind}"), colour, width, height, renderer)
        _draw_king(getattr(board, f"{side}_king"), colour, renderer)