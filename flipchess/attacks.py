"""Occupancy queries, attack detection and capture removal on a Board."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from flipchess.board import Board

logger = logging.getLogger(__name__)

# Black piece bitboards paired with the name used when reporting a capture.
_BLACK_PIECES: tuple[tuple[str, str], ...] = (
    ("black_pawns", "pawn"),
    ("black_knights", "knight"),
    ("black_bishops", "bishop"),
    ("black_rooks", "rook"),
    ("black_queens", "queen"),
    ("black_king", "king"),
)


def _bit(square: int) -> int:
    return 1 << square


def _squares(bitboard: int) -> Iterator[int]:
    """Yield the indices of the set bits of a bitboard in ascending order."""
    while bitboard:
        lowest = bitboard & -bitboard
        yield lowest.bit_length() - 1
        bitboard ^= lowest


def _lowest_square(bitboard: int) -> int:
    return (bitboard & -bitboard).bit_length() - 1


def _on_board(x: int, y: int) -> bool:
    return 0 <= x < 8 and 0 <= y < 8


def is_occupied(board: Board, square: int) -> bool:
    """Whether any piece stands on the square."""
    return bool(board.all_pieces & _bit(square))


def is_black_occupied(board: Board, square: int) -> bool:
    """Whether a black piece stands on the square."""
    return bool(board.black_pieces & _bit(square))


def is_white_occupied(board: Board, square: int) -> bool:
    """Whether a white piece stands on the square."""
    return bool(board.white_pieces & _bit(square))


def _pawn_attacks(black_pawns: int, x: int, y: int, square: int) -> bool:
    if y > 0:
        if x > 0 and black_pawns & _bit(square - 9):
            return True
        if x < 7 and black_pawns & _bit(square - 7):
            return True
    return False


def _knight_attacks(knights: int, x: int, y: int) -> bool:
    for knight in _squares(knights):
        ddx = abs(knight % 8 - x)
        ddy = abs(knight // 8 - y)
        if (ddx == 2 and ddy == 1) or (ddx == 1 and ddy == 2):
            return True
    return False


def _diagonal_attacks(board: Board, pieces: int, x: int, y: int) -> bool:
    """Whether a piece on a shared diagonal reaches (x, y) over empty squares."""
    for piece in _squares(pieces):
        px, py = piece % 8, piece // 8
        if abs(px - x) != abs(py - y):
            continue
        dx = 1 if px - x > 0 else -1
        dy = 1 if py - y > 0 else -1
        step_x, step_y = x + dx, y + dy
        clear = True
        while step_x != px and step_y != py and _on_board(step_x, step_y):
            if board.all_pieces & _bit(step_y * 8 + step_x):
                clear = False
                break
            step_x += dx
            step_y += dy
        if clear:
            return True
    return False


def _king_adjacent(black_king: int, x: int, y: int) -> bool:
    if not black_king:
        return False
    king = _lowest_square(black_king)
    return abs(king % 8 - x) <= 1 and abs(king // 8 - y) <= 1


def is_square_under_attack(board: Board, square: int) -> bool:
    """Whether a black piece attacks the square.

    Rooks and queens count as attacking anything on their rank or file,
    whatever stands between.
    """
    x, y = square % 8, square // 8

    if _pawn_attacks(board.black_pawns, x, y, square):
        return True

    for piece in _squares(board.black_rooks | board.black_queens):
        if piece % 8 == x or piece // 8 == y:
            return True

    if _knight_attacks(board.black_knights, x, y):
        return True

    if _diagonal_attacks(board, board.black_bishops | board.black_queens, x, y):
        return True

    return _king_adjacent(board.black_king, x, y)


def is_white_king_hanging(board: Board) -> bool:
    """Whether the white king is attacked by a black piece.

    Rooks attack along their whole rank and file regardless of blockers;
    bishops and queens need a clear path. A board with no white king has
    no king to attack.
    """
    if not board.white_king:
        return False

    king = _lowest_square(board.white_king)
    x, y = king % 8, king // 8

    if _pawn_attacks(board.black_pawns, x, y, king):
        return True

    for rook in _squares(board.black_rooks):
        if rook % 8 == x or rook // 8 == y:
            return True

    if _knight_attacks(board.black_knights, x, y):
        return True

    if _diagonal_attacks(board, board.black_bishops, x, y):
        return True

    for queen in _squares(board.black_queens):
        qx, qy = queen % 8, queen // 8
        if not (qx == x or qy == y or abs(qx - x) == abs(qy - y)):
            continue
        dx = (qx > x) - (qx < x)
        dy = (qy > y) - (qy < y)
        step_x, step_y = x + dx, y + dy
        clear = True
        while step_x != qx or step_y != qy:
            if is_occupied(board, step_y * 8 + step_x):
                clear = False
                break
            step_x += dx
            step_y += dy
        if clear:
            return True

    return _king_adjacent(board.black_king, x, y)


def remove_black_piece(board: Board, square: int) -> bool:
    """Take any black piece off the square, in place.

    Clears the square in the black and combined occupancy boards and resets
    the counter of moves without capture when something was removed.
    Returns whether a piece was removed.
    """
    mask = _bit(square)
    removed = False
    for name, label in _BLACK_PIECES:
        bitboard = getattr(board, name)
        if bitboard & mask:
            logger.debug("Removing black %s at square: %d", label, square)
            setattr(board, name, 0 if name == "black_king" else bitboard & ~mask)
            removed = True

    board.all_pieces &= ~mask
    board.black_pieces &= ~mask

    if removed:
        board.moves_without_capture_or_pawn_move = 0
    return removed