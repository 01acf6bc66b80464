"""Generation of the positions reachable by one white move."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from flipchess.attacks import (
    is_black_occupied,
    is_occupied,
    is_square_under_attack,
    is_white_king_hanging,
    remove_black_piece,
)
from flipchess.board import Board

logger = logging.getLogger(__name__)

# Promotion choices, in the order the resulting positions are produced.
_PROMOTIONS = ("white_queens", "white_rooks", "white_bishops", "white_knights")

_ROOK_DIRECTIONS = ((-1, 0), (0, -1), (0, 1), (1, 0))
_BISHOP_DIRECTIONS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
_QUEEN_DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)
_KNIGHT_OFFSETS = (
    (2, 1), (2, -1), (-2, 1), (-2, -1),
    (1, 2), (1, -2), (-1, 2), (-1, -2),
)
_KING_OFFSETS = (
    (1, 0), (1, 1), (0, 1), (-1, 1),
    (-1, 0), (-1, -1), (0, -1), (1, -1),
)


def _bit(square: int) -> int:
    return 1 << square


def _squares(bitboard: int) -> Iterator[int]:
    """Yield the indices of the set bits of a bitboard in ascending order."""
    while bitboard:
        lowest = bitboard & -bitboard
        yield lowest.bit_length() - 1
        bitboard ^= lowest


def _on_board(x: int, y: int) -> bool:
    return 0 <= x < 8 and 0 <= y < 8


def _lift(board: Board, name: str, origin: int, capture_at: int | None) -> Board:
    """Copy the board, count the move and take the piece off its origin."""
    new = board.copy()
    new.moves_count += 1
    setattr(new, name, getattr(new, name) & ~_bit(origin))
    if capture_at is not None:
        remove_black_piece(new, capture_at)
    return new


def _place(board: Board, name: str, target: int) -> Board:
    setattr(board, name, getattr(board, name) | _bit(target))
    board.recompute_occupancy()
    return board


def _relocate(
    board: Board, name: str, origin: int, target: int, capture_at: int | None = None
) -> Board:
    """Return a copy with the piece moved from origin to target."""
    return _place(_lift(board, name, origin, capture_at), name, target)


def _legal(candidates: Iterable[Board]) -> list[Board]:
    return [candidate for candidate in candidates if not is_white_king_hanging(candidate)]


def _pawn_step(board: Board, origin: int, target: int, capture: bool) -> Iterator[Board]:
    """Yield the boards for a pawn arriving on target, promoting on the last rank."""
    lifted = _lift(board, "white_pawns", origin, target if capture else None)
    if origin // 8 == 6:
        for name in _PROMOTIONS:
            yield _place(lifted.copy(), name, target)
    else:
        yield _place(lifted, "white_pawns", target)


def _pawn_candidates(board: Board) -> Iterator[Board]:
    for square in _squares(board.white_pawns):
        x, y = square % 8, square // 8

        if y < 7 and not is_occupied(board, square + 8):
            yield from _pawn_step(board, square, square + 8, capture=False)

        if x > 0 and y < 7 and is_black_occupied(board, square + 7):
            yield from _pawn_step(board, square, square + 7, capture=True)

        if x < 7 and y < 7 and is_black_occupied(board, square + 9):
            yield from _pawn_step(board, square, square + 9, capture=True)

        if y == 1 and not is_occupied(board, square + 16) and not is_occupied(board, square + 8):
            yield _relocate(board, "white_pawns", square, square + 16)

        if (
            x > 0
            and y == 4
            and is_black_occupied(board, square + 7)
            and board.black_pawns & _bit(square - 1)
            and board.en_passant_square == square + 7
        ):
            yield _relocate(board, "white_pawns", square, square + 7, capture_at=square - 1)

        if (
            x < 7
            and y == 4
            and is_black_occupied(board, square + 9)
            and board.black_pawns & _bit(square + 1)
            and board.en_passant_square == square + 9
        ):
            yield _relocate(board, "white_pawns", square, square + 9, capture_at=square + 1)


def _step_candidates(
    board: Board, name: str, origin: int, offsets: Iterable[tuple[int, int]]
) -> Iterator[Board]:
    """Yield single-step moves of one piece to empty or black-held squares."""
    x, y = origin % 8, origin // 8
    for dx, dy in offsets:
        nx, ny = x + dx, y + dy
        if not _on_board(nx, ny):
            continue
        target = ny * 8 + nx
        if not is_occupied(board, target):
            yield _relocate(board, name, origin, target)
        elif is_black_occupied(board, target):
            yield _relocate(board, name, origin, target, capture_at=target)


def _slide_candidates(
    board: Board, name: str, directions: Iterable[tuple[int, int]]
) -> Iterator[Board]:
    """Yield sliding moves for every piece on the named bitboard."""
    for origin in _squares(getattr(board, name)):
        x, y = origin % 8, origin // 8
        for dx, dy in directions:
            step_x, step_y = x + dx, y + dy
            while _on_board(step_x, step_y):
                target = step_y * 8 + step_x
                if not is_occupied(board, target):
                    yield _relocate(board, name, origin, target)
                elif is_black_occupied(board, target):
                    yield _relocate(board, name, origin, target, capture_at=target)
                    break
                else:
                    break
                step_x += dx
                step_y += dy


def white_pawn_moves(board: Board) -> list[Board]:
    """Positions after each legal white pawn move, promotions included."""
    return _legal(_pawn_candidates(board))


def white_rook_moves(board: Board) -> list[Board]:
    """Positions after each legal white rook move."""
    return _legal(_slide_candidates(board, "white_rooks", _ROOK_DIRECTIONS))


def white_knight_moves(board: Board) -> list[Board]:
    """Positions after each legal white knight move."""
    return _legal(
        candidate
        for origin in _squares(board.white_knights)
        for candidate in _step_candidates(board, "white_knights", origin, _KNIGHT_OFFSETS)
    )


def white_bishop_moves(board: Board) -> list[Board]:
    """Positions after each legal white bishop move."""
    return _legal(_slide_candidates(board, "white_bishops", _BISHOP_DIRECTIONS))


def white_queen_moves(board: Board) -> list[Board]:
    """Positions after each legal white queen move."""
    return _legal(_slide_candidates(board, "white_queens", _QUEEN_DIRECTIONS))


def _castle(
    board: Board, king_square: int, king_target: int, rook_origin: int, rook_target: int
) -> Board:
    new = board.copy()
    new.moves_count += 1
    new.white_king &= ~_bit(king_square)
    new.white_rooks &= ~_bit(rook_origin)
    new.white_king |= _bit(king_target)
    new.white_rooks |= _bit(rook_target)
    new.recompute_occupancy()
    return new


def white_king_moves(board: Board) -> list[Board]:
    """Positions after each legal white king move, castling included."""
    if not board.white_king:
        return []

    king_square = next(_squares(board.white_king))
    moves = _legal(_step_candidates(board, "white_king", king_square, _KING_OFFSETS))

    if (
        not board.white_king_moved
        and not board.white_rooks_moved[0]
        and not is_occupied(board, 5)
        and not is_occupied(board, 6)
        and not is_white_king_hanging(board)
    ):
        logger.debug("Trying short castling")
        castled = _castle(board, king_square, 6, 7, 5)
        if (
            not is_white_king_hanging(castled)
            and not is_square_under_attack(castled, 5)
            and not is_square_under_attack(castled, 6)
        ):
            logger.debug("Short castling")
            moves.append(castled)

    if (
        not board.white_king_moved
        and not board.white_rooks_moved[1]
        and not is_occupied(board, 3)
        and not is_occupied(board, 2)
        and not is_occupied(board, 1)
        and not is_white_king_hanging(board)
    ):
        logger.debug("Trying long castling")
        castled = _castle(board, king_square, 2, 0, 3)
        if (
            not is_white_king_hanging(castled)
            and not is_square_under_attack(castled, 3)
            and not is_square_under_attack(castled, 2)
            and not is_square_under_attack(castled, 1)
        ):
            logger.debug("Long castling")
            moves.append(castled)

    return moves


def all_moves(board: Board) -> list[Board]:
    """Every legal white move: pawns, rooks, knights, bishops, queens, then king."""
    return [
        *white_pawn_moves(board),
        *white_rook_moves(board),
        *white_knight_moves(board),
        *white_bishop_moves(board),
        *white_queen_moves(board),
        *white_king_moves(board),
    ]