"""Turning mouse clicks into validated moves on the board."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flipchess.attacks import remove_black_piece
from flipchess.board import TILE_SIZE, Board
from flipchess.events import EventListener
from flipchess.moves import all_moves

logger = logging.getLogger(__name__)

# White piece bitboards in the order a moving piece is looked up.
_WHITE_KINDS = (
    "white_pawns",
    "white_knights",
    "white_bishops",
    "white_rooks",
    "white_queens",
    "white_king",
)


def _bit(square: int) -> int:
    return 1 << square


def square_at(mouse_x: int, mouse_y: int) -> int:
    """Square index under a pixel position; the board is drawn rotated by 180 degrees."""
    return (7 - mouse_y // TILE_SIZE) * 8 + (7 - mouse_x // TILE_SIZE)


def _piece_on(board: Board, square: int) -> str | None:
    """Name of the white bitboard holding a piece on the square, if any."""
    mask = _bit(square)
    if not board.white_pieces & mask:
        return None
    return next((name for name in _WHITE_KINDS if getattr(board, name) & mask), None)


def _shift(board: Board, name: str, origin: int, target: int) -> None:
    setattr(board, name, (getattr(board, name) & ~_bit(origin)) | _bit(target))


@dataclass
class MoveHandler:
    """Two-click move selection: the first click picks a square, the second moves."""

    selected_first: int | None = None
    selected_second: int | None = None

    def handle_click(self, board: Board, listener: EventListener) -> bool:
        """Process the current mouse state; return whether a move was applied."""
        if not listener.left_mouse_pressed:
            return False

        square = square_at(listener.mouse_x, listener.mouse_y)

        if self.selected_first is None:
            self.selected_first = square
            logger.debug("Selected first square: %d", square)
            return False

        if square == self.selected_first:
            return False

        self.selected_second = square
        logger.debug("Selected second square: %d", square)
        moved = self.make_move(board, self.selected_first, self.selected_second)
        self.selected_first = None
        self.selected_second = None
        return moved

    def is_valid_move(self, board: Board, first_square: int, second_square: int) -> bool:
        """Whether moving from first_square to second_square yields a generated position."""
        possible = all_moves(board)

        candidate = board.copy()
        candidate.moves_count += 1
        candidate.white_pieces = (candidate.white_pieces & ~_bit(first_square)) | _bit(
            second_square
        )

        name = _piece_on(board, first_square)
        if name is not None:
            remove_black_piece(candidate, second_square)
            _shift(candidate, name, first_square, second_square)
            if name == "white_king" and first_square == 4:
                if second_square == 6:
                    _shift(candidate, "white_rooks", 7, 5)
                elif second_square == 1:
                    _shift(candidate, "white_rooks", 0, 2)

        if candidate in possible:
            return True

        logger.debug("Move from %d to %d is not valid.", first_square, second_square)
        return False

    def make_move(self, board: Board, first_square: int, second_square: int) -> bool:
        """Apply a valid move in place and flip the board to the other side.

        Returns whether the move was valid and applied.
        """
        if not self.is_valid_move(board, first_square, second_square):
            return False

        name = _piece_on(board, first_square)
        if name is not None:
            logger.debug("Moving white piece from %d to %d", first_square, second_square)
            board.white_pieces = (board.white_pieces & ~_bit(first_square)) | _bit(
                second_square
            )
            _shift(board, name, first_square, second_square)
            if name == "white_king":
                if second_square == 6:
                    _shift(board, "white_rooks", 7, 5)
                elif second_square == 1:
                    _shift(board, "white_rooks", 0, 2)
            remove_black_piece(board, second_square)

        board.moves_count += 1
        board.invert()
        return True