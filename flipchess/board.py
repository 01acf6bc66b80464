"""Bitboard representation of a chess position seen from the side to move."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

SCREEN_WIDTH = 800
SCREEN_HEIGHT = 800
SCALE = 1.0
TILE_SIZE = 100

_FULL = (1 << 64) - 1

# Bitboard attribute names paired with the labels used when reporting differences.
PIECE_FIELDS: tuple[tuple[str, str], ...] = (
    ("white_pawns", "White Pawns"),
    ("white_knights", "White Knights"),
    ("white_bishops", "White Bishops"),
    ("white_rooks", "White Rooks"),
    ("white_queens", "White Queens"),
    ("white_king", "White King"),
    ("black_pawns", "Black Pawns"),
    ("black_knights", "Black Knights"),
    ("black_bishops", "Black Bishops"),
    ("black_rooks", "Black Rooks"),
    ("black_queens", "Black Queens"),
    ("black_king", "Black King"),
)

_WHITE_FIELDS = tuple(name for name, _ in PIECE_FIELDS[:6])
_BLACK_FIELDS = tuple(name for name, _ in PIECE_FIELDS[6:])


def square_index(x: int, y: int) -> int:
    """Map a file/rank pair to a square index in 0..63."""
    return y * 8 + x


def _bit(square: int) -> int:
    return 1 << square


def _byte_swap(bitboard: int) -> int:
    """Reverse the byte order of a 64-bit board, mirroring its ranks."""
    return int.from_bytes((bitboard & _FULL).to_bytes(8, "little"), "big")


@dataclass
class Board:
    """A position stored as one 64-bit bitboard per piece kind.

    The combined occupancy boards are derived data and take no part in
    equality comparisons.
    """

    white_pawns: int = 0
    white_knights: int = 0
    white_bishops: int = 0
    white_rooks: int = 0
    white_queens: int = 0
    white_king: int = 0

    black_pawns: int = 0
    black_knights: int = 0
    black_bishops: int = 0
    black_rooks: int = 0
    black_queens: int = 0
    black_king: int = 0

    white_pieces: int = field(default=0, compare=False)
    black_pieces: int = field(default=0, compare=False)
    all_pieces: int = field(default=0, compare=False)

    moves_without_capture_or_pawn_move: int = 0
    en_passant_square: int = -1
    white_king_moved: bool = False
    black_king_moved: bool = False
    white_rooks_moved: list[bool] = field(default_factory=lambda: [False, False])
    black_rooks_moved: list[bool] = field(default_factory=lambda: [False, False])

    moves_count: int = 0

    def copy(self) -> Board:
        """Return an independent copy of this position."""
        return dataclasses.replace(
            self,
            white_rooks_moved=list(self.white_rooks_moved),
            black_rooks_moved=list(self.black_rooks_moved),
        )

    def recompute_occupancy(self) -> None:
        """Rebuild the white, black and combined occupancy boards."""
        white = 0
        for name in _WHITE_FIELDS:
            white |= getattr(self, name)
        black = 0
        for name in _BLACK_FIELDS:
            black |= getattr(self, name)
        self.white_pieces = white
        self.black_pieces = black
        self.all_pieces = white | black

    def invert(self) -> None:
        """Swap the colours and mirror the ranks so the other side is to move."""
        for white_name, black_name in zip(_WHITE_FIELDS, _BLACK_FIELDS):
            white = getattr(self, white_name)
            black = getattr(self, black_name)
            setattr(self, white_name, _byte_swap(black))
            setattr(self, black_name, _byte_swap(white))

        self.white_king_moved, self.black_king_moved = (
            self.black_king_moved,
            self.white_king_moved,
        )
        self.white_rooks_moved, self.black_rooks_moved = (
            self.black_rooks_moved,
            self.white_rooks_moved,
        )

        if self.en_passant_square != -1:
            self.en_passant_square = 63 - self.en_passant_square

        self.recompute_occupancy()

    def differences(self, other: Board) -> list[str]:
        """Name the piece bitboards that differ between the two positions."""
        return [
            label
            for name, label in PIECE_FIELDS
            if getattr(self, name) != getattr(other, name)
        ]

    def __sub__(self, other: Board) -> list[str]:
        return self.differences(other)


def initial_board() -> Board:
    """Return the standard starting position with white to move."""
    board = Board()
    for x in range(8):
        board.white_pawns |= _bit(square_index(x, 1))
        board.black_pawns |= _bit(square_index(x, 6))

    back_rank = (
        ("rooks", (0, 7)),
        ("knights", (1, 6)),
        ("bishops", (2, 5)),
        ("queens", (3,)),
        ("king", (4,)),
    )
    for kind, files in back_rank:
        for x in files:
            white_name = f"white_{kind}"
            black_name = f"black_{kind}"
            setattr(board, white_name, getattr(board, white_name) | _bit(square_index(x, 0)))
            setattr(board, black_name, getattr(board, black_name) | _bit(square_index(x, 7)))

    board.recompute_occupancy()
    return board