# flipchess

flipchess is a two-player chess game drawn in a pygame window. The position
is kept as bitboards, one 64-bit integer per piece kind and colour. After
every move the board is mirrored rank by rank and the colours are swapped, so
the side to move is always stored as "white". The colours the pieces are
drawn in swap with each move, which shows whose turn it is.

## Installing

```
pip install .
```

This also installs pygame.

## Playing

```
flipchess
```

The command takes no options besides `--help`. An 800 by 800 window opens
with the starting position, drawn turned by 180 degrees. To move a piece,
click the square it stands on, then click the square it should go to. If the
move is one of the legal moves generated for the position, it is played and
the board flips for the other player. If it is not, nothing changes and the
selection is cleared. Accepted and rejected moves are reported through the
`logging` module at debug level (loggers `flipchess.handler`,
`flipchess.moves` and `flipchess.attacks`), so they are only visible when
debug logging is turned on.

Pieces are drawn as plain rectangles, each kind with its own size; kings are
drawn as crosses. Pawns that reach the last rank are promoted to a queen when
moved with the mouse. Short castling is played by moving the king from its
starting square two squares towards the rook on its side.

## Using the library

The rules can be used without the window:

```python
from flipchess.board import initial_board
from flipchess.moves import all_moves

board = initial_board()
replies = all_moves(board)
print(len(replies))          # number of positions white can reach
```

- `flipchess.board` holds the `Board` dataclass, `initial_board()` and
  `square_index(x, y)`. Squares are numbered `y * 8 + x`, from 0 to 63.
  `Board.copy()` returns an independent copy, `Board.invert()` mirrors the
  position and swaps the colours, `Board.recompute_occupancy()` rebuilds the
  combined bitboards, and `Board.differences(other)` (also `board - other`)
  names the piece bitboards that differ.
- `flipchess.attacks` holds the occupancy tests (`is_occupied`,
  `is_black_occupied`, `is_white_occupied`), `is_square_under_attack`,
  `is_white_king_hanging` and `remove_black_piece`.
- `flipchess.moves` builds the positions that can follow a given one for the
  side stored as white: `white_pawn_moves`, `white_rook_moves`,
  `white_knight_moves`, `white_bishop_moves`, `white_queen_moves`,
  `white_king_moves`, and `all_moves(board)` for all of them in that order.
- `flipchess.handler.MoveHandler` checks a move with `is_valid_move` and
  plays it in place with `make_move`; `square_at(x, y)` turns a pixel
  position into a square index.
- `flipchess.events.EventListener` keeps the arrow key, mouse button, mouse
  position and quit state from a stream of pygame events.
- `flipchess.render` holds `Renderer`, a set of drawing primitives on a
  pygame surface, `Sprite`, `load_texture(path)` and `draw_board`.
- `flipchess.app` holds `FrameClock`, `render_frame` and `main`.

## What it does not do

The game has no computer opponent and no clock. It does not detect check,
checkmate, stalemate or draws, and it cannot save, load or replay games. The
attack tests are simplified: a rook counts as attacking its whole rank and
file whatever stands in between. Long castling is generated as a move but
cannot be played with the mouse.

## Running the tests

```
pip install .[test]
pytest
```