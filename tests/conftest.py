from __future__ import annotations

from typing import Iterable, Optional

import pytest

from falling_blocks.game import Board, GameConfig, GameState, PlacedPiece, new_state
from falling_blocks.game.pieces import Coordinate, TetrominoType, definition_for
from falling_blocks.game.state import update_state


def place_state(
    kind: TetrominoType,
    origin: Coordinate,
    rotation: int = 0,
    stack: Iterable[Coordinate] = (),
    stack_colour: str = "red",
    **changes,
) -> GameState:
    """Started game whose current piece sits at ``origin`` over ``stack`` cells."""
    board = Board.empty().with_cells(stack, stack_colour)
    piece = PlacedPiece.place(definition_for(kind), origin, rotation, board)
    board = board.with_cells(piece.cells, piece.colour)
    return update_state(new_state(GameConfig()), current=piece, board=board, **changes)


def full_rows(rows: Iterable[int], skip_cols: Optional[Iterable[int]] = None, cols: int = 10):
    skip = set(skip_cols or ())
    return [(r, c) for r in rows for c in range(cols) if c not in skip]


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()
