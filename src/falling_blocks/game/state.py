from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .collision import drop_preview, shift
from .grid import Board
from .pieces import TETROMINOES, Cells, Coordinate, PieceDefinition
from .rng import RandomSequence, random_numbers


@dataclass(frozen=True)
class GameConfig:
    rows: int = 22
    cols: int = 10
    spawn_rows: int = 3
    initial_gravity_interval: int = 1000
    min_gravity_interval: int = 25
    seed: int = 0


@dataclass(frozen=True)
class PlacedPiece:
    """A piece definition positioned on the board, plus its landing preview."""

    definition: PieceDefinition
    origin: Coordinate
    rotation: int
    cells: Cells
    ghost: Cells

    @staticmethod
    def cells_for(definition: PieceDefinition, origin: Coordinate, rotation: int) -> Cells:
        return shift(definition.rotations[rotation % len(definition.rotations)], *origin)

    @classmethod
    def place(cls, definition: PieceDefinition, origin: Coordinate, rotation: int, board: Board) -> "PlacedPiece":
        rotation %= len(definition.rotations)
        cells = cls.cells_for(definition, origin, rotation)
        return cls(definition, origin, rotation, cells, drop_preview(cells, board))

    @classmethod
    def spawn(cls, definition: PieceDefinition, board: Board) -> "PlacedPiece":
        return cls.place(definition, definition.spawn_origin(board.cols), 0, board)

    @property
    def colour(self) -> str:
        return self.definition.colour

    def moved(self, d_row: int, d_col: int, board: Board) -> "PlacedPiece":
        row, col = self.origin
        return PlacedPiece.place(self.definition, (row + d_row, col + d_col), self.rotation, board)

    def rotated(self, board: Board, d_col: int = 0) -> "PlacedPiece":
        row, col = self.origin
        return PlacedPiece.place(self.definition, (row, col + d_col), self.rotation + 1, board)


@dataclass(frozen=True)
class GameState:
    score: int
    level: int
    lines: int
    current: PlacedPiece
    next_piece: PieceDefinition
    sequence: RandomSequence
    board: Board
    gravity_interval: int
    started: bool = False
    game_over: bool = False


def update_state(state: GameState, **changes) -> GameState:
    return replace(state, **changes)


def move_piece(state: GameState, piece: PlacedPiece) -> GameState:
    """Repaint the board for ``piece`` replacing the current piece."""
    board = state.board.repaint(state.current.cells, piece.cells, piece.colour)
    return replace(state, board=board, current=replace(piece, ghost=drop_preview(piece.cells, board)))


def spawn_piece(definition: PieceDefinition, board: Board) -> Tuple[PlacedPiece, Board]:
    piece = PlacedPiece.spawn(definition, board)
    return piece, board.with_cells(piece.cells, piece.colour)


def new_state(config: Optional[GameConfig] = None, started: bool = True) -> GameState:
    config = config or GameConfig()
    sequence = random_numbers(len(TETROMINOES) - 1, config.seed)
    board = Board.empty(config.rows, config.cols)
    current = TETROMINOES[sequence.value]
    sequence = sequence.next()
    if started:
        piece, board = spawn_piece(current, board)
    else:
        piece = PlacedPiece.spawn(current, board)
    return GameState(
        score=0,
        level=0,
        lines=0,
        current=piece,
        next_piece=TETROMINOES[sequence.value],
        sequence=sequence,
        board=board,
        gravity_interval=config.initial_gravity_interval,
        started=started,
        game_over=False,
    )
