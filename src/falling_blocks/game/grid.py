from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .pieces import Coordinate


EMPTY = "black"
_CELL_DTYPE = "<U16"


def _frozen(cells: np.ndarray) -> np.ndarray:
    cells.flags.writeable = False
    return cells


@dataclass(frozen=True, eq=False)
class Board:
    """Immutable rows x cols matrix of cell colours.

    ``EMPTY`` marks a free cell; any other string is the colour of a block.
    Every update returns a new board backed by a fresh read-only array.
    """

    cells: np.ndarray

    def __post_init__(self) -> None:
        if self.cells.ndim != 2:
            raise ValueError(f"Board must be 2-dimensional, got shape {self.cells.shape}")
        if self.cells.flags.writeable:
            object.__setattr__(self, "cells", _frozen(self.cells.astype(_CELL_DTYPE, copy=True)))

    @classmethod
    def empty(cls, rows: int = 22, cols: int = 10) -> "Board":
        return cls(np.full((rows, cols), EMPTY, dtype=_CELL_DTYPE))

    @property
    def rows(self) -> int:
        return int(self.cells.shape[0])

    @property
    def cols(self) -> int:
        return int(self.cells.shape[1])

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise IndexError(f"cell ({row}, {col}) outside {self.rows}x{self.cols} board")

    def cell_at(self, row: int, col: int) -> str:
        self._check(row, col)
        return str(self.cells[row, col])

    def is_empty(self, row: int, col: int) -> bool:
        return self.cell_at(row, col) == EMPTY

    def with_cells(self, cells: Iterable[Coordinate], value: str) -> "Board":
        grid = self.cells.copy()
        for row, col in cells:
            self._check(row, col)
            grid[row, col] = value
        return Board(grid)

    def with_cell(self, row: int, col: int, value: str) -> "Board":
        return self.with_cells([(row, col)], value)

    def repaint(self, old: Iterable[Coordinate], new: Iterable[Coordinate], colour: str) -> "Board":
        """Clear ``old`` cells that are not in ``new``, then paint ``new`` with ``colour``."""
        new = tuple(new)
        grid = self.cells.copy()
        for row, col in old:
            if (row, col) not in new:
                self._check(row, col)
                grid[row, col] = EMPTY
        for row, col in new:
            self._check(row, col)
            grid[row, col] = colour
        return Board(grid)

    def is_row_full(self, row: int) -> bool:
        self._check(row, 0)
        return bool(np.all(self.cells[row] != EMPTY))

    def is_row_empty(self, row: int) -> bool:
        self._check(row, 0)
        return bool(np.all(self.cells[row] == EMPTY))

    def occupied(self) -> int:
        return int(np.count_nonzero(self.cells != EMPTY))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.cells.shape, self.cells.tobytes()))


@dataclass(frozen=True, eq=False)
class LineClearResult:
    board: Board
    cleared_rows: Tuple[int, ...]
    remaining_rows: np.ndarray

    @property
    def count(self) -> int:
        return len(self.cleared_rows)


def remove_cleared_lines(board: Board) -> LineClearResult:
    """Drop every full row and pad the top with fresh empty rows.

    ``cleared_rows`` lists the removed indices top to bottom and
    ``remaining_rows`` the kept rows in their original order.
    """
    full = np.all(board.cells != EMPTY, axis=1)
    cleared = tuple(int(i) for i in np.flatnonzero(full))
    remaining = _frozen(board.cells[~full].copy())
    if not cleared:
        return LineClearResult(board=board, cleared_rows=(), remaining_rows=remaining)
    padding = np.full((len(cleared), board.cols), EMPTY, dtype=_CELL_DTYPE)
    new_board = Board(np.vstack((padding, remaining)))
    return LineClearResult(board=new_board, cleared_rows=cleared, remaining_rows=remaining)


def format_board(board: Board) -> str:
    return "\n".join("".join("·" if cell == EMPTY else "█" for cell in row) for row in board.cells)
