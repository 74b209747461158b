from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable

from .grid import Board
from .pieces import Cells, Coordinate


class Direction(Enum):
    DOWN = "d"
    LEFT = "l"
    RIGHT = "r"


_STEP: Dict[Direction, Coordinate] = {
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


def step_for(direction: Direction) -> Coordinate:
    return _STEP[direction]


def shift(cells: Iterable[Coordinate], d_row: int, d_col: int) -> Cells:
    return tuple((r + d_row, c + d_col) for r, c in cells)


def extremal_coordinates(cells: Iterable[Coordinate], direction: Direction) -> Cells:
    """Return the most advanced cell per column (DOWN) or per row (LEFT/RIGHT).

    Only these cells can touch something when the piece moves one step in
    ``direction``; every other cell has a cell of the same piece in front of it.
    """
    best: Dict[int, Coordinate] = {}
    for row, col in cells:
        key = col if direction is Direction.DOWN else row
        current = best.get(key)
        if current is None:
            best[key] = (row, col)
        elif direction is Direction.DOWN and row > current[0]:
            best[key] = (row, col)
        elif direction is Direction.LEFT and col < current[1]:
            best[key] = (row, col)
        elif direction is Direction.RIGHT and col > current[1]:
            best[key] = (row, col)
    return tuple(sorted(best.values()))


def would_collide(probes: Iterable[Coordinate], board: Board, direction: Direction) -> bool:
    last_row = board.rows - 1
    last_col = board.cols - 1
    d_row, d_col = step_for(direction)
    for row, col in probes:
        if direction is Direction.DOWN and row >= last_row:
            return True
        if direction is Direction.LEFT and col <= 0:
            return True
        if direction is Direction.RIGHT and col >= last_col:
            return True
        if not board.is_empty(row + d_row, col + d_col):
            return True
    return False


def blocked(cells: Iterable[Coordinate], board: Board, direction: Direction) -> bool:
    return would_collide(extremal_coordinates(cells, direction), board, direction)


def drop_preview(cells: Cells, board: Board) -> Cells:
    """Project ``cells`` straight down until the next step would collide."""
    position = tuple(cells)
    while position and not blocked(position, board, Direction.DOWN):
        position = shift(position, 1, 0)
    return position


def drop_distance(cells: Cells, board: Board) -> int:
    if not cells:
        return 0
    ghost = drop_preview(cells, board)
    return ghost[0][0] - cells[0][0]
