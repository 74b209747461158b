from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


Coordinate = Tuple[int, int]
Cells = Tuple[Coordinate, ...]

PREVIEW_ROWS = 4
PREVIEW_COLS = 6


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


def _offsets(shape: Shape) -> Cells:
    return tuple((int(r), int(c)) for r, c in np.argwhere(shape))


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}

COLOURS: Dict[TetrominoType, str] = {
    TetrominoType.I: "cyan",
    TetrominoType.O: "yellow",
    TetrominoType.T: "purple",
    TetrominoType.S: "green",
    TetrominoType.Z: "red",
    TetrominoType.J: "blue",
    TetrominoType.L: "orange",
}


@dataclass(frozen=True)
class PieceDefinition:
    """Read-only description of one tetromino.

    ``rotations`` holds the occupied offsets of every distinct clockwise
    rotation state, relative to the top-left corner of the bounding box.
    ``preview_cells`` are absolute cells in the 4x6 side-panel grid.
    """

    kind: TetrominoType
    colour: str
    rotations: Tuple[Cells, ...]
    preview_cells: Cells

    @property
    def cells(self) -> Cells:
        return self.rotations[0]

    @property
    def width(self) -> int:
        return max(c for _, c in self.cells) + 1

    def spawn_origin(self, cols: int = 10) -> Coordinate:
        return 0, (cols - self.width) // 2

    def spawn_cells(self, cols: int = 10) -> Cells:
        row, col = self.spawn_origin(cols)
        return tuple((row + dr, col + dc) for dr, dc in self.cells)


def _build(kind: TetrominoType) -> PieceDefinition:
    rotations = []
    for k in range(4):
        cells = _offsets(_rot90(BASE_SHAPES[kind], k))
        if cells not in rotations:
            rotations.append(cells)
    base = rotations[0]
    h = max(r for r, _ in base) + 1
    w = max(c for _, c in base) + 1
    # Centre the base shape inside the preview grid
    top = (PREVIEW_ROWS - h) // 2
    left = (PREVIEW_COLS - w) // 2
    preview = tuple((top + r, left + c) for r, c in base)
    return PieceDefinition(kind=kind, colour=COLOURS[kind], rotations=tuple(rotations), preview_cells=preview)


TETROMINOES: Tuple[PieceDefinition, ...] = tuple(_build(kind) for kind in TetrominoType)


def definition_for(kind: TetrominoType) -> PieceDefinition:
    return TETROMINOES[int(kind) - 1]
