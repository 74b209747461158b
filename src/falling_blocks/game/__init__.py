"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Board: Immutable grid of cell colours and line clearing
- PieceDefinition / TETROMINOES: Static piece catalog with rotation states
- RandomSequence: Replayable piece sequence
- ScoringRules: Line-clear, soft-drop and level rules
- GameState / GameConfig: Snapshot of one game and its fixed settings
- GameEngine: Event-driven state machine with sound and save hooks
"""

from .grid import Board, EMPTY, LineClearResult, format_board, remove_cleared_lines
from .collision import Direction, drop_preview, extremal_coordinates, would_collide
from .pieces import PieceDefinition, TetrominoType, TETROMINOES
from .rng import RandomSequence, random_numbers
from .rules import ScoringRules, next_gravity_interval
from .state import GameConfig, GameState, PlacedPiece, new_state
from .core import Event, GameEngine, Signal, Transition, transition

__all__ = [
    "Board",
    "EMPTY",
    "LineClearResult",
    "format_board",
    "remove_cleared_lines",
    "Direction",
    "drop_preview",
    "extremal_coordinates",
    "would_collide",
    "PieceDefinition",
    "TetrominoType",
    "TETROMINOES",
    "RandomSequence",
    "random_numbers",
    "ScoringRules",
    "next_gravity_interval",
    "GameConfig",
    "GameState",
    "PlacedPiece",
    "new_state",
    "Event",
    "GameEngine",
    "Signal",
    "Transition",
    "transition",
]
