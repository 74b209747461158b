from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Tuple

from .collision import Direction, blocked, drop_distance, extremal_coordinates, would_collide
from .grid import remove_cleared_lines
from .pieces import TETROMINOES
from .rules import ScoringRules, next_gravity_interval
from .state import GameConfig, GameState, PlacedPiece, move_piece, new_state, spawn_piece, update_state


logger = logging.getLogger(__name__)


class Event(IntEnum):
    START = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    SOFT_DROP = 3
    GRAVITY_TICK = 4
    ROTATE = 5
    HARD_DROP = 6


class Signal(str, Enum):
    MOVE = "move"
    ROTATE = "rotate"
    LAND = "land"
    LEVEL_UP = "levelUp"
    LINE_CLEAR = "lineClear"
    FOUR_LINES = "fourLines"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class Transition:
    state: GameState
    signals: Tuple[Signal, ...] = ()
    save: bool = False


def _spawn_blocked(state: GameState, config: GameConfig) -> bool:
    # A piece still inside the spawn rows that already rests on the stack
    probes = extremal_coordinates(state.current.cells, Direction.DOWN)
    board = state.board
    return any(
        row < config.spawn_rows and row + 1 < board.rows and not board.is_empty(row + 1, col)
        for row, col in probes
    )


def _game_over(state: GameState) -> Transition:
    logger.debug("game over at score %d, level %d", state.score, state.level)
    return Transition(update_state(state, started=False, game_over=True), (Signal.GAME_OVER,))


def _shift(state: GameState, direction: Direction) -> Transition:
    piece = state.current
    if blocked(piece.cells, state.board, direction):
        return Transition(state)
    d_col = -1 if direction is Direction.LEFT else 1
    return Transition(move_piece(state, piece.moved(0, d_col, state.board)), (Signal.MOVE,))


def _rotate(state: GameState) -> Transition:
    piece = state.current
    board = state.board
    if len(piece.definition.rotations) == 1:
        return Transition(state)
    row, col = piece.origin
    for kick in (0, -1, 1):
        cells = PlacedPiece.cells_for(piece.definition, (row, col + kick), piece.rotation + 1)
        if all(board.is_inside(r, c) and (board.is_empty(r, c) or (r, c) in piece.cells) for r, c in cells):
            return Transition(move_piece(state, piece.rotated(board, kick)), (Signal.ROTATE,))
    return Transition(state)


def _lock(state: GameState, config: GameConfig, rules: ScoringRules) -> Transition:
    cleared = remove_cleared_lines(state.board)
    lines = state.lines + cleared.count
    level = rules.level_for_lines(lines)
    score = rules.score(state.score, cleared.cleared_rows, cleared.remaining_rows, state.level, state.board.rows)
    interval = state.gravity_interval
    signals: List[Signal] = [Signal.LAND]
    if level > state.level:
        interval = next_gravity_interval(interval, config.min_gravity_interval)
        signals.append(Signal.LEVEL_UP)
        logger.debug("level %d reached, gravity interval now %d ms", level, interval)
    if cleared.count == 4:
        signals.append(Signal.FOUR_LINES)
    elif cleared.count > 0:
        signals.append(Signal.LINE_CLEAR)
    if cleared.count:
        logger.debug("cleared rows %s, score %d -> %d", cleared.cleared_rows, state.score, score)

    spawn_cells = state.next_piece.spawn_cells(cleared.board.cols)
    if any(not cleared.board.is_empty(row, col) for row, col in spawn_cells):
        # The next piece would overlap the stack; the locked board stays as is
        locked = update_state(
            state, score=score, level=level, lines=lines, board=cleared.board, gravity_interval=interval
        )
        return _game_over(locked)

    piece, board = spawn_piece(state.next_piece, cleared.board)
    sequence = state.sequence.next()
    new = update_state(
        state,
        score=score,
        level=level,
        lines=lines,
        current=piece,
        next_piece=TETROMINOES[sequence.value],
        sequence=sequence,
        board=board,
        gravity_interval=interval,
    )
    return Transition(new, tuple(signals), save=True)


def _step_down(state: GameState, config: GameConfig, rules: ScoringRules, soft: bool) -> Transition:
    if _spawn_blocked(state, config):
        return _game_over(state)
    probes = extremal_coordinates(state.current.cells, Direction.DOWN)
    if not would_collide(probes, state.board, Direction.DOWN):
        moved = move_piece(state, state.current.moved(1, 0, state.board))
        if not soft:
            return Transition(moved)
        moved = update_state(moved, score=moved.score + rules.soft_drop_bonus(state.level))
        return Transition(moved, (Signal.MOVE,))
    return _lock(state, config, rules)


def _hard_drop(state: GameState, config: GameConfig, rules: ScoringRules) -> Transition:
    if _spawn_blocked(state, config):
        return _game_over(state)
    distance = drop_distance(state.current.cells, state.board)
    if distance:
        state = move_piece(state, state.current.moved(distance, 0, state.board))
        if _spawn_blocked(state, config):
            return _game_over(state)
        state = update_state(state, score=state.score + distance * rules.soft_drop_bonus(state.level))
    return _lock(state, config, rules)


def transition(
    state: GameState,
    event: Event,
    config: Optional[GameConfig] = None,
    rules: Optional[ScoringRules] = None,
) -> Transition:
    """Apply one event to ``state`` and return the resulting snapshot.

    The input state is never modified. Events other than ``START`` are
    ignored before the game starts and after it ends.
    """
    config = config or GameConfig()
    rules = rules or ScoringRules()
    if event == Event.START:
        return Transition(new_state(config, started=True))
    if not state.started or state.game_over:
        return Transition(state)
    if event == Event.MOVE_LEFT:
        return _shift(state, Direction.LEFT)
    if event == Event.MOVE_RIGHT:
        return _shift(state, Direction.RIGHT)
    if event == Event.ROTATE:
        return _rotate(state)
    if event == Event.SOFT_DROP:
        return _step_down(state, config, rules, soft=True)
    if event == Event.GRAVITY_TICK:
        return _step_down(state, config, rules, soft=False)
    if event == Event.HARD_DROP:
        return _hard_drop(state, config, rules)
    raise ValueError(f"Unknown event: {event!r}")


SoundHandler = Callable[[Signal], None]
SaveHandler = Callable[[GameState], None]


class GameEngine:
    """Holds the canonical game state and notifies the sound/save collaborators.

    The engine does not schedule itself: the caller owns the gravity timer
    and should re-arm it whenever ``gravity_interval`` changes.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        sound: Optional[SoundHandler] = None,
        save: Optional[SaveHandler] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.sound = sound
        self.save = save
        self.state = new_state(self.config, started=False)

    @property
    def gravity_interval(self) -> int:
        return self.state.gravity_interval

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def reset(self, seed: Optional[int] = None) -> Transition:
        if seed is not None:
            self.config = replace(self.config, seed=seed)
        return self.step(Event.START)

    def step(self, event: Event) -> Transition:
        result = transition(self.state, event, self.config, self.rules)
        self.state = result.state
        for signal in result.signals:
            self._notify_sound(signal)
        if result.save:
            self._notify_save(result.state)
        return result

    def _notify_sound(self, signal: Signal) -> None:
        if self.sound is None:
            return
        try:
            self.sound(signal)
        except Exception:
            logger.exception("sound handler failed for %s", signal.value)

    def _notify_save(self, state: GameState) -> None:
        if self.save is None:
            return
        try:
            self.save(state)
        except Exception:
            logger.exception("save handler failed")
