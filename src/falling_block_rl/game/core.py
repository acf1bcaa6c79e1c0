from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Callable, Iterable, List, Optional, Tuple, Union

import numpy as np

from .grid import Coordinate, GameGrid
from .pieces import ActivePiece, TetrominoType
from .rules import ScoreState, ScoringRules


logger = logging.getLogger(__name__)

BOARD_WIDTH = 10
BOARD_HEIGHT = 20


class Move(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    TOGGLE_PAUSE = 4


class Status(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


# Signals raised to the driver


@dataclass(frozen=True)
class PieceSpawned:
    kind: TetrominoType
    next_kind: TetrominoType


@dataclass(frozen=True)
class LinesCleared:
    count: int


@dataclass(frozen=True)
class LevelChanged:
    level: int
    interval_ms: int


@dataclass(frozen=True)
class GameOverReached:
    score: int
    level: int


Event = Union[PieceSpawned, LinesCleared, LevelChanged, GameOverReached]
Listener = Callable[[Event], None]


@dataclass
class StepResult:
    moved: bool = False
    locked: bool = False
    lines_cleared: int = 0
    level_changed: bool = False
    game_over: bool = False
    events: List[Event] = field(default_factory=list)


# Piece sources


class RandomPieceSource:
    """Uniform draws over the seven types from a seeded `random.Random`."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def __call__(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))


class SequencePieceSource:
    """Replays a fixed sequence of types, cycling when exhausted."""

    def __init__(self, kinds: Iterable[Union[TetrominoType, int]]) -> None:
        self.kinds = [TetrominoType(k) for k in kinds]
        if not self.kinds:
            raise ValueError("piece sequence must not be empty")
        self._index = 0

    def __call__(self) -> TetrominoType:
        kind = self.kinds[self._index % len(self.kinds)]
        self._index += 1
        return kind


PieceSource = Callable[[], TetrominoType]


@dataclass
class GameConfig:
    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT
    random_seed: Optional[int] = None
    base_interval_ms: int = 500

    def __post_init__(self) -> None:
        if (self.width, self.height) != (BOARD_WIDTH, BOARD_HEIGHT):
            raise ValueError(f"board must be {BOARD_WIDTH}x{BOARD_HEIGHT}, got {self.width}x{self.height}")
        if self.base_interval_ms <= 0:
            raise ValueError("base_interval_ms must be positive")


@dataclass
class GameState:
    grid: GameGrid
    scores: ScoreState
    current: Optional[ActivePiece] = None
    next_kind: Optional[TetrominoType] = None
    paused: bool = False
    game_over: bool = False

    @property
    def status(self) -> Status:
        if self.game_over:
            return Status.GAME_OVER
        if self.paused:
            return Status.PAUSED
        return Status.RUNNING


class GameEngine:
    """Tick-driven falling block game.

    The engine owns no timer. A driver calls `tick()` every
    `get_fall_interval()` milliseconds and `command()` on player input, and
    reschedules its timer whenever a `LevelChanged` event is raised.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        piece_source: Optional[PieceSource] = None,
    ) -> None:
        self.config = config or GameConfig()
        if rules is not None and rules.base_interval_ms != self.config.base_interval_ms:
            raise ValueError(
                f"rules.base_interval_ms={rules.base_interval_ms} does not match "
                f"config.base_interval_ms={self.config.base_interval_ms}"
            )
        self.rules = rules or ScoringRules(base_interval_ms=self.config.base_interval_ms)
        self.piece_source: PieceSource = piece_source or RandomPieceSource(self.config.random_seed)
        self._listeners: List[Listener] = []
        self._pending: List[Event] = []
        self.new_game()

    # ---------- Signals ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener` for engine events; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: Event) -> None:
        self._pending.append(event)

    def _finish(self, result: StepResult) -> StepResult:
        # listeners run only once the whole transition is applied
        result.events = self._pending
        self._pending = []
        for event in result.events:
            for listener in list(self._listeners):
                listener(event)
        return result

    # ---------- Lifecycle ----------
    def _fresh_state(self) -> GameState:
        return GameState(
            grid=GameGrid(self.config.width, self.config.height),
            scores=ScoreState(self.rules),
        )

    def _draw(self) -> TetrominoType:
        return TetrominoType(self.piece_source())

    def new_game(self) -> StepResult:
        self.state = self._fresh_state()
        self._pending = []
        logger.info("new game")
        self.state.next_kind = self._draw()
        result = StepResult()
        self._spawn_next()
        self._check_spawn(result)
        return self._finish(result)

    def _spawn_next(self) -> None:
        assert self.state.next_kind is not None and not self.state.game_over
        kind = self.state.next_kind
        self.state.next_kind = self._draw()
        self.state.current = ActivePiece.spawn(kind, self.state.grid.width)
        logger.debug("spawned %s, next %s", kind.name, self.state.next_kind.name)
        self._emit(PieceSpawned(kind, self.state.next_kind))

    def _check_spawn(self, result: StepResult) -> None:
        assert self.state.current is not None
        if not self.state.grid.is_legal(self.state.current.cells()):
            self.state.game_over = True
            self.state.paused = False
            result.game_over = True
            logger.info("game over: score=%d level=%d", self.state.scores.score, self.state.scores.level)
            self._emit(GameOverReached(self.state.scores.score, self.state.scores.level))

    # ---------- Mutations ----------
    def _try_commit(self, proposal: ActivePiece) -> bool:
        if self.state.grid.is_legal(proposal.cells()):
            self.state.current = proposal
            return True
        return False

    def _lock_piece(self, result: StepResult) -> None:
        piece = self.state.current
        assert piece is not None
        self.state.grid.lock(piece.cells(), piece.kind)
        result.locked = True
        lines = self.state.grid.clear_full_lines()
        logger.debug("locked %s at (%d, %d), cleared %d", piece.kind.name, piece.x, piece.y, lines)
        result.lines_cleared = lines
        if lines:
            self._emit(LinesCleared(lines))
        if self.state.scores.on_lines_cleared(lines):
            result.level_changed = True
            interval = self.state.scores.fall_interval_ms
            logger.info("level %d, fall interval %d ms", self.state.scores.level, interval)
            self._emit(LevelChanged(self.state.scores.level, interval))

    def tick(self) -> StepResult:
        result = StepResult()
        self._pending = []
        if self.state.paused or self.state.game_over:
            return self._finish(result)
        assert self.state.current is not None
        if self._try_commit(self.state.current.translated(0, 1)):
            result.moved = True
            return self._finish(result)
        self._lock_piece(result)
        self._spawn_next()
        self._check_spawn(result)
        return self._finish(result)

    def command(self, move: Move) -> StepResult:
        result = StepResult()
        self._pending = []
        if self.state.game_over:
            return self._finish(result)
        move = Move(move)
        if move == Move.TOGGLE_PAUSE:
            self.state.paused = not self.state.paused
            logger.debug("paused" if self.state.paused else "resumed")
            return self._finish(result)
        if self.state.paused:
            return self._finish(result)

        piece = self.state.current
        assert piece is not None
        if move == Move.LEFT:
            result.moved = self._try_commit(piece.translated(-1, 0))
        elif move == Move.RIGHT:
            result.moved = self._try_commit(piece.translated(1, 0))
        elif move == Move.DOWN:
            result.moved = self._try_commit(piece.translated(0, 1))
        elif move == Move.ROTATE:
            result.moved = self._try_commit(piece.rotated())
        return self._finish(result)

    # ---------- Queries ----------
    def get_board_cell(self, x: int, y: int) -> Optional[TetrominoType]:
        return self.state.grid.type_at(x, y)

    def get_current_piece(self) -> Tuple[TetrominoType, List[Coordinate]]:
        piece = self.state.current
        assert piece is not None
        return piece.kind, piece.cells()

    def get_next_type(self) -> TetrominoType:
        assert self.state.next_kind is not None
        return self.state.next_kind

    def get_score(self) -> int:
        return self.state.scores.score

    def get_level(self) -> int:
        return self.state.scores.level

    def get_fall_interval(self) -> int:
        return self.state.scores.fall_interval_ms

    def is_paused(self) -> bool:
        return self.state.paused

    def is_game_over(self) -> bool:
        return self.state.game_over

    @property
    def status(self) -> Status:
        return self.state.status

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.state.grid.clone_state()
        piece = self.state.current
        if piece is not None and not self.state.game_over:
            for x, y in piece.cells():
                if self.state.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -(int(piece.kind) + 1)
        return state
