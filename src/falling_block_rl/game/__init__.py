"""Game module for Falling Block RL.

Exports the core game engine and supporting classes:
- GameGrid: Board representation, collision and line clearing
- ActivePiece: The falling tetromino with translate/rotate proposals
- TetrominoType: Enum of the seven piece types
- ScoringRules / ScoreState: Scoring, leveling and fall interval
- GameEngine: Tick-driven state machine and query surface
"""

from .grid import CellOutOfRange, GameGrid
from .pieces import ActivePiece, TetrominoType, color_of, rgb255, shape_of
from .rules import ScoreState, ScoringRules
from .core import (
    GameConfig,
    GameEngine,
    GameOverReached,
    Event,
    GameState,
    LevelChanged,
    LinesCleared,
    Move,
    PieceSpawned,
    RandomPieceSource,
    SequencePieceSource,
    Status,
    StepResult,
)

__all__ = [
    "GameGrid",
    "CellOutOfRange",
    "ActivePiece",
    "TetrominoType",
    "shape_of",
    "color_of",
    "rgb255",
    "ScoringRules",
    "ScoreState",
    "GameConfig",
    "GameEngine",
    "GameState",
    "Event",
    "Move",
    "Status",
    "StepResult",
    "PieceSpawned",
    "LinesCleared",
    "LevelChanged",
    "GameOverReached",
    "RandomPieceSource",
    "SequencePieceSource",
]
