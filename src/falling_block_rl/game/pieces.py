from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple


Offset = Tuple[int, int]
Cell = Tuple[int, int]
Color = Tuple[float, float, float]


class TetrominoType(IntEnum):
    SQUARE = 0
    LINE = 1
    Z = 2
    S = 3
    T = 4
    L = 5
    J = 6


# (dx, dy) offsets from the piece anchor
BASE_SHAPES: Dict[TetrominoType, Tuple[Offset, ...]] = {
    TetrominoType.SQUARE: ((0, 0), (0, 1), (1, 0), (1, 1)),
    TetrominoType.LINE: ((0, 0), (0, 1), (0, 2), (0, 3)),
    TetrominoType.Z: ((0, 0), (0, 1), (1, 1), (1, 2)),
    TetrominoType.S: ((0, 1), (0, 2), (1, 0), (1, 1)),
    TetrominoType.T: ((0, 0), (0, 1), (0, 2), (1, 1)),
    TetrominoType.L: ((0, 0), (1, 0), (2, 0), (2, 1)),
    TetrominoType.J: ((0, 1), (1, 1), (2, 0), (2, 1)),
}

COLORS: Dict[TetrominoType, Color] = {
    TetrominoType.SQUARE: (1.0, 1.0, 0.0),
    TetrominoType.LINE: (0.0, 1.0, 1.0),
    TetrominoType.Z: (1.0, 0.0, 0.0),
    TetrominoType.S: (0.0, 1.0, 0.0),
    TetrominoType.T: (1.0, 0.0, 1.0),
    TetrominoType.L: (1.0, 0.5, 0.0),
    TetrominoType.J: (0.0, 0.0, 1.0),
}


def shape_of(kind: TetrominoType) -> Tuple[Offset, ...]:
    return BASE_SHAPES[TetrominoType(kind)]


def color_of(kind: TetrominoType) -> Color:
    return COLORS[TetrominoType(kind)]


def rgb255(kind: TetrominoType) -> Tuple[int, int, int]:
    """Color of `kind` scaled to 0..255 for pixel renderers."""
    r, g, b = color_of(kind)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def _rotate_offset(offset: Offset) -> Offset:
    dx, dy = offset
    return dy, -dx


@dataclass(frozen=True)
class ActivePiece:
    """The falling piece.

    Instances are immutable: `translated` and `rotated` return proposals that
    the engine commits only after the board accepts their cells.
    """

    kind: TetrominoType
    x: int
    y: int
    offsets: Tuple[Offset, ...]

    @staticmethod
    def spawn(kind: TetrominoType, board_width: int) -> "ActivePiece":
        return ActivePiece(kind=TetrominoType(kind), x=board_width // 2 - 2, y=0, offsets=shape_of(kind))

    def translated(self, dx: int, dy: int) -> "ActivePiece":
        return ActivePiece(self.kind, self.x + dx, self.y + dy, self.offsets)

    def rotated(self) -> "ActivePiece":
        # 90 degrees about the anchor, no wall kicks
        return ActivePiece(self.kind, self.x, self.y, tuple(_rotate_offset(o) for o in self.offsets))

    def cells(self) -> List[Cell]:
        return [(self.x + dx, self.y + dy) for dx, dy in self.offsets]
