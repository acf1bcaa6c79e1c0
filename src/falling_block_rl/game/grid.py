from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .pieces import TetrominoType


Coordinate = Tuple[int, int]

EMPTY = 0


class CellOutOfRange(IndexError):
    """Raised when a board query names a cell outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"cell ({x}, {y}) is outside the {width}x{height} board")
        self.x = x
        self.y = y


class GameGrid:
    """Discrete 2D board of locked cells.

    Row 0 is the top. Cells hold 0 when empty and ``type + 1`` when occupied,
    so every occupied value is in [1, 7]. Rows above the board (y < 0) never
    collide, which lets pieces spawn partly off the top.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_legal(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return False
            if y >= 0 and self.grid[y, x] != EMPTY:
                return False
        return True

    def lock(self, cells: Iterable[Coordinate], kind: TetrominoType) -> int:
        """Write `kind` into every on-board cell and return how many were written.

        Cells above the board are dropped. Legality is assumed to have been
        checked by the caller.
        """
        value = int(kind) + 1
        written = 0
        for x, y in cells:
            if y < 0:
                continue
            self.grid[y, x] = value
            written += 1
        return written

    def clear_full_lines(self) -> int:
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if np.all(self.grid[y] != EMPTY):
                # shift everything above down by one, same index is re-checked
                self.grid[1 : y + 1] = self.grid[0:y].copy()
                self.grid[0].fill(EMPTY)
                cleared += 1
            else:
                y -= 1
        return cleared

    def cell(self, x: int, y: int) -> int:
        if not self.is_inside(x, y):
            raise CellOutOfRange(x, y, self.width, self.height)
        return int(self.grid[y, x])

    def type_at(self, x: int, y: int) -> Optional[TetrominoType]:
        value = self.cell(x, y)
        if value == EMPTY:
            return None
        return TetrominoType(value - 1)

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
