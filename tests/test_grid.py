import numpy as np
import pytest

from falling_block_rl.game import CellOutOfRange, GameGrid, TetrominoType


def _fill_row(grid: GameGrid, y: int, kind=TetrominoType.L) -> None:
    grid.lock([(x, y) for x in range(grid.width)], kind)


def test_is_legal_bounds_and_collisions():
    grid = GameGrid(10, 20)
    assert grid.is_legal([(0, 0), (9, 19)])
    assert not grid.is_legal([(-1, 5)])
    assert not grid.is_legal([(10, 5)])
    assert not grid.is_legal([(4, 20)])
    grid.lock([(4, 10)], TetrominoType.T)
    assert not grid.is_legal([(4, 10)])


def test_cells_above_board_never_collide_but_stay_bounded_in_x():
    grid = GameGrid(10, 20)
    _fill_row(grid, 0)
    assert grid.is_legal([(4, -1), (4, -3)])
    assert not grid.is_legal([(-1, -1)])
    assert not grid.is_legal([(10, -2)])


def test_lock_stores_type_plus_one_and_drops_cells_above():
    grid = GameGrid(10, 20)
    written = grid.lock([(3, -1), (3, 0), (4, 0)], TetrominoType.J)
    assert written == 2
    assert grid.cell(3, 0) == int(TetrominoType.J) + 1
    assert grid.type_at(4, 0) is TetrominoType.J
    assert int(np.count_nonzero(grid.grid)) == 2


def test_occupied_values_stay_in_range():
    grid = GameGrid(10, 20)
    for i, kind in enumerate(TetrominoType):
        grid.lock([(i, 19)], kind)
    occupied = grid.grid[grid.grid != 0]
    assert occupied.min() >= 1 and occupied.max() <= 7


def test_clear_full_lines_on_empty_board():
    grid = GameGrid(10, 20)
    assert grid.clear_full_lines() == 0
    assert not grid.grid.any()


def test_clear_bottom_two_rows_shifts_rest_down_by_two():
    grid = GameGrid(10, 20)
    _fill_row(grid, 18)
    _fill_row(grid, 19)
    grid.lock([(0, 17)], TetrominoType.S)
    grid.lock([(4, 16)], TetrominoType.Z)

    assert grid.clear_full_lines() == 2
    assert grid.type_at(0, 19) is TetrominoType.S
    assert grid.type_at(4, 18) is TetrominoType.Z
    assert int(np.count_nonzero(grid.grid)) == 2
    assert not grid.grid[:18].any()


def test_clear_non_contiguous_rows():
    grid = GameGrid(10, 20)
    _fill_row(grid, 17)
    grid.lock([(2, 18)], TetrominoType.T)
    _fill_row(grid, 19)
    grid.lock([(7, 16)], TetrominoType.LINE)

    assert grid.clear_full_lines() == 2
    assert grid.type_at(2, 19) is TetrominoType.T
    assert grid.type_at(7, 18) is TetrominoType.LINE
    assert int(np.count_nonzero(grid.grid)) == 2


def test_clear_adjacent_rows_in_middle():
    grid = GameGrid(10, 20)
    _fill_row(grid, 5)
    _fill_row(grid, 6)
    _fill_row(grid, 7)
    grid.lock([(1, 4)], TetrominoType.S)
    assert grid.clear_full_lines() == 3
    assert grid.type_at(1, 7) is TetrominoType.S
    assert grid.type_at(1, 4) is None


def test_cell_queries_out_of_range():
    grid = GameGrid(10, 20)
    for x, y in [(-1, 0), (10, 0), (0, -1), (0, 20)]:
        with pytest.raises(CellOutOfRange):
            grid.cell(x, y)
    with pytest.raises(IndexError):
        grid.type_at(11, 3)


def test_analytics():
    grid = GameGrid(10, 20)
    assert grid.get_max_height() == 0
    grid.lock([(0, 15), (0, 17)], TetrominoType.T)
    assert grid.get_max_height() == 5
    assert grid.count_holes() == 3
    clone = grid.clone_state()
    grid.reset()
    assert not grid.grid.any()
    assert clone[15, 0] != 0
