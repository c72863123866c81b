import numpy as np
import pytest

from falling_blocks.game import EMPTY, GameGrid, OutOfBoundsError, TetrominoType


def fill_row(grid: GameGrid, y: int, skip=(), value=int(TetrominoType.T)) -> None:
    for x in range(grid.width):
        if x not in skip:
            grid.set_cell(x, y, value)


def test_fresh_board_is_empty():
    grid = GameGrid(10, 20)
    assert grid.grid.shape == (20, 10)
    assert not any(grid.is_occupied(x, y) for y in range(20) for x in range(10))


def test_set_cell_marks_only_that_cell():
    grid = GameGrid(10, 20)
    grid.set_cell(3, 7, int(TetrominoType.L))
    assert grid.is_occupied(3, 7)
    assert grid.grid[7, 3] == TetrominoType.L
    others = [(x, y) for y in range(20) for x in range(10) if (x, y) != (3, 7)]
    assert not any(grid.is_occupied(x, y) for x, y in others)


def test_is_occupied_outside_board_is_false():
    grid = GameGrid(4, 4)
    fill_row(grid, 0)
    assert not grid.is_occupied(-1, 0)
    assert not grid.is_occupied(4, 0)
    assert not grid.is_occupied(0, -1)
    assert not grid.is_occupied(0, 4)


@pytest.mark.parametrize("x, y", [(-1, 0), (10, 0), (0, -1), (0, 20)])
def test_set_cell_out_of_bounds_raises(x, y):
    grid = GameGrid(10, 20)
    with pytest.raises(OutOfBoundsError):
        grid.set_cell(x, y, 1)
    assert issubclass(OutOfBoundsError, IndexError)


def test_collides_walls_and_floor():
    grid = GameGrid(10, 20)
    assert grid.collides([(-1, 5)])
    assert grid.collides([(10, 5)])
    assert grid.collides([(3, 20)])
    assert not grid.collides([(0, 0), (9, 19)])


def test_cells_above_board_skip_occupancy_check():
    grid = GameGrid(10, 20)
    fill_row(grid, 0)
    assert not grid.collides([(4, -1), (5, -2)])
    assert grid.collides([(4, -1), (4, 0)])
    # side walls still apply above the board
    assert grid.collides([(-1, -1)])


def test_collision_check_is_repeatable():
    grid = GameGrid(10, 20)
    grid.set_cell(5, 10, 1)
    cells = [(5, 9), (5, 10)]
    assert grid.collides(cells) == grid.collides(cells)
    assert grid.grid[10, 5] == 1


def test_clear_single_full_row_shifts_rows_down():
    grid = GameGrid(10, 20)
    fill_row(grid, 19)
    grid.set_cell(2, 18, int(TetrominoType.S))
    assert grid.clear_full_rows() == 1
    assert grid.grid.shape == (20, 10)
    assert grid.grid[19, 2] == TetrominoType.S
    assert np.count_nonzero(grid.grid) == 1


def test_clear_four_rows_cascades():
    grid = GameGrid(10, 20)
    for y in range(16, 20):
        fill_row(grid, y)
    grid.set_cell(0, 15, int(TetrominoType.O))
    assert grid.clear_full_rows() == 4
    assert grid.grid.shape == (20, 10)
    assert grid.grid[19, 0] == TetrominoType.O
    assert np.count_nonzero(grid.grid) == 1


def test_clear_non_adjacent_rows():
    grid = GameGrid(10, 20)
    fill_row(grid, 19)
    fill_row(grid, 18, skip=(4,))
    fill_row(grid, 17)
    assert grid.clear_full_rows() == 2
    # the partial row survives and lands on the floor
    assert np.count_nonzero(grid.grid[19]) == 9
    assert grid.grid[19, 4] == EMPTY
    assert np.count_nonzero(grid.grid[:19]) == 0


def test_clear_without_full_rows_is_noop():
    grid = GameGrid(10, 20)
    fill_row(grid, 19, skip=(0,))
    before = grid.clone_state()
    assert grid.clear_full_rows() == 0
    assert np.array_equal(grid.grid, before)


def test_lock_skips_cells_above_board():
    grid = GameGrid(10, 20)
    result = grid.lock([(4, -1), (4, 0), (5, 0)], int(TetrominoType.Z))
    assert result.cells_written == 2
    assert result.lines_cleared == 0
    assert grid.grid[0, 4] == TetrominoType.Z
    assert grid.grid[0, 5] == TetrominoType.Z


def test_lock_reports_cleared_rows():
    grid = GameGrid(4, 4)
    fill_row(grid, 3, skip=(0,))
    result = grid.lock([(0, 3)], int(TetrominoType.I))
    assert result.lines_cleared == 1
    assert np.count_nonzero(grid.grid) == 0


def test_board_analytics():
    grid = GameGrid(4, 6)
    grid.set_cell(1, 3, 1)
    grid.set_cell(2, 5, 1)
    assert grid.get_max_height() == 3
    # cells below (1, 3) in the same column are holes
    assert grid.count_holes() == 2
    grid.reset()
    assert grid.get_max_height() == 0
    assert grid.count_holes() == 0
