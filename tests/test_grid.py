from collections import Counter

import numpy as np
import pytest

from falling_blocks.game import EMPTY, Board, format_board, remove_cleared_lines


def test_empty_board_dimensions():
    board = Board.empty()
    assert (board.rows, board.cols) == (22, 10)
    assert board.occupied() == 0
    assert all(board.cell_at(r, c) == EMPTY for r in range(22) for c in range(10))


def test_with_cell_is_copy_on_write():
    board = Board.empty()
    updated = board.with_cell(0, 0, "red")
    assert updated.cell_at(0, 0) == "red"
    assert board.cell_at(0, 0) == EMPTY
    # Rows must not alias each other
    assert updated.cell_at(1, 0) == EMPTY
    assert updated.occupied() == 1
    assert not np.shares_memory(board.cells, updated.cells)


def test_board_snapshot_is_read_only():
    board = Board.empty()
    with pytest.raises(ValueError):
        board.cells[0, 0] = "red"


def test_out_of_range_access_raises():
    board = Board.empty()
    with pytest.raises(IndexError):
        board.cell_at(22, 0)
    with pytest.raises(IndexError):
        board.with_cell(0, -1, "red")


def test_repaint_clears_old_cells_and_paints_new():
    board = Board.empty().with_cells([(0, 0), (0, 1)], "blue")
    moved = board.repaint([(0, 0), (0, 1)], [(0, 1), (0, 2)], "blue")
    assert moved.cell_at(0, 0) == EMPTY
    assert moved.cell_at(0, 1) == "blue"
    assert moved.cell_at(0, 2) == "blue"


def test_is_row_full():
    board = Board.empty().with_cells([(21, c) for c in range(10)], "red")
    assert board.is_row_full(21)
    assert not board.is_row_full(20)
    assert not board.with_cell(21, 5, EMPTY).is_row_full(21)


def test_remove_cleared_lines_without_full_rows_is_noop():
    board = Board.empty().with_cells([(21, c) for c in range(9)], "red")
    result = remove_cleared_lines(board)
    assert result.board is board
    assert result.cleared_rows == ()
    assert result.remaining_rows.shape == (22, 10)


def test_line_clear_results_compare_by_identity():
    board = Board.empty().with_cells([(21, c) for c in range(10)], "red")
    first = remove_cleared_lines(board)
    second = remove_cleared_lines(board)
    assert first != second
    assert first == first
    assert first.board == second.board
    assert hash(first.board) == hash(second.board)


def test_remove_cleared_lines_shifts_rows_down():
    board = (
        Board.empty()
        .with_cells([(21, c) for c in range(10)], "red")
        .with_cell(20, 3, "green")
    )
    result = remove_cleared_lines(board)
    assert result.cleared_rows == (21,)
    assert result.count == 1
    assert result.board.rows == 22
    assert result.board.cell_at(21, 3) == "green"
    assert result.board.is_row_empty(0)
    assert result.board.occupied() == 1


def test_remove_cleared_lines_keeps_rows_in_order():
    board = (
        Board.empty()
        .with_cells([(r, c) for r in (15, 18, 21) for c in range(10)], "red")
        .with_cell(16, 0, "blue")
        .with_cell(19, 9, "cyan")
    )
    result = remove_cleared_lines(board)
    assert result.cleared_rows == (15, 18, 21)
    assert len(result.remaining_rows) == 19
    assert result.board.cell_at(20, 9) == "cyan"
    assert result.board.cell_at(18, 0) == "blue"
    assert all(result.board.is_row_empty(r) for r in range(3))

    # Restoring the cleared rows gives back the same multiset of rows
    restored = list(map(tuple, result.board.cells[result.count:])) + [
        tuple(board.cells[r]) for r in result.cleared_rows
    ]
    original = list(map(tuple, board.cells))
    assert Counter(restored) == Counter(original)


def test_format_board():
    board = Board.empty(2, 3).with_cell(1, 2, "red")
    assert format_board(board) == "···\n··█"
