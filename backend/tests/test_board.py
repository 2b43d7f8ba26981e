import pytest

from tictactoe.board import Board
from tictactoe.constants import WINNING_LINES, Mark
from tictactoe.errors import CellOccupied, OutOfBounds

ALL_CELLS = [(r, c) for r in range(3) for c in range(3)]


@pytest.mark.parametrize("row,col", ALL_CELLS)
def test_place_succeeds_once_per_cell(row: int, col: int) -> None:
    board = Board()
    board.place(row, col, Mark.X)
    assert board.get(row, col) is Mark.X
    with pytest.raises(CellOccupied):
        board.place(row, col, Mark.O)
    assert board.get(row, col) is Mark.X


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3), (5, 5), (-2, 7)])
def test_place_out_of_bounds_leaves_board_untouched(row: int, col: int) -> None:
    board = Board()
    before = board.render()
    with pytest.raises(OutOfBounds):
        board.place(row, col, Mark.X)
    assert board.render() == before


@pytest.mark.parametrize("line", WINNING_LINES)
@pytest.mark.parametrize("mark", [Mark.X, Mark.O])
def test_winner_detected_for_every_line(line, mark: Mark) -> None:
    board = Board()
    for row, col in line:
        board.place(row, col, mark)
    assert board.winner() is mark


def test_no_winner_without_three_in_a_row() -> None:
    board = Board()
    board.place(0, 0, Mark.X)
    board.place(0, 1, Mark.X)
    board.place(1, 1, Mark.O)
    board.place(0, 2, Mark.O)
    assert board.winner() is None
    assert not board.is_draw()


def _fill(rows: list[str]) -> Board:
    board = Board()
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            if ch != ".":
                board.place(r, c, Mark(ch))
    return board


def test_full_board_without_line_is_draw() -> None:
    board = _fill(["XOX", "XOO", "OXX"])
    assert board.is_full()
    assert board.winner() is None
    assert board.is_draw()


def test_full_board_with_line_reports_winner_not_draw() -> None:
    board = _fill(["XXX", "OOX", "XOO"])
    assert board.is_full()
    assert board.winner() is Mark.X
    assert not board.is_draw()


def test_render_marks_empty_cells_with_dots() -> None:
    board = _fill(["X..", ".O.", "..X"])
    assert board.render() == "X..\n.O.\n..X"
