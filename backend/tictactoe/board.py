"""
Поле 3x3: постановка метки, проверка победителя и ничьей.
Поле ничего не знает об игроках и блокировках, это делает GameSession.
"""
from dataclasses import dataclass, field

from .constants import BOARD_SIZE, WINNING_LINES, Mark
from .errors import CellOccupied, OutOfBounds


def _empty_grid() -> list[list[Mark | None]]:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    cells: list[list[Mark | None]] = field(default_factory=_empty_grid)

    def place(self, row: int, col: int, mark: Mark) -> None:
        """Поставить метку. Занятая клетка не перезаписывается."""
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise OutOfBounds(row, col)
        if self.cells[row][col] is not None:
            raise CellOccupied(row, col)
        self.cells[row][col] = mark

    def get(self, row: int, col: int) -> Mark | None:
        return self.cells[row][col]

    def winner(self) -> Mark | None:
        for line in WINNING_LINES:
            (r0, c0), (r1, c1), (r2, c2) = line
            first = self.cells[r0][c0]
            if first is not None and first == self.cells[r1][c1] == self.cells[r2][c2]:
                return first
        return None

    def is_full(self) -> bool:
        return all(cell is not None for row in self.cells for cell in row)

    def is_draw(self) -> bool:
        # Полное поле с собранной линией — победа, не ничья
        return self.is_full() and self.winner() is None

    def render(self) -> str:
        """Текстовый вид поля: строка на ряд, '.' для пустой клетки."""
        return "\n".join(
            "".join(cell.value if cell else "." for cell in row)
            for row in self.cells
        )
