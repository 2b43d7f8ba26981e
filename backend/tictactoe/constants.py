"""Константы игры: метки, линии победы, режимы подбора."""
from enum import Enum


class Mark(str, Enum):
    X = "X"
    O = "O"


BOARD_SIZE = 3

WINNING_LINES: list[tuple[tuple[int, int], ...]] = [
    # строки
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # столбцы
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # диагонали
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
]

MATCH_MODE_NAMED = "named"
MATCH_MODE_AUTO = "auto"
MATCH_MODES = [MATCH_MODE_NAMED, MATCH_MODE_AUTO]
