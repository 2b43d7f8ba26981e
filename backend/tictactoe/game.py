"""
Партия: поле, два подключения, чей ход, статус.
Все изменения идут под собственной блокировкой партии.
"""
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .board import Board
from .constants import Mark
from .errors import AlreadyFull, GameNotReady, NotYourTurn


class GameStatus(str, Enum):
    WAITING = "waiting"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


@dataclass
class MoveResult:
    mark: Mark
    row: int
    col: int
    winner: Mark | None = None
    draw: bool = False

    @property
    def game_over(self) -> bool:
        return self.winner is not None or self.draw


@dataclass(eq=False)
class GameSession:
    id: str
    player_a: Any
    player_b: Any = None
    board: Board = field(default_factory=Board)
    turn: Any = None
    status: GameStatus = GameStatus.WAITING
    enforce_turns: bool = True
    abandoned: bool = False
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)
    # ход и его рассылка идут под ним целиком, чтобы оба игрока видели один порядок
    send_lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    @property
    def closed(self) -> bool:
        """Партия окончена или брошена: в ней больше нельзя играть."""
        return self.status is GameStatus.FINISHED or self.abandoned

    def players(self) -> list[Any]:
        return [p for p in (self.player_a, self.player_b) if p is not None]

    def has_player(self, connection: Any) -> bool:
        return connection is self.player_a or (
            self.player_b is not None and connection is self.player_b
        )

    def mark_for(self, connection: Any) -> Mark:
        return Mark.X if connection is self.player_a else Mark.O

    def peer_of(self, connection: Any) -> Any:
        if connection is self.player_a:
            return self.player_b
        if connection is self.player_b:
            return self.player_a
        return None

    async def join(self, connection: Any) -> None:
        async with self._lock:
            if (
                self.abandoned
                or connection is self.player_a
                or self.player_b is not None
                or self.status is not GameStatus.WAITING
            ):
                raise AlreadyFull()
            self.player_b = connection
            self.status = GameStatus.IN_PROGRESS
            self.turn = self.player_a

    async def move(self, connection: Any, row: int, col: int) -> MoveResult:
        """
        Применить ход: проверка статуса и очереди, затем запись на поле,
        затем победа и ничья. Ошибки поля пробрасываются как есть.
        """
        async with self._lock:
            if self.status is not GameStatus.IN_PROGRESS or self.abandoned:
                raise GameNotReady()
            if not self.has_player(connection):
                raise NotYourTurn()
            if self.enforce_turns and connection is not self.turn:
                raise NotYourTurn()
            mark = self.mark_for(connection)
            self.board.place(row, col, mark)
            result = MoveResult(mark=mark, row=row, col=col)
            result.winner = self.board.winner()
            if result.winner is None:
                result.draw = self.board.is_draw()
            if result.game_over:
                self.status = GameStatus.FINISHED
            else:
                self.turn = self.peer_of(connection)
            return result

    async def disconnect(self, connection: Any) -> None:
        """Пометить партию к удалению. Соперника уведомляет только транспорт."""
        async with self._lock:
            if self.has_player(connection):
                self.abandoned = True

    async def render_board(self) -> str:
        async with self._lock:
            return self.board.render()
