"""
Обработка сообщений WebSocket: CREATE GAME, JOIN GAME, MOVE, BOARD.
Один цикл на подключение; общий только реестр партий.
"""
import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from .config import get_config
from .constants import MATCH_MODE_AUTO
from .errors import AlreadyInGame, GameError, GameNotReady
from .game import GameSession
from .pairing import registry
from .protocol import (
    CreateGame,
    JoinGame,
    Move,
    ShowBoard,
    board_message,
    error_message,
    game_created_message,
    game_over_message,
    move_message,
    parse_command,
    player_message,
)
from .ws_manager import Connection, manager

logger = logging.getLogger(__name__)


class ConnectionHandler:
    """Состояние одного подключения: своё соединение и текущая партия."""

    def __init__(self, conn: Connection):
        self.conn = conn
        self.session: GameSession | None = None

    async def handle_message(self, raw: str) -> bool:
        """
        Обрабатывает один кадр от клиента.
        Возвращает False если цикл нужно завершить (партия окончена).
        """
        try:
            command = parse_command(raw)
            logger.info("WS: msg from %s command=%s", self.conn.conn_id, type(command).__name__)
            if isinstance(command, CreateGame):
                return await self._create(command)
            if isinstance(command, JoinGame):
                return await self._join(command)
            if isinstance(command, Move):
                return await self._move(command)
            if isinstance(command, ShowBoard):
                return await self._board()
        except GameError as e:
            logger.info("WS: rejected from %s: %s", self.conn.conn_id, e)
            await self.conn.send(error_message(e))
        return True

    async def match(self) -> None:
        """Автоподбор: в ждущую партию или в новую."""
        self.session = await registry.create_or_match(self.conn)
        number = 1 if self.session.player_a is self.conn else 2
        await self.conn.send(player_message(number))
        logger.info("WS: %s is player %s in game %s", self.conn.conn_id, number, self.session.id)

    async def _leave_closed_game(self) -> None:
        """Отпустить оконченную или брошенную партию; живая мешает новой."""
        if self.session is None:
            return
        if not self.session.closed:
            raise AlreadyInGame()
        await self.cleanup()
        self.session = None

    async def _create(self, command: CreateGame) -> bool:
        await self._leave_closed_game()
        self.session = await registry.create_named(command.game_id, self.conn)
        await self.conn.send(game_created_message(command.game_id))
        return True

    async def _join(self, command: JoinGame) -> bool:
        await self._leave_closed_game()
        self.session = await registry.join_named(command.game_id, self.conn)
        await self.conn.send(player_message(2))
        return True

    async def _move(self, command: Move) -> bool:
        session = self.session
        if session is None:
            raise GameNotReady()
        async with session.send_lock:
            result = await session.move(self.conn, command.row, command.col)
            players = session.players()
            if result.game_over:
                logger.info(
                    "WS: game %s over winner=%s\n%s",
                    session.id,
                    result.winner.value if result.winner else "draw",
                    session.board.render(),
                )
                await manager.broadcast(players, game_over_message(result))
                return False
            await manager.broadcast(players, move_message(result))
        return True

    async def _board(self) -> bool:
        if self.session is None:
            raise GameNotReady()
        await self.conn.send(board_message(await self.session.render_board()))
        return True

    async def cleanup(self) -> None:
        session = self.session
        if session is None:
            return
        await session.disconnect(self.conn)
        await registry.remove(session.id, session)


async def ws_game_loop(ws: WebSocket) -> None:
    """
    Принять подключение, в режиме auto сразу подобрать соперника,
    дальше цикл приёма кадров до конца партии или разрыва.
    """
    config = get_config()
    conn = None
    handler = None
    try:
        await ws.accept()
        conn = manager.connect(ws)
        handler = ConnectionHandler(conn)
        logger.info("WS: accepted %s mode=%s", conn.conn_id, config.match_mode)
        if config.match_mode == MATCH_MODE_AUTO:
            await handler.match()
        while True:
            msg = await ws.receive_text()
            if not await handler.handle_message(msg):
                break
    except WebSocketDisconnect as e:
        logger.info(
            "WS: client disconnected code=%s reason=%s conn=%s",
            e.code, e.reason or "", conn.conn_id if conn else None,
        )
    except Exception as e:
        logger.exception("WS: error conn=%s: %s", conn.conn_id if conn else None, e)
    finally:
        if handler:
            await handler.cleanup()
        if conn:
            manager.disconnect(conn)
            await conn.close()
            logger.info("WS: closed %s", conn.conn_id)
