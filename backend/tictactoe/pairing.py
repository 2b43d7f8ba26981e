"""
Реестр партий (in-memory) и подбор соперника.
Блокировка реестра держится только на время работы со словарём:
партию берём под ней, а join/move делаем уже под блокировкой партии.
"""
import asyncio
import itertools
import logging
from typing import Any

from .config import get_config
from .errors import AlreadyFull, IdAlreadyExists, NotFound
from .game import GameSession, GameStatus

logger = logging.getLogger(__name__)


class SessionRegistry:
    def __init__(self, enforce_turns: bool = True):
        self.enforce_turns = enforce_turns
        self._lock = asyncio.Lock()
        self._sessions: dict[str, GameSession] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._sessions)

    def _new_session(self, game_id: str, connection: Any) -> GameSession:
        session = GameSession(
            id=game_id,
            player_a=connection,
            enforce_turns=self.enforce_turns,
        )
        self._sessions[game_id] = session
        return session

    def _next_id(self) -> str:
        game_id = str(next(self._ids))
        while game_id in self._sessions:
            game_id = str(next(self._ids))
        return game_id

    async def create_or_match(self, connection: Any) -> GameSession:
        """
        Присоединить к ждущей партии или создать новую.
        Если ждущую партию перехватил другой воркер, пробуем заново.
        """
        while True:
            async with self._lock:
                waiting = next(
                    (
                        s for s in self._sessions.values()
                        if s.status is GameStatus.WAITING and not s.abandoned
                    ),
                    None,
                )
                if waiting is None:
                    session = self._new_session(self._next_id(), connection)
                    logger.info("Registry: game %s created, waiting for opponent", session.id)
                    return session
            try:
                await waiting.join(connection)
            except AlreadyFull:
                logger.debug("Registry: lost race for game %s, retrying", waiting.id)
                continue
            logger.info("Registry: matched into game %s", waiting.id)
            return waiting

    async def create_named(self, game_id: str, connection: Any) -> GameSession:
        async with self._lock:
            if game_id in self._sessions:
                raise IdAlreadyExists(game_id)
            session = self._new_session(game_id, connection)
        logger.info("Registry: game %s created", game_id)
        return session

    async def join_named(self, game_id: str, connection: Any) -> GameSession:
        async with self._lock:
            session = self._sessions.get(game_id)
        if session is None:
            raise NotFound(game_id)
        await session.join(connection)
        logger.info("Registry: second player joined game %s", game_id)
        return session

    async def get(self, game_id: str) -> GameSession | None:
        async with self._lock:
            return self._sessions.get(game_id)

    async def remove(self, game_id: str, session: GameSession | None = None) -> bool:
        """
        Удалить партию. Отсутствующий id — не ошибка.
        Если передана session, удаляем только её: id мог уже занять новый матч.
        """
        async with self._lock:
            current = self._sessions.get(game_id)
            if current is None or (session is not None and current is not session):
                return False
            del self._sessions[game_id]
        logger.info("Registry: game %s removed", game_id)
        return True

    async def counts(self) -> dict[str, int]:
        """Количество партий по статусам."""
        async with self._lock:
            sessions = list(self._sessions.values())
        return {status.value: sum(1 for s in sessions if s.status is status) for status in GameStatus}


registry = SessionRegistry(enforce_turns=get_config().enforce_turns)
