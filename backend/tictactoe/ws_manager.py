"""
Менеджер WebSocket: живые подключения и отправка текстовых кадров.
"""
import logging
import uuid

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class Connection:
    """Одно подключение клиента. Сравнивается только по идентичности."""

    def __init__(self, ws: WebSocket):
        self.ws = ws
        self.conn_id = uuid.uuid4().hex[:8]

    def __repr__(self) -> str:
        return f"Connection({self.conn_id})"

    async def send(self, text: str) -> bool:
        try:
            await self.ws.send_text(text)
            return True
        except Exception as e:
            logger.warning("send to %s: %s", self.conn_id, e)
            return False

    async def close(self, code: int = 1000) -> None:
        try:
            await self.ws.close(code=code)
        except Exception as e:
            # сокет уже закрыт клиентом
            logger.debug("close %s: %s", self.conn_id, e)


class WSManager:
    def __init__(self):
        self._all: dict[str, Connection] = {}

    def connect(self, ws: WebSocket) -> Connection:
        conn = Connection(ws)
        self._all[conn.conn_id] = conn
        return conn

    def disconnect(self, conn: Connection) -> None:
        self._all.pop(conn.conn_id, None)

    def count(self) -> int:
        return len(self._all)

    async def broadcast(self, conns: list[Connection], text: str) -> None:
        """Отправить кадр нескольким подключениям; сбои только логируются."""
        for conn in conns:
            await conn.send(text)


manager = WSManager()
