"""
Ошибки игры. Текст исключения уходит клиенту как есть: "ERROR: <reason>".
Ошибки транспорта сюда не входят (WebSocketDisconnect и сбои отправки).
"""


class GameError(Exception):
    reason = "request rejected"

    def __init__(self, reason: str | None = None):
        super().__init__(reason or self.reason)


class ProtocolError(GameError):
    reason = "malformed command"


class StateError(GameError):
    pass


class AlreadyFull(StateError):
    reason = "cannot join game"


class IdAlreadyExists(StateError):
    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"game id {game_id} already exists")


class NotFound(StateError):
    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"game id {game_id} not found")


class GameNotReady(StateError):
    reason = "game is not ready"


class NotYourTurn(StateError):
    reason = "not your turn"


class AlreadyInGame(StateError):
    reason = "already in a game"


class MoveError(GameError):
    pass


class OutOfBounds(MoveError):
    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        super().__init__(f"move {row} {col} out of bounds")


class CellOccupied(MoveError):
    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        super().__init__(f"cell {row} {col} occupied")
