"""
Текстовый протокол: разбор входящих кадров и сборка исходящих.
Кадр — строка UTF-8 без переводов строки, токены через пробел, регистр важен.
"""
from dataclasses import dataclass

from .errors import GameError, ProtocolError
from .game import MoveResult


@dataclass(frozen=True)
class CreateGame:
    game_id: str


@dataclass(frozen=True)
class JoinGame:
    game_id: str


@dataclass(frozen=True)
class Move:
    row: int
    col: int


@dataclass(frozen=True)
class ShowBoard:
    pass


Command = CreateGame | JoinGame | Move | ShowBoard


def _coordinate(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ProtocolError(f"invalid coordinate {token}") from None


def parse_command(text: str) -> Command:
    """Разобрать кадр в команду или поднять ProtocolError."""
    parts = text.split()
    if not parts:
        raise ProtocolError("empty command")
    head, args = parts[0], parts[1:]
    if head in ("CREATE", "JOIN"):
        if len(args) != 2 or args[0] != "GAME":
            raise ProtocolError(f"usage: {head} GAME <id>")
        return CreateGame(args[1]) if head == "CREATE" else JoinGame(args[1])
    if head == "MOVE":
        if len(args) != 2:
            raise ProtocolError("usage: MOVE <row> <col>")
        return Move(_coordinate(args[0]), _coordinate(args[1]))
    if head == "BOARD":
        if args:
            raise ProtocolError("usage: BOARD")
        return ShowBoard()
    raise ProtocolError(f"unknown command {head}")


def player_message(number: int) -> str:
    return f"PLAYER {number}"


def game_created_message(game_id: str) -> str:
    return f"GAME CREATED {game_id}"


def move_message(result: MoveResult) -> str:
    return f"MOVE {result.mark.value} {result.row} {result.col}"


def game_over_message(result: MoveResult) -> str:
    if result.winner is not None:
        return f"GAME OVER {result.winner.value} WIN"
    return "GAME OVER DRAW"


def board_message(board_text: str) -> str:
    # строки поля через '/', чтобы кадр остался однострочным
    return "BOARD " + board_text.replace("\n", "/")


def error_message(error: GameError | str) -> str:
    return f"ERROR: {error}"
