import pytest
from fastapi.testclient import TestClient

from tictactoe import main, ws_handlers
from tictactoe.config import get_config
from tictactoe.constants import MATCH_MODE_AUTO, MATCH_MODE_NAMED
from tictactoe.pairing import SessionRegistry


class FakeConnection:
    """Stand-in for a live connection; compared by identity like the real one."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"FakeConnection({self.name})"


@pytest.fixture()
def registry(monkeypatch) -> SessionRegistry:
    """Isolate tests with a fresh registry in the handlers and the HTTP API."""
    fresh = SessionRegistry(enforce_turns=True)
    monkeypatch.setattr(ws_handlers, "registry", fresh)
    monkeypatch.setattr(main, "registry", fresh)
    return fresh


@pytest.fixture()
def named_mode(monkeypatch) -> None:
    monkeypatch.setattr(get_config(), "match_mode", MATCH_MODE_NAMED)


@pytest.fixture()
def auto_mode(monkeypatch) -> None:
    monkeypatch.setattr(get_config(), "match_mode", MATCH_MODE_AUTO)


@pytest.fixture()
def client(registry):
    with TestClient(main.app) as test_client:
        yield test_client
