"""Handler-level tests that drive ConnectionHandler directly with fake sockets."""

from __future__ import annotations

import asyncio

import pytest

from tictactoe.ws_handlers import ConnectionHandler


class RecordingConnection:
    """Connection whose send yields to the loop, so concurrent broadcasts can interleave."""

    def __init__(self, conn_id: str):
        self.conn_id = conn_id
        self.frames: list[str] = []

    async def send(self, text: str) -> bool:
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        self.frames.append(text)
        return True


@pytest.mark.asyncio
@pytest.mark.parametrize("winner_first", [True, False])
async def test_racing_moves_reach_both_players_in_one_order(registry, winner_first: bool) -> None:
    registry.enforce_turns = False
    a, b = RecordingConnection("a"), RecordingConnection("b")
    ha, hb = ConnectionHandler(a), ConnectionHandler(b)

    await ha.handle_message("CREATE GAME abc")
    await hb.handle_message("JOIN GAME abc")
    for handler, raw in [(ha, "MOVE 0 0"), (hb, "MOVE 1 0"), (ha, "MOVE 0 1"), (hb, "MOVE 1 1")]:
        assert await handler.handle_message(raw)
    a.frames.clear()
    b.frames.clear()

    racers = [ha.handle_message("MOVE 0 2"), hb.handle_message("MOVE 2 2")]
    if not winner_first:
        racers.reverse()
    await asyncio.gather(*racers)

    shared_a = [f for f in a.frames if not f.startswith("ERROR:")]
    shared_b = [f for f in b.frames if not f.startswith("ERROR:")]
    assert shared_a == shared_b
    assert shared_a[-1] == "GAME OVER X WIN"
    if winner_first:
        assert shared_a == ["GAME OVER X WIN"]
        assert b.frames[-1] == "ERROR: game is not ready"
    else:
        assert shared_a == ["MOVE O 2 2", "GAME OVER X WIN"]
