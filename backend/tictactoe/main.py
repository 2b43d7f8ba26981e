"""
Tic-tac-toe API и WebSocket.
"""
import logging

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .pairing import registry
from .ws_handlers import ws_game_loop
from .ws_manager import manager

config = get_config()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Tic-tac-toe API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/stats")
async def stats():
    return {
        "games": await registry.counts(),
        "connections": manager.count(),
        "match_mode": get_config().match_mode,
    }


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    logger.info("WS: connection attempt from %s", ws.client)
    await ws_game_loop(ws)


def run() -> None:
    import uvicorn

    logger.info("Listening on ws://%s:%s/ws", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()
