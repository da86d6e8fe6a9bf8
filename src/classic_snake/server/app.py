"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from classic_snake import __version__
from classic_snake.config import GameConfig
from classic_snake.highscore import HighScoreStore, JsonHighScoreStore
from classic_snake.server.routes import router
from classic_snake.server.session_manager import SessionManager
from classic_snake.server.websocket import ws_router


def create_app(
    config: GameConfig | None = None,
    store: HighScoreStore | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Without an explicit *store* the best score lives in the JSON file named
    by ``config.high_score_path``.
    """
    config = config or GameConfig()
    if store is None:
        store = JsonHighScoreStore(config.high_score_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(config, store=store)
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Classic Snake API", version=__version__, lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
