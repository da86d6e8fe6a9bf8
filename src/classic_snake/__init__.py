"""Classic Snake single-player game engine."""

__version__ = "0.1.0"

from classic_snake.config import GameConfig
from classic_snake.engine import GameEngine
from classic_snake.events import EventKind, GameEvent, LoggingNotifier
from classic_snake.grid import CellType, Grid
from classic_snake.highscore import (
    HighScoreStore,
    JsonHighScoreStore,
    MemoryHighScoreStore,
)
from classic_snake.snake import Direction, Snake
from classic_snake.state import GameState, Phase

__all__ = [
    "CellType",
    "Direction",
    "EventKind",
    "GameConfig",
    "GameEngine",
    "GameEvent",
    "GameState",
    "Grid",
    "HighScoreStore",
    "JsonHighScoreStore",
    "LoggingNotifier",
    "MemoryHighScoreStore",
    "Phase",
    "Snake",
]
