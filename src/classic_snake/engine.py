"""Stateful game engine wrapping the pure transition rules."""

from __future__ import annotations

import logging
import threading

import numpy as np

from classic_snake.config import GameConfig
from classic_snake.events import EventKind, GameEvent, NotificationSink
from classic_snake.food import FoodSpawner
from classic_snake.grid import Grid
from classic_snake.highscore import HighScoreStore, MemoryHighScoreStore
from classic_snake.rules import (
    Command,
    Reset,
    Rules,
    SetHeading,
    Start,
    Tick,
    TogglePause,
    transition,
)
from classic_snake.snake import Direction
from classic_snake.state import GameState, Phase, initial_state

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake, tick-based game engine.

    The engine owns the current :class:`GameState` and funnels every
    command through :func:`classic_snake.rules.transition` behind one
    lock, so a timer thread and an input thread may drive it together.
    Each command returns the resulting snapshot; events go to the
    registered notification sinks once the lock is released.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.grid = Grid(self.config.grid_size)
        self.rng = np.random.default_rng(seed)
        self.rules = Rules(
            grid=self.grid,
            spawner=FoodSpawner(self.grid, rng=self.rng),
            food_reward=self.config.food_reward,
        )
        self.store = store if store is not None else MemoryHighScoreStore()
        self.high_score = self._read_high_score()
        self.state: GameState = initial_state(self.grid)
        self._listeners: list[NotificationSink] = []
        self._lock = threading.Lock()

    # -- commands ---------------------------------------------------------

    def start(self) -> GameState:
        """Begin a fresh game from any phase."""
        return self.dispatch(Start())

    def reset(self) -> GameState:
        """Return to the idle board, discarding the current game."""
        return self.dispatch(Reset())

    def set_heading(self, direction: Direction) -> GameState:
        """Turn for the next tick; reversals and repeats are ignored."""
        return self.dispatch(SetHeading(direction))

    def toggle_pause(self) -> GameState:
        return self.dispatch(TogglePause())

    def advance_tick(self) -> GameState:
        """Advance the game by one tick."""
        return self.dispatch(Tick())

    def dispatch(self, command: Command) -> GameState:
        """Apply *command* atomically and notify listeners."""
        with self._lock:
            result = transition(self.state, command, self.rules, self.high_score)
            if result.changed:
                self.state = result.state
            if result.high_score is not None:
                self._record_high_score(result.high_score)
            state = self.state

        for event in result.events:
            if event.kind is EventKind.GAME_OVER:
                logger.info(
                    "Snake died at length %d with score %d.",
                    len(state.snake), state.score,
                )
            self._notify(event)
        return state

    # -- queries ----------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def game_over(self) -> bool:
        return self.state.is_over

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        state = self.state
        return {
            **state.to_dict(),
            "high_score": self.high_score,
            "grid": self.grid.to_dict(state),
        }

    # -- collaborators ----------------------------------------------------

    def add_listener(self, sink: NotificationSink) -> None:
        self._listeners.append(sink)

    def remove_listener(self, sink: NotificationSink) -> None:
        if sink in self._listeners:
            self._listeners.remove(sink)

    def _notify(self, event: GameEvent) -> None:
        for sink in list(self._listeners):
            try:
                sink(event)
            except Exception:
                logger.exception("Notification sink failed on %s.", event.kind.value)

    def _read_high_score(self) -> int:
        try:
            return self.store.read()
        except Exception:
            logger.warning("Could not read high score; starting from 0.", exc_info=True)
            return 0

    def _record_high_score(self, score: int) -> None:
        self.high_score = score
        try:
            self.store.write(score)
        except Exception:
            logger.warning("Could not persist high score %d.", score, exc_info=True)
