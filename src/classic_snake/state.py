"""Immutable game-state snapshot and lifecycle phases."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from classic_snake.grid import Grid
from classic_snake.snake import Cell, Direction, Snake


class Phase(str, enum.Enum):
    """Lifecycle states of a single game."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass(frozen=True)
class GameState:
    """Everything the engine knows about one game at one instant.

    Instances are never mutated; transitions build new ones with
    :meth:`evolve`.
    """

    snake: Snake
    food: Cell | None
    heading: Direction
    score: int = 0
    phase: Phase = Phase.IDLE

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.OVER

    @property
    def is_paused(self) -> bool:
        return self.phase is Phase.PAUSED

    @property
    def is_running(self) -> bool:
        return self.phase is Phase.RUNNING

    def evolve(self, **changes) -> GameState:
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "phase": self.phase.value,
            "score": self.score,
            "is_over": self.is_over,
            "is_paused": self.is_paused,
            "heading": self.heading.name.lower(),
            "snake": self.snake.to_dict(),
            "food": list(self.food) if self.food is not None else None,
        }


def initial_state(grid: Grid) -> GameState:
    """The idle board shown before the first start and after a reset."""
    x, y = grid.center
    idle_food = (grid.size * 3 // 4, grid.size * 3 // 4)
    return GameState(
        snake=Snake.at(x, y),
        food=idle_food,
        heading=Direction.RIGHT,
    )
