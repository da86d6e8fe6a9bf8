"""Notable game events and the sinks that receive them."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventKind(str, enum.Enum):
    STARTED = "started"
    FOOD_EATEN = "food_eaten"
    NEW_HIGH_SCORE = "new_high_score"
    GAME_OVER = "game_over"
    PAUSED = "paused"
    RESUMED = "resumed"
    RESET = "reset"


@dataclass(frozen=True)
class GameEvent:
    """A human-readable notification emitted by a state transition."""

    kind: EventKind
    message: str
    score: int = 0

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "score": self.score,
        }


NotificationSink = Callable[[GameEvent], None]


def started() -> GameEvent:
    return GameEvent(
        EventKind.STARTED, "Game started! Use arrow keys or WASD to move.",
    )


def food_eaten(score: int) -> GameEvent:
    return GameEvent(EventKind.FOOD_EATEN, f"Score: {score}", score)


def new_high_score(score: int) -> GameEvent:
    return GameEvent(
        EventKind.NEW_HIGH_SCORE, f"New high score: {score}!", score,
    )


def game_over(score: int) -> GameEvent:
    return GameEvent(
        EventKind.GAME_OVER, f"Game over! Final score: {score}", score,
    )


def paused(score: int) -> GameEvent:
    return GameEvent(EventKind.PAUSED, "Game paused", score)


def resumed(score: int) -> GameEvent:
    return GameEvent(EventKind.RESUMED, "Game resumed", score)


def reset() -> GameEvent:
    return GameEvent(EventKind.RESET, "Game reset")


class LoggingNotifier:
    """Notification sink that writes every event to the log."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def __call__(self, event: GameEvent) -> None:
        logger.log(self.level, "[%s] %s", event.kind.value, event.message)
