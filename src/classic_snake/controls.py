"""Keyboard and text input mapping onto engine commands."""

from __future__ import annotations

from classic_snake.rules import Command, Reset, SetHeading, Start, TogglePause
from classic_snake.snake import Direction

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

# Browser ``KeyboardEvent.key`` values and pygame key names, lower-cased.
_KEY_BINDINGS: dict[str, Command] = {
    "arrowup": SetHeading(Direction.UP),
    "up": SetHeading(Direction.UP),
    "w": SetHeading(Direction.UP),
    "arrowdown": SetHeading(Direction.DOWN),
    "down": SetHeading(Direction.DOWN),
    "s": SetHeading(Direction.DOWN),
    "arrowleft": SetHeading(Direction.LEFT),
    "left": SetHeading(Direction.LEFT),
    "a": SetHeading(Direction.LEFT),
    "arrowright": SetHeading(Direction.RIGHT),
    "right": SetHeading(Direction.RIGHT),
    "d": SetHeading(Direction.RIGHT),
    " ": TogglePause(),
    "space": TogglePause(),
    "p": TogglePause(),
    "enter": Start(),
    "return": Start(),
    "r": Reset(),
}

_COMMAND_NAMES: dict[str, Command] = {
    "start": Start(),
    "pause": TogglePause(),
    "resume": TogglePause(),
    "toggle_pause": TogglePause(),
    "reset": Reset(),
}


def parse_direction(name: str) -> Direction | None:
    """Map ``"up"``/``"down"``/``"left"``/``"right"`` to a heading."""
    return _DIRECTION_MAP.get(name.strip().lower())


def parse_key(key: str) -> Command | None:
    """Map a key name (arrow keys, WASD, space/P, Enter, R) to a command."""
    if key == " ":
        return _KEY_BINDINGS[key]
    return _KEY_BINDINGS.get(key.strip().lower())


def parse_command(name: str) -> Command | None:
    """Map a command word such as ``"start"`` or ``"pause"`` to a command."""
    return _COMMAND_NAMES.get(name.strip().lower())
