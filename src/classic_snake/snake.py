"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from dataclasses import dataclass

Cell = tuple[int, int]


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) values; y grows downward."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_reverse_of(self, other: Direction) -> bool:
        """True if turning from *other* to this heading is a 180° reversal."""
        return other.opposite is self


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Snake:
    """An immutable snake stored as a tuple of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. Movement returns a
    new ``Snake`` rather than mutating in place, so game-state snapshots
    can share instances safely.
    """

    body: tuple[Cell, ...]

    def __post_init__(self) -> None:
        if not self.body:
            raise ValueError("Snake length must be at least 1.")

    @classmethod
    def at(cls, x: int, y: int) -> Snake:
        """Build a single-cell snake."""
        return cls(((x, y),))

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def next_head(self, direction: Direction) -> Cell:
        """Compute the next head position without moving."""
        dx, dy = direction.value
        x, y = self.head
        return x + dx, y + dy

    def advance(self, new_head: Cell, grow: bool = False) -> Snake:
        """Prepend *new_head*, dropping the tail unless the snake grows."""
        kept = self.body if grow else self.body[:-1]
        return Snake((new_head, *kept))

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "length": len(self.body),
        }
