"""Square play-field geometry and cell-code rasterization."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from classic_snake.snake import Cell
    from classic_snake.state import GameState

MIN_GRID_SIZE = 4


class CellType(enum.IntEnum):
    """Integer codes stored in a rendered grid array."""

    EMPTY = 0
    BODY = 1
    HEAD = 2
    FOOD = 3


class Grid:
    """A ``size x size`` board with a top-left origin.

    Coordinates are (x, y) pairs; rendered arrays are indexed ``[y, x]``
    so that rows run top to bottom, matching the screen.
    """

    def __init__(self, size: int = 20) -> None:
        if size < MIN_GRID_SIZE:
            raise ValueError(
                f"Grid size must be at least {MIN_GRID_SIZE}, got {size}.",
            )
        self.size = size

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    @property
    def center(self) -> Cell:
        return self.size // 2, self.size // 2

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a coordinate lies within the grid."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def render(self, state: GameState) -> np.ndarray:
        """Rasterize a snapshot into an ``int8`` matrix of :class:`CellType`."""
        cells = np.zeros((self.size, self.size), dtype=np.int8)
        if state.food is not None:
            fx, fy = state.food
            cells[fy, fx] = CellType.FOOD
        for x, y in state.snake.body[1:]:
            cells[y, x] = CellType.BODY
        hx, hy = state.snake.head
        cells[hy, hx] = CellType.HEAD
        return cells

    def to_dict(self, state: GameState) -> dict:
        """Serialize the rendered grid to a dictionary."""
        return {
            "size": self.size,
            "cells": self.render(state).tolist(),
        }
