"""Food placement by rejection sampling."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from classic_snake.grid import Grid
    from classic_snake.snake import Cell, Snake

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food on uniformly random cells not occupied by the snake.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self, snake: Snake) -> Cell | None:
        """Draw cells until one is free of the snake.

        Returns ``None`` when the snake covers the whole board.
        """
        occupied = set(snake.body)
        if len(occupied) >= self.grid.cell_count:
            logger.warning("No free cells available for food spawning.")
            return None

        while True:
            x, y = self.rng.integers(0, self.grid.size, size=2)
            candidate = (int(x), int(y))
            if candidate not in occupied:
                return candidate
