"""Pygame desktop front end: board rendering and the keyboard loop."""

from __future__ import annotations

import logging

import numpy as np
import pygame

from classic_snake.config import GameConfig
from classic_snake.controls import parse_key
from classic_snake.engine import GameEngine
from classic_snake.events import GameEvent, LoggingNotifier
from classic_snake.grid import CellType, Grid
from classic_snake.highscore import HighScoreStore
from classic_snake.state import GameState, Phase

logger = logging.getLogger(__name__)

BACKGROUND = (15, 23, 42)
GRID_LINE = (30, 41, 59)
HEAD = (16, 185, 129)
BODY = (5, 150, 105)
FOOD = (239, 68, 68)
TEXT = (226, 232, 240)
HIGHLIGHT = (250, 204, 21)

STATUS_BAR_PX = 48
FPS = 60

_CELL_COLORS = {
    CellType.BODY: BODY,
    CellType.HEAD: HEAD,
    CellType.FOOD: FOOD,
}


class BoardRenderer:
    """Draws snapshots onto a square area of a pygame surface."""

    def __init__(
        self,
        surface: pygame.Surface,
        grid: Grid,
        cell_px: int,
        top: int = 0,
    ) -> None:
        self.surface = surface
        self.grid = grid
        self.cell_px = cell_px
        self.top = top

    @property
    def side_px(self) -> int:
        return self.grid.size * self.cell_px

    def draw(self, state: GameState) -> None:
        side = self.side_px
        pygame.draw.rect(self.surface, BACKGROUND, (0, self.top, side, side))

        for i in range(self.grid.size + 1):
            # The closing line sits on the last pixel so it stays visible.
            offset = min(i * self.cell_px, side - 1)
            pygame.draw.line(
                self.surface, GRID_LINE,
                (offset, self.top), (offset, self.top + side - 1),
            )
            pygame.draw.line(
                self.surface, GRID_LINE,
                (0, self.top + offset), (side - 1, self.top + offset),
            )

        cells = self.grid.render(state)
        for y, x in np.argwhere(cells != CellType.EMPTY):
            self.fill_cell(int(x), int(y), _CELL_COLORS[CellType(int(cells[y, x]))])

    def fill_cell(self, x: int, y: int, color: tuple[int, int, int]) -> None:
        # One pixel of padding keeps the grid lines visible.
        rect = pygame.Rect(
            x * self.cell_px + 1,
            self.top + y * self.cell_px + 1,
            self.cell_px - 2,
            self.cell_px - 2,
        )
        pygame.draw.rect(self.surface, color, rect)


class StatusBar:
    """Score, best score, and the latest notification."""

    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self.surface = surface
        self.font = font
        self.message = "Press Enter to start"

    def __call__(self, event: GameEvent) -> None:
        self.message = event.message

    def draw(self, state: GameState, high_score: int) -> None:
        width = self.surface.get_width()
        pygame.draw.rect(self.surface, BACKGROUND, (0, 0, width, STATUS_BAR_PX))
        score = self.font.render(f"Score: {state.score}", True, TEXT)
        best = self.font.render(f"High: {high_score}", True, HIGHLIGHT)
        self.surface.blit(score, (8, 4))
        self.surface.blit(best, (width - best.get_width() - 8, 4))

        line = self.message
        if state.phase is Phase.PAUSED:
            line = "Paused (Space to resume)"
        note = self.font.render(line, True, TEXT)
        self.surface.blit(note, (8, 4 + self.font.get_linesize()))


class TickClock:
    """Turns frame time into whole engine ticks while a game is running."""

    def __init__(self, tick_rate_ms: int) -> None:
        self.tick_rate_ms = tick_rate_ms
        self.elapsed_ms = 0

    def due(self, phase: Phase, dt_ms: int) -> int:
        """Return how many ticks to run after *dt_ms* of wall time."""
        if phase is not Phase.RUNNING:
            self.elapsed_ms = 0
            return 0
        self.elapsed_ms += dt_ms
        ticks, self.elapsed_ms = divmod(self.elapsed_ms, self.tick_rate_ms)
        return ticks


def handle_key(engine: GameEngine, key_name: str) -> bool:
    """Route one key press to the engine. Returns False to quit."""
    if key_name in ("escape", "q"):
        return False
    command = parse_key(key_name)
    if command is not None:
        engine.dispatch(command)
    return True


def run(
    config: GameConfig,
    store: HighScoreStore,
    seed: int | None = None,
) -> int:
    """Open the game window and play until it is closed.

    Returns the score of the last game.
    """
    engine = GameEngine(config, store=store, seed=seed)
    engine.add_listener(LoggingNotifier())

    pygame.init()
    try:
        side = config.grid_size * config.cell_px
        screen = pygame.display.set_mode((side, side + STATUS_BAR_PX))
        pygame.display.set_caption("Classic Snake")
        font = pygame.font.Font(None, 22)

        status = StatusBar(screen, font)
        engine.add_listener(status)
        board = BoardRenderer(screen, engine.grid, config.cell_px, top=STATUS_BAR_PX)
        ticker = TickClock(config.tick_rate_ms)
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and not handle_key(
                    engine, pygame.key.name(event.key),
                ):
                    running = False

            dt = clock.tick(FPS)
            for _ in range(ticker.due(engine.phase, dt)):
                engine.advance_tick()

            state = engine.state
            status.draw(state, engine.high_score)
            board.draw(state)
            pygame.display.flip()
    finally:
        pygame.quit()

    logger.info("Window closed with score %d.", engine.score)
    return engine.score
