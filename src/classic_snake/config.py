"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from classic_snake.grid import MIN_GRID_SIZE

logger = logging.getLogger(__name__)

DEFAULT_HIGH_SCORE_PATH = str(Path.home() / ".classic_snake" / "high_score.json")


@dataclass(frozen=True)
class GameConfig:
    """Tunables for one game.

    Supports JSON serialization so a setup can be saved and reused.
    """

    grid_size: int = 20
    tick_rate_ms: int = 150
    food_reward: int = 10

    # Desktop front end
    cell_px: int = 20

    # Persistence
    high_score_path: str = DEFAULT_HIGH_SCORE_PATH

    def __post_init__(self) -> None:
        if self.grid_size < MIN_GRID_SIZE:
            raise ValueError(f"grid_size must be at least {MIN_GRID_SIZE}.")
        if self.tick_rate_ms <= 0:
            raise ValueError("tick_rate_ms must be positive.")
        if self.food_reward < 1:
            raise ValueError("food_reward must be at least 1.")
        if self.cell_px < 2:
            raise ValueError("cell_px must be at least 2.")

    @property
    def tick_interval(self) -> float:
        """Tick period in seconds."""
        return self.tick_rate_ms / 1000.0

    def to_dict(self) -> dict:
        return asdict(self)

    def with_overrides(self, **overrides) -> GameConfig:
        """Return a copy with every non-``None`` override applied."""
        d = self.to_dict()
        d.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig(**d)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file, ignoring unknown keys."""
        raw = json.loads(Path(path).read_text())
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in raw.items() if k in known})
