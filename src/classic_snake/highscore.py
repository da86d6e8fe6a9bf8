"""Best-score persistence collaborators."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """Key-value style storage for the best score across sessions."""

    def read(self) -> int:
        """Return the stored best score, or 0 when none is stored."""
        ...

    def write(self, score: int) -> None:
        """Persist *score* as the new best."""
        ...


class MemoryHighScoreStore:
    """Process-local store, used by tests and throwaway sessions."""

    def __init__(self, score: int = 0) -> None:
        self.score = score
        self.writes = 0

    def read(self) -> int:
        return self.score

    def write(self, score: int) -> None:
        self.score = score
        self.writes += 1


class JsonHighScoreStore:
    """Stores the best score in a small JSON document on disk.

    A missing file reads as 0. Malformed contents raise ``ValueError`` so
    callers can decide how to degrade.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def read(self) -> int:
        if not self.path.exists():
            return 0
        try:
            raw = json.loads(self.path.read_text())
        except json.JSONDecodeError as exc:
            raise ValueError(f"Corrupt high score file {self.path}.") from exc
        score = raw.get("high_score", 0) if isinstance(raw, dict) else None
        if not isinstance(score, int) or isinstance(score, bool) or score < 0:
            raise ValueError(f"Invalid high score in {self.path}: {score!r}")
        return score

    def write(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps({"high_score": int(score)}))
        tmp.replace(self.path)
        logger.info("High score %d saved to %s", score, self.path)

    def clear(self) -> None:
        """Forget the stored best score."""
        self.path.unlink(missing_ok=True)
        logger.info("High score cleared at %s", self.path)
