"""In-memory session registry, command routing, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from classic_snake.config import GameConfig
from classic_snake.engine import GameEngine
from classic_snake.events import EventKind, GameEvent
from classic_snake.highscore import HighScoreStore, MemoryHighScoreStore
from classic_snake.rules import Command
from classic_snake.server.models import SessionSummary
from classic_snake.state import Phase

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100


@dataclass
class Session:
    """One single-player game plus the sockets watching it."""

    session_id: str
    engine: GameEngine
    tick_rate_ms: int
    sockets: list[WebSocket] = field(default_factory=list)
    pending_events: list[GameEvent] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def ticking(self) -> bool:
        return self._task is not None and not self._task.done()

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            phase=self.engine.phase,
            score=self.engine.score,
            high_score=self.engine.high_score,
            tick_rate_ms=self.tick_rate_ms,
        )


class SessionManager:
    """Central registry managing all game sessions.

    Every session has at most one tick task. The task runs only while the
    session's engine is ``RUNNING``; pause, game over, and reset cancel it
    before the command that caused them returns.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self.config = config or GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self._sessions: dict[str, Session] = {}
        self._max_finished_sessions = max_finished_sessions

    @property
    def high_score(self) -> int:
        """Best score known to any live session or the store."""
        best = max((s.engine.high_score for s in self._sessions.values()), default=0)
        try:
            return max(best, self.store.read())
        except Exception:
            logger.warning("Could not read high score from store.", exc_info=True)
            return best

    def create_session(
        self,
        tick_rate_ms: int | None = None,
        seed: int | None = None,
    ) -> Session:
        """Create an idle session and return it."""
        config = self.config.with_overrides(tick_rate_ms=tick_rate_ms)
        engine = GameEngine(config, store=self.store, seed=seed)
        engine.high_score = max(engine.high_score, self.high_score)

        session_id = uuid.uuid4().hex[:12]
        session = Session(
            session_id=session_id,
            engine=engine,
            tick_rate_ms=config.tick_rate_ms,
        )
        engine.add_listener(session.pending_events.append)
        engine.add_listener(self._share_high_score)
        self._sessions[session_id] = session
        logger.info("Session %s created (tick=%dms).", session_id, config.tick_rate_ms)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def apply(self, session_id: str, command: Command) -> dict:
        """Run *command* against a session and broadcast the result."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")

        async with session.lock:
            session.engine.dispatch(command)
            payload = self._drain(session)
            self._sync_driver(session)
        await self._broadcast(session, payload)
        return payload

    def snapshot(self, session: Session) -> dict:
        return {"state": session.engine.get_state(), "events": []}

    def _drain(self, session: Session) -> dict:
        events = [e.to_dict() for e in session.pending_events]
        session.pending_events.clear()
        return {"state": session.engine.get_state(), "events": events}

    def _share_high_score(self, event: GameEvent) -> None:
        if event.kind is not EventKind.NEW_HIGH_SCORE:
            return
        for other in self._sessions.values():
            if other.engine.high_score < event.score:
                other.engine.high_score = event.score

    # -- tick driver ------------------------------------------------------

    def _sync_driver(self, session: Session) -> None:
        """Start or stop the tick task to match the engine phase."""
        phase = session.engine.phase
        if session.engine.state.is_running:
            session.finished_at = None
            if not session.ticking:
                session._task = asyncio.create_task(self._tick_loop(session))
            return

        self._stop_driver(session)
        if phase is Phase.OVER:
            self._mark_session_finished(session)

    def _stop_driver(self, session: Session) -> None:
        task = session._task
        session._task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    async def _tick_loop(self, session: Session) -> None:
        """Advance the engine every tick while it is running."""
        tick_interval = session.engine.config.tick_interval
        try:
            while True:
                await asyncio.sleep(tick_interval)
                async with session.lock:
                    if not session.engine.state.is_running:
                        break
                    session.engine.advance_tick()
                    payload = self._drain(session)
                    if session.engine.game_over:
                        self._mark_session_finished(session)
                await self._broadcast(session, payload)
                if session.engine.game_over:
                    break
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.session_id)
        finally:
            if session._task is asyncio.current_task():
                session._task = None
            if session.finished_at is not None:
                self._prune_finished_sessions()

    def _mark_session_finished(self, session: Session) -> None:
        """Timestamp a session's game over exactly once."""
        if session.finished_at is None:
            session.finished_at = time.monotonic()
            logger.info(
                "Session %s finished with score %d.",
                session.session_id, session.engine.score,
            )

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded registry growth."""
        finished = [
            s for s in self._sessions.values()
            if s.finished_at is not None and not s.sockets
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(key=lambda s: s.finished_at)
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def _broadcast(self, session: Session, payload: dict) -> None:
        """Send a state frame to every socket attached to the session."""
        text = json.dumps(payload, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the
        # live list without affecting this send loop.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(text)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [s._task for s in self._sessions.values() if s.ticking]
        for session in self._sessions.values():
            self._stop_driver(session)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
