"""REST API route handlers for session lifecycle and commands."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from classic_snake.controls import parse_direction
from classic_snake.rules import Command, Reset, SetHeading, Start, TogglePause
from classic_snake.server.models import (
    CreateSessionRequest,
    ErrorResponse,
    HeadingRequest,
    HighScoreResponse,
    SessionSummary,
)
from classic_snake.server.session_manager import SessionManager

router = APIRouter(tags=["sessions"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


def _get_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


async def _apply(request: Request, session_id: str, command: Command) -> dict:
    try:
        return await _get_manager(request).apply(session_id, command)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Session not found.") from exc


@router.post("/sessions", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new idle game session."""
    session = _get_manager(request).create_session(
        tick_rate_ms=body.tick_rate_ms, seed=body.seed,
    )
    return session.summary()


@router.get("/sessions")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all retained sessions."""
    return _get_manager(request).list_sessions()


@router.get("/sessions/{session_id}", responses=_NOT_FOUND)
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the full game state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return {
        **session.summary().model_dump(mode="json"),
        "connections": len(session.sockets),
        "state": session.engine.get_state(),
    }


@router.post("/sessions/{session_id}/start", responses=_NOT_FOUND)
async def start_session(session_id: str, request: Request) -> dict:
    """Start (or restart) the game."""
    return await _apply(request, session_id, Start())


@router.post("/sessions/{session_id}/pause", responses=_NOT_FOUND)
async def toggle_pause(session_id: str, request: Request) -> dict:
    """Pause a running game or resume a paused one."""
    return await _apply(request, session_id, TogglePause())


@router.post("/sessions/{session_id}/reset", responses=_NOT_FOUND)
async def reset_session(session_id: str, request: Request) -> dict:
    """Return the session to the idle board."""
    return await _apply(request, session_id, Reset())


@router.post("/sessions/{session_id}/heading", responses=_NOT_FOUND)
async def set_heading(
    session_id: str, body: HeadingRequest, request: Request,
) -> dict:
    """Turn the snake; ignored unless the game is running."""
    direction = parse_direction(body.direction)
    return await _apply(request, session_id, SetHeading(direction))


@router.get("/high-score")
async def get_high_score(request: Request) -> HighScoreResponse:
    """Best score across all sessions."""
    return HighScoreResponse(high_score=_get_manager(request).high_score)
