"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from classic_snake.controls import parse_command, parse_direction, parse_key
from classic_snake.rules import Command, SetHeading
from classic_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _parse_message(raw: str) -> Command | None:
    """Decode one client frame; anything unrecognised yields ``None``.

    Accepted shapes: ``{"direction": "up"}``, ``{"key": "ArrowUp"}``,
    and ``{"command": "start" | "pause" | "reset"}``.
    """
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None

    direction = msg.get("direction")
    if isinstance(direction, str):
        parsed = parse_direction(direction)
        return SetHeading(parsed) if parsed is not None else None

    key = msg.get("key")
    if isinstance(key, str):
        return parse_key(key)

    command = msg.get("command")
    if isinstance(command, str):
        return parse_command(command)
    return None


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send commands, receive a state frame per change."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    # Send initial state snapshot so the client can draw immediately.
    await websocket.send_text(
        json.dumps(manager.snapshot(session), separators=(",", ":")),
    )

    try:
        while True:
            raw = await websocket.receive_text()
            command = _parse_message(raw)
            if command is None:
                continue
            await manager.apply(session_id, command)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    except KeyError:
        logger.info("Session %s was pruned while connected.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
