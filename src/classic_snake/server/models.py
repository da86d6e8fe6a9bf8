"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from classic_snake.state import Phase


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    tick_rate_ms: int | None = Field(default=None, ge=50, le=2000)
    seed: int | None = Field(default=None, ge=0)


class HeadingRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/heading."""

    direction: Literal["up", "down", "left", "right"]


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    phase: Phase
    score: int
    high_score: int
    tick_rate_ms: int


class HighScoreResponse(BaseModel):
    high_score: int


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
