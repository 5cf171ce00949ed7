from __future__ import annotations

from enum import Enum

from sqlmodel import SQLModel, Field


class StoreEntry(SQLModel, table=True):
    key: str = Field(primary_key=True, index=True)
    value: str


class SessionPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVERLAY_SHOWN = "overlay_shown"


class SessionConfig(SQLModel):
    """The single active session, stored under ``active-session``."""

    duration_minutes: int = Field(ge=0)
    message: str = ""
    overlay_delay_seconds: int = Field(ge=0)
    start_time: int = Field(ge=0)


class OverlayConfig(SQLModel):
    """What the overlay window needs to render itself, stored under ``session-config``."""

    message: str = ""
    delay_seconds: int = Field(ge=0)
