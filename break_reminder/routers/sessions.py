"""
Session commands: start/stop the break session, query its status,
and let the overlay window fetch its own display parameters.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from break_reminder.controller import SessionController
from break_reminder.errors import BreakReminderError
from break_reminder.models import OverlayConfig, SessionConfig, SessionPhase
from break_reminder.routers import get_controller, to_http_error

router = APIRouter(prefix="/api/session", tags=["session"])


class StartSessionRequest(BaseModel):
    duration_minutes: int = Field(ge=0)
    message: str = ""
    overlay_delay_seconds: int = Field(default=0, ge=0)


class RemainingResponse(BaseModel):
    phase: SessionPhase
    remaining_seconds: Optional[int] = None


@router.post("/start")
async def start_session(
    req: StartSessionRequest,
    controller: SessionController = Depends(get_controller),
):
    """Start a session. Replaces any session already running."""
    try:
        controller.start(req.duration_minutes, req.message, req.overlay_delay_seconds)
    except BreakReminderError as e:
        raise to_http_error(e)
    return {"status": "ok"}


@router.get("/status", response_model=Optional[SessionConfig])
async def get_session_status(controller: SessionController = Depends(get_controller)):
    """The active session, or null if there is none."""
    try:
        return controller.get_status()
    except BreakReminderError as e:
        raise to_http_error(e)


@router.post("/stop")
async def stop_session(controller: SessionController = Depends(get_controller)):
    try:
        controller.stop()
    except BreakReminderError as e:
        raise to_http_error(e)
    return {"status": "ok"}


@router.get("/config", response_model=OverlayConfig)
async def get_session_config(controller: SessionController = Depends(get_controller)):
    """Display parameters for the overlay window. 404 until an overlay has been shown."""
    try:
        return controller.get_overlay_config()
    except BreakReminderError as e:
        raise to_http_error(e)


@router.get("/remaining", response_model=RemainingResponse)
async def get_remaining(controller: SessionController = Depends(get_controller)):
    """Countdown for the main window: current phase and seconds left."""
    try:
        return RemainingResponse(
            phase=controller.phase(),
            remaining_seconds=controller.remaining_seconds(),
        )
    except BreakReminderError as e:
        raise to_http_error(e)
