"""
Window commands: dismiss the overlay and drive the main window
(custom titlebar buttons in the frontend call these).
"""
from fastapi import APIRouter, Depends

from break_reminder.controller import SessionController
from break_reminder.errors import BreakReminderError
from break_reminder.routers import get_controller, to_http_error

router = APIRouter(prefix="/api/windows", tags=["windows"])


@router.post("/overlay/close")
async def close_overlay_window(controller: SessionController = Depends(get_controller)):
    """Close the overlay (if open) and show the main window again."""
    try:
        controller.close_overlay()
    except BreakReminderError as e:
        raise to_http_error(e)
    return {"status": "ok"}


@router.post("/main/hide")
async def hide_main_window(controller: SessionController = Depends(get_controller)):
    try:
        controller.hide_main()
    except BreakReminderError as e:
        raise to_http_error(e)
    return {"status": "ok"}


@router.post("/main/show")
async def show_main_window(controller: SessionController = Depends(get_controller)):
    try:
        controller.show_main()
    except BreakReminderError as e:
        raise to_http_error(e)
    return {"status": "ok"}


@router.post("/main/minimize")
async def minimize_window(controller: SessionController = Depends(get_controller)):
    try:
        controller.minimize()
    except BreakReminderError as e:
        raise to_http_error(e)
    return {"status": "ok"}


@router.post("/main/maximize")
async def maximize_window(controller: SessionController = Depends(get_controller)):
    """Toggle maximized state. Returns the state after the toggle."""
    try:
        maximized = controller.toggle_maximize()
    except BreakReminderError as e:
        raise to_http_error(e)
    return {"status": "ok", "maximized": maximized}


@router.post("/main/close")
async def close_window(controller: SessionController = Depends(get_controller)):
    try:
        controller.close_main()
    except BreakReminderError as e:
        raise to_http_error(e)
    return {"status": "ok"}
