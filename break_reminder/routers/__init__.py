from fastapi import HTTPException, Request

from break_reminder.controller import SessionController
from break_reminder.errors import (
    BreakReminderError,
    DisplayError,
    NotFoundError,
    WindowNotFoundError,
)


def get_controller(request: Request) -> SessionController:
    # Handlers using this are async def: they must run on the event loop so
    # DelayedAction can schedule on it. Store calls are short SQLite queries.
    return request.app.state.controller


def to_http_error(error: BreakReminderError) -> HTTPException:
    """Map a controller error to an HTTP error, keeping its message as the detail."""
    if isinstance(error, (WindowNotFoundError, NotFoundError)):
        status_code = 404
    elif isinstance(error, DisplayError):
        status_code = 503
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail=str(error))
