"""Error taxonomy shared by the controller, the store and the window surface."""


class BreakReminderError(Exception):
    """Base class for every failure the controller reports to a caller."""


class ClockError(BreakReminderError):
    """System wall-clock time is unavailable."""


class StoreError(BreakReminderError):
    """Persistence read/write/flush failed, or a stored record could not be parsed."""


class DisplayError(BreakReminderError):
    """No primary display was detected."""


class WindowNotFoundError(BreakReminderError):
    """The referenced window does not currently exist."""


class NotFoundError(BreakReminderError):
    """A queried record is absent where the caller expects it."""


class WindowSurfaceError(BreakReminderError):
    """A window-surface call (show, hide, close...) failed."""
