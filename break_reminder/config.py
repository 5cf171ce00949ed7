"""Configuration for the Break Reminder backend, read from the environment / .env."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    value = (os.getenv(name) or "").strip()
    if not value:
        return default
    try:
        number = int(value)
    except ValueError:
        logger.warning(f"{name}={value!r} is not an integer, using {default}")
        return default
    if number < minimum:
        logger.warning(f"{name}={number} is below {minimum}, using {minimum}")
        return minimum
    return number


# Persistence (SQLite file holding the key-value store)
DATABASE_URL = os.getenv("BREAK_REMINDER_DATABASE_URL", "sqlite:///break_reminder.db")

# Overlay behaviour
# Auto-close is disabled by default: the overlay stays up until dismissed manually.
AUTO_CLOSE_ENABLED = _env_flag("BREAK_REMINDER_AUTO_CLOSE", False)
DEFAULT_OVERLAY_DELAY_SECONDS = _env_int("BREAK_REMINDER_DEFAULT_OVERLAY_DELAY", 5, minimum=1)

# Headless window surface: primary monitor as WIDTHxHEIGHT@SCALE (empty = no display)
PRIMARY_MONITOR = os.getenv("BREAK_REMINDER_PRIMARY_MONITOR", "1920x1080@1.0")

# Frontend origins allowed to call the API (Tauri dev server by default)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("BREAK_REMINDER_CORS_ORIGINS", "http://localhost:1420").split(",")
    if origin.strip()
]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Store keys
ACTIVE_SESSION_KEY = "active-session"
OVERLAY_CONFIG_KEY = "session-config"
SESSION_PHASE_KEY = "session-phase"

# Window labels
MAIN_WINDOW = "main"
OVERLAY_WINDOW = "overlay"
