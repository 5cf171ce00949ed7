"""
Session/overlay lifecycle controller.

Owns the single active session: persists it, schedules the expiry that brings
up the overlay, schedules the overlay auto-close, and drives main/overlay
window visibility. The lifecycle phase is persisted explicitly next to the
session record (``session-phase``), and every scheduled action is an owned
``DelayedAction`` that ``start``/``stop`` cancel once the state replacing
it has been saved.
"""
import asyncio
import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from break_reminder import config
from break_reminder.errors import (
    ClockError,
    DisplayError,
    NotFoundError,
    StoreError,
    WindowNotFoundError,
)
from break_reminder.models import OverlayConfig, SessionConfig, SessionPhase
from break_reminder.overlay import OverlayPresenter
from break_reminder.store import KeyValueStore
from break_reminder.timers import DelayedAction, SleepFn
from break_reminder.window_surface import Window, WindowSurface

logger = logging.getLogger(__name__)


class SessionController:
    def __init__(
        self,
        store: KeyValueStore,
        surface: WindowSurface,
        presenter: Optional[OverlayPresenter] = None,
        *,
        auto_close_enabled: bool = config.AUTO_CLOSE_ENABLED,
        default_overlay_delay: int = config.DEFAULT_OVERLAY_DELAY_SECONDS,
        clock: Callable[[], float] = time.time,
        sleep: SleepFn = asyncio.sleep,
    ):
        self.store = store
        self.surface = surface
        self.presenter = presenter or OverlayPresenter(surface)
        self.auto_close_enabled = auto_close_enabled
        self.default_overlay_delay = default_overlay_delay
        self._clock = clock
        self._sleep = sleep
        self.expiry_timer: Optional[DelayedAction] = None
        self.auto_close_timer: Optional[DelayedAction] = None

    # --- Session commands ---

    def start(self, duration_minutes: int, message: str, overlay_delay_seconds: int) -> SessionConfig:
        """Start (or restart) the session and schedule the overlay for when it ends."""
        if duration_minutes < 0 or overlay_delay_seconds < 0:
            raise ValueError("duration_minutes and overlay_delay_seconds must be non-negative")

        session = SessionConfig(
            duration_minutes=duration_minutes,
            message=message,
            overlay_delay_seconds=overlay_delay_seconds,
            start_time=self._now(),
        )
        self.store.set(config.ACTIVE_SESSION_KEY, session.model_dump())
        self.store.set(config.SESSION_PHASE_KEY, SessionPhase.RUNNING.value)
        self.store.save()
        # the previous session stays armed until the new one is durable
        self._cancel_timers()
        logger.info(
            "Session started: %d minutes, started at %d", duration_minutes, session.start_time
        )

        self._schedule_expiry(duration_minutes * 60, message, overlay_delay_seconds)
        return session

    def get_status(self) -> Optional[SessionConfig]:
        value = self.store.get(config.ACTIVE_SESSION_KEY)
        if value is None:
            return None
        try:
            return SessionConfig.model_validate(value)
        except ValidationError as e:
            raise StoreError(f"Failed to parse session config: {e}") from e

    def stop(self) -> None:
        """Drop the active session. Safe to call when nothing is running."""
        self.store.delete(config.ACTIVE_SESSION_KEY)
        self.store.set(config.SESSION_PHASE_KEY, SessionPhase.IDLE.value)
        self.store.save()
        self._cancel_timers()
        logger.info("Session stopped")

    def get_overlay_config(self) -> OverlayConfig:
        value = self.store.get(config.OVERLAY_CONFIG_KEY)
        if value is None:
            raise NotFoundError("No session config found in store")
        try:
            overlay_config = OverlayConfig.model_validate(value)
        except ValidationError as e:
            raise StoreError(f"Failed to parse session config: {e}") from e
        logger.debug("Retrieved overlay config from store: %s", overlay_config)
        return overlay_config

    def phase(self) -> SessionPhase:
        value = self.store.get(config.SESSION_PHASE_KEY)
        if value is None:
            return SessionPhase.IDLE
        try:
            return SessionPhase(value)
        except ValueError as e:
            raise StoreError(f"Unknown session phase in store: {value!r}") from e

    def remaining_seconds(self, now: Optional[int] = None) -> Optional[int]:
        """Seconds until the session ends (0 once it has), or None with no session."""
        session = self.get_status()
        if session is None:
            return None
        if now is None:
            now = self._now()
        elapsed = now - session.start_time
        return max(0, session.duration_minutes * 60 - elapsed)

    def resume(self) -> None:
        """Bring a persisted session back in line after a process restart."""
        phase = self.phase()
        if phase == SessionPhase.OVERLAY_SHOWN and self.surface.get_window(config.OVERLAY_WINDOW) is None:
            logger.info("Overlay from a previous run is gone, resetting phase to idle")
            self._set_phase(SessionPhase.IDLE)
            return
        if phase != SessionPhase.RUNNING:
            return

        session = self.get_status()
        if session is None:
            self._set_phase(SessionPhase.IDLE)
            return
        remaining = self.remaining_seconds()
        if remaining:
            logger.info("Resuming session with %d seconds remaining", remaining)
            self._schedule_expiry(remaining, session.message, session.overlay_delay_seconds)
        else:
            logger.info("Session expired while the app was not running, cleaning it up")
            self.stop()

    def shutdown(self) -> None:
        self._cancel_timers()

    # --- Overlay lifecycle ---

    def present_overlay(self, message: str, overlay_delay_seconds: int) -> None:
        """Expiry handler: put up the overlay and arm its auto-close."""
        self.expiry_timer = None
        if self.phase() != SessionPhase.RUNNING:
            logger.info("Session expiry fired with no running session, ignoring")
            return

        delay = overlay_delay_seconds or self.default_overlay_delay
        self.store.set(
            config.OVERLAY_CONFIG_KEY,
            OverlayConfig(message=message, delay_seconds=delay).model_dump(),
        )
        self.store.save()

        try:
            self.presenter.present()
        except DisplayError:
            # the expiry is consumed either way, no retry
            self.store.delete(config.OVERLAY_CONFIG_KEY)
            self._set_phase(SessionPhase.IDLE)
            raise
        self._set_phase(SessionPhase.OVERLAY_SHOWN)

        logger.info("Overlay auto-close armed for %d seconds (requested: %d)", delay, overlay_delay_seconds)
        self.auto_close_timer = DelayedAction(
            "overlay-auto-close", delay, self._auto_close, sleep=self._sleep
        )

    def _auto_close(self) -> None:
        self.auto_close_timer = None
        if not self.auto_close_enabled:
            logger.info("Auto-close disabled, overlay remains open for manual control")
            return
        self.close_overlay()

    def close_overlay(self) -> None:
        """Close the overlay if it is open and bring the main window back."""
        if self.auto_close_timer is not None:
            self.auto_close_timer.cancel()
            self.auto_close_timer = None

        overlay = self.surface.get_window(config.OVERLAY_WINDOW)
        if overlay is not None:
            overlay.close()
            logger.info("Overlay window closed")

        main = self.surface.get_window(config.MAIN_WINDOW)
        if main is not None:
            main.show()
            logger.info("Main window shown after overlay close")

        if self.phase() == SessionPhase.OVERLAY_SHOWN:
            self._set_phase(SessionPhase.IDLE)

    # --- Main window ---

    def hide_main(self) -> None:
        self._main_window().hide()
        logger.info("Main window hidden")

    def show_main(self) -> None:
        self._main_window().show()

    def minimize(self) -> None:
        self._main_window().minimize()

    def toggle_maximize(self) -> bool:
        """Flip the main window's maximized state; returns the new state."""
        window = self._main_window()
        if window.is_maximized():
            window.unmaximize()
            return False
        window.maximize()
        return True

    def close_main(self) -> None:
        self._main_window().close()
        logger.info("Main window closed")

    # --- Helpers ---

    def _main_window(self) -> Window:
        window = self.surface.get_window(config.MAIN_WINDOW)
        if window is None:
            raise WindowNotFoundError("Main window not found")
        return window

    def _now(self) -> int:
        try:
            now = self._clock()
        except (OSError, OverflowError, ValueError) as e:
            raise ClockError(f"Failed to get current time: {e}") from e
        if now < 0:
            raise ClockError("Failed to get current time: clock is before the unix epoch")
        return int(now)

    def _set_phase(self, phase: SessionPhase) -> None:
        self.store.set(config.SESSION_PHASE_KEY, phase.value)
        self.store.save()

    def _schedule_expiry(self, seconds: int, message: str, overlay_delay_seconds: int) -> None:
        self.expiry_timer = DelayedAction(
            "session-expiry",
            seconds,
            lambda: self.present_overlay(message, overlay_delay_seconds),
            sleep=self._sleep,
        )

    def _cancel_timers(self) -> None:
        for timer in (self.expiry_timer, self.auto_close_timer):
            if timer is not None:
                timer.cancel()
        self.expiry_timer = None
        self.auto_close_timer = None
