"""
Window surface: the boundary to whatever actually draws windows.

The controller only talks to the ``WindowSurface`` / ``Window`` protocols.
``HeadlessWindowSurface`` keeps window state in memory; it backs the service
when no native shell is attached and doubles as the test surface.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol

from break_reminder.errors import WindowSurfaceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Monitor:
    """Physical pixel size of a display plus its scale factor."""

    width: int
    height: int
    scale_factor: float = 1.0


@dataclass(frozen=True)
class WindowOptions:
    label: str
    url: str
    title: str
    width: float
    height: float
    resizable: bool = True
    maximizable: bool = True
    minimizable: bool = True
    closable: bool = True
    always_on_top: bool = False
    center: bool = False
    skip_taskbar: bool = False
    decorations: bool = True
    transparent: bool = False


class Window(Protocol):
    label: str

    def show(self) -> None: ...
    def hide(self) -> None: ...
    def close(self) -> None: ...
    def minimize(self) -> None: ...
    def maximize(self) -> None: ...
    def unmaximize(self) -> None: ...
    def is_maximized(self) -> bool: ...


class WindowSurface(Protocol):
    def primary_monitor(self) -> Optional[Monitor]: ...
    def get_window(self, label: str) -> Optional[Window]: ...
    def create_window(self, options: WindowOptions) -> Window: ...


def parse_monitor(value: str) -> Optional[Monitor]:
    """Parse ``WIDTHxHEIGHT@SCALE`` (scale optional). Empty means no display."""
    value = (value or "").strip()
    if not value:
        return None
    match = re.fullmatch(r"(\d+)x(\d+)(?:@([\d.]+))?", value)
    if not match:
        raise ValueError(f"Invalid monitor: {value!r} (expected WIDTHxHEIGHT@SCALE)")
    scale = float(match.group(3)) if match.group(3) else 1.0
    if scale <= 0:
        raise ValueError(f"Invalid monitor scale factor: {scale}")
    return Monitor(int(match.group(1)), int(match.group(2)), scale)


class HeadlessWindow:
    def __init__(self, surface: HeadlessWindowSurface, options: WindowOptions):
        self._surface = surface
        self.label = options.label
        self.options = options
        self.visible = False
        self.minimized = False
        self.maximized = False
        self.closed = False

    def _check_open(self, action: str) -> None:
        if self.closed:
            raise WindowSurfaceError(f"Failed to {action} window '{self.label}': window is closed")

    def show(self) -> None:
        self._check_open("show")
        self.visible = True
        self.minimized = False

    def hide(self) -> None:
        self._check_open("hide")
        self.visible = False

    def close(self) -> None:
        self._check_open("close")
        self.closed = True
        self.visible = False
        self._surface._forget(self)

    def minimize(self) -> None:
        self._check_open("minimize")
        self.minimized = True

    def maximize(self) -> None:
        self._check_open("maximize")
        self.maximized = True

    def unmaximize(self) -> None:
        self._check_open("unmaximize")
        self.maximized = False

    def is_maximized(self) -> bool:
        self._check_open("query")
        return self.maximized

    def __repr__(self) -> str:
        return f"<HeadlessWindow {self.label!r} visible={self.visible} maximized={self.maximized}>"


class HeadlessWindowSurface:
    def __init__(self, monitor: Optional[Monitor] = Monitor(1920, 1080, 1.0)):
        self.monitor = monitor
        self._windows: dict[str, HeadlessWindow] = {}

    def primary_monitor(self) -> Optional[Monitor]:
        return self.monitor

    def get_window(self, label: str) -> Optional[HeadlessWindow]:
        return self._windows.get(label)

    def create_window(self, options: WindowOptions) -> HeadlessWindow:
        if options.label in self._windows:
            raise WindowSurfaceError(f"Failed to create window: label '{options.label}' already exists")
        window = HeadlessWindow(self, options)
        self._windows[options.label] = window
        logger.debug("Created window %s (%sx%s)", options.label, options.width, options.height)
        return window

    def _forget(self, window: HeadlessWindow) -> None:
        if self._windows.get(window.label) is window:
            del self._windows[window.label]
