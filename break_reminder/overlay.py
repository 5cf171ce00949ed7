"""Overlay presenter: turns "show the break screen" into window-surface calls."""
import logging
from dataclasses import dataclass

from break_reminder import config
from break_reminder.errors import DisplayError
from break_reminder.window_surface import Window, WindowOptions, WindowSurface

logger = logging.getLogger(__name__)

OVERLAY_URL = "index.html?screen=overlay"
OVERLAY_TITLE = "Take a Break"


@dataclass(frozen=True)
class OverlayGeometry:
    width: float
    height: float


class OverlayPresenter:
    def __init__(self, surface: WindowSurface):
        self._surface = surface

    def overlay_geometry(self) -> OverlayGeometry:
        """Logical size of the primary monitor (physical pixels / scale factor)."""
        monitor = self._surface.primary_monitor()
        if monitor is None:
            raise DisplayError("No primary monitor found")
        scale = monitor.scale_factor or 1.0
        return OverlayGeometry(width=monitor.width / scale, height=monitor.height / scale)

    @staticmethod
    def window_options(geometry: OverlayGeometry) -> WindowOptions:
        return WindowOptions(
            label=config.OVERLAY_WINDOW,
            url=OVERLAY_URL,
            title=OVERLAY_TITLE,
            width=geometry.width,
            height=geometry.height,
            resizable=False,
            maximizable=False,
            minimizable=False,
            closable=False,
            always_on_top=True,
            center=True,
            skip_taskbar=True,
            decorations=False,
            transparent=True,
        )

    def present(self) -> Window:
        existing = self._surface.get_window(config.OVERLAY_WINDOW)
        if existing is not None:
            existing.show()
            logger.info("Overlay window already open, brought back to front")
            return existing
        options = self.window_options(self.overlay_geometry())
        window = self._surface.create_window(options)
        window.show()
        logger.info("Overlay window created and shown (%.0fx%.0f)", options.width, options.height)
        return window
