"""In-memory floating window host

Keeps one rectangle per open panel. move() stands in for the user dragging
or resizing a window between frames.
"""

from ..core.geometry import Rect
from ..core.ids import PanelId
from ..telemetry import get_logger
from .base import WindowHost

logger = get_logger(__name__)


class InMemoryWindowHost(WindowHost):
    """Dictionary-backed window host."""

    def __init__(self):
        self._windows: dict[PanelId, Rect] = {}

    def open(self, panel: PanelId, geometry: Rect) -> bool:
        if panel in self._windows:
            logger.debug(f"[Windows:{panel.value}] Already open")
            return False
        self._windows[panel] = geometry
        return True

    def close(self, panel: PanelId) -> Rect | None:
        return self._windows.pop(panel, None)

    def is_open(self, panel: PanelId) -> bool:
        return panel in self._windows

    def current_geometry(self, panel: PanelId) -> Rect | None:
        return self._windows.get(panel)

    def open_panels(self) -> list[PanelId]:
        return list(self._windows)

    def move(self, panel: PanelId, geometry: Rect) -> bool:
        """Move/resize an open window (user interaction)"""
        if panel not in self._windows:
            return False
        self._windows[panel] = geometry
        return True
