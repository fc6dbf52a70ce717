"""Core module - identifiers and geometry"""

from .geometry import Rect
from .ids import PanelId, TileRef, parse_panel_id, short_ref

__all__ = [
    "PanelId",
    "TileRef",
    "Rect",
    "parse_panel_id",
    "short_ref",
]
