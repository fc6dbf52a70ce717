"""Panel and tile identifiers

PanelId is a closed enumeration; everything placement-related is keyed by
the enum member, never by a name string.

TileRef is an opaque handle minted by a TileTree adapter. The placement
core only stores it, compares it and hands it back to the tree.
"""

from dataclasses import dataclass
from enum import Enum


class PanelId(Enum):
    """Panel identity."""

    SCENE = "scene"
    SETTINGS = "settings"
    PRESETS = "presets"
    PROPERTIES = "properties"
    STATS = "stats"
    DATASET = "dataset"

    @property
    def title(self) -> str:
        """Display title (e.g. "Settings")."""
        return self.value.capitalize()


@dataclass(frozen=True)
class TileRef:
    """Handle to a leaf or container of a TileTree.

    Attributes:
        value: Adapter-assigned number, meaningless to the placement core
    """

    value: int

    def __str__(self) -> str:
        return f"#{self.value}"


def parse_panel_id(value: str) -> PanelId | None:
    """Resolve a PanelId from its value.

    Only meant for outer surfaces (demo input). Matching is exact.

    Args:
        value: PanelId value such as "scene"

    Returns:
        PanelId, or None if the value is unknown
    """
    try:
        return PanelId(value)
    except ValueError:
        return None


def short_ref(ref: TileRef | None) -> str:
    """Short display form of a TileRef for logs."""
    return str(ref) if ref is not None else "none"
