"""PlacementLedger - one PlacementState per panel

Responsibilities:
- Hold the current PlacementState of every panel (created once, never removed)
- Remember the last floating geometry of each panel
- Keep a bounded transition history
- Serialize to dict for debugging
"""

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from ..config import LEDGER_HISTORY_MAX_LENGTH
from ..core.geometry import Rect
from ..core.ids import PanelId
from ..telemetry import get_logger
from .types import (
    Closed,
    Floating,
    LedgerSnapshot,
    PlacementKind,
    PlacementState,
    TransitionRecord,
    WasFloating,
)

logger = get_logger(__name__)


@dataclass
class LedgerEntry:
    """Ledger row

    Attributes:
        state: Current placement
        remembered_geometry: Last geometry the panel had as a floating window
    """

    state: PlacementState
    remembered_geometry: Rect | None = None


class PlacementLedger:
    """Placement ledger

    Only the transition engine writes to it, and only while draining.

    Attributes:
        history_max_length: Size of the transition history ring
    """

    def __init__(self, history_max_length: int = LEDGER_HISTORY_MAX_LENGTH):
        self._entries: dict[PanelId, LedgerEntry] = {}
        self._history: deque[TransitionRecord] = deque(maxlen=history_max_length)

    # === Entries ===

    def seed(self, panel: PanelId, state: PlacementState) -> None:
        """Create the entry for a panel (start-up only)

        Raises:
            ValueError: The panel already has an entry
        """
        if panel in self._entries:
            raise ValueError(f"Ledger entry already exists: {panel.value}")
        self._entries[panel] = LedgerEntry(state=state)
        self._remember(panel, state)
        logger.debug(f"[Ledger:{panel.value}] Seeded {state}")

    def get(self, panel: PanelId) -> PlacementState:
        """Current state; raises KeyError for unknown panels"""
        return self._entries[panel].state

    def kind_of(self, panel: PanelId) -> PlacementKind:
        return self._entries[panel].state.kind

    def set(self, panel: PanelId, state: PlacementState) -> PlacementState:
        """Replace a panel's state

        Returns:
            The previous state
        """
        entry = self._entries[panel]
        old = entry.state
        entry.state = state
        self._remember(panel, state)
        logger.debug(f"[Ledger:{panel.value}] {old} → {state}")
        return old

    def remembered_geometry(self, panel: PanelId) -> Rect | None:
        return self._entries[panel].remembered_geometry

    def remember_geometry(self, panel: PanelId, geometry: Rect) -> None:
        """Keep a floating geometry for the next undock without changing state"""
        self._entries[panel].remembered_geometry = geometry

    def refresh_geometry(self, panel: PanelId, geometry: Rect) -> bool:
        """Track a floating window the user moved/resized since last frame

        Returns:
            Whether the stored geometry changed (False if not floating)
        """
        entry = self._entries[panel]
        state = entry.state
        if not isinstance(state, Floating) or state.geometry == geometry:
            return False
        entry.state = Floating(geometry=geometry, last_parent=state.last_parent)
        entry.remembered_geometry = geometry
        return True

    def snapshot(self, panel: PanelId, pinned: bool = False) -> LedgerSnapshot:
        return LedgerSnapshot(panel=panel, state=self._entries[panel].state, pinned=pinned)

    def _remember(self, panel: PanelId, state: PlacementState) -> None:
        geometry = None
        if isinstance(state, Floating):
            geometry = state.geometry
        elif isinstance(state, Closed) and isinstance(state.last_known, WasFloating):
            geometry = state.last_known.geometry
        if geometry is not None:
            self._entries[panel].remembered_geometry = geometry

    # === Queries ===

    def panels_in(self, kind: PlacementKind) -> list[PanelId]:
        return [panel for panel, entry in self._entries.items() if entry.state.kind is kind]

    def closed_panels(self) -> list[PanelId]:
        return self.panels_in(PlacementKind.CLOSED)

    def __contains__(self, panel: PanelId) -> bool:
        return panel in self._entries

    def __iter__(self) -> Iterator[PanelId]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[PanelId, PlacementState]]:
        for panel, entry in self._entries.items():
            yield panel, entry.state

    # === History ===

    def add_record(self, record: TransitionRecord) -> None:
        self._history.append(record)

    @property
    def history(self) -> list[TransitionRecord]:
        return list(self._history)

    def history_of(self, panel: PanelId) -> list[TransitionRecord]:
        return [record for record in self._history if record.panel is panel]

    def get_history_log(self) -> str:
        """History as text (debugging)"""
        if not self._history:
            return "  (no history)"
        return "\n".join(f"  {record}" for record in self._history)

    # === Serialization ===

    def to_dict(self) -> dict:
        """Debug view of every entry"""
        result = {}
        for panel, entry in self._entries.items():
            geometry = entry.remembered_geometry
            result[panel.value] = {
                "kind": entry.state.kind.value,
                "state": str(entry.state),
                "remembered_geometry": geometry.to_dict() if geometry else None,
            }
        return result
