"""PanelRegistry - canonical panel identities and their content

Content objects live here for the whole process lifetime. Placement code
moves a reference to the same object between the tile tree and floating
windows; it never copies or rebuilds it.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ..config import DEFAULT_FLOATING_GEOMETRY, PANEL_FLOATING_GEOMETRY
from ..core.geometry import Rect
from ..core.ids import PanelId
from ..telemetry import get_logger

logger = get_logger(__name__)


@dataclass(eq=False)
class PanelContent:
    """Per-panel state object

    The placement core treats it as opaque and compares it by identity.
    `state` is free-form storage for whatever the panel's UI keeps between
    frames.
    """

    panel: PanelId
    state: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"PanelContent({self.panel.value}, id=0x{id(self):x})"


@dataclass
class PanelSpec:
    """Registered panel

    Attributes:
        panel_id: Identity
        content: Content object (never replaced)
        title: Display title
        pinned: Pinned panels can not be undocked or closed
        default_geometry: Floating geometry used when nothing is remembered
    """

    panel_id: PanelId
    content: Any
    title: str
    pinned: bool = False
    default_geometry: Rect | None = None


class PanelRegistry:
    """Panel identity -> content registry

    Registration order is preserved and used for listings (e.g. the panels
    offered for reopening).
    """

    def __init__(self):
        self._panels: dict[PanelId, PanelSpec] = {}

    def register(
        self,
        panel: PanelId,
        content: Any = None,
        title: str | None = None,
        pinned: bool = False,
        default_geometry: Rect | None = None,
    ) -> PanelSpec:
        """Register a panel

        Args:
            panel: Panel identity
            content: Content object, a fresh PanelContent when omitted
            title: Display title, defaults to PanelId.title
            pinned: Refuse undock/close for this panel
            default_geometry: Floating geometry override

        Returns:
            The registered PanelSpec

        Raises:
            ValueError: The panel is already registered
        """
        if panel in self._panels:
            raise ValueError(f"Panel already registered: {panel.value}")
        spec = PanelSpec(
            panel_id=panel,
            content=content if content is not None else PanelContent(panel),
            title=title or panel.title,
            pinned=pinned,
            default_geometry=default_geometry,
        )
        self._panels[panel] = spec
        logger.debug(f"[Registry:{panel.value}] Registered (pinned={pinned})")
        return spec

    def spec_of(self, panel: PanelId) -> PanelSpec:
        """Raises KeyError for unregistered panels"""
        return self._panels[panel]

    def content_of(self, panel: PanelId) -> Any:
        """Stable content object of a panel (same object every call)"""
        return self._panels[panel].content

    def title_of(self, panel: PanelId) -> str:
        return self._panels[panel].title

    def is_pinned(self, panel: PanelId) -> bool:
        return self._panels[panel].pinned

    def default_geometry_of(self, panel: PanelId) -> Rect:
        """Floating geometry when nothing is remembered

        Order: registered override, per-panel config, global default.
        """
        spec = self._panels[panel]
        if spec.default_geometry is not None:
            return spec.default_geometry
        configured = PANEL_FLOATING_GEOMETRY.get(panel.value)
        if configured is not None:
            return Rect.from_tuple(configured)
        return Rect.from_tuple(DEFAULT_FLOATING_GEOMETRY)

    def panel_for_content(self, content: Any) -> PanelId | None:
        """Reverse lookup by identity"""
        for spec in self._panels.values():
            if spec.content is content:
                return spec.panel_id
        return None

    # === Iteration ===

    def __contains__(self, panel: PanelId) -> bool:
        return panel in self._panels

    def __iter__(self) -> Iterator[PanelId]:
        return iter(self._panels)

    def __len__(self) -> int:
        return len(self._panels)

    @property
    def panel_ids(self) -> list[PanelId]:
        return list(self._panels)
