"""PlacementManager - per-frame placement driver

Owns registry, ledger, tree, windows, queue and engine:
- seeds the ledger from the initial layout
- hands out the submit-only RequestSink for UI passes
- drive(): refresh floating geometry, drain, validate
- forwards diagnostics to an optional callback
"""

from collections.abc import Callable
from typing import Any

from ..adapters.base import TileTree, WindowHost
from ..config import VALIDATE_AFTER_DRAIN
from ..core.ids import PanelId, TileRef
from ..render.layout import render_layout_text
from ..telemetry import get_logger
from .engine import TransitionEngine
from .ledger import PlacementLedger
from .queue import EventQueue, RequestSink
from .registry import PanelRegistry
from .selector import TargetSelector
from .types import (
    Closed,
    Diagnostic,
    DiagnosticKind,
    Docked,
    Floating,
    PlacementKind,
    PlacementState,
    TransitionRecord,
)

logger = get_logger(__name__)

# Callback types
OnDiagnosticCallback = Callable[[Diagnostic], Any]


class PlacementManager:
    """Placement manager

    Usage per frame:
        sink = manager.handle()
        ...UI pass calls sink.undock(...), sink.reopen(...)...
        diagnostics = manager.drive()

    Attributes:
        registry: Panel registry
        ledger: Placement ledger
        tree: Tile tree
        windows: Floating window host
        queue: Default event queue
        engine: Transition engine
    """

    def __init__(
        self,
        registry: PanelRegistry,
        tree: TileTree,
        windows: WindowHost,
        ledger: PlacementLedger | None = None,
        queue: EventQueue | None = None,
        selector: TargetSelector | None = None,
    ):
        self.registry = registry
        self.tree = tree
        self.windows = windows
        self.ledger = ledger if ledger is not None else PlacementLedger()
        self.queue = queue if queue is not None else EventQueue()
        self.engine = TransitionEngine(registry, self.ledger, tree, windows, selector)

        self._frame = 0
        self._on_diagnostic: OnDiagnosticCallback | None = None
        self._last_diagnostics: list[Diagnostic] = []

    # === Configuration ===

    def set_on_diagnostic(self, callback: OnDiagnosticCallback | None) -> None:
        """Set the diagnostic callback

        Args:
            callback: Called once per Diagnostic produced by drive()
        """
        self._on_diagnostic = callback

    def seed_from_layout(self) -> None:
        """Create a ledger entry for every registered panel

        Panels found as tree leaves start Docked, panels with an open window
        start Floating, everything else starts Closed with no hint.
        """
        leaves: dict[int, TileRef] = {}
        for ref, content in self.tree.iter_leaves():
            leaves.setdefault(id(content), ref)

        for panel in self.registry:
            if panel in self.ledger:
                continue
            content = self.registry.content_of(panel)
            leaf = leaves.get(id(content))
            geometry = self.windows.current_geometry(panel)
            if leaf is not None:
                state: PlacementState = Docked(leaf)
            elif geometry is not None:
                state = Floating(geometry=geometry)
            else:
                state = Closed()
            self.ledger.seed(panel, state)

        logger.info(
            f"[Manager] Seeded {len(self.ledger)} panels: "
            f"docked={len(self.ledger.panels_in(PlacementKind.DOCKED))} "
            f"floating={len(self.ledger.panels_in(PlacementKind.FLOATING))} "
            f"closed={len(self.ledger.panels_in(PlacementKind.CLOSED))}"
        )

    # === Queries ===

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def last_diagnostics(self) -> list[Diagnostic]:
        return list(self._last_diagnostics)

    @property
    def history(self) -> list[TransitionRecord]:
        return self.ledger.history

    def handle(self) -> RequestSink:
        return self.queue.handle()

    def placement_of(self, panel: PanelId) -> PlacementState:
        return self.ledger.get(panel)

    def leaf_of(self, panel: PanelId) -> TileRef | None:
        """Current leaf of a docked panel (what a tab's buttons capture)"""
        state = self.ledger.get(panel)
        return state.leaf if isinstance(state, Docked) else None

    def reopenable_panels(self) -> list[PanelId]:
        """Closed panels in registration order (the "View" menu)"""
        return [panel for panel in self.registry if self.ledger.kind_of(panel) is PlacementKind.CLOSED]

    # === Frame ===

    def drive(self, queue: EventQueue | None = None) -> list[Diagnostic]:
        """Run one frame's refresh-then-drain cycle

        Args:
            queue: Queue to drain, defaults to the manager's queue

        Returns:
            Diagnostics produced this frame, in order
        """
        queue = queue if queue is not None else self.queue

        # 1. Windows may have moved since the last frame
        diagnostics = self.refresh_geometry()

        # 2. Apply the batch in submission order
        batch = queue.drain()
        queue.set_processing(True)
        try:
            for request in batch:
                diagnostic = self.engine.apply(request, frame=self._frame)
                if diagnostic is not None:
                    diagnostics.append(diagnostic)
        finally:
            queue.set_processing(False)

        # 3. Whole-ledger check
        if VALIDATE_AFTER_DRAIN:
            reported = {
                d.panel for d in diagnostics if d.kind is DiagnosticKind.INVARIANT_VIOLATION
            }
            diagnostics.extend(d for d in self.validate() if d.panel not in reported)

        for diagnostic in diagnostics:
            self._emit(diagnostic)

        if batch:
            logger.debug(
                f"[Manager] Frame {self._frame}: {len(batch)} request(s), "
                f"{len(diagnostics)} diagnostic(s)"
            )

        self._last_diagnostics = diagnostics
        self._frame += 1
        queue.set_frame(self._frame)
        if queue is not self.queue:
            self.queue.set_frame(self._frame)
        return diagnostics

    def refresh_geometry(self) -> list[Diagnostic]:
        """Copy current floating window geometry into the ledger

        Non-finite geometry is ignored. A floating panel whose window is gone
        is reported as an invariant violation.

        Returns:
            Diagnostics for floating panels without a window
        """
        diagnostics = []
        for panel, state in list(self.ledger.items()):
            if not isinstance(state, Floating):
                continue
            geometry = self.windows.current_geometry(panel)
            if geometry is None:
                logger.error(f"[Manager:{panel.value}] Floating but window host has no window")
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.INVARIANT_VIOLATION,
                        panel=panel,
                        message="floating panel has no open window",
                        frame=self._frame,
                        context={"state": str(state)},
                    )
                )
                continue
            if not geometry.is_finite():
                logger.warning(f"[Manager:{panel.value}] Ignoring non-finite geometry {geometry}")
                continue
            if self.ledger.refresh_geometry(panel, geometry):
                logger.debug(f"[Manager:{panel.value}] Geometry refreshed to {geometry}")
        return diagnostics

    def validate(self) -> list[Diagnostic]:
        """Check exclusivity for every registered panel

        Returns:
            One INVARIANT_VIOLATION per inconsistent or missing panel
        """
        diagnostics = []
        for panel in self.registry:
            if panel not in self.ledger:
                logger.error(f"[Manager:{panel.value}] Registered panel missing from ledger")
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.INVARIANT_VIOLATION,
                        panel=panel,
                        message="panel has no ledger entry",
                        frame=self._frame,
                    )
                )
                continue
            violation = self.engine.check_exclusivity(panel, frame=self._frame)
            if violation is not None:
                diagnostics.append(violation)
        return diagnostics

    def _emit(self, diagnostic: Diagnostic) -> None:
        if self._on_diagnostic:
            self._on_diagnostic(diagnostic)

    # === Debugging ===

    def render_layout(self) -> str:
        """Text dump of the docked tree, floating windows and closed panels"""
        return render_layout_text(self.tree, self.windows, self.registry, self.ledger)

    def to_dict(self) -> dict:
        return {
            "frame": self._frame,
            "ledger": self.ledger.to_dict(),
            "queue": self.queue.debug_snapshot(),
            "history": [record.to_dict() for record in self.ledger.history],
        }
