"""TransitionEngine - applies placement requests

Responsibilities:
- Verify the panel's exclusivity against tree and windows before acting
- Match the request against the rule table and check guards
- Run the transition, touching tree, windows and ledger together
- Roll back when a collaborator refuses a step
- Record every attempt in the ledger history

Each apply() returns None on success or a Diagnostic. Collaborator failures
never raise.
"""

import logging

from ..adapters.base import TileTree, WindowHost
from ..config import LAYOUT_DUMP_ON_DOCK, METRICS_ENABLED
from ..core.geometry import Rect
from ..core.ids import PanelId, TileRef, short_ref
from ..render.layout import render_layout_text
from ..telemetry import get_logger, metrics
from .ledger import PlacementLedger
from .registry import PanelRegistry
from .selector import TargetSelector
from .transitions import find_matching_rules
from .types import (
    Closed,
    Diagnostic,
    DiagnosticKind,
    Docked,
    Floating,
    PlacementRequest,
    PlacementState,
    RequestDockTo,
    Severity,
    TransitionRecord,
    TransitionRule,
    WasDocked,
    WasFloating,
    remembered_parent,
)

logger = get_logger(__name__)

_LOG_LEVELS = {
    Severity.INFO: logging.DEBUG,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class TransitionEngine:
    """Placement transition engine

    Sole writer of ledger, tree and windows while a batch is applied.

    Attributes:
        registry: Panel registry (content lookup)
        ledger: Placement ledger
        tree: Tile tree
        windows: Floating window host
        selector: Docking target selector
    """

    def __init__(
        self,
        registry: PanelRegistry,
        ledger: PlacementLedger,
        tree: TileTree,
        windows: WindowHost,
        selector: TargetSelector | None = None,
    ):
        self.registry = registry
        self.ledger = ledger
        self.tree = tree
        self.windows = windows
        self.selector = selector or TargetSelector()

    # === Entry point ===

    def apply(self, request: PlacementRequest, frame: int | None = None) -> Diagnostic | None:
        """Apply one request

        Args:
            request: Drained request
            frame: Frame being drained, defaults to the request's frame

        Returns:
            None on success, otherwise a Diagnostic
        """
        frame = request.frame if frame is None else frame
        panel = request.panel
        state = self.ledger.get(panel)

        # 1. Exclusivity against the collaborators
        violation = self.check_exclusivity(panel, frame=frame)
        if violation is not None:
            violation.request = request
            self._record(request, state, state, False, "invariant_violation", frame)
            return violation

        # 2. Candidate rules
        rules = find_matching_rules(request, state.kind)
        if not rules:
            if request.satisfied_by(state.kind):
                return self._reject(
                    request, DiagnosticKind.ALREADY_IN_REQUESTED_STATE,
                    f"{request.signal} ignored: already {state.kind.value}", state, frame,
                )
            return self._reject(
                request, DiagnosticKind.STALE_REFERENCE,
                f"{request.signal} does not apply to a {state.kind.value} panel", state, frame,
            )

        # 3. Guards: first rule whose guards all pass
        snapshot = self.ledger.snapshot(panel, pinned=self.registry.is_pinned(panel))
        rule = None
        failed = None
        for candidate in rules:
            guard = candidate.first_failed_guard(request, snapshot)
            if guard is None:
                rule = candidate
                break
            failed = failed or guard

        if rule is None:
            return self._reject(
                request, failed.reject_kind, f"{request.signal} rejected by {failed.name}",
                state, frame, guard=failed.name,
            )

        # 4. Transition
        handler = getattr(self, f"_{rule.transition}")
        return handler(request, state, rule, frame)

    # === Exclusivity ===

    def check_exclusivity(self, panel: PanelId, frame: int = 0) -> Diagnostic | None:
        """Compare the ledger with where the panel actually is

        Docked: exactly the recorded leaf holds the content, no window.
        Floating: no leaf, window open. Closed: no leaf, no window.

        Returns:
            INVARIANT_VIOLATION diagnostic, or None when consistent
        """
        state = self.ledger.get(panel)
        content = self.registry.content_of(panel)
        leaves = [ref for ref, held in self.tree.iter_leaves() if held is content]
        window_open = self.windows.is_open(panel)

        if isinstance(state, Docked):
            consistent = leaves == [state.leaf] and not window_open
        elif isinstance(state, Floating):
            consistent = not leaves and window_open
        else:
            consistent = not leaves and not window_open

        if consistent:
            return None

        message = (
            f"ledger says {state} but tree has {len(leaves)} leaf(s) "
            f"and window_open={window_open}"
        )
        logger.error(f"[Engine:{panel.value}] Invariant violation: {message}")
        if METRICS_ENABLED:
            metrics.inc("invariant.violation", {"panel": panel.value})
        return Diagnostic(
            kind=DiagnosticKind.INVARIANT_VIOLATION,
            panel=panel,
            message=message,
            frame=frame,
            context={
                "state": str(state),
                "leaves": [ref.value for ref in leaves],
                "window_open": window_open,
            },
        )

    # === Transitions ===

    def _undock(
        self, request: PlacementRequest, state: Docked, rule: TransitionRule, frame: int
    ) -> Diagnostic | None:
        panel = request.panel
        leaf = state.leaf
        parent = self.tree.find_parent_of(leaf)
        if parent is None:
            return self._reject(
                request, DiagnosticKind.STALE_REFERENCE,
                f"leaf {short_ref(leaf)} has no parent", state, frame, leaf=leaf.value,
            )

        content = self.tree.remove_leaf(leaf)
        if content is None:
            return self._reject(
                request, DiagnosticKind.STALE_REFERENCE,
                f"leaf {short_ref(leaf)} could not be removed", state, frame, leaf=leaf.value,
            )

        geometry = self.floating_geometry_for(panel)
        if not self.windows.open(panel, geometry):
            return self._rollback_undock(request, state, parent, content, geometry, frame)

        new_state = Floating(geometry=geometry, last_parent=parent)
        self.ledger.set(panel, new_state)
        self.tree.simplify(parent)
        return self._succeed(request, rule, state, new_state, frame)

    def _rollback_undock(
        self,
        request: PlacementRequest,
        state: Docked,
        parent: TileRef,
        content: object,
        geometry: Rect,
        frame: int,
    ) -> Diagnostic:
        """Put a panel whose window failed to open back into its parent"""
        panel = request.panel
        new_leaf = self.tree.insert_leaf(parent, content)
        if new_leaf is not None:
            self.tree.set_active(parent, new_leaf)
            restored: PlacementState = Docked(new_leaf)
        else:
            # Parent refused the leaf back; the panel is nowhere, so say so
            restored = Closed(WasDocked(parent))
        self.ledger.set(panel, restored)
        if METRICS_ENABLED:
            metrics.inc("transition.rollback", {"panel": panel.value})
        return self._reject(
            request, DiagnosticKind.WINDOW_FAILED,
            f"window host refused to open at {geometry}", state, frame,
            to_state=restored, restored=str(restored),
        )

    def _dock(
        self, request: PlacementRequest, state: PlacementState, rule: TransitionRule, frame: int
    ) -> Diagnostic | None:
        explicit = request.container if isinstance(request, RequestDockTo) else None
        return self._dock_via_selector(request, state, rule, frame, explicit=explicit)

    def _dock_via_selector(
        self,
        request: PlacementRequest,
        state: PlacementState,
        rule: TransitionRule,
        frame: int,
        explicit: TileRef | None = None,
    ) -> Diagnostic | None:
        """Select a destination and insert; prior state untouched on failure"""
        panel = request.panel
        selection = self.selector.select(
            self.tree, panel, remembered_parent=remembered_parent(state), explicit=explicit
        )
        if selection is None:
            return self._reject(
                request, DiagnosticKind.DOCKING_FAILED, "no destination container", state, frame
            )

        leaf = self.tree.insert_leaf(selection.container, self.registry.content_of(panel))
        if leaf is None:
            if selection.created:
                self.tree.simplify(selection.container)
            if METRICS_ENABLED:
                metrics.inc("transition.rollback", {"panel": panel.value})
            return self._reject(
                request, DiagnosticKind.DOCKING_FAILED,
                f"insert into {short_ref(selection.container)} failed", state, frame,
                container=selection.container.value, tier=selection.tier,
            )

        return self._finish_dock(request, rule, state, selection.container, leaf, frame)

    def _finish_dock(
        self,
        request: PlacementRequest,
        rule: TransitionRule,
        state: PlacementState,
        container: TileRef,
        leaf: TileRef,
        frame: int,
    ) -> None:
        panel = request.panel
        self.tree.set_active(container, leaf)
        if isinstance(state, Floating):
            final = self.windows.close(panel)
            if final is not None and final.is_finite():
                self.ledger.remember_geometry(panel, final)
        new_state = Docked(leaf)
        self.ledger.set(panel, new_state)
        self.tree.simplify(container)
        self._dump_layout(panel)
        return self._succeed(request, rule, state, new_state, frame)

    def _close_docked(
        self, request: PlacementRequest, state: Docked, rule: TransitionRule, frame: int
    ) -> Diagnostic | None:
        panel = request.panel
        parent = self.tree.find_parent_of(state.leaf)
        if parent is None or self.tree.remove_leaf(state.leaf) is None:
            return self._reject(
                request, DiagnosticKind.STALE_REFERENCE,
                f"leaf {short_ref(state.leaf)} is not in the tree", state, frame,
                leaf=state.leaf.value,
            )

        new_state = Closed(WasDocked(parent))
        self.ledger.set(panel, new_state)
        self.tree.simplify(parent)
        return self._succeed(request, rule, state, new_state, frame)

    def _close_floating(
        self, request: PlacementRequest, state: Floating, rule: TransitionRule, frame: int
    ) -> Diagnostic | None:
        panel = request.panel
        geometry = self.windows.close(panel)
        if geometry is None or not geometry.is_finite():
            geometry = state.geometry

        new_state = Closed(WasFloating(geometry=geometry, last_parent=state.last_parent))
        self.ledger.set(panel, new_state)
        return self._succeed(request, rule, state, new_state, frame)

    def _reopen(
        self, request: PlacementRequest, state: Closed, rule: TransitionRule, frame: int
    ) -> Diagnostic | None:
        panel = request.panel
        hint = state.last_known

        if isinstance(hint, WasDocked):
            if self.selector.is_valid_target(self.tree, hint.parent):
                leaf = self.tree.insert_leaf(hint.parent, self.registry.content_of(panel))
                if leaf is not None:
                    return self._finish_dock(request, rule, state, hint.parent, leaf, frame)
            logger.debug(
                f"[Engine:{panel.value}] Previous parent {short_ref(hint.parent)} unusable, "
                f"selecting a new target"
            )
            return self._dock_via_selector(request, state, rule, frame)

        if isinstance(hint, WasFloating):
            return self._open_floating(request, state, rule, hint.geometry, frame)

        # Never placed: float at the panel's default geometry
        return self._open_floating(
            request, state, rule, self.registry.default_geometry_of(panel), frame
        )

    def _open_floating(
        self,
        request: PlacementRequest,
        state: Closed,
        rule: TransitionRule,
        geometry: Rect,
        frame: int,
    ) -> Diagnostic | None:
        panel = request.panel
        if not self.windows.open(panel, geometry):
            return self._reject(
                request, DiagnosticKind.WINDOW_FAILED,
                f"window host refused to open at {geometry}", state, frame,
            )
        new_state = Floating(geometry=geometry, last_parent=None)
        self.ledger.set(panel, new_state)
        return self._succeed(request, rule, state, new_state, frame)

    def _activate(
        self, request: PlacementRequest, state: Docked, rule: TransitionRule, frame: int
    ) -> Diagnostic | None:
        parent = self.tree.find_parent_of(state.leaf)
        if parent is None or not self.tree.set_active(parent, state.leaf):
            return self._reject(
                request, DiagnosticKind.STALE_REFERENCE,
                f"leaf {short_ref(state.leaf)} can not be activated", state, frame,
                leaf=state.leaf.value,
            )
        return self._succeed(request, rule, state, state, frame)

    # === Helpers ===

    def floating_geometry_for(self, panel: PanelId) -> Rect:
        """Remembered floating geometry, else the panel's default"""
        remembered = self.ledger.remembered_geometry(panel)
        if remembered is not None and remembered.is_finite():
            return remembered
        return self.registry.default_geometry_of(panel)

    def _succeed(
        self,
        request: PlacementRequest,
        rule: TransitionRule,
        old: PlacementState,
        new: PlacementState,
        frame: int,
    ) -> None:
        self._record(request, old, new, True, rule.name, frame)
        if METRICS_ENABLED:
            metrics.inc("transition.ok", {"signal": request.signal})
        logger.info(
            f"[Engine:{request.panel.value}] {old.kind.value} → {new.kind.value} | "
            f"signal={request.signal} | rule={rule.name} | {new}"
        )
        return None

    def _reject(
        self,
        request: PlacementRequest,
        kind: DiagnosticKind,
        message: str,
        state: PlacementState,
        frame: int,
        to_state: PlacementState | None = None,
        **context,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            kind=kind,
            panel=request.panel,
            message=message,
            request=request,
            frame=frame,
            context={"state": str(state), **context},
        )
        self._record(request, state, to_state or state, False, kind.value, frame)
        if METRICS_ENABLED:
            metrics.inc("transition.rejected", {"kind": kind.value})
        logger.log(
            _LOG_LEVELS[diagnostic.severity],
            f"[Engine:{request.panel.value}] {request.signal} seq={request.seq}: {message}",
        )
        return diagnostic

    def _record(
        self,
        request: PlacementRequest,
        old: PlacementState,
        new: PlacementState,
        success: bool,
        description: str,
        frame: int,
    ) -> None:
        self.ledger.add_record(
            TransitionRecord(
                signal=request.signal,
                panel=request.panel,
                from_kind=old.kind,
                to_kind=new.kind,
                success=success,
                description=description,
                frame=frame,
            )
        )

    def _dump_layout(self, panel: PanelId) -> None:
        if not LAYOUT_DUMP_ON_DOCK or not logger.isEnabledFor(logging.DEBUG):
            return
        text = render_layout_text(self.tree, self.windows, self.registry)
        logger.debug(f"[Engine:{panel.value}] Layout after dock:\n{text}")
