"""Placement module

Core components of panel placement:
- types: placement states, requests, diagnostics, rule types
- registry: PanelRegistry (identity -> content)
- ledger: PlacementLedger (identity -> placement)
- queue: EventQueue / RequestSink (deferred requests)
- predicates: guard library
- transitions: transition rule table
- selector: TargetSelector (docking destination)
- engine: TransitionEngine
- manager: PlacementManager (per-frame drive)
"""

from .types import (
    PlacementKind,
    Docked,
    Floating,
    Closed,
    PlacementState,
    WasDocked,
    WasFloating,
    PriorPlacementHint,
    PlacementRequest,
    RequestDock,
    RequestDockTo,
    RequestUndock,
    RequestClose,
    RequestReopen,
    RequestActivate,
    Diagnostic,
    DiagnosticKind,
    Severity,
    TransitionRecord,
    TransitionRule,
    Guard,
    LedgerSnapshot,
)
from .predicates import (
    require_leaf_matches,
    require_no_leaf,
    reject_pinned,
)
from .registry import PanelContent, PanelRegistry, PanelSpec
from .ledger import PlacementLedger
from .queue import ActorQueue, EventQueue, RequestSink
from .selector import Selection, TargetSelector
from .engine import TransitionEngine
from .manager import PlacementManager

__all__ = [
    # Types
    "PlacementKind",
    "Docked",
    "Floating",
    "Closed",
    "PlacementState",
    "WasDocked",
    "WasFloating",
    "PriorPlacementHint",
    "PlacementRequest",
    "RequestDock",
    "RequestDockTo",
    "RequestUndock",
    "RequestClose",
    "RequestReopen",
    "RequestActivate",
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    "TransitionRecord",
    "TransitionRule",
    "Guard",
    "LedgerSnapshot",
    # Predicates
    "require_leaf_matches",
    "require_no_leaf",
    "reject_pinned",
    # Registry / ledger
    "PanelContent",
    "PanelRegistry",
    "PanelSpec",
    "PlacementLedger",
    # Queue
    "ActorQueue",
    "EventQueue",
    "RequestSink",
    # Selector / engine
    "Selection",
    "TargetSelector",
    "TransitionEngine",
    # Manager
    "PlacementManager",
]
