"""Placement data types

Contains:
- PlacementKind / PlacementState: where a panel is (Docked, Floating, Closed)
- PriorPlacementHint: how to restore a closed panel
- PlacementRequest variants: what the UI asked for during a pass
- Diagnostic: outcome of a request that did not simply succeed
- TransitionRecord: ledger history entry
- TransitionRule / Guard: declarative transition table entries
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

from ..core.geometry import Rect
from ..core.ids import PanelId, TileRef, short_ref


class PlacementKind(Enum):
    """Placement tag"""

    DOCKED = "docked"
    FLOATING = "floating"
    CLOSED = "closed"

    @property
    def is_open(self) -> bool:
        """Visible somewhere (tree or window)"""
        return self is not PlacementKind.CLOSED


# === Restore hints ===


@dataclass(frozen=True)
class WasDocked:
    """Panel was closed from a docked tab

    Attributes:
        parent: Container it was removed from (may be pruned since)
    """

    parent: TileRef

    def __str__(self) -> str:
        return f"was_docked({short_ref(self.parent)})"


@dataclass(frozen=True)
class WasFloating:
    """Panel was closed from a floating window

    Attributes:
        geometry: Window geometry at close time
        last_parent: Container the panel had been undocked from, if any
    """

    geometry: Rect
    last_parent: TileRef | None = None

    def __str__(self) -> str:
        return f"was_floating({self.geometry})"


PriorPlacementHint = WasDocked | WasFloating


# === Placement states ===


@dataclass(frozen=True)
class Docked:
    """Panel is a leaf of the tile tree"""

    leaf: TileRef

    @property
    def kind(self) -> PlacementKind:
        return PlacementKind.DOCKED

    def __str__(self) -> str:
        return f"docked({short_ref(self.leaf)})"


@dataclass(frozen=True)
class Floating:
    """Panel is an open floating window"""

    geometry: Rect
    last_parent: TileRef | None = None

    @property
    def kind(self) -> PlacementKind:
        return PlacementKind.FLOATING

    def __str__(self) -> str:
        return f"floating({self.geometry}, last_parent={short_ref(self.last_parent)})"


@dataclass(frozen=True)
class Closed:
    """Panel is shown nowhere"""

    last_known: PriorPlacementHint | None = None

    @property
    def kind(self) -> PlacementKind:
        return PlacementKind.CLOSED

    def __str__(self) -> str:
        return f"closed({self.last_known or 'no_hint'})"


PlacementState = Docked | Floating | Closed


def remembered_parent(state: PlacementState) -> TileRef | None:
    """Container a panel most recently left, if the state remembers one"""
    if isinstance(state, Floating):
        return state.last_parent
    if isinstance(state, Closed):
        hint = state.last_known
        if isinstance(hint, WasDocked):
            return hint.parent
        if isinstance(hint, WasFloating):
            return hint.last_parent
    return None


# === Requests ===


@dataclass(frozen=True)
class PlacementRequest:
    """Request buffered during a UI pass

    seq and frame are stamped by EventQueue.submit().

    Attributes:
        panel: Panel the request is about
        seq: Submission sequence number
        frame: Frame the request was submitted in
    """

    panel: PanelId
    seq: int = field(default=0, kw_only=True)
    frame: int = field(default=0, kw_only=True)

    signal = "request"

    def satisfied_by(self, kind: PlacementKind) -> bool:
        """Whether a panel in this placement already has what the request asks for"""
        return False

    def format_log(self) -> str:
        return f"{self.signal}({self.panel.value}) seq={self.seq} frame={self.frame}"


@dataclass(frozen=True)
class RequestDock(PlacementRequest):
    signal = "dock"

    def satisfied_by(self, kind: PlacementKind) -> bool:
        return kind is PlacementKind.DOCKED


@dataclass(frozen=True)
class RequestDockTo(PlacementRequest):
    """Dock into a specific container (falls back to target selection)"""

    container: TileRef | None = None

    signal = "dock_to"

    def satisfied_by(self, kind: PlacementKind) -> bool:
        return kind is PlacementKind.DOCKED


@dataclass(frozen=True)
class RequestUndock(PlacementRequest):
    """Undock the docked tab `leaf` (captured when the button was clicked)"""

    leaf: TileRef | None = None

    signal = "undock"

    def satisfied_by(self, kind: PlacementKind) -> bool:
        return kind is PlacementKind.FLOATING


@dataclass(frozen=True)
class RequestClose(PlacementRequest):
    """Close a panel; leaf is set when closing a docked tab, None for a window"""

    leaf: TileRef | None = None

    signal = "close"

    def satisfied_by(self, kind: PlacementKind) -> bool:
        return kind is PlacementKind.CLOSED


@dataclass(frozen=True)
class RequestReopen(PlacementRequest):
    signal = "reopen"

    def satisfied_by(self, kind: PlacementKind) -> bool:
        return kind.is_open


@dataclass(frozen=True)
class RequestActivate(PlacementRequest):
    """Make a docked tab the visible one of its container"""

    leaf: TileRef | None = None

    signal = "activate"


# === Diagnostics ===


class Severity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticKind(Enum):
    """Outcome taxonomy. None of these abort the drain."""

    STALE_REFERENCE = "stale_reference"
    DOCKING_FAILED = "docking_failed"
    ALREADY_IN_REQUESTED_STATE = "already_in_requested_state"
    INVARIANT_VIOLATION = "invariant_violation"
    PANEL_PINNED = "panel_pinned"
    WINDOW_FAILED = "window_failed"

    @property
    def default_severity(self) -> Severity:
        severities = {
            DiagnosticKind.ALREADY_IN_REQUESTED_STATE: Severity.INFO,
            DiagnosticKind.INVARIANT_VIOLATION: Severity.ERROR,
        }
        return severities.get(self, Severity.WARNING)


@dataclass
class Diagnostic:
    """Outcome of a request that did not simply succeed

    Attributes:
        kind: Diagnostic kind
        panel: Panel concerned
        message: Human readable description
        severity: Defaults from kind
        request: Request that produced it (None for validation passes)
        frame: Frame number
        context: Extra data (refs, states) for callers
    """

    kind: DiagnosticKind
    panel: PanelId
    message: str
    severity: Severity | None = None
    request: PlacementRequest | None = None
    frame: int = 0
    context: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.severity is None:
            self.severity = self.kind.default_severity

    @property
    def is_failure(self) -> bool:
        return self.severity is not Severity.INFO

    def format_log(self) -> str:
        return f"[{self.kind.value}] {self.panel.value}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "panel": self.panel.value,
            "message": self.message,
            "severity": self.severity.value,
            "signal": self.request.signal if self.request else None,
            "seq": self.request.seq if self.request else None,
            "frame": self.frame,
            "context": dict(self.context),
        }


# === History ===


@dataclass
class TransitionRecord:
    """Ledger history entry"""

    signal: str
    panel: PanelId
    from_kind: PlacementKind
    to_kind: PlacementKind
    success: bool = True
    description: str = ""
    frame: int = 0
    timestamp: float = field(default_factory=lambda: datetime.now().timestamp())

    def __str__(self) -> str:
        ts = datetime.fromtimestamp(self.timestamp).strftime("%H:%M:%S")
        mark = "✓" if self.success else "✗"
        return (
            f"{ts} | {mark} {self.signal}({self.panel.value}) "
            f"{self.from_kind.value} → {self.to_kind.value} {self.description}".rstrip()
        )

    def to_dict(self) -> dict:
        return {
            "signal": self.signal,
            "panel": self.panel.value,
            "from_kind": self.from_kind.value,
            "to_kind": self.to_kind.value,
            "success": self.success,
            "description": self.description,
            "frame": self.frame,
            "timestamp": self.timestamp,
        }


# === Transition table ===


@dataclass(frozen=True)
class LedgerSnapshot:
    """Read-only view handed to guard predicates"""

    panel: PanelId
    state: PlacementState
    pinned: bool = False

    @property
    def kind(self) -> PlacementKind:
        return self.state.kind


Predicate = Callable[[PlacementRequest, LedgerSnapshot], bool]


@dataclass(frozen=True)
class Guard:
    """Named predicate plus the diagnostic produced when it fails"""

    name: str
    check: Predicate
    reject_kind: DiagnosticKind = DiagnosticKind.STALE_REFERENCE


@dataclass
class TransitionRule:
    """Placement transition rule

    Attributes:
        name: Rule name (also used in history)
        request_type: Request class the rule handles
        from_kinds: Placements the rule applies to
        transition: Engine transition to run
        guards: Predicates that must all pass
    """

    name: str
    request_type: type[PlacementRequest]
    from_kinds: set[PlacementKind]
    transition: str
    guards: list[Guard] = field(default_factory=list)

    def matches_request(self, request: PlacementRequest) -> bool:
        return type(request) is self.request_type

    def matches_from_kind(self, kind: PlacementKind) -> bool:
        return kind in self.from_kinds

    def first_failed_guard(
        self, request: PlacementRequest, snapshot: LedgerSnapshot
    ) -> Guard | None:
        """Return the first guard that rejects the request, None if all pass"""
        for guard in self.guards:
            if not guard.check(request, snapshot):
                return guard
        return None
