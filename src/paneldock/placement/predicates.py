"""Built-in guards

Guards used by TransitionRule. Each wraps a predicate with the signature
(request: PlacementRequest, snapshot: LedgerSnapshot) -> bool plus the
diagnostic kind reported when it fails.

Available guards:
- require_leaf_matches(): captured leaf equals the ledger's current leaf
- require_no_leaf(): request carries no leaf (window close)
- reject_pinned(): panel is not pinned
"""

from .types import (
    DiagnosticKind,
    Docked,
    Guard,
    LedgerSnapshot,
    PlacementRequest,
)


def require_leaf_matches() -> Guard:
    """Reject requests whose captured leaf is no longer the panel's leaf

    A leaf captured at submission time goes stale when an earlier request in
    the same batch moved the panel.

    Returns:
        Guard reporting STALE_REFERENCE
    """
    def predicate(request: PlacementRequest, snapshot: LedgerSnapshot) -> bool:
        leaf = getattr(request, "leaf", None)
        state = snapshot.state
        return isinstance(state, Docked) and leaf == state.leaf

    return Guard("require_leaf_matches", predicate, DiagnosticKind.STALE_REFERENCE)


def require_no_leaf() -> Guard:
    """Reject window closes that were issued against a docked tab

    Returns:
        Guard reporting STALE_REFERENCE
    """
    def predicate(request: PlacementRequest, snapshot: LedgerSnapshot) -> bool:
        return getattr(request, "leaf", None) is None

    return Guard("require_no_leaf", predicate, DiagnosticKind.STALE_REFERENCE)


def reject_pinned() -> Guard:
    """Refuse to move pinned panels out of the tree

    Returns:
        Guard reporting PANEL_PINNED
    """
    def predicate(request: PlacementRequest, snapshot: LedgerSnapshot) -> bool:
        return not snapshot.pinned

    return Guard("reject_pinned", predicate, DiagnosticKind.PANEL_PINNED)


def always_true() -> Guard:
    """Guard that always passes (tests)"""
    def predicate(request: PlacementRequest, snapshot: LedgerSnapshot) -> bool:
        return True

    return Guard("always_true", predicate)


def always_false() -> Guard:
    """Guard that always fails (tests)"""
    def predicate(request: PlacementRequest, snapshot: LedgerSnapshot) -> bool:
        return False

    return Guard("always_false", predicate)
