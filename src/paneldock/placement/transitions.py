"""Placement transition rules

Rule table:
| # | request | from | transition | guards |
|---|---------|------|------------|--------|
| U1 | undock | DOCKED | undock | leaf_matches, not pinned |
| D1 | dock | FLOATING, CLOSED | dock | |
| D2 | dock_to | FLOATING, CLOSED | dock | |
| X1 | close(leaf) | DOCKED | close_docked | leaf_matches, not pinned |
| X2 | close() | FLOATING | close_floating | no_leaf, not pinned |
| R1 | reopen | CLOSED | reopen | |
| A1 | activate | DOCKED | activate | leaf_matches |

No rule for (request, placement): the request is either already satisfied
(ALREADY_IN_REQUESTED_STATE) or refers to a placement the panel no longer
has (STALE_REFERENCE). See PlacementRequest.satisfied_by().
"""

from .predicates import reject_pinned, require_leaf_matches, require_no_leaf
from .types import (
    PlacementKind,
    PlacementRequest,
    RequestActivate,
    RequestClose,
    RequestDock,
    RequestDockTo,
    RequestReopen,
    RequestUndock,
    TransitionRule,
)

NOT_DOCKED = {PlacementKind.FLOATING, PlacementKind.CLOSED}


# === Undock ===

U1_UNDOCK = TransitionRule(
    name="U1_undock",
    request_type=RequestUndock,
    from_kinds={PlacementKind.DOCKED},
    transition="undock",
    guards=[require_leaf_matches(), reject_pinned()],
)


# === Dock ===

D1_DOCK = TransitionRule(
    name="D1_dock",
    request_type=RequestDock,
    from_kinds=NOT_DOCKED,
    transition="dock",
)

D2_DOCK_TO = TransitionRule(
    name="D2_dock_to",
    request_type=RequestDockTo,
    from_kinds=NOT_DOCKED,
    transition="dock",
)


# === Close ===

X1_CLOSE_DOCKED = TransitionRule(
    name="X1_close_docked",
    request_type=RequestClose,
    from_kinds={PlacementKind.DOCKED},
    transition="close_docked",
    guards=[require_leaf_matches(), reject_pinned()],
)

X2_CLOSE_FLOATING = TransitionRule(
    name="X2_close_floating",
    request_type=RequestClose,
    from_kinds={PlacementKind.FLOATING},
    transition="close_floating",
    guards=[require_no_leaf(), reject_pinned()],
)


# === Reopen / activate ===

R1_REOPEN = TransitionRule(
    name="R1_reopen",
    request_type=RequestReopen,
    from_kinds={PlacementKind.CLOSED},
    transition="reopen",
)

A1_ACTIVATE = TransitionRule(
    name="A1_activate",
    request_type=RequestActivate,
    from_kinds={PlacementKind.DOCKED},
    transition="activate",
    guards=[require_leaf_matches()],
)


# === Rule table ===
# First match wins

TRANSITION_RULES: list[TransitionRule] = [
    U1_UNDOCK,
    D1_DOCK,
    D2_DOCK_TO,
    X1_CLOSE_DOCKED,
    X2_CLOSE_FLOATING,
    R1_REOPEN,
    A1_ACTIVATE,
]


def find_matching_rules(
    request: PlacementRequest,
    current_kind: PlacementKind,
) -> list[TransitionRule]:
    """Rules matching request type and placement (guards not checked)

    Args:
        request: Placement request
        current_kind: Panel's current placement

    Returns:
        Matching rules in table order
    """
    result = []
    for rule in TRANSITION_RULES:
        if not rule.matches_request(request):
            continue
        if not rule.matches_from_kind(current_kind):
            continue
        result.append(rule)
    return result


def find_matching_rule(
    request: PlacementRequest,
    current_kind: PlacementKind,
) -> TransitionRule | None:
    rules = find_matching_rules(request, current_kind)
    return rules[0] if rules else None
