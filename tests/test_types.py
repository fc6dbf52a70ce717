"""Placement data type tests"""

import pytest

from paneldock.core.geometry import Rect
from paneldock.core.ids import PanelId, TileRef
from paneldock.placement import (
    Closed,
    Diagnostic,
    DiagnosticKind,
    Docked,
    Floating,
    PlacementKind,
    RequestClose,
    Severity,
    TransitionRecord,
    WasDocked,
    WasFloating,
)
from paneldock.placement.types import remembered_parent


class TestStates:
    def test_kinds(self):
        assert Docked(TileRef(1)).kind is PlacementKind.DOCKED
        assert Floating(Rect(0, 0, 1, 1)).kind is PlacementKind.FLOATING
        assert Closed().kind is PlacementKind.CLOSED
        assert not PlacementKind.CLOSED.is_open

    def test_str(self):
        assert str(Docked(TileRef(4))) == "docked(#4)"
        assert str(Closed()) == "closed(no_hint)"
        assert str(Closed(WasDocked(TileRef(2)))) == "closed(was_docked(#2))"

    @pytest.mark.parametrize(
        "state, expected",
        [
            (Docked(TileRef(1)), None),
            (Floating(Rect(0, 0, 1, 1), last_parent=TileRef(3)), TileRef(3)),
            (Closed(WasDocked(TileRef(5))), TileRef(5)),
            (Closed(WasFloating(Rect(0, 0, 1, 1), last_parent=TileRef(6))), TileRef(6)),
            (Closed(), None),
        ],
    )
    def test_remembered_parent(self, state, expected):
        assert remembered_parent(state) == expected


class TestDiagnostic:
    def test_default_severity(self):
        stale = Diagnostic(DiagnosticKind.STALE_REFERENCE, PanelId.SCENE, "gone")
        already = Diagnostic(DiagnosticKind.ALREADY_IN_REQUESTED_STATE, PanelId.SCENE, "noop")
        broken = Diagnostic(DiagnosticKind.INVARIANT_VIOLATION, PanelId.SCENE, "twice")

        assert stale.severity is Severity.WARNING and stale.is_failure
        assert already.severity is Severity.INFO and not already.is_failure
        assert broken.severity is Severity.ERROR

    def test_explicit_severity_kept(self):
        diagnostic = Diagnostic(
            DiagnosticKind.STALE_REFERENCE, PanelId.SCENE, "gone", severity=Severity.INFO
        )
        assert diagnostic.severity is Severity.INFO

    def test_to_dict(self):
        request = RequestClose(PanelId.STATS, TileRef(2), seq=7, frame=3)
        diagnostic = Diagnostic(
            DiagnosticKind.PANEL_PINNED, PanelId.STATS, "pinned", request=request, frame=3
        )

        data = diagnostic.to_dict()

        assert data["kind"] == "panel_pinned"
        assert data["severity"] == "warning"
        assert data["signal"] == "close"
        assert data["seq"] == 7
        assert diagnostic.format_log() == "[panel_pinned] stats: pinned"


class TestTransitionRecord:
    def test_str_marks_outcome(self):
        ok = TransitionRecord("undock", PanelId.SCENE, PlacementKind.DOCKED, PlacementKind.FLOATING)
        failed = TransitionRecord(
            "dock", PanelId.SCENE, PlacementKind.FLOATING, PlacementKind.FLOATING,
            success=False, description="docking_failed",
        )

        assert "✓ undock(scene) docked → floating" in str(ok)
        assert str(failed).endswith("✗ dock(scene) floating → floating docking_failed")
        assert ok.to_dict()["to_kind"] == "floating"
