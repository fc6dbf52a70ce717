"""InMemoryWindowHost tests"""

import pytest

from paneldock.adapters import InMemoryWindowHost
from paneldock.core.geometry import Rect
from paneldock.core.ids import PanelId


@pytest.fixture
def windows():
    return InMemoryWindowHost()


class TestWindowHost:
    """open / close / move"""

    def test_open_and_close_returns_geometry(self, windows):
        geometry = Rect(10, 20, 300, 200)
        assert windows.open(PanelId.SCENE, geometry)
        assert windows.is_open(PanelId.SCENE)
        assert windows.current_geometry(PanelId.SCENE) == geometry

        assert windows.close(PanelId.SCENE) == geometry
        assert not windows.is_open(PanelId.SCENE)
        assert windows.current_geometry(PanelId.SCENE) is None

    def test_open_twice_refused(self, windows):
        windows.open(PanelId.STATS, Rect(0, 0, 10, 10))
        assert not windows.open(PanelId.STATS, Rect(5, 5, 10, 10))
        assert windows.current_geometry(PanelId.STATS) == Rect(0, 0, 10, 10)

    def test_close_not_open(self, windows):
        assert windows.close(PanelId.DATASET) is None

    def test_move(self, windows):
        windows.open(PanelId.SETTINGS, Rect(0, 0, 10, 10))
        assert windows.move(PanelId.SETTINGS, Rect(50, 60, 70, 80))
        assert windows.current_geometry(PanelId.SETTINGS) == Rect(50, 60, 70, 80)

    def test_move_not_open(self, windows):
        assert not windows.move(PanelId.SETTINGS, Rect(0, 0, 1, 1))

    def test_open_panels_in_open_order(self, windows):
        windows.open(PanelId.STATS, Rect(0, 0, 1, 1))
        windows.open(PanelId.SCENE, Rect(0, 0, 1, 1))
        assert windows.open_panels() == [PanelId.STATS, PanelId.SCENE]
