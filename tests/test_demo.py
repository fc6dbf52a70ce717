"""Demo menu tests"""

from unittest.mock import patch

from paneldock import demo
from paneldock.core.ids import PanelId
from paneldock.placement import Floating


def test_menu_shows_layout_and_exits(components, capsys):
    with patch("builtins.input", side_effect=["1", "9", "x", "0"]):
        demo.main_menu(components)

    out = capsys.readouterr().out
    assert "Settings" in out
    assert "Invalid choice" in out
    assert "Bye!" in out


def test_undock_action(components, capsys):
    index = components.registry.panel_ids.index(PanelId.STATS)
    with patch("builtins.input", side_effect=[str(index)]):
        demo.undock_panel(components)

    assert isinstance(components.manager.placement_of(PanelId.STATS), Floating)
    assert "ok" in capsys.readouterr().out


def test_select_panel_rejects_bad_input(components, capsys):
    with patch("builtins.input", side_effect=["abc"]):
        assert demo.select_panel(components) is None
    assert "Please enter a number" in capsys.readouterr().out
