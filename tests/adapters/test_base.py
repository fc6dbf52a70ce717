"""Collaborator interface tests"""

import pytest
from abc import ABC

from paneldock.adapters.base import ContainerKind, TileTree, WindowHost
from paneldock.adapters import InMemoryTileTree, InMemoryWindowHost


class TestContainerKind:
    """ContainerKind properties"""

    def test_only_tabs_accept_leaves(self):
        assert ContainerKind.TABS.accepts_leaves
        assert not ContainerKind.HORIZONTAL.accepts_leaves
        assert not ContainerKind.VERTICAL.accepts_leaves

    def test_linear_kinds(self):
        assert ContainerKind.HORIZONTAL.is_linear
        assert ContainerKind.VERTICAL.is_linear
        assert not ContainerKind.TABS.is_linear


class TestInterfaces:
    """Abstract base classes"""

    def test_tile_tree_is_abstract(self):
        assert issubclass(TileTree, ABC)
        with pytest.raises(TypeError):
            TileTree()

    def test_window_host_is_abstract(self):
        assert issubclass(WindowHost, ABC)
        with pytest.raises(TypeError):
            WindowHost()

    def test_in_memory_implementations(self):
        assert isinstance(InMemoryTileTree(), TileTree)
        assert isinstance(InMemoryWindowHost(), WindowHost)
