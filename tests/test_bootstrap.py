"""bootstrap() tests"""

import pytest

from paneldock.adapters import InMemoryTileTree
from paneldock.adapters.base import ContainerKind, TraversalOrder
from paneldock.core.ids import PanelId
from paneldock.placement import Docked, PanelRegistry, RequestSink
from paneldock.runtime.bootstrap import bootstrap, build_default_layout


class TestDefaultLayout:
    """build_default_layout"""

    def test_shape(self, components):
        tree = components.tree
        containers = components.containers

        assert tree.root == containers["root"]
        assert tree.children_of(containers["root"]) == [
            containers["left_column"],
            containers["scene_tabs"],
            containers["dataset_tabs"],
        ]
        assert tree.kind_of(containers["left_column"]) is ContainerKind.VERTICAL
        assert len(tree.children_of(containers["left_tabs"])) == 3

    def test_every_panel_docked_once(self, components, any_panel):
        state = components.manager.placement_of(any_panel)
        assert isinstance(state, Docked)
        content = components.registry.content_of(any_panel)
        holders = [ref for ref, held in components.tree.iter_leaves() if held is content]
        assert holders == [state.leaf]

    def test_unregistered_panels_skipped(self):
        registry = PanelRegistry()
        registry.register(PanelId.SCENE)
        tree = InMemoryTileTree()

        containers = build_default_layout(tree, registry)

        assert [content for _, content in tree.iter_leaves()] == [
            registry.content_of(PanelId.SCENE)
        ]
        assert tree.root == containers["scene_tabs"]


class TestBootstrap:
    def test_components(self, components):
        assert len(components.registry) == len(PanelId)
        assert components.windows.open_panels() == []
        assert components.manager.tree is components.tree
        assert isinstance(components.handle(), RequestSink)

    def test_pinned(self):
        components = bootstrap(pinned=[PanelId.SCENE])
        assert components.registry.is_pinned(PanelId.SCENE)
        assert not components.registry.is_pinned(PanelId.STATS)

    def test_selector_options(self):
        components = bootstrap(traversal="breadth_first", split="vertical")
        selector = components.manager.engine.selector
        assert selector.order is TraversalOrder.BREADTH_FIRST
        assert selector.split is ContainerKind.VERTICAL

    def test_tabs_split_rejected(self):
        with pytest.raises(ValueError):
            bootstrap(split="tabs")
