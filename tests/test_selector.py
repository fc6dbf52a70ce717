"""TargetSelector tests"""

import pytest

from paneldock.adapters import ContainerKind, InMemoryTileTree, TraversalOrder
from paneldock.core.ids import PanelId, TileRef
from paneldock.placement import TargetSelector
from paneldock.placement.selector import (
    TIER_CREATED,
    TIER_EXPLICIT,
    TIER_FIRST_TABS,
    TIER_REMEMBERED_PARENT,
)


@pytest.fixture
def tree():
    """horizontal[vertical[tabs deep], tabs shallow]"""
    tree = InMemoryTileTree()
    root = tree.add_container(ContainerKind.HORIZONTAL)
    column = tree.add_container(ContainerKind.VERTICAL, parent=root)
    tree.refs = {
        "root": root,
        "column": column,
        "deep": tree.add_container(ContainerKind.TABS, parent=column),
        "shallow": tree.add_container(ContainerKind.TABS, parent=root),
    }
    return tree


class TestTiers:
    """Selection tiers"""

    def test_explicit_target_first(self, tree):
        selection = TargetSelector().select(
            tree, PanelId.SCENE,
            remembered_parent=tree.refs["deep"], explicit=tree.refs["shallow"],
        )
        assert selection.container == tree.refs["shallow"]
        assert selection.tier == TIER_EXPLICIT
        assert not selection.created

    def test_invalid_explicit_falls_back(self, tree):
        selection = TargetSelector().select(
            tree, PanelId.SCENE,
            remembered_parent=tree.refs["shallow"], explicit=tree.refs["column"],
        )
        assert selection.container == tree.refs["shallow"]
        assert selection.tier == TIER_REMEMBERED_PARENT

    def test_remembered_parent(self, tree):
        selection = TargetSelector().select(tree, PanelId.SCENE, remembered_parent=tree.refs["shallow"])
        assert selection.container == tree.refs["shallow"]
        assert selection.tier == TIER_REMEMBERED_PARENT

    def test_pruned_parent_falls_to_first_tabs(self, tree):
        selection = TargetSelector().select(tree, PanelId.SCENE, remembered_parent=TileRef(999))
        assert selection.container == tree.refs["deep"]
        assert selection.tier == TIER_FIRST_TABS

    def test_parent_of_wrong_kind_skipped(self, tree):
        selection = TargetSelector().select(tree, PanelId.SCENE, remembered_parent=tree.refs["root"])
        assert selection.tier == TIER_FIRST_TABS

    def test_breadth_first_order(self, tree):
        selection = TargetSelector(order=TraversalOrder.BREADTH_FIRST).select(tree, PanelId.SCENE)
        assert selection.container == tree.refs["shallow"]

    def test_order_accepts_config_string(self, tree):
        selector = TargetSelector(order="breadth_first")
        assert selector.order is TraversalOrder.BREADTH_FIRST

    def test_deterministic(self, tree):
        selector = TargetSelector()
        results = {selector.select(tree, PanelId.SCENE).container for _ in range(5)}
        assert results == {tree.refs["deep"]}


class TestCreation:
    """Tier 3: creating a tabs container"""

    def test_empty_tree_gets_root_tabs(self):
        tree = InMemoryTileTree()
        selection = TargetSelector().select(tree, PanelId.DATASET)

        assert selection.tier == TIER_CREATED
        assert selection.created
        assert tree.root == selection.container
        assert tree.kind_of(selection.container) is ContainerKind.TABS

    def test_tree_without_tabs_splits_root(self):
        tree = InMemoryTileTree()
        old_root = tree.add_container(ContainerKind.VERTICAL)
        selection = TargetSelector(split=ContainerKind.HORIZONTAL).select(tree, PanelId.DATASET)

        assert selection.created
        assert tree.kind_of(tree.root) is ContainerKind.HORIZONTAL
        assert tree.children_of(tree.root) == [old_root, selection.container]

    def test_split_must_be_linear(self):
        with pytest.raises(ValueError):
            TargetSelector(split=ContainerKind.TABS)

    def test_refused_creation(self):
        class RefusingTree(InMemoryTileTree):
            def add_container(self, kind, parent=None, split=ContainerKind.HORIZONTAL):
                return None

        assert TargetSelector().select(RefusingTree(), PanelId.SCENE) is None
