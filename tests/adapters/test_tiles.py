"""InMemoryTileTree tests"""

import pytest

from paneldock.adapters import ContainerKind, InMemoryTileTree, TraversalOrder
from paneldock.core.ids import TileRef


@pytest.fixture
def tree():
    return InMemoryTileTree()


@pytest.fixture
def split_tree(tree):
    """horizontal[tabs A, vertical[tabs B, tabs C]]"""
    root = tree.add_container(ContainerKind.HORIZONTAL)
    tabs_a = tree.add_container(ContainerKind.TABS, parent=root)
    column = tree.add_container(ContainerKind.VERTICAL, parent=root)
    tabs_b = tree.add_container(ContainerKind.TABS, parent=column)
    tabs_c = tree.add_container(ContainerKind.TABS, parent=column)
    return tree, {"root": root, "a": tabs_a, "column": column, "b": tabs_b, "c": tabs_c}


class TestContainers:
    """Container creation"""

    def test_first_container_becomes_root(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        assert tree.root == tabs
        assert tree.kind_of(tabs) is ContainerKind.TABS

    def test_second_root_container_splits_root(self, tree):
        """A parentless container next to an existing root wraps both"""
        first = tree.add_container(ContainerKind.TABS)
        second = tree.add_container(ContainerKind.TABS, split=ContainerKind.VERTICAL)

        root = tree.root
        assert root not in (first, second)
        assert tree.kind_of(root) is ContainerKind.VERTICAL
        assert tree.children_of(root) == [first, second]

    def test_invalid_parent(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        leaf = tree.insert_leaf(tabs, object())
        assert tree.add_container(ContainerKind.TABS, parent=leaf) is None


class TestLeaves:
    """Leaf insertion and removal"""

    def test_insert_and_remove_keeps_content_identity(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        content = object()

        leaf = tree.insert_leaf(tabs, content)
        assert tree.content_of(leaf) is content
        assert tree.find_parent_of(leaf) == tabs
        assert tree.remove_leaf(leaf) is content
        assert not tree.exists(leaf)

    def test_only_tabs_accept_leaves(self, split_tree):
        tree, refs = split_tree
        assert tree.insert_leaf(refs["root"], object()) is None
        assert tree.insert_leaf(refs["column"], object()) is None

    def test_insert_into_missing_container(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        tree.simplify(tabs)
        assert tree.insert_leaf(tabs, object()) is None

    def test_remove_unknown_leaf(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        assert tree.remove_leaf(tabs) is None

    def test_refs_are_never_reused(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        first = tree.insert_leaf(tabs, object())
        tree.remove_leaf(first)
        second = tree.insert_leaf(tabs, object())
        assert second != first

    def test_iter_leaves_in_pre_order(self, split_tree):
        tree, refs = split_tree
        la = tree.insert_leaf(refs["a"], "a")
        lc = tree.insert_leaf(refs["c"], "c")
        lb = tree.insert_leaf(refs["b"], "b")
        assert list(tree.iter_leaves()) == [(la, "a"), (lb, "b"), (lc, "c")]


class TestActive:
    """Active tab bookkeeping"""

    def test_first_child_is_active(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        first = tree.insert_leaf(tabs, "x")
        tree.insert_leaf(tabs, "y")
        assert tree.active_of(tabs) == first

    def test_set_active(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        tree.insert_leaf(tabs, "x")
        second = tree.insert_leaf(tabs, "y")
        assert tree.set_active(tabs, second)
        assert tree.active_of(tabs) == second

    def test_set_active_rejects_non_child(self, split_tree):
        tree, refs = split_tree
        leaf = tree.insert_leaf(refs["a"], "x")
        assert not tree.set_active(refs["b"], leaf)

    def test_removing_active_selects_neighbour(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        first = tree.insert_leaf(tabs, "x")
        second = tree.insert_leaf(tabs, "y")
        tree.remove_leaf(first)
        assert tree.active_of(tabs) == second


class TestSimplify:
    """simplify() pruning and collapsing"""

    def test_empty_tabs_pruned_and_parent_collapsed(self, split_tree):
        """Empty tabs disappear, the column left with one child collapses"""
        tree, refs = split_tree
        leaf = tree.insert_leaf(refs["b"], "b")
        tree.insert_leaf(refs["c"], "c")
        tree.remove_leaf(leaf)

        tree.simplify(refs["b"])

        assert not tree.exists(refs["b"])
        assert not tree.exists(refs["column"])
        assert tree.children_of(refs["root"]) == [refs["a"], refs["c"]]

    def test_tabs_with_single_leaf_kept(self, split_tree):
        tree, refs = split_tree
        tree.insert_leaf(refs["a"], "a")
        tree.simplify(refs["a"])
        assert tree.exists(refs["a"])

    def test_empty_root_empties_tree(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        leaf = tree.insert_leaf(tabs, "x")
        tree.remove_leaf(leaf)
        tree.simplify(tabs)
        assert tree.root is None
        assert tree.is_empty
        assert len(tree) == 0

    def test_pruning_cascades_to_root(self, split_tree):
        """No leaves anywhere: every container goes"""
        tree, refs = split_tree
        tree.simplify(refs["b"])
        tree.simplify(refs["c"])
        tree.simplify(refs["a"])
        assert tree.is_empty

    def test_single_child_root_collapses(self, tree):
        root = tree.add_container(ContainerKind.HORIZONTAL)
        tabs_a = tree.add_container(ContainerKind.TABS, parent=root)
        tabs_b = tree.add_container(ContainerKind.TABS, parent=root)
        tree.insert_leaf(tabs_a, "a")

        tree.simplify(tabs_b)

        assert tree.root == tabs_a
        assert tree.find_parent_of(tabs_a) is None

    def test_simplify_unknown_ref_is_noop(self, tree):
        tabs = tree.add_container(ContainerKind.TABS)
        tree.insert_leaf(tabs, "a")
        before = tree.to_dict()
        tree.simplify(tabs)
        tree.simplify(TileRef(999))
        assert tree.to_dict() == before


class TestTraversal:
    """find_first_container_of_kind ordering"""

    def test_pre_order_goes_deep_first(self, tree):
        """root[vertical[tabs X], tabs Y]: pre-order finds X, BFS finds Y"""
        root = tree.add_container(ContainerKind.HORIZONTAL)
        column = tree.add_container(ContainerKind.VERTICAL, parent=root)
        deep = tree.add_container(ContainerKind.TABS, parent=column)
        shallow = tree.add_container(ContainerKind.TABS, parent=root)

        assert tree.find_first_container_of_kind(ContainerKind.TABS) == deep
        assert (
            tree.find_first_container_of_kind(ContainerKind.TABS, TraversalOrder.BREADTH_FIRST)
            == shallow
        )

    def test_empty_tree(self, tree):
        assert tree.find_first_container_of_kind(ContainerKind.TABS) is None
