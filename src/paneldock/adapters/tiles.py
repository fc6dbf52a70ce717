"""In-memory tile tree

Reference TileTree used by the demo and the tests. Mirrors the behaviour
of an egui_tiles tree configured with all_panes_must_have_tabs:
- leaves only live inside tabs containers
- simplify() prunes empty containers upwards and collapses linear
  containers that are left with a single child
- refs are never reused, so a stale ref simply stops existing
"""

import itertools
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ..core.ids import TileRef
from ..telemetry import get_logger
from .base import ContainerKind, TileTree, TraversalOrder

logger = get_logger(__name__)


@dataclass
class _Leaf:
    content: Any


@dataclass
class _Container:
    kind: ContainerKind
    children: list[TileRef] = field(default_factory=list)
    active: TileRef | None = None


class InMemoryTileTree(TileTree):
    """Dictionary-backed tile tree.

    Attributes:
        name: Tree name used in logs
    """

    def __init__(self, name: str = "main_tree"):
        self.name = name
        self._ids = itertools.count(1)
        self._nodes: dict[TileRef, _Leaf | _Container] = {}
        self._parents: dict[TileRef, TileRef] = {}
        self._root: TileRef | None = None

    # === Queries ===

    @property
    def root(self) -> TileRef | None:
        return self._root

    def exists(self, ref: TileRef) -> bool:
        return ref in self._nodes

    def kind_of(self, ref: TileRef) -> ContainerKind | None:
        node = self._nodes.get(ref)
        if isinstance(node, _Container):
            return node.kind
        return None

    def is_leaf(self, ref: TileRef) -> bool:
        return isinstance(self._nodes.get(ref), _Leaf)

    def children_of(self, ref: TileRef) -> list[TileRef]:
        node = self._nodes.get(ref)
        if isinstance(node, _Container):
            return list(node.children)
        return []

    def content_of(self, leaf: TileRef) -> Any | None:
        node = self._nodes.get(leaf)
        if isinstance(node, _Leaf):
            return node.content
        return None

    def active_of(self, container: TileRef) -> TileRef | None:
        node = self._nodes.get(container)
        if isinstance(node, _Container):
            return node.active
        return None

    def find_parent_of(self, ref: TileRef) -> TileRef | None:
        return self._parents.get(ref)

    def iter_containers(
        self, order: TraversalOrder = TraversalOrder.PRE_ORDER
    ) -> Iterator[TileRef]:
        """Containers reachable from the root in the given order"""
        for ref in self._walk(order):
            if isinstance(self._nodes[ref], _Container):
                yield ref

    def find_first_container_of_kind(
        self,
        kind: ContainerKind,
        order: TraversalOrder = TraversalOrder.PRE_ORDER,
    ) -> TileRef | None:
        for ref in self.iter_containers(order):
            if self._nodes[ref].kind is kind:
                return ref
        return None

    def iter_leaves(self) -> Iterator[tuple[TileRef, Any]]:
        for ref in self._walk(TraversalOrder.PRE_ORDER):
            node = self._nodes[ref]
            if isinstance(node, _Leaf):
                yield ref, node.content

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def is_empty(self) -> bool:
        return self._root is None

    # === Mutations ===

    def add_container(
        self,
        kind: ContainerKind,
        parent: TileRef | None = None,
        split: ContainerKind = ContainerKind.HORIZONTAL,
    ) -> TileRef | None:
        if parent is not None:
            parent_node = self._nodes.get(parent)
            if not isinstance(parent_node, _Container):
                logger.debug(f"[Tiles:{self.name}] add_container: invalid parent {parent}")
                return None
            ref = self._new_ref()
            self._nodes[ref] = _Container(kind=kind)
            self._attach(parent, ref)
            return ref

        ref = self._new_ref()
        self._nodes[ref] = _Container(kind=kind)
        if self._root is None:
            self._root = ref
            return ref

        # Split: wrap the old root and the new container side by side
        old_root = self._root
        wrapper = self._new_ref()
        self._nodes[wrapper] = _Container(kind=split)
        self._root = wrapper
        self._attach(wrapper, old_root)
        self._attach(wrapper, ref)
        logger.debug(f"[Tiles:{self.name}] Split root {old_root} into {wrapper} ({split.value})")
        return ref

    def insert_leaf(self, container: TileRef, content: Any) -> TileRef | None:
        node = self._nodes.get(container)
        if not isinstance(node, _Container) or not node.kind.accepts_leaves:
            logger.debug(f"[Tiles:{self.name}] insert_leaf: {container} cannot take leaves")
            return None
        ref = self._new_ref()
        self._nodes[ref] = _Leaf(content=content)
        self._attach(container, ref)
        return ref

    def remove_leaf(self, leaf: TileRef) -> Any | None:
        node = self._nodes.get(leaf)
        if not isinstance(node, _Leaf):
            return None
        self._detach(leaf)
        del self._nodes[leaf]
        return node.content

    def set_active(self, container: TileRef, child: TileRef) -> bool:
        node = self._nodes.get(container)
        if not isinstance(node, _Container) or child not in node.children:
            return False
        node.active = child
        return True

    def simplify(self, container: TileRef) -> None:
        ref: TileRef | None = container
        while ref is not None:
            node = self._nodes.get(ref)
            if not isinstance(node, _Container):
                return
            parent = self._parents.get(ref)

            if not node.children:
                self._detach(ref)
                del self._nodes[ref]
                logger.debug(f"[Tiles:{self.name}] Pruned empty {node.kind.value} {ref}")
                ref = parent
                continue

            if len(node.children) == 1:
                only = node.children[0]
                if node.kind.is_linear or isinstance(self._nodes[only], _Container):
                    self._replace(ref, only)
                    logger.debug(f"[Tiles:{self.name}] Collapsed {node.kind.value} {ref} into {only}")
            return

    # === Internals ===

    def _new_ref(self) -> TileRef:
        return TileRef(next(self._ids))

    def _walk(self, order: TraversalOrder) -> Iterator[TileRef]:
        if self._root is None:
            return
        if order is TraversalOrder.BREADTH_FIRST:
            pending: deque[TileRef] = deque([self._root])
            while pending:
                ref = pending.popleft()
                yield ref
                node = self._nodes[ref]
                if isinstance(node, _Container):
                    pending.extend(node.children)
        else:
            stack = [self._root]
            while stack:
                ref = stack.pop()
                yield ref
                node = self._nodes[ref]
                if isinstance(node, _Container):
                    stack.extend(reversed(node.children))

    def _attach(self, parent: TileRef, child: TileRef) -> None:
        node = self._nodes[parent]
        node.children.append(child)
        self._parents[child] = parent
        if node.active is None:
            node.active = child

    def _detach(self, ref: TileRef) -> None:
        parent = self._parents.pop(ref, None)
        if parent is None:
            if self._root == ref:
                self._root = None
            return
        node = self._nodes[parent]
        index = node.children.index(ref)
        node.children.pop(index)
        if node.active == ref:
            if node.children:
                node.active = node.children[min(index, len(node.children) - 1)]
            else:
                node.active = None

    def _replace(self, ref: TileRef, child: TileRef) -> None:
        """Put child where ref was and drop ref"""
        parent = self._parents.pop(ref, None)
        del self._nodes[ref]
        if parent is None:
            self._root = child
            self._parents.pop(child, None)
            return
        node = self._nodes[parent]
        node.children[node.children.index(ref)] = child
        self._parents[child] = parent
        if node.active == ref:
            node.active = child

    def to_dict(self, ref: TileRef | None = None) -> dict | None:
        """Nested dict view of the tree (debugging)"""
        ref = ref if ref is not None else self._root
        if ref is None:
            return None
        node = self._nodes[ref]
        if isinstance(node, _Leaf):
            return {"ref": ref.value, "leaf": True}
        return {
            "ref": ref.value,
            "kind": node.kind.value,
            "active": node.active.value if node.active else None,
            "children": [self.to_dict(c) for c in node.children],
        }
