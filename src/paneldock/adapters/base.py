"""Collaborator adapter interfaces

The placement core never renders or lays anything out itself. It talks to
two collaborators through these interfaces:
- TileTree: hierarchical tree of containers and leaves (docked panels)
- WindowHost: independent floating surfaces, one per floating panel

Design rules:
1. Minimal surface: only what placement bookkeeping needs
2. Failures are return values (None / False), never exceptions
3. Refs are opaque: the core stores and passes TileRef, nothing more
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from enum import Enum
from typing import Any

from ..core.geometry import Rect
from ..core.ids import PanelId, TileRef


class ContainerKind(Enum):
    """Container layout kind."""

    TABS = "tabs"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def accepts_leaves(self) -> bool:
        """Whether panels can be docked directly into this container"""
        return self is ContainerKind.TABS

    @property
    def is_linear(self) -> bool:
        return self in {ContainerKind.HORIZONTAL, ContainerKind.VERTICAL}


class TraversalOrder(Enum):
    """Container traversal order used when searching the tree."""

    PRE_ORDER = "pre_order"
    BREADTH_FIRST = "breadth_first"


class TileTree(ABC):
    """Tile tree interface

    Usage:
        tabs = tree.add_container(ContainerKind.TABS)
        leaf = tree.insert_leaf(tabs, content)
        parent = tree.find_parent_of(leaf)
        content = tree.remove_leaf(leaf)
        tree.simplify(parent)
    """

    @property
    @abstractmethod
    def root(self) -> TileRef | None:
        """Root tile, None when the tree is empty"""
        pass

    @abstractmethod
    def exists(self, ref: TileRef) -> bool:
        """Whether the ref still names a tile in the tree"""
        pass

    @abstractmethod
    def kind_of(self, ref: TileRef) -> ContainerKind | None:
        """Container kind, None for leaves and unknown refs"""
        pass

    @abstractmethod
    def children_of(self, ref: TileRef) -> list[TileRef]:
        """Children of a container (empty for leaves and unknown refs)"""
        pass

    @abstractmethod
    def content_of(self, leaf: TileRef) -> Any | None:
        """Content held by a leaf"""
        pass

    @abstractmethod
    def active_of(self, container: TileRef) -> TileRef | None:
        """Visible child of a container"""
        pass

    @abstractmethod
    def insert_leaf(self, container: TileRef, content: Any) -> TileRef | None:
        """Add a new leaf holding content to a container

        Args:
            container: Destination container (must accept leaves)
            content: Panel content, stored by reference

        Returns:
            New leaf ref, or None if the container is missing or of the wrong kind
        """
        pass

    @abstractmethod
    def remove_leaf(self, leaf: TileRef) -> Any | None:
        """Detach a leaf from its parent and drop it

        Returns:
            The content it held, or None if the leaf does not exist
        """
        pass

    @abstractmethod
    def find_parent_of(self, ref: TileRef) -> TileRef | None:
        """Parent container of a tile, None for the root and unknown refs"""
        pass

    @abstractmethod
    def find_first_container_of_kind(
        self,
        kind: ContainerKind,
        order: TraversalOrder = TraversalOrder.PRE_ORDER,
    ) -> TileRef | None:
        """First container of a kind reachable from the root"""
        pass

    @abstractmethod
    def add_container(
        self,
        kind: ContainerKind,
        parent: TileRef | None = None,
        split: ContainerKind = ContainerKind.HORIZONTAL,
    ) -> TileRef | None:
        """Create a container

        Args:
            kind: Container kind
            parent: Parent container; None makes it the root, and an existing
                root is wrapped in a new `split` container next to it
            split: Kind of the wrapping container when the root is split

        Returns:
            New container ref, or None if the parent is invalid
        """
        pass

    @abstractmethod
    def set_active(self, container: TileRef, child: TileRef) -> bool:
        """Make a child the visible one of its container"""
        pass

    @abstractmethod
    def simplify(self, container: TileRef) -> None:
        """Prune empty containers and collapse single-child ones, walking upwards"""
        pass

    @abstractmethod
    def iter_leaves(self) -> Iterator[tuple[TileRef, Any]]:
        """All (leaf, content) pairs reachable from the root"""
        pass


class WindowHost(ABC):
    """Floating window host interface

    One independent surface per floating panel.
    """

    @abstractmethod
    def open(self, panel: PanelId, geometry: Rect) -> bool:
        """Open a surface for a panel

        Returns:
            Whether the window was opened (False if already open or refused)
        """
        pass

    @abstractmethod
    def close(self, panel: PanelId) -> Rect | None:
        """Close a panel's surface

        Returns:
            Last geometry of the surface, or None if it was not open
        """
        pass

    @abstractmethod
    def is_open(self, panel: PanelId) -> bool:
        pass

    @abstractmethod
    def current_geometry(self, panel: PanelId) -> Rect | None:
        """Geometry as the user left it this frame, None if not open"""
        pass

    @abstractmethod
    def open_panels(self) -> list[PanelId]:
        pass
