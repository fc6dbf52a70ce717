"""TargetSelector - picks the container a panel docks into

Tiers (first success wins):
0. explicit container (dock_to requests)
1. the panel's remembered parent
2. first tabs container in configured traversal order
3. a new tabs container (new root, or a split of the existing root)

A candidate counts only if it still exists and accepts leaves.
"""

from dataclasses import dataclass

from ..adapters.base import ContainerKind, TileTree, TraversalOrder
from ..config import DOCK_TARGET_TRAVERSAL, NEW_ROOT_SPLIT
from ..core.ids import PanelId, TileRef, short_ref
from ..telemetry import get_logger

logger = get_logger(__name__)

TIER_EXPLICIT = 0
TIER_REMEMBERED_PARENT = 1
TIER_FIRST_TABS = 2
TIER_CREATED = 3


@dataclass(frozen=True)
class Selection:
    """Selected destination

    Attributes:
        container: Container to insert into
        tier: Which tier produced it
        created: The container was created for this selection
    """

    container: TileRef
    tier: int
    created: bool = False


class TargetSelector:
    """Docking destination selector

    Attributes:
        order: Traversal order for the first-tabs tier
        split: Kind of the container wrapping the root when a tabs container
            has to be added to a non-empty tree
    """

    def __init__(
        self,
        order: TraversalOrder | str = DOCK_TARGET_TRAVERSAL,
        split: ContainerKind | str = NEW_ROOT_SPLIT,
    ):
        self.order = TraversalOrder(order)
        self.split = ContainerKind(split)
        if not self.split.is_linear:
            raise ValueError(f"Root split must be horizontal or vertical, got {self.split.value}")

    def is_valid_target(self, tree: TileTree, container: TileRef | None) -> bool:
        """Container exists and accepts leaves"""
        if container is None or not tree.exists(container):
            return False
        kind = tree.kind_of(container)
        return kind is not None and kind.accepts_leaves

    def select(
        self,
        tree: TileTree,
        panel: PanelId,
        remembered_parent: TileRef | None = None,
        explicit: TileRef | None = None,
    ) -> Selection | None:
        """Pick a destination container

        Args:
            tree: Tile tree
            panel: Panel being docked (logging only)
            remembered_parent: Container the panel last left
            explicit: Container named by the request

        Returns:
            Selection, or None if the tree refused to create a container
        """
        if explicit is not None:
            if self.is_valid_target(tree, explicit):
                return self._selected(panel, Selection(explicit, TIER_EXPLICIT))
            logger.debug(
                f"[Selector:{panel.value}] Explicit target {short_ref(explicit)} invalid, falling back"
            )

        if self.is_valid_target(tree, remembered_parent):
            return self._selected(panel, Selection(remembered_parent, TIER_REMEMBERED_PARENT))

        first = tree.find_first_container_of_kind(ContainerKind.TABS, self.order)
        if first is not None:
            return self._selected(panel, Selection(first, TIER_FIRST_TABS))

        created = tree.add_container(ContainerKind.TABS, split=self.split)
        if created is None:
            logger.warning(f"[Selector:{panel.value}] Tree refused to create a tabs container")
            return None
        return self._selected(panel, Selection(created, TIER_CREATED, created=True))

    def _selected(self, panel: PanelId, selection: Selection) -> Selection:
        logger.debug(
            f"[Selector:{panel.value}] tier={selection.tier} "
            f"container={short_ref(selection.container)} created={selection.created}"
        )
        return selection
