"""Bootstrap - builds the placement components

Responsibilities:
- Register every panel with a fresh content object
- Build the initial docked layout in the tile tree
- Create the window host and the PlacementManager
- Seed the ledger from the layout

Not responsible for:
- Driving frames (done by the caller)
- Rendering panel content
"""

from collections.abc import Iterable
from dataclasses import dataclass

from ..adapters.base import ContainerKind, TraversalOrder
from ..adapters.tiles import InMemoryTileTree
from ..adapters.windows import InMemoryWindowHost
from ..config import DOCK_TARGET_TRAVERSAL, NEW_ROOT_SPLIT
from ..core.ids import PanelId, TileRef
from ..placement.manager import PlacementManager
from ..placement.queue import RequestSink
from ..placement.registry import PanelRegistry
from ..placement.selector import TargetSelector
from ..telemetry import get_logger

logger = get_logger(__name__)


@dataclass
class RuntimeComponents:
    """Components returned by bootstrap()"""

    registry: PanelRegistry
    tree: InMemoryTileTree
    windows: InMemoryWindowHost
    manager: PlacementManager
    containers: dict[str, TileRef]

    def handle(self) -> RequestSink:
        """Submit-only handle for a UI pass"""
        return self.manager.handle()


def build_default_layout(tree: InMemoryTileTree, registry: PanelRegistry) -> dict[str, TileRef]:
    """Build the default layout

    horizontal
    ├── vertical
    │   ├── tabs [Settings, Presets, Properties]
    │   └── tabs [Stats]
    ├── tabs [Scene]
    └── tabs [Dataset]

    Panels missing from the registry are skipped.

    Returns:
        Named container refs: root, left_column, left_tabs, stats_tabs,
        scene_tabs, dataset_tabs
    """
    root = tree.add_container(ContainerKind.HORIZONTAL)
    left_column = tree.add_container(ContainerKind.VERTICAL, parent=root)
    containers = {
        "root": root,
        "left_column": left_column,
        "left_tabs": tree.add_container(ContainerKind.TABS, parent=left_column),
        "stats_tabs": tree.add_container(ContainerKind.TABS, parent=left_column),
        "scene_tabs": tree.add_container(ContainerKind.TABS, parent=root),
        "dataset_tabs": tree.add_container(ContainerKind.TABS, parent=root),
    }

    placements = [
        ("left_tabs", PanelId.SETTINGS),
        ("left_tabs", PanelId.PRESETS),
        ("left_tabs", PanelId.PROPERTIES),
        ("stats_tabs", PanelId.STATS),
        ("scene_tabs", PanelId.SCENE),
        ("dataset_tabs", PanelId.DATASET),
    ]
    for name, panel in placements:
        if panel not in registry:
            continue
        tree.insert_leaf(containers[name], registry.content_of(panel))

    # Tabs left empty by skipped panels
    for name in ("left_tabs", "stats_tabs", "scene_tabs", "dataset_tabs"):
        if not tree.children_of(containers[name]):
            tree.simplify(containers[name])

    logger.debug(f"[Bootstrap] Layout built: {tree.to_dict()}")
    return containers


def bootstrap(
    panels: Iterable[PanelId] | None = None,
    pinned: Iterable[PanelId] = (),
    traversal: TraversalOrder | str = DOCK_TARGET_TRAVERSAL,
    split: ContainerKind | str = NEW_ROOT_SPLIT,
) -> RuntimeComponents:
    """Build registry, layout, window host and manager

    Args:
        panels: Panels to register, all PanelId members by default
        pinned: Panels that can not be undocked or closed
        traversal: Traversal order for docking target selection
        split: Root split kind used when a new tabs container is needed

    Returns:
        RuntimeComponents with a seeded ledger
    """
    pinned = set(pinned)
    registry = PanelRegistry()
    for panel in panels if panels is not None else PanelId:
        registry.register(panel, pinned=panel in pinned)

    tree = InMemoryTileTree()
    containers = build_default_layout(tree, registry)
    windows = InMemoryWindowHost()

    manager = PlacementManager(
        registry, tree, windows, selector=TargetSelector(traversal, split)
    )
    manager.seed_from_layout()

    logger.info(f"[Bootstrap] Components created ({len(registry)} panels)")

    return RuntimeComponents(
        registry=registry,
        tree=tree,
        windows=windows,
        manager=manager,
        containers=containers,
    )
