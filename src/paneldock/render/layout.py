"""Layout diagnostics rendered with Rich.

Turns the tile tree, the floating windows and (optionally) the closed
panels into plain text. Used for debug logging after docking and by the
demo.
"""

import io
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from ..adapters.base import TileTree, WindowHost
from ..config import LAYOUT_DUMP_WIDTH
from ..core.ids import TileRef

if TYPE_CHECKING:
    from ..placement.ledger import PlacementLedger
    from ..placement.registry import PanelRegistry


def _leaf_label(
    tree: TileTree, leaf: TileRef, registry: "PanelRegistry | None", active: bool
) -> Text:
    content = tree.content_of(leaf)
    panel = registry.panel_for_content(content) if registry is not None else None
    name = registry.title_of(panel) if panel is not None else repr(content)
    label = Text(f"{leaf} {name}")
    if active:
        label.append(" *", style="bold")
    return label


def _add_subtree(
    node: Tree,
    tree: TileTree,
    ref: TileRef,
    registry: "PanelRegistry | None",
    active: bool = False,
) -> None:
    kind = tree.kind_of(ref)
    if kind is None:
        node.add(_leaf_label(tree, ref, registry, active))
        return
    branch = node.add(Text(f"{ref} {kind.value}", style="cyan"))
    current = tree.active_of(ref)
    for child in tree.children_of(ref):
        _add_subtree(branch, tree, child, registry, active=child == current)


def build_layout_tree(
    tree: TileTree,
    windows: WindowHost,
    registry: "PanelRegistry | None" = None,
    ledger: "PlacementLedger | None" = None,
) -> Tree:
    """Build a Rich tree of the whole layout

    Args:
        tree: Tile tree
        windows: Floating window host
        registry: Used to show panel titles instead of raw content
        ledger: When given, closed panels are listed too

    Returns:
        rich.tree.Tree with "docked", "floating" and "closed" branches
    """
    layout = Tree(Text("layout", style="bold"))

    docked = layout.add("docked")
    root = tree.root
    if root is None:
        docked.add(Text("(empty)", style="dim"))
    else:
        _add_subtree(docked, tree, root, registry)

    floating = layout.add("floating")
    open_panels = windows.open_panels()
    if not open_panels:
        floating.add(Text("(none)", style="dim"))
    for panel in open_panels:
        geometry = windows.current_geometry(panel)
        title = registry.title_of(panel) if registry is not None else panel.value
        floating.add(f"{title} {geometry}")

    if ledger is not None:
        closed = layout.add("closed")
        closed_panels = ledger.closed_panels()
        if not closed_panels:
            closed.add(Text("(none)", style="dim"))
        for panel in closed_panels:
            title = registry.title_of(panel) if registry is not None else panel.value
            closed.add(f"{title} {ledger.get(panel)}")

    return layout


def render_layout_text(
    tree: TileTree,
    windows: WindowHost,
    registry: "PanelRegistry | None" = None,
    ledger: "PlacementLedger | None" = None,
    width: int = LAYOUT_DUMP_WIDTH,
) -> str:
    """Render the layout as plain text (no colour codes)."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None, force_terminal=False)
    console.print(build_layout_tree(tree, windows, registry, ledger))
    return buffer.getvalue().rstrip("\n")
