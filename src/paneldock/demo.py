"""Demo: interactive panel placement"""

from .core.geometry import Rect
from .core.ids import PanelId
from .placement.types import Diagnostic
from .runtime.bootstrap import RuntimeComponents, bootstrap
from .telemetry import metrics, setup_logging


def select_panel(components: RuntimeComponents, panels: list[PanelId] | None = None) -> PanelId | None:
    """Ask the user to pick a panel"""
    panels = panels if panels is not None else components.registry.panel_ids
    if not panels:
        print("No panels to choose from")
        return None

    print("-" * 40)
    for idx, panel in enumerate(panels):
        state = components.manager.placement_of(panel)
        print(f"  [{idx}] {components.registry.title_of(panel):<12} {state}")
    print("-" * 40)
    try:
        choice = int(input(f"Panel number (0-{len(panels) - 1}): "))
    except ValueError:
        print("Please enter a number")
        return None
    if 0 <= choice < len(panels):
        return panels[choice]
    print("Invalid number")
    return None


def run_frame(components: RuntimeComponents) -> list[Diagnostic]:
    """Drive one frame and print what happened"""
    diagnostics = components.manager.drive()
    for diagnostic in diagnostics:
        print(f"  ! {diagnostic.severity.value}: {diagnostic.format_log()}")
    if not diagnostics:
        print("  ok")
    return diagnostics


def undock_panel(components: RuntimeComponents):
    """Action 2: undock a docked tab"""
    panel = select_panel(components)
    if panel is None:
        return
    leaf = components.manager.leaf_of(panel)
    if leaf is None:
        print(f"{panel.title} is not docked")
        return
    components.handle().undock(panel, leaf)
    run_frame(components)


def dock_panel(components: RuntimeComponents):
    """Action 3: dock a floating or closed panel"""
    panel = select_panel(components)
    if panel is None:
        return
    components.handle().dock(panel)
    run_frame(components)


def close_panel(components: RuntimeComponents):
    """Action 4: close a docked tab or a floating window"""
    panel = select_panel(components)
    if panel is None:
        return
    components.handle().close(panel, components.manager.leaf_of(panel))
    run_frame(components)


def reopen_panel(components: RuntimeComponents):
    """Action 5: the "View" menu"""
    panel = select_panel(components, components.manager.reopenable_panels())
    if panel is None:
        return
    components.handle().reopen(panel)
    run_frame(components)


def activate_panel(components: RuntimeComponents):
    """Action 6: select a docked tab"""
    panel = select_panel(components)
    if panel is None:
        return
    leaf = components.manager.leaf_of(panel)
    if leaf is None:
        print(f"{panel.title} is not docked")
        return
    components.handle().activate(panel, leaf)
    run_frame(components)


def move_window(components: RuntimeComponents):
    """Action 7: move/resize a floating window, picked up on the next frame"""
    panel = select_panel(components, components.windows.open_panels())
    if panel is None:
        return
    try:
        values = [float(v) for v in input("x y width height: ").split()]
        geometry = Rect.from_min_size(*values)
    except (TypeError, ValueError):
        print("Please enter four numbers")
        return
    components.windows.move(panel, geometry)
    run_frame(components)


def show_metrics():
    """Action 9: dump counters and gauges"""
    for name, value in sorted(metrics.get_all_counters().items()):
        print(f"  {name} = {value}")
    for name, value in sorted(metrics.get_all_gauges().items()):
        print(f"  {name} = {value:g}")


def main_menu(components: RuntimeComponents):
    """Main menu"""
    actions = {
        "2": undock_panel,
        "3": dock_panel,
        "4": close_panel,
        "5": reopen_panel,
        "6": activate_panel,
        "7": move_window,
    }
    while True:
        print("\n" + "=" * 40)
        print(f"  PanelDock Demo (frame {components.manager.frame})")
        print("=" * 40)
        print("  [1] Show layout")
        print("  [2] Undock panel")
        print("  [3] Dock panel")
        print("  [4] Close panel")
        print("  [5] Reopen panel")
        print("  [6] Activate tab")
        print("  [7] Move floating window")
        print("  [8] Show history")
        print("  [9] Show metrics")
        print("  [0] Exit")
        print("=" * 40)

        choice = input("Choose: ").strip()

        if choice == "1":
            print(components.manager.render_layout())
        elif choice in actions:
            actions[choice](components)
        elif choice == "8":
            print(components.manager.ledger.get_history_log())
        elif choice == "9":
            show_metrics()
        elif choice == "0":
            print("Bye!")
            break
        else:
            print("Invalid choice, try again")


def main():
    """Run the demo"""
    setup_logging()
    main_menu(bootstrap())


if __name__ == "__main__":
    main()
