"""PanelDock configuration

Settings are grouped as:
- Floating window geometry defaults
- Docking target selection
- Event queue
- Ledger history
- Validation and diagnostics
- Logging and metrics
"""

import os

# === Floating geometry ===
# (x, y, width, height)
DEFAULT_FLOATING_GEOMETRY = (100.0, 100.0, 200.0, 200.0)  # Fallback for panels without their own
PANEL_FLOATING_GEOMETRY: dict[str, tuple[float, float, float, float]] = {
    "settings": (750.0, 50.0, 250.0, 300.0),
    "properties": (750.0, 400.0, 250.0, 300.0),
}  # Keyed by PanelId.value

# === Docking target selection ===
DOCK_TARGET_TRAVERSAL = "pre_order"  # "pre_order" | "breadth_first"
NEW_ROOT_SPLIT = "horizontal"  # Split direction when a tabs container must be added next to an existing root

# === Event queue ===
QUEUE_HIGH_WATERMARK = 64  # Pending requests before a debug log; requests are never dropped

# === Ledger ===
LEDGER_HISTORY_MAX_LENGTH = 50  # Transition records kept in memory

# === Validation and diagnostics ===
VALIDATE_AFTER_DRAIN = True  # Check every panel's exclusivity after each drain
LAYOUT_DUMP_ON_DOCK = True  # Log a rendered tree at DEBUG after docking transitions
LAYOUT_DUMP_WIDTH = 100  # Console width used for the rendered tree

# === Logging ===
LOG_LEVEL = os.environ.get("PANELDOCK_LOG_LEVEL", "INFO")

# === Metrics ===
METRICS_ENABLED = True
