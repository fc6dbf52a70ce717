"""Layout diagnostics renderer module."""

from .layout import build_layout_tree, render_layout_text

__all__ = [
    "build_layout_tree",
    "render_layout_text",
]
