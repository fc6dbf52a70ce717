"""Runtime module - bootstrap of the placement components"""

from .bootstrap import (
    RuntimeComponents,
    bootstrap,
    build_default_layout,
)

__all__ = [
    "bootstrap",
    "build_default_layout",
    "RuntimeComponents",
]
