"""Collaborator adapters

- base: TileTree / WindowHost interfaces
- tiles: InMemoryTileTree
- windows: InMemoryWindowHost
"""

from .base import ContainerKind, TileTree, TraversalOrder, WindowHost
from .tiles import InMemoryTileTree
from .windows import InMemoryWindowHost

__all__ = [
    "ContainerKind",
    "TraversalOrder",
    "TileTree",
    "WindowHost",
    "InMemoryTileTree",
    "InMemoryWindowHost",
]
