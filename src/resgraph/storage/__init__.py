"""Node storage for declaration passes."""

from resgraph.storage.arena import NodeSlot, ResourceArena

__all__ = [
    "NodeSlot",
    "ResourceArena",
]
