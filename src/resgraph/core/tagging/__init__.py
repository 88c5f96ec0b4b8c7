"""Type tagging: resource-kind markers layered over arbitrary value metadata."""

from resgraph.core.tagging.models import RESOURCE_KIND_KEY, MetaLayer
from resgraph.core.tagging.registry import TypeTagRegistry

__all__ = [
    "RESOURCE_KIND_KEY",
    "MetaLayer",
    "TypeTagRegistry",
]
