"""Metadata layers attached to declaration values.

A layer holds its own entries and falls back to the layer it was stacked on, so
tagging a value never destroys metadata it already carried.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

RESOURCE_KIND_KEY = "resource_kind"

_MISSING = object()


@dataclass(slots=True)
class MetaLayer:
    """One link of a metadata override chain.

    Attributes:
        entries: Keys exposed directly by this layer.
        base: Layer consulted for keys this one does not define.
    """

    entries: dict[str, Any] = field(default_factory=dict)
    base: MetaLayer | None = None

    def lookup(self, key: str, default: Any = None) -> Any:
        """Find the nearest value for a key along the chain.

        Args:
            key: Metadata key.
            default: Returned when no layer defines the key.

        Returns:
            Value from the closest layer defining key, else default.
        """
        for layer in self.chain():
            value = layer.entries.get(key, _MISSING)
            if value is not _MISSING:
                return value
        return default

    def chain(self) -> Iterator[MetaLayer]:
        """Iterate this layer and every base layer, nearest first."""
        layer: MetaLayer | None = self
        while layer is not None:
            yield layer
            layer = layer.base

    def depth(self) -> int:
        """Number of layers in the chain, including this one."""
        return sum(1 for _ in self.chain())
