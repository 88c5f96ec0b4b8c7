"""Type-tag registry: marks ordinary composite values as resource kinds.

Values such as dicts cannot carry attributes, so metadata lives in a side table
keyed by object identity. The table holds a strong reference to each tagged value,
which keeps ``id()`` from being recycled while the registry is alive.

Usage:
    registry = TypeTagRegistry()
    spec = registry.tag_type({"path": "/etc/motd"}, ResourceKind.FILE)
    registry.query_type(spec)  # ResourceKind.FILE
    registry.query_type({})     # None
"""

from __future__ import annotations

import logging
from typing import Any

from resgraph.core.tagging.models import RESOURCE_KIND_KEY, MetaLayer

logger = logging.getLogger(__name__)


class TypeTagRegistry:
    """Side table of metadata chains for declaration values.

    One registry belongs to one declaration pass, so tags never leak across passes.
    """

    def __init__(self) -> None:
        self._layers: dict[int, tuple[Any, MetaLayer]] = {}

    def _layer(self, value: Any) -> MetaLayer | None:
        entry = self._layers.get(id(value))
        if entry is None or entry[0] is not value:
            return None
        return entry[1]

    def _push(self, value: Any, entries: dict[str, Any]) -> MetaLayer:
        layer = MetaLayer(entries=entries, base=self._layer(value))
        self._layers[id(value)] = (value, layer)
        return layer

    def attach(self, value: Any, key: str, data: Any) -> Any:
        """Attach arbitrary metadata to a value as a new override layer.

        Args:
            value: Value to annotate.
            key: Metadata key.
            data: Metadata value.

        Returns:
            The same value, for chaining.
        """
        self._push(value, {key: data})
        return value

    def tag_type(self, value: Any, tag: int) -> Any:
        """Mark a value as a resource kind.

        If the value already carries metadata, the tag is stacked on top of it:
        the new layer answers the resource-kind key and defers everything else to
        the previous layer.

        Args:
            value: Composite value to tag.
            tag: Resource-kind tag.

        Returns:
            The same value, now tagged.
        """
        layer = self._push(value, {RESOURCE_KIND_KEY: tag})
        logger.debug(
            "tagged %s value as %#x (chain depth %d)", type(value).__name__, tag, layer.depth()
        )
        return value

    def lookup(self, value: Any, key: str, default: Any = None) -> Any:
        """Resolve a metadata key through the value's override chain.

        Args:
            value: Value to inspect.
            key: Metadata key.
            default: Returned when the key is not attached anywhere.

        Returns:
            Nearest attached value for key, else default.
        """
        layer = self._layer(value)
        if layer is None:
            return default
        return layer.lookup(key, default)

    def query_type(self, value: Any) -> int | None:
        """Get the nearest resource-kind tag of a value without mutating it.

        Args:
            value: Value to inspect.

        Returns:
            Tag, or None if no layer in the chain carries one.
        """
        return self.lookup(value, RESOURCE_KIND_KEY)

    def metadata(self, value: Any) -> MetaLayer | None:
        """Get the nearest metadata layer of a value.

        Args:
            value: Value to inspect.

        Returns:
            Top of the override chain, or None if nothing is attached.
        """
        return self._layer(value)

    def __len__(self) -> int:
        return len(self._layers)

    def __contains__(self, value: Any) -> bool:
        return self._layer(value) is not None
