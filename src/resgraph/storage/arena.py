"""Resource arena: exclusive owner of the nodes built during one declaration pass.

Nodes are appended, never removed. Allocation goes through ``reserve()``, which
hands out a slot and discards it if the declaration fails before filling it, so
a failed declaration leaves no trace in the arena.

Usage:
    arena = ResourceArena()
    with arena.reserve(comment="motd") as slot:
        slot.fill(ResourceNode(id=..., comment="motd", dependencies=(), payload=NOOP))
    nodes = arena.release()  # arena is closed from here on
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from resgraph.core.resource.models import ResourceNode
from resgraph.errors import ArenaClosedError

logger = logging.getLogger(__name__)


class NodeSlot:
    """Reserved position in an arena awaiting its node.

    Args:
        index: Position the node will occupy.
        comment: Label of the resource being declared, for diagnostics.
    """

    __slots__ = ("_index", "_comment", "_node")

    def __init__(self, index: int, comment: str = ""):
        self._index = index
        self._comment = comment
        self._node: ResourceNode | None = None

    @property
    def index(self) -> int:
        """Position of this slot in the arena."""
        return self._index

    @property
    def filled(self) -> bool:
        """Whether a node has been placed in this slot."""
        return self._node is not None

    def fill(self, node: ResourceNode) -> None:
        """Place the finished node in this slot.

        Args:
            node: Node to commit on successful exit of the reservation.

        Raises:
            RuntimeError: If the slot was already filled.
        """
        if self._node is not None:
            raise RuntimeError(f"Slot {self._index} ({self._comment!r}) already filled")
        self._node = node


class ResourceArena:
    """Append-only store of resource nodes for a single pass.

    Only one reservation may be open at a time; the declaration pass is
    single-threaded and declarations do not nest.
    """

    def __init__(self) -> None:
        self._nodes: list[ResourceNode] = []
        self._by_id: dict[int, list[int]] = {}
        self._open: NodeSlot | None = None
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ArenaClosedError("Arena was already released to the convergence stage")

    @contextmanager
    def reserve(self, comment: str = "") -> Iterator[NodeSlot]:
        """Reserve the next slot for a node.

        The node is committed when the block exits normally with the slot filled.
        If the block raises, or exits without filling the slot, the reservation is
        dropped and the arena is unchanged.

        Args:
            comment: Label of the resource being declared, for diagnostics.

        Yields:
            Slot to fill with the finished node.

        Raises:
            ArenaClosedError: If the arena was already released.
            RuntimeError: If another reservation is still open.
        """
        self._check_open()
        if self._open is not None:
            raise RuntimeError(
                f"Slot {self._open.index} is still reserved; declarations cannot nest"
            )
        slot = NodeSlot(len(self._nodes), comment)
        self._open = slot
        try:
            yield slot
        except BaseException:
            logger.debug("discarding slot %d (%r) after failure", slot.index, comment)
            raise
        else:
            if slot._node is None:
                logger.debug("discarding unfilled slot %d (%r)", slot.index, comment)
            else:
                self._commit(slot._node)
        finally:
            self._open = None

    def _commit(self, node: ResourceNode) -> None:
        self._by_id.setdefault(node.id, []).append(len(self._nodes))
        self._nodes.append(node)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[ResourceNode]:
        self._check_open()
        return iter(self._nodes)

    def __getitem__(self, index: int) -> ResourceNode:
        self._check_open()
        return self._nodes[index]

    def find(self, resource_id: int) -> list[ResourceNode]:
        """Find every committed node declared with an id.

        Args:
            resource_id: Identifier value to look up.

        Returns:
            Nodes with that id, in declaration order (empty if none).
        """
        self._check_open()
        return [self._nodes[i] for i in self._by_id.get(resource_id, [])]

    def count(self, resource_id: int) -> int:
        """Number of committed nodes declared with an id."""
        return len(self._by_id.get(resource_id, []))

    @property
    def closed(self) -> bool:
        """Whether the node list was already released."""
        return self._closed

    def release(self) -> tuple[ResourceNode, ...]:
        """Hand the node list off and tear the arena down.

        Returns:
            Committed nodes in declaration order.

        Raises:
            ArenaClosedError: If the arena was already released.
            RuntimeError: If a reservation is still open.
        """
        self._check_open()
        if self._open is not None:
            raise RuntimeError(f"Cannot release arena while slot {self._open.index} is reserved")
        nodes = tuple(self._nodes)
        self._nodes = []
        self._by_id = {}
        self._closed = True
        return nodes
