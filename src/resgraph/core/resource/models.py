"""Resource node model: the typed record produced per declaration.

Usage:
    node = ResourceNode(
        id=derive_id("motd").value,
        comment="motd",
        dependencies=(derive_id("base").value,),
        payload=File(path="/etc/motd"),
    )
    node.kind  # "file"
"""

from __future__ import annotations

from dataclasses import dataclass

from resgraph.core.identity.models import MAX_ID, ResourceKind
from resgraph.core.resource.schema import Exec, File


@dataclass(frozen=True, slots=True)
class Noop:
    """Payload of a resource that only orders its dependencies."""

    pass


NOOP = Noop()

Payload = Noop | File | Exec

_PAYLOAD_TAGS: dict[type, int] = {
    Noop: ResourceKind.NOOP,
    File: ResourceKind.FILE,
    Exec: ResourceKind.EXEC,
}


def payload_tag(payload: Payload) -> int:
    """Get the reserved type tag matching a payload variant.

    Args:
        payload: Noop, File, or Exec instance.

    Returns:
        Type tag for the variant.

    Raises:
        TypeError: If payload is not one of the known variants.
    """
    try:
        return _PAYLOAD_TAGS[type(payload)]
    except KeyError:
        raise TypeError(f"Unknown payload type {type(payload).__name__}") from None


@dataclass(frozen=True, slots=True)
class ResourceNode:
    """One committed resource in the compiled graph.

    Dependencies keep declaration order and are neither sorted nor deduplicated.
    The node is immutable once built, so its id, dependency count and payload
    kind are fixed for its whole lifetime.
    """

    id: int
    comment: str
    dependencies: tuple[int, ...]
    payload: Payload

    def __post_init__(self) -> None:
        if not 0 <= self.id <= MAX_ID:
            raise ValueError(f"Resource id {self.id} does not fit in 64 bits")
        if not isinstance(self.dependencies, tuple):
            # Freeze whatever sequence the caller handed in.
            object.__setattr__(self, "dependencies", tuple(self.dependencies))
        payload_tag(self.payload)

    @property
    def tag(self) -> int:
        """Type tag of the payload variant."""
        return payload_tag(self.payload)

    @property
    def kind(self) -> str:
        """Payload kind name: ``noop``, ``file`` or ``exec``."""
        return ResourceKind.name_of(self.tag)  # type: ignore[return-value]


def format_resource(node: ResourceNode) -> str:
    """Describe a node for operator-facing messages.

    Args:
        node: Node to describe.

    Returns:
        ``"<comment> (id=<id>)"``, or ``"id=<id>"`` when the node has no comment.
    """
    if not node.comment:
        return f"id={node.id}"
    return f"{node.comment} (id={node.id})"
