"""Resource graph builder: validates declarations and commits typed nodes.

Usage:
    builder = ResourceGraphBuilder()
    spec = builder.registry.tag_type({"path": "/etc/motd"}, ResourceKind.FILE)
    builder.declare_resource("motd", ["base packages"], spec)
    builder.arena[0].dependencies  # (derive_id("base packages").value,)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ValidationError

from resgraph.core.identity.hashing import IdHasher, default_hasher, derive_id
from resgraph.core.identity.models import ResourceId, ResourceKind
from resgraph.core.resource.models import NOOP, Payload, ResourceNode, format_resource
from resgraph.core.resource.schema import Exec, File
from resgraph.core.tagging.registry import TypeTagRegistry
from resgraph.errors import ArgumentTypeError, StructureError, UnknownResourceTypeError
from resgraph.storage.arena import ResourceArena

logger = logging.getLogger(__name__)

_RECORD_MODELS: dict[int, type[BaseModel]] = {
    ResourceKind.FILE: File,
    ResourceKind.EXEC: Exec,
}


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


class ResourceGraphBuilder:
    """Compiles declarations into resource nodes owned by an arena.

    Every argument is resolved and the payload copied before the node is
    committed; a failed declaration raises and leaves the arena unchanged.

    Args:
        arena: Arena receiving committed nodes (a fresh one if omitted).
        registry: Type-tag registry used to classify spec values.
        hasher: Strategy for deriving ids from string labels.
        namespace: Name of the declaration table, used in error messages.
        sort_dependencies: Sort dependency ids instead of keeping declaration order.
    """

    def __init__(
        self,
        arena: ResourceArena | None = None,
        registry: TypeTagRegistry | None = None,
        hasher: IdHasher | None = None,
        *,
        namespace: str = "mcm",
        sort_dependencies: bool = False,
    ):
        self._arena = arena if arena is not None else ResourceArena()
        self._registry = registry if registry is not None else TypeTagRegistry()
        self._hasher = hasher or default_hasher()
        self._namespace = namespace
        self._sort_dependencies = sort_dependencies

    @property
    def arena(self) -> ResourceArena:
        """Arena owning the committed nodes."""
        return self._arena

    @property
    def registry(self) -> TypeTagRegistry:
        """Registry holding the type tags of spec values."""
        return self._registry

    @property
    def hasher(self) -> IdHasher:
        """Strategy used for string labels."""
        return self._hasher

    @property
    def namespace(self) -> str:
        """Name of the declaration table."""
        return self._namespace

    def qualify(self, function: str) -> str:
        """Qualified entry point name used in diagnostics, e.g. ``mcm.resource``."""
        return f"{self._namespace}.{function}"

    def derive_id(self, label: str) -> ResourceId:
        """Derive an identifier for a label with this builder's hasher.

        Args:
            label: Human-readable resource label.

        Returns:
            ResourceId carrying label as its comment.
        """
        return derive_id(label, self._hasher)

    def resolve_id(self, value: Any, position: int, expectation: str) -> ResourceId:
        """Resolve an explicit identifier or a label to a ResourceId.

        Args:
            value: ResourceId or string label.
            position: Argument position reported on failure.
            expectation: Message reported on failure.

        Returns:
            The given ResourceId, or the id derived from the label.

        Raises:
            ArgumentTypeError: If value is neither a ResourceId nor a string.
        """
        if isinstance(value, ResourceId):
            return value
        if isinstance(value, str):
            return self.derive_id(value)
        raise ArgumentTypeError(position, expectation, self.qualify("resource"))

    def resolve_dependencies(self, deps: Any) -> tuple[int, ...]:
        """Resolve every dependency entry to an identifier value.

        Args:
            deps: Sequence of ResourceIds and/or string labels.

        Returns:
            Identifier values, one per entry, in input order (or sorted when
            the builder canonicalizes dependencies).

        Raises:
            ArgumentTypeError: At position 2 if deps is not a sequence or any
                entry is neither a ResourceId nor a string.
        """
        if not _is_sequence(deps):
            raise ArgumentTypeError(2, "must be a sequence", self.qualify("resource"))
        slots: list[int] = [0] * len(deps)
        expectation = f"expect deps to contain only {self.qualify('hash')} or strings"
        for i, entry in enumerate(deps):
            slots[i] = self.resolve_id(entry, 2, expectation).value
        if self._sort_dependencies:
            slots.sort()
        return tuple(slots)

    def resolve_tag(self, spec: Any) -> int:
        """Get the resource-kind tag of a spec value.

        Args:
            spec: Value previously tagged through the registry.

        Returns:
            The nearest tag on the value.

        Raises:
            ArgumentTypeError: At position 3 if the value carries no tag.
        """
        tag = self._registry.query_type(spec)
        if tag is None:
            raise ArgumentTypeError(3, "expect resource table", self.qualify("resource"))
        return tag

    def build_payload(self, tag: int, spec: Any, comment: str) -> Payload:
        """Copy a spec value into the payload variant for its tag.

        Args:
            tag: Resolved resource-kind tag.
            spec: Tagged spec value.
            comment: Label of the resource, for diagnostics.

        Returns:
            Noop, File, or Exec payload.

        Raises:
            UnknownResourceTypeError: If no payload kind matches the tag.
            StructureError: If the spec's fields do not fit the record shape.
        """
        if tag == ResourceKind.NOOP:
            return NOOP
        model = _RECORD_MODELS.get(tag)
        if model is None:
            raise UnknownResourceTypeError(tag, self.qualify("resource"))
        try:
            return model.model_validate(spec)  # type: ignore[return-value]
        except ValidationError as e:
            raise StructureError(ResourceKind.name_of(tag) or hex(tag), comment, e) from e

    def declare_resource(self, id_arg: Any, deps_arg: Any, spec_arg: Any) -> None:
        """Validate one declaration and commit its node to the arena.

        Args:
            id_arg: ResourceId or string label of the resource.
            deps_arg: Sequence of ResourceIds and/or labels this resource depends on.
            spec_arg: Value tagged with a resource kind.

        Raises:
            ArgumentTypeError: If an argument has the wrong shape (position-aware).
            UnknownResourceTypeError: If the spec's tag is not a known kind.
            StructureError: If the spec's fields do not fit the payload record.
            ArenaClosedError: If the pass was already finished.
        """
        rid = self.resolve_id(id_arg, 1, f"expect {self.qualify('hash')} or string")
        dependencies = self.resolve_dependencies(deps_arg)
        tag = self.resolve_tag(spec_arg)

        with self._arena.reserve(rid.comment) as slot:
            payload = self.build_payload(tag, spec_arg, rid.comment)
            node = ResourceNode(
                id=rid.value,
                comment=rid.comment,
                dependencies=dependencies,
                payload=payload,
            )
            slot.fill(node)

        if self._arena.count(rid.value) > 1:
            logger.warning("resource %s declared more than once", format_resource(node))
        logger.debug(
            "committed %s resource %s with %d deps",
            node.kind,
            format_resource(node),
            len(dependencies),
        )
