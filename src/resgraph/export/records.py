"""Plain-data records for handing a compiled graph to other processes.

Each node becomes ``{id, comment, dependencies, payload}`` where payload is a
single-key mapping naming the variant: ``{"noop": None}``, ``{"file": {...}}`` or
``{"exec": {...}}``. Record field names follow the catalog's camelCase.

Usage:
    records = catalog_to_records(session.finish())
    text = json.dumps(records)
    nodes = catalog_from_json(text)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from resgraph.core.identity.models import MAX_ID
from resgraph.core.resource.models import NOOP, Noop, Payload, ResourceNode
from resgraph.core.resource.schema import Exec, File

Uint64 = Annotated[int, Field(ge=0, le=MAX_ID)]


def payload_to_record(payload: Payload) -> dict[str, Any]:
    """Encode a payload variant as a single-key mapping.

    Args:
        payload: Noop, File, or Exec instance.

    Returns:
        Mapping from variant name to its fields (None for noop).
    """
    if isinstance(payload, Noop):
        return {"noop": None}
    if isinstance(payload, File):
        return {"file": payload.to_record()}
    return {"exec": payload.to_record()}


def node_to_record(node: ResourceNode) -> dict[str, Any]:
    """Encode one node as plain data.

    Args:
        node: Node to encode.

    Returns:
        Dict with id, comment, dependencies and payload.
    """
    return {
        "id": node.id,
        "comment": node.comment,
        "dependencies": list(node.dependencies),
        "payload": payload_to_record(node.payload),
    }


def catalog_to_records(nodes: Iterable[ResourceNode]) -> list[dict[str, Any]]:
    """Encode a compiled graph as a list of plain records, in order."""
    return [node_to_record(node) for node in nodes]


class _NoopPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    noop: None


class _FilePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    file: File


class _ExecPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    exec: Exec


class ResourceRecord(BaseModel):
    """Validated wire record of one node."""

    model_config = ConfigDict(extra="forbid")

    id: Uint64
    comment: str = ""
    dependencies: list[Uint64] = Field(default_factory=list)
    payload: _NoopPayload | _FilePayload | _ExecPayload

    def to_node(self) -> ResourceNode:
        """Rebuild the graph node this record describes."""
        payload: Payload
        if isinstance(self.payload, _FilePayload):
            payload = self.payload.file
        elif isinstance(self.payload, _ExecPayload):
            payload = self.payload.exec
        else:
            payload = NOOP
        return ResourceNode(
            id=self.id,
            comment=self.comment,
            dependencies=tuple(self.dependencies),
            payload=payload,
        )


_catalog_adapter = TypeAdapter(list[ResourceRecord])


def catalog_from_records(records: Any) -> tuple[ResourceNode, ...]:
    """Decode plain records back into graph nodes.

    Args:
        records: List of record mappings.

    Returns:
        Nodes in record order.

    Raises:
        pydantic.ValidationError: If any record is malformed.
    """
    return tuple(record.to_node() for record in _catalog_adapter.validate_python(records))


def catalog_from_json(data: str | bytes) -> tuple[ResourceNode, ...]:
    """Decode a JSON array of records into graph nodes.

    Raises:
        pydantic.ValidationError: If the document is not valid JSON or any
            record is malformed.
    """
    return tuple(record.to_node() for record in _catalog_adapter.validate_json(data))
