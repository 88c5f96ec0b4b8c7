"""Export formats for compiled graphs: plain records and Graphviz."""

from resgraph.export.dot import iter_dot_lines, render_dot
from resgraph.export.records import (
    ResourceRecord,
    catalog_from_json,
    catalog_from_records,
    catalog_to_records,
    node_to_record,
    payload_to_record,
)

__all__ = [
    "ResourceRecord",
    "node_to_record",
    "payload_to_record",
    "catalog_to_records",
    "catalog_from_records",
    "catalog_from_json",
    "render_dot",
    "iter_dot_lines",
]
