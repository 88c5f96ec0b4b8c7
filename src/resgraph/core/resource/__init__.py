"""Resource records: graph nodes and their payload variants."""

from resgraph.core.resource.models import (
    NOOP,
    Noop,
    Payload,
    ResourceNode,
    format_resource,
    payload_tag,
)
from resgraph.core.resource.schema import (
    Command,
    Directory,
    EnvVar,
    Exec,
    File,
    PlainFile,
    Symlink,
)

__all__ = [
    "ResourceNode",
    "Payload",
    "Noop",
    "NOOP",
    "payload_tag",
    "format_resource",
    "File",
    "PlainFile",
    "Directory",
    "Symlink",
    "Exec",
    "Command",
    "EnvVar",
]
