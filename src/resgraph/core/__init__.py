"""Core functionalities: identity, type tagging, and resource records.

Architecture Note:
    core/ contains pure, stateless building blocks. The arena that owns nodes
    lives in storage/, and the stateful declaration pass lives in builder/.
"""

from resgraph.core.identity import (
    HashlibIdHasher,
    IdHasher,
    ResourceId,
    ResourceKind,
    Sha1IdHasher,
    derive_id,
    hash_label,
)
from resgraph.core.resource import (
    NOOP,
    Command,
    EnvVar,
    Exec,
    File,
    Noop,
    Payload,
    ResourceNode,
)
from resgraph.core.tagging import RESOURCE_KIND_KEY, MetaLayer, TypeTagRegistry

__all__ = [
    # Identity
    "ResourceId",
    "ResourceKind",
    "IdHasher",
    "HashlibIdHasher",
    "Sha1IdHasher",
    "derive_id",
    "hash_label",
    # Tagging
    "TypeTagRegistry",
    "MetaLayer",
    "RESOURCE_KIND_KEY",
    # Resource
    "ResourceNode",
    "Payload",
    "Noop",
    "NOOP",
    "File",
    "Exec",
    "Command",
    "EnvVar",
]
