"""Resource identity: 64-bit identifiers, reserved kinds, and label hashing."""

from resgraph.core.identity.hashing import (
    HashlibIdHasher,
    IdHasher,
    Sha1IdHasher,
    default_hasher,
    derive_id,
    hash_label,
)
from resgraph.core.identity.models import MAX_ID, ResourceId, ResourceKind

__all__ = [
    "MAX_ID",
    "ResourceId",
    "ResourceKind",
    "IdHasher",
    "HashlibIdHasher",
    "Sha1IdHasher",
    "default_hasher",
    "derive_id",
    "hash_label",
]
