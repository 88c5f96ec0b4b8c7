"""Content-addressed identifier derivation.

Labels are hashed with a domain-separation prefix; the low 8 bytes of the digest
are read little-endian and bit 0 is forced so every derived id is odd.

Usage:
    rid = derive_id("nginx config")
    assert rid.value & 1 == 1
    assert rid.comment == "nginx config"

    # Swap the digest without touching the bit layout
    hasher = HashlibIdHasher("sha256")
    rid = derive_id("nginx config", hasher=hasher)
"""

from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable

from resgraph.core.identity.models import ResourceId

DEFAULT_PREFIX = "mcm-luacat ID: "


@runtime_checkable
class IdHasher(Protocol):
    """Strategy turning a label into a 64-bit identifier value."""

    def hash_label(self, label: str) -> int: ...


def _encode(text: str) -> bytes:
    """Encode a label as UTF-8, mapping lone surrogates back to their bytes.

    Strings from ``os.fsdecode`` or ``sys.argv`` carry undecodable bytes as
    ``\\udc80``-``\\udcff`` escapes; those round-trip to the original bytes. Any
    other lone surrogate is encoded as-is, so every ``str`` has a digest.
    """
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


def _fold_digest(digest: bytes) -> int:
    """Apply the fixed bit-layout contract to a raw digest.

    Args:
        digest: Digest bytes, at least 8 long.

    Returns:
        Low 8 bytes as a little-endian unsigned integer with bit 0 set.
    """
    return int.from_bytes(digest[:8], "little") | 1


class HashlibIdHasher:
    """Identifier hasher backed by any ``hashlib`` algorithm.

    Args:
        algorithm: Name accepted by ``hashlib.new``.
        prefix: Domain-separation prefix hashed before the label.

    Raises:
        ValueError: If the algorithm is unknown or its digest is shorter than 8 bytes.
    """

    def __init__(self, algorithm: str = "sha1", prefix: str = DEFAULT_PREFIX):
        try:
            probe = hashlib.new(algorithm)
        except ValueError as e:
            raise ValueError(f"Unknown hash algorithm {algorithm!r}") from e
        if probe.digest_size < 8:
            raise ValueError(
                f"Hash algorithm {algorithm!r} has a {probe.digest_size}-byte digest, "
                "need at least 8"
            )
        self._algorithm = algorithm
        self._prefix_text = prefix
        self._prefix = _encode(prefix)

    @property
    def algorithm(self) -> str:
        """Name of the underlying digest."""
        return self._algorithm

    def hash_label(self, label: str) -> int:
        """Derive the identifier value for a label.

        Args:
            label: Human-readable resource label.

        Returns:
            Odd 64-bit identifier value.
        """
        h = hashlib.new(self._algorithm)
        h.update(self._prefix)
        h.update(_encode(label))
        return _fold_digest(h.digest())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._algorithm!r}, prefix={self._prefix_text!r})"


class Sha1IdHasher(HashlibIdHasher):
    """SHA-1 hasher kept for compatibility with previously compiled catalogs."""

    def __init__(self, prefix: str = DEFAULT_PREFIX):
        super().__init__("sha1", prefix)


_default = Sha1IdHasher()


def default_hasher() -> IdHasher:
    """Access the process-wide default hasher.

    Returns:
        The SHA-1 hasher with the standard prefix.
    """
    return _default


def hash_label(label: str, hasher: IdHasher | None = None) -> int:
    """Derive the raw identifier value for a label.

    Args:
        label: Human-readable resource label.
        hasher: Strategy to use (default SHA-1).

    Returns:
        Odd 64-bit identifier value.

    Raises:
        TypeError: If label is not a string.
    """
    if not isinstance(label, str):
        raise TypeError(f"Label must be a string, got {type(label).__name__}")
    return (hasher or _default).hash_label(label)


def derive_id(label: str, hasher: IdHasher | None = None) -> ResourceId:
    """Derive an identifier for a label, keeping the label as its comment.

    Args:
        label: Human-readable resource label.
        hasher: Strategy to use (default SHA-1).

    Returns:
        ResourceId whose value is odd and whose comment is the label.
    """
    return ResourceId(value=hash_label(label, hasher), comment=label)
