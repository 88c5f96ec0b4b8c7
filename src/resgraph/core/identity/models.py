"""Resource identity models.

Usage:
    rid = ResourceId(value=0x1234_5678_9ABC_DEF1, comment="nginx config")
    ResourceKind.FILE  # reserved type tag, never produced by the hasher
"""

from dataclasses import dataclass

MAX_ID = (1 << 64) - 1


@dataclass(frozen=True, slots=True)
class ResourceId:
    """64-bit resource identifier paired with the label it was derived from.

    The comment only carries provenance for diagnostics; equality and hashing
    use both fields, so compare ``value`` when only identity matters.
    """

    value: int
    comment: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.value <= MAX_ID:
            raise ValueError(f"Resource id {self.value} does not fit in 64 bits")

    def is_hashed(self) -> bool:
        """Check if this identifier lies in the hash-derived (odd) range.

        Returns:
            True if the lowest bit is set, False for reserved sentinels.
        """
        return self.value & 1 == 1

    def __int__(self) -> int:
        return self.value


class ResourceKind:
    """Reserved type tags for built-in resource kinds.

    NOOP is zero and FILE/EXEC are even, so none of them is reachable by the
    hasher, which always sets bit 0.
    FILE is the legacy catalog tool's file tag 0x8DC4AC52B2962163 with bit 0
    cleared; catalogs never carry tags, so only the in-process value changed.
    """

    NOOP = 0
    FILE = 0x8DC4AC52B2962162
    EXEC = 0x984C97311006F1CA

    _NAMES = {NOOP: "noop", FILE: "file", EXEC: "exec"}

    @classmethod
    def name_of(cls, tag: int) -> str | None:
        """Get the payload kind name for a reserved tag.

        Args:
            tag: Type tag to look up.

        Returns:
            Kind name, or None if the tag is not reserved.
        """
        return cls._NAMES.get(tag)
