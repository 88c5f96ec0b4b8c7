"""Compiler configuration using Pydantic Settings.

Usage:
    from resgraph.config import CompilerSettings

    # Load from environment variables (RESGRAPH_*)
    settings = CompilerSettings()

    # Or override with explicit values
    settings = CompilerSettings(hash_algorithm="sha256", sort_dependencies=True)
"""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from resgraph.core.identity.hashing import DEFAULT_PREFIX, HashlibIdHasher, IdHasher, Sha1IdHasher


class CompilerSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for declaration passes.

    Attributes:
        id_hash_prefix: Domain-separation prefix hashed before every label.
        hash_algorithm: ``hashlib`` digest used to derive identifiers.
        namespace: Name of the declaration table, used in error messages.
        sort_dependencies: Sort dependency ids ascending instead of keeping
            declaration order. Duplicates are kept either way.
        log_level: Logging level used by the command-line tool.

    Environment Variables:
        RESGRAPH_ID_HASH_PREFIX
        RESGRAPH_HASH_ALGORITHM
        RESGRAPH_NAMESPACE
        RESGRAPH_SORT_DEPENDENCIES
        RESGRAPH_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="RESGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    id_hash_prefix: str = DEFAULT_PREFIX
    hash_algorithm: str = "sha1"
    namespace: str = "mcm"
    sort_dependencies: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, level: str) -> str:
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {level!r}")
        return level

    def build_hasher(self) -> IdHasher:
        """Create the identifier hasher these settings describe.

        Returns:
            Hasher for the configured algorithm and prefix.

        Raises:
            ValueError: If the algorithm is unknown or its digest is too short.
        """
        if self.hash_algorithm == "sha1":
            return Sha1IdHasher(self.id_hash_prefix)
        return HashlibIdHasher(self.hash_algorithm, self.id_hash_prefix)
