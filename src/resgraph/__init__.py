"""resgraph: compile configuration declarations into a typed resource graph.

Usage:
    from resgraph import GraphSession

    with GraphSession() as session:
        mcm = session.declarations
        pkgs = mcm.hash("base packages")
        mcm.resource(pkgs, [], mcm.exec({"command": {"argv": ["/usr/bin/apt-get", "update"]}}))
        mcm.resource("motd", [pkgs], mcm.file({"path": "/etc/motd", "mode": "0644"}))
        mcm.resource("all", ["motd"], mcm.noop)
        catalog = session.finish()
"""

__version__ = "0.1.0"

# Core primitives
from resgraph.core import (
    NOOP,
    Command,
    EnvVar,
    Exec,
    File,
    HashlibIdHasher,
    IdHasher,
    MetaLayer,
    Noop,
    Payload,
    ResourceId,
    ResourceKind,
    ResourceNode,
    Sha1IdHasher,
    TypeTagRegistry,
    derive_id,
    hash_label,
)

# Declaration passes
from resgraph.builder import Catalog, Declarations, GraphSession, ResourceGraphBuilder

# Configuration
from resgraph.config import CompilerSettings

# Errors
from resgraph.errors import (
    ArenaClosedError,
    ArgumentCountError,
    ArgumentTypeError,
    DeclarationError,
    StructureError,
    UnknownResourceTypeError,
)

# Export
from resgraph.export import catalog_from_records, catalog_to_records, render_dot

# Storage
from resgraph.storage import ResourceArena

__all__ = [
    # Version
    "__version__",
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
    # Resource
    "ResourceNode",
    "Payload",
    "Noop",
    "NOOP",
    "File",
    "Exec",
    "Command",
    "EnvVar",
    # Builder
    "ResourceGraphBuilder",
    "GraphSession",
    "Declarations",
    "Catalog",
    # Storage
    "ResourceArena",
    # Config
    "CompilerSettings",
    # Errors
    "DeclarationError",
    "ArgumentCountError",
    "ArgumentTypeError",
    "UnknownResourceTypeError",
    "StructureError",
    "ArenaClosedError",
    # Export
    "catalog_to_records",
    "catalog_from_records",
    "render_dot",
]
