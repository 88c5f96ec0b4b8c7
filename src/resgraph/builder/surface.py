"""Declaration surface: the entry points a configuration script calls.

Each entry point checks its arity and argument shapes before touching the
builder, and raises a position-aware error on the first mismatch.

Usage:
    mcm = Declarations(builder)
    base = mcm.hash("base packages")
    motd = mcm.file({"path": "/etc/motd", "plain": {"content": "hi\\n"}})
    mcm.resource("motd", [base], motd)
    mcm.resource("all", ["motd"], mcm.noop)
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from types import MappingProxyType
from typing import Any

from resgraph.builder.builder import ResourceGraphBuilder
from resgraph.core.identity.models import ResourceId, ResourceKind
from resgraph.errors import ArgumentCountError, ArgumentTypeError


class Declarations:
    """Entry points bound to one builder.

    Attributes:
        noop: Read-only empty spec pre-tagged NOOP, usable as a resource spec.

    Args:
        builder: Builder that receives every declaration.
    """

    def __init__(self, builder: ResourceGraphBuilder):
        self._builder = builder
        self.noop: Mapping[str, Any] = builder.registry.tag_type(
            MappingProxyType({}), ResourceKind.NOOP
        )

    def _check_arity(self, function: str, args: tuple[Any, ...], expected: int) -> None:
        if len(args) != expected:
            raise ArgumentCountError(self._builder.qualify(function), expected, len(args))

    def _tag_table(self, function: str, args: tuple[Any, ...], tag: int) -> Any:
        self._check_arity(function, args, 1)
        (value,) = args
        if not isinstance(value, MutableMapping):
            raise ArgumentTypeError(1, "must be a table", self._builder.qualify(function))
        return self._builder.registry.tag_type(value, tag)

    def hash(self, *args: Any) -> ResourceId:
        """Derive an identifier from a label.

        Args:
            *args: Exactly one string label.

        Returns:
            ResourceId carrying the label as its comment.

        Raises:
            ArgumentCountError: If not called with exactly one argument.
            ArgumentTypeError: If the label is not a string.
        """
        self._check_arity("hash", args, 1)
        (label,) = args
        if not isinstance(label, str):
            raise ArgumentTypeError(1, "must be a string", self._builder.qualify("hash"))
        return self._builder.derive_id(label)

    def file(self, *args: Any) -> Any:
        """Tag a table as a file resource spec.

        Returns:
            The same table, tagged FILE.
        """
        return self._tag_table("file", args, ResourceKind.FILE)

    def exec(self, *args: Any) -> Any:
        """Tag a table as an exec resource spec.

        Returns:
            The same table, tagged EXEC.
        """
        return self._tag_table("exec", args, ResourceKind.EXEC)

    def resource(self, *args: Any) -> None:
        """Declare a resource: ``resource(id, dependencies, spec)``.

        Raises:
            ArgumentCountError: If not called with exactly three arguments.
            DeclarationError: Any failure raised by the builder.
        """
        self._check_arity("resource", args, 3)
        self._builder.declare_resource(*args)

    def as_table(self) -> dict[str, Any]:
        """Expose the entry points as a plain table for script globals.

        Returns:
            Mapping of ``hash``, ``file``, ``exec``, ``resource`` and ``noop``.
        """
        return {
            "exec": self.exec,
            "file": self.file,
            "hash": self.hash,
            "resource": self.resource,
            "noop": self.noop,
        }
