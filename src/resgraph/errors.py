"""Error taxonomy for declaration passes.

Every failure is raised synchronously at the call that caused it. Messages are
position-aware so they can be shown directly to the operator authoring the
declarations.

Usage:
    try:
        decl.resource("x", [], {"path": "/etc/motd"})
    except DeclarationError as e:
        print(e)  # bad argument #3 to 'mcm.resource' (expect resource table)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import ValidationError


class DeclarationError(Exception):
    """Base class for every fault detected while compiling declarations."""

    pass


class ArgumentCountError(DeclarationError):
    """Raised when an entry point receives the wrong number of arguments.

    Args:
        function: Qualified entry point name, e.g. ``mcm.resource``.
        expected: Number of arguments the entry point takes.
        got: Number of arguments actually passed.
    """

    def __init__(self, function: str, expected: int, got: int):
        self.function = function
        self.expected = expected
        self.got = got
        noun = "argument" if expected == 1 else "arguments"
        super().__init__(f"'{function}' takes {expected} {noun}, got {got}")


class ArgumentTypeError(DeclarationError):
    """Raised when an argument has the wrong shape.

    Args:
        position: 1-based index of the offending argument.
        expectation: Human-readable description of what was expected.
        function: Qualified entry point name, if known.
    """

    def __init__(self, position: int, expectation: str, function: str | None = None):
        self.position = position
        self.expectation = expectation
        self.function = function
        where = f" to '{function}'" if function else ""
        super().__init__(f"bad argument #{position}{where} ({expectation})")


class UnknownResourceTypeError(ArgumentTypeError):
    """Raised when a spec carries a type tag no payload kind is registered for."""

    def __init__(self, tag: int, function: str | None = None):
        self.tag = tag
        super().__init__(3, "unknown resource type", function)


class StructureError(DeclarationError):
    """Raised when a spec's fields do not match the payload record shape.

    Wraps the pydantic ``ValidationError`` produced during the structural copy and
    flattens its locations into dotted field paths.

    Args:
        kind: Payload kind being copied (``file`` or ``exec``).
        comment: Label of the resource being declared.
        cause: Underlying validation error.
    """

    def __init__(self, kind: str, comment: str, cause: ValidationError):
        self.kind = kind
        self.comment = comment
        self.errors: list[dict[str, Any]] = cause.errors(include_url=False)
        details = "; ".join(
            f"{_format_loc(err['loc'])}: {err['msg']}" for err in self.errors
        )
        super().__init__(f"{kind} resource {comment!r}: {details}")

    @property
    def fields(self) -> list[str]:
        """Dotted paths of every field that failed validation."""
        return [_format_loc(err["loc"]) for err in self.errors]


class ArenaClosedError(DeclarationError):
    """Raised when an arena or session is used after its graph was handed off."""

    pass


def _format_loc(loc: tuple[Any, ...]) -> str:
    if not loc:
        return "<root>"
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts)
