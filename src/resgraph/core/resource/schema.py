"""Payload record shapes for file and exec resources.

Declaration values are copied into these models field by field; any mismatch
surfaces as a pydantic ``ValidationError`` naming the offending field. Both
snake_case names and the camelCase names used by catalog consumers are accepted.

Usage:
    File.model_validate({"path": "/etc/motd", "plain": {"content": "hi\\n"}})
    Exec.model_validate({
        "command": {"argv": ["/usr/bin/apt-get", "update"]},
        "fileAbsent": "/var/lib/apt/periodic/update-success-stamp",
    })
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_record(self) -> dict[str, Any]:
        """Dump as plain data using catalog (camelCase) field names.

        Returns:
            Dict suitable for JSON encoding; unset optional fields are dropped.
        """
        return self.model_dump(by_alias=True, exclude_none=True)


def _exclusive(model: BaseModel, names: tuple[str, ...], what: str) -> str | None:
    given = [name for name in names if getattr(model, name) not in (None, False)]
    if len(given) > 1:
        raise ValueError(f"{what} are mutually exclusive, got {', '.join(given)}")
    return given[0] if given else None


# File


class PlainFile(_Record):
    """Regular file, optionally with exact content."""

    content: str | None = None


class Directory(_Record):
    """Directory that must exist."""

    pass


class Symlink(_Record):
    """Symbolic link pointing at target."""

    target: str


_FILE_DIRECTIVES = ("plain", "directory", "symlink", "absent")


class File(_Record):
    """Desired state of one filesystem path.

    At most one of plain/directory/symlink/absent may be given; with none the
    path is treated as a plain file whose content is left alone.
    Unknown keys are rejected, so a misspelled key such as ``mdoe`` raises
    rather than being dropped.
    """

    path: str = Field(min_length=1)
    mode: str | None = Field(default=None, pattern=r"^0?[0-7]{3,4}$")
    plain: PlainFile | None = None
    directory: Directory | None = None
    symlink: Symlink | None = None
    absent: bool = False

    @model_validator(mode="after")
    def _single_directive(self) -> Self:
        _exclusive(self, _FILE_DIRECTIVES, "file directives")
        return self

    @property
    def which(self) -> str:
        """Name of the file directive in effect."""
        return _exclusive(self, _FILE_DIRECTIVES, "file directives") or "plain"


# Exec


class EnvVar(_Record):
    """Single environment variable for a command."""

    name: str = Field(min_length=1)
    value: str = ""


class Command(_Record):
    """Program invocation.

    ``environment`` may be given as a mapping; it is normalized to a list of
    name/value records in insertion order.
    """

    argv: list[str] = Field(min_length=1)
    environment: list[EnvVar] = Field(default_factory=list)
    working_directory: str | None = None

    @field_validator("argv")
    @classmethod
    def _absolute_program(cls, argv: list[str]) -> list[str]:
        if not posixpath.isabs(argv[0]):
            raise ValueError(f"argv[0] ({argv[0]!r}) is not an absolute path")
        return argv

    @field_validator("environment", mode="before")
    @classmethod
    def _environment_mapping(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return [{"name": k, "value": v} for k, v in value.items()]
        return value

    @field_validator("working_directory")
    @classmethod
    def _absolute_directory(cls, path: str | None) -> str | None:
        if path is not None and not posixpath.isabs(path):
            raise ValueError(f"working directory {path!r} is not absolute")
        return path


_EXEC_CONDITIONS = ("only_if", "unless", "file_absent")


class Exec(_Record):
    """Command to run, optionally guarded by a condition.

    Conditions: ``only_if`` runs the command when the guard succeeds, ``unless``
    when it fails, ``file_absent`` when the path does not exist. With none the
    command always runs.
    Unknown keys are rejected, so a misspelled condition such as ``onlyIff``
    raises rather than leaving the command unguarded.
    """

    command: Command
    only_if: Command | None = None
    unless: Command | None = None
    file_absent: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _single_condition(self) -> Self:
        _exclusive(self, _EXEC_CONDITIONS, "exec conditions")
        return self

    @property
    def which_condition(self) -> str:
        """Name of the guard condition in effect."""
        return _exclusive(self, _EXEC_CONDITIONS, "exec conditions") or "always"
