"""Graph session: owns one declaration pass from first declaration to hand-off.

The session wires an arena, a tag registry and a builder together and is passed
explicitly to whatever runs the declarations. When the pass ends, ``finish()``
releases the node list and the session can no longer be used.

Usage:
    with GraphSession() as session:
        mcm = session.declarations
        mcm.resource("motd", [], mcm.file({"path": "/etc/motd"}))
        catalog = session.finish()

    # Or hand the graph straight to the convergence stage
    session.hand_off(applier.apply)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import TypeVar

from resgraph.builder.builder import ResourceGraphBuilder
from resgraph.builder.surface import Declarations
from resgraph.config.settings import CompilerSettings
from resgraph.core.resource.models import ResourceNode
from resgraph.core.tagging.registry import TypeTagRegistry
from resgraph.storage.arena import ResourceArena

logger = logging.getLogger(__name__)

R = TypeVar("R")

Catalog = tuple[ResourceNode, ...]


class GraphSession:
    """Owner of the arena and builder for a single declaration pass.

    Args:
        settings: Compiler settings (loaded from the environment if omitted).
    """

    def __init__(self, settings: CompilerSettings | None = None):
        self._settings = settings if settings is not None else CompilerSettings()
        self._arena = ResourceArena()
        self._builder = ResourceGraphBuilder(
            self._arena,
            TypeTagRegistry(),
            self._settings.build_hasher(),
            namespace=self._settings.namespace,
            sort_dependencies=self._settings.sort_dependencies,
        )
        self._declarations = Declarations(self._builder)

    @property
    def settings(self) -> CompilerSettings:
        """Settings this pass was configured with."""
        return self._settings

    @property
    def builder(self) -> ResourceGraphBuilder:
        """Builder receiving the declarations of this pass."""
        return self._builder

    @property
    def declarations(self) -> Declarations:
        """Entry points bound to this pass."""
        return self._declarations

    @property
    def closed(self) -> bool:
        """Whether the pass already ended."""
        return self._arena.closed

    def __len__(self) -> int:
        return len(self._arena)

    def finish(self) -> Catalog:
        """End the pass and take ownership of the compiled graph.

        Returns:
            Committed nodes in declaration order.

        Raises:
            ArenaClosedError: If the pass already ended.
        """
        nodes = self._arena.release()
        logger.info("declaration pass finished with %d resources", len(nodes))
        return nodes

    def hand_off(self, stage: Callable[[Catalog], R]) -> R:
        """End the pass and give the compiled graph to the convergence stage.

        Args:
            stage: Callable consuming the node list.

        Returns:
            Whatever the stage returns.
        """
        return stage(self.finish())

    def abort(self) -> None:
        """Discard the in-progress graph and end the pass."""
        if self._arena.closed:
            return
        discarded = self._arena.release()
        logger.info("declaration pass aborted, discarded %d resources", len(discarded))

    def __enter__(self) -> GraphSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.abort()
