"""Graphviz rendering of a compiled graph.

Usage:
    print(render_dot(session.finish()))
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator

from resgraph.core.resource.models import ResourceNode


def iter_dot_lines(nodes: Iterable[ResourceNode]) -> Iterator[str]:
    """Yield the lines of a ``digraph catalog`` document.

    Each node contributes a label line when it has a comment, one edge per
    dependency (duplicates included), and a blank separator line.

    Args:
        nodes: Compiled graph.

    Yields:
        Lines without trailing newlines.
    """
    yield "digraph catalog {"
    for node in nodes:
        if node.comment:
            yield f"  {node.id} [label={json.dumps(node.comment, ensure_ascii=False)}];"
        for dep in node.dependencies:
            yield f"  {node.id} -> {dep};"
        yield ""
    yield "}"


def render_dot(nodes: Iterable[ResourceNode]) -> str:
    """Render a compiled graph as Graphviz source.

    Args:
        nodes: Compiled graph.

    Returns:
        Complete document, newline-terminated.
    """
    return "\n".join(iter_dot_lines(nodes)) + "\n"
