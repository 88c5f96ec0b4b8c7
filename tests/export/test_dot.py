"""Tests for Graphviz rendering."""

from resgraph.core.resource import NOOP, ResourceNode
from resgraph.export import render_dot


def test_render_dot():
    nodes = [
        ResourceNode(id=3, comment="base", dependencies=(), payload=NOOP),
        ResourceNode(id=5, comment="", dependencies=(3, 3), payload=NOOP),
        ResourceNode(id=7, comment='say "hi"', dependencies=(5,), payload=NOOP),
    ]

    assert render_dot(nodes) == (
        "digraph catalog {\n"
        '  3 [label="base"];\n'
        "\n"
        "  5 -> 3;\n"
        "  5 -> 3;\n"
        "\n"
        '  7 [label="say \\"hi\\""];\n'
        "  7 -> 5;\n"
        "\n"
        "}\n"
    )


def test_render_empty_graph():
    assert render_dot([]) == "digraph catalog {\n}\n"
