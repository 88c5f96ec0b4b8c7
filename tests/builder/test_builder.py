"""Tests for declaring resources through the builder.

Critical Invariants:
- Dependency count and order match the declaration exactly
- Failed declarations commit nothing
- Payload kind follows the spec's nearest type tag
"""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from resgraph.builder import ResourceGraphBuilder
from resgraph.core.identity import ResourceId, ResourceKind, derive_id
from resgraph.core.resource import NOOP, Exec, File
from resgraph.errors import ArgumentTypeError, StructureError, UnknownResourceTypeError


def _noop(builder):
    return builder.registry.tag_type({}, ResourceKind.NOOP)


def test_file_resource(builder):
    """Explicit id, no dependencies, file payload copied from the spec."""
    spec = builder.registry.tag_type({"path": "/etc/passwd", "mode": "0644"}, ResourceKind.FILE)

    builder.declare_resource(derive_id("f1"), [], spec)

    assert len(builder.arena) == 1
    node = builder.arena[0]
    assert node.id == derive_id("f1").value
    assert node.comment == "f1"
    assert node.dependencies == ()
    assert isinstance(node.payload, File)
    assert node.payload.path == "/etc/passwd"
    assert node.payload.mode == "0644"


def test_string_labels_are_hashed(builder):
    builder.declare_resource("x", ["y", "z"], _noop(builder))

    node = builder.arena[0]
    assert node.id == derive_id("x").value
    assert node.comment == "x"
    assert node.dependencies == (derive_id("y").value, derive_id("z").value)
    assert node.payload == NOOP


def test_surrogate_escaped_labels_are_hashed(builder):
    builder.declare_resource("etc/\udcff", ["\ud800"], _noop(builder))

    node = builder.arena[0]
    assert node.id == derive_id("etc/\udcff").value
    assert node.comment == "etc/\udcff"
    assert node.dependencies == (derive_id("\ud800").value,)


def test_explicit_id_keeps_its_comment(builder):
    builder.declare_resource(ResourceId(value=42, comment="answer"), [], _noop(builder))

    assert builder.arena[0].id == 42
    assert builder.arena[0].comment == "answer"


def test_dependencies_mix_ids_and_labels(builder):
    builder.declare_resource("x", [derive_id("a"), "b", ResourceId(value=8)], _noop(builder))

    assert builder.arena[0].dependencies == (derive_id("a").value, derive_id("b").value, 8)


@given(st.lists(st.text(), max_size=20))
def test_dependency_arity_and_order_preserved(labels):
    """CRITICAL: N dependencies in, N dependencies out, same order, duplicates kept.

    Why: Downstream ordering is derived solely from this list.
    """
    builder = ResourceGraphBuilder()

    builder.declare_resource("r", labels, _noop(builder))

    assert builder.arena[0].dependencies == tuple(derive_id(s).value for s in labels)


def test_tuple_dependencies_accepted(builder):
    builder.declare_resource("x", ("y",), _noop(builder))

    assert len(builder.arena[0].dependencies) == 1


def test_exec_resource(builder):
    spec = builder.registry.tag_type(
        {"command": {"argv": ["/usr/bin/apt-get", "update"]}, "fileAbsent": "/stamp"},
        ResourceKind.EXEC,
    )

    builder.declare_resource("apt update", [], spec)

    payload = builder.arena[0].payload
    assert isinstance(payload, Exec)
    assert payload.file_absent == "/stamp"
    assert builder.arena[0].kind == "exec"


def test_retagged_spec_uses_nearest_tag(builder):
    spec = {"command": {"argv": ["/bin/true"]}}
    builder.registry.tag_type(spec, ResourceKind.FILE)
    builder.registry.tag_type(spec, ResourceKind.EXEC)

    builder.declare_resource("x", [], spec)

    assert isinstance(builder.arena[0].payload, Exec)


# Failures


def test_bad_id_reports_position_1(builder):
    with pytest.raises(ArgumentTypeError) as exc_info:
        builder.declare_resource(42, [], _noop(builder))

    assert exc_info.value.position == 1
    assert "expect mcm.hash or string" in str(exc_info.value)
    assert len(builder.arena) == 0


def test_bad_dependency_reports_position_2(builder):
    """CRITICAL: A bad entry anywhere in deps aborts the whole declaration.

    Why: A partial dependency list would silently drop ordering constraints.
    """
    with pytest.raises(ArgumentTypeError) as exc_info:
        builder.declare_resource("x", ["y", 3, "z"], _noop(builder))

    assert exc_info.value.position == 2
    assert "expect deps to contain only mcm.hash or strings" in str(exc_info.value)
    assert len(builder.arena) == 0


@pytest.mark.parametrize("deps", ["y", None, {"y": 1}])
def test_dependencies_must_be_a_sequence(builder, deps):
    with pytest.raises(ArgumentTypeError) as exc_info:
        builder.declare_resource("x", deps, _noop(builder))

    assert exc_info.value.position == 2


def test_untagged_spec_rejected(builder):
    """CRITICAL: A spec without a resource-kind tag is a usage error."""
    with pytest.raises(ArgumentTypeError, match="expect resource table") as exc_info:
        builder.declare_resource("x", [], {"path": "/etc/motd"})

    assert exc_info.value.position == 3
    assert len(builder.arena) == 0


def test_unknown_tag_rejected(builder):
    spec = builder.registry.tag_type({}, 0xDEAD)

    with pytest.raises(UnknownResourceTypeError, match="unknown resource type") as exc_info:
        builder.declare_resource("x", [], spec)

    assert exc_info.value.position == 3
    assert exc_info.value.tag == 0xDEAD
    assert len(builder.arena) == 0


def test_structure_mismatch_rolls_back(builder):
    """CRITICAL: Payload validation failures leave the arena unchanged."""
    spec = builder.registry.tag_type({"path": "/etc/passwd", "mode": 420}, ResourceKind.FILE)

    with pytest.raises(StructureError) as exc_info:
        builder.declare_resource("passwd", ["base"], spec)

    assert exc_info.value.kind == "file"
    assert exc_info.value.comment == "passwd"
    assert exc_info.value.fields == ["mode"]
    assert "file resource 'passwd'" in str(exc_info.value)
    assert len(builder.arena) == 0


def test_structure_error_paths_are_dotted(builder):
    spec = builder.registry.tag_type({"command": {"argv": [1]}}, ResourceKind.EXEC)

    with pytest.raises(StructureError) as exc_info:
        builder.declare_resource("x", [], spec)

    assert exc_info.value.fields == ["command.argv[0]"]


@pytest.mark.parametrize(
    ("kind", "spec", "field"),
    [
        (ResourceKind.FILE, {"path": "/etc/motd", "mdoe": "0644"}, "mdoe"),
        (ResourceKind.EXEC, {"command": {"argv": ["/bin/true"]}, "onlyIff": {}}, "onlyIff"),
    ],
)
def test_misspelled_keys_are_structure_errors(builder, kind, spec, field):
    """CRITICAL: A typo in a spec key fails the declaration instead of being dropped.

    Why: A dropped guard or mode would silently change what gets converged.
    """
    with pytest.raises(StructureError) as exc_info:
        builder.declare_resource("x", [], builder.registry.tag_type(spec, kind))

    assert exc_info.value.fields == [field]
    assert len(builder.arena) == 0


def test_non_mapping_spec_is_structure_error(builder):
    spec = builder.registry.tag_type(["/etc/motd"], ResourceKind.FILE)

    with pytest.raises(StructureError):
        builder.declare_resource("x", [], spec)


def test_failure_does_not_block_later_declarations(builder):
    with pytest.raises(ArgumentTypeError):
        builder.declare_resource("x", [], {})

    builder.declare_resource("y", [], _noop(builder))

    assert [node.comment for node in builder.arena] == ["y"]


# Policies


def test_duplicate_ids_are_kept_with_warning(builder, caplog):
    with caplog.at_level(logging.WARNING, logger="resgraph.builder.builder"):
        builder.declare_resource("x", [], _noop(builder))
        builder.declare_resource("x", ["y"], _noop(builder))

    assert len(builder.arena) == 2
    assert "declared more than once" in caplog.text


def test_sorted_dependencies_policy():
    builder = ResourceGraphBuilder(sort_dependencies=True)
    labels = ["c", "a", "b", "a"]

    builder.declare_resource("x", labels, _noop(builder))

    assert builder.arena[0].dependencies == tuple(sorted(derive_id(s).value for s in labels))


def test_custom_namespace_in_messages():
    builder = ResourceGraphBuilder(namespace="site")

    with pytest.raises(ArgumentTypeError, match="'site.resource'"):
        builder.declare_resource(None, [], {})
