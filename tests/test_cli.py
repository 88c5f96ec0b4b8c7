"""Tests for the resgraph command-line tool."""

import json

import pytest
from typer.testing import CliRunner

from resgraph import __version__
from resgraph.cli import app

runner = CliRunner()


@pytest.fixture
def catalog_json():
    return json.dumps(
        [
            {"id": 3, "comment": "base", "dependencies": [], "payload": {"noop": None}},
            {
                "id": 5,
                "comment": "motd",
                "dependencies": [3],
                "payload": {"file": {"path": "/etc/motd"}},
            },
        ]
    )


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_hash_prints_ids():
    result = runner.invoke(app, ["hash", "foo", "bar"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == f"{0x131381E8715BB9E1}\tfoo"
    assert lines[1].endswith("\tbar")


def test_hash_honors_environment(monkeypatch):
    monkeypatch.setenv("RESGRAPH_HASH_ALGORITHM", "sha256")

    result = runner.invoke(app, ["hash", "foo"])

    assert result.exit_code == 0
    assert not result.output.startswith(f"{0x131381E8715BB9E1}\t")


def test_hash_rejects_bad_algorithm(monkeypatch):
    monkeypatch.setenv("RESGRAPH_HASH_ALGORITHM", "nope")

    result = runner.invoke(app, ["hash", "foo"])

    assert result.exit_code == 1
    assert "resgraph: Unknown hash algorithm" in result.output


def test_dot_from_stdin(catalog_json):
    result = runner.invoke(app, ["dot"], input=catalog_json)

    assert result.exit_code == 0
    assert result.output.startswith("digraph catalog {\n")
    assert '  5 [label="motd"];' in result.output
    assert "  5 -> 3;" in result.output


def test_dot_from_file(tmp_path, catalog_json):
    path = tmp_path / "catalog.json"
    path.write_text(catalog_json, encoding="utf-8")

    result = runner.invoke(app, ["dot", str(path)])

    assert result.exit_code == 0
    assert "  5 -> 3;" in result.output


def test_dot_rejects_bad_catalog():
    result = runner.invoke(app, ["dot"], input='[{"id": "x"}]')

    assert result.exit_code == 1
    assert "resgraph: read catalog" in result.output


def test_dot_rejects_undecodable_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_bytes(b'[{"id": 1, "comment": "\xff", "payload": {"noop": null}}]')

    result = runner.invoke(app, ["dot", str(path)])

    assert result.exit_code == 1
    assert "resgraph: read catalog" in result.output


def test_dot_rejects_undecodable_stdin():
    result = runner.invoke(app, ["dot"], input=b'[{"id": 1, "comment": "\xfe"}]')

    assert result.exit_code == 1
    assert "resgraph: read catalog" in result.output


def test_bad_log_level():
    result = runner.invoke(app, ["--log-level", "chatty", "hash", "foo"])

    assert result.exit_code == 1
    assert "unknown log level" in result.output
