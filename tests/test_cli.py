"""Tests for the typer command-line interface."""

from __future__ import annotations

import json
import uuid

import pytest
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


@pytest.fixture(params=["sqlite", "json"])
def workspace(request, tmp_path, monkeypatch):
    """Point the CLI at a fresh workspace using each backend in turn."""
    monkeypatch.setattr("taskgraph.config.settings.workspace_dir", tmp_path)
    monkeypatch.setattr("taskgraph.config.settings.backend", request.param)
    monkeypatch.setattr("taskgraph.config.settings.editor", None)
    return tmp_path


def _add(*args: str) -> str:
    result = runner.invoke(app, ["add", *args])
    assert result.exit_code == 0, result.stdout
    return result.stdout.splitlines()[0]


def test_add_prints_id_and_document(workspace):
    result = runner.invoke(app, ["add", "-t", "Buy groceries", "-d", "milk", "-e", "2024-03-02 18:00:00"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    node_id = uuid.UUID(lines[0])

    doc = json.loads("\n".join(lines[1:]))
    assert doc["id"] == str(node_id)
    assert doc["title"] == "Buy groceries"
    assert doc["description"] == "milk"
    assert doc["due"] == 1709402400
    assert doc["scheduled"] is None


def test_add_persists_between_invocations(workspace):
    node_id = _add("-t", "Persisted")
    result = runner.invoke(app, ["roots"])
    assert result.exit_code == 0
    assert f"Persisted ({node_id})" in result.stdout


def test_connect_and_show_tree(workspace):
    parent = _add("-t", "Plan trip")
    child = _add("-t", "Book flights")

    result = runner.invoke(app, ["connect", parent, child])
    assert result.exit_code == 0
    assert "Connected" in result.stdout

    result = runner.invoke(app, ["show"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [
        f"Plan trip ({parent})",
        f"  Book flights ({child})",
    ]


def test_show_from_root(workspace):
    parent = _add("-t", "Parent")
    child = _add("-t", "Child")
    other = _add("-t", "Other")
    runner.invoke(app, ["connect", parent, child])

    result = runner.invoke(app, ["show", "--root", child])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [f"Child ({child})"]
    assert other not in result.stdout


def test_connect_missing_node_fails(workspace):
    parent = _add("-t", "Parent")
    ghost = str(uuid.uuid4())

    result = runner.invoke(app, ["connect", parent, ghost])
    assert result.exit_code == 1
    assert f"Missing node {ghost}" in result.stdout

    result = runner.invoke(app, ["show"])
    assert result.stdout.splitlines() == [f"Parent ({parent})"]


def test_connect_rejects_malformed_id(workspace):
    result = runner.invoke(app, ["connect", "not-a-uuid", str(uuid.uuid4())])
    assert result.exit_code != 0


def test_next_lists_leaves(workspace):
    project = _add("-t", "Project")
    step1 = _add("-t", "Step 1")
    step2 = _add("-t", "Step 2")
    runner.invoke(app, ["connect", project, step1])
    runner.invoke(app, ["connect", project, step2])

    result = runner.invoke(app, ["next"])
    assert result.exit_code == 0
    assert sorted(result.stdout.splitlines()) == sorted([
        f"Step 1 ({step1})",
        f"Step 2 ({step2})",
    ])


def test_show_unknown_root_fails(workspace):
    result = runner.invoke(app, ["show", "--root", str(uuid.uuid4())])
    assert result.exit_code == 1
    assert "Missing node" in result.stdout


def test_find(workspace):
    groceries = _add("-t", "Buy groceries")
    _add("-t", "File taxes")

    result = runner.invoke(app, ["find", "Buy gro"])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == [f"Buy groceries {groceries}"]


def test_find_no_match(workspace):
    _add("-t", "File taxes")
    result = runner.invoke(app, ["find", "zzzzzzzz"])
    assert result.exit_code == 0
    assert "No tasks match" in result.stdout


def test_edit(workspace, monkeypatch):
    node_id = _add("-t", "Draft")

    def _open(path):
        doc = json.loads(path.read_text(encoding="utf-8"))
        doc["title"] = "Edited"
        path.write_text(json.dumps(doc), encoding="utf-8")
        return 0

    monkeypatch.setattr("cli.editor._open_editor", _open)
    result = runner.invoke(app, ["edit", node_id])
    assert result.exit_code == 0
    assert f"Updated: Edited ({node_id})" in result.stdout

    result = runner.invoke(app, ["roots"])
    assert f"Edited ({node_id})" in result.stdout


def test_edit_editor_failure(workspace, monkeypatch):
    node_id = _add("-t", "Draft")
    monkeypatch.setattr("cli.editor._open_editor", lambda path: 1)

    result = runner.invoke(app, ["edit", node_id])
    assert result.exit_code == 0
    assert "unchanged" in result.stdout


def test_snapshot_backend_writes_json(tmp_path, monkeypatch):
    monkeypatch.setattr("taskgraph.config.settings.workspace_dir", tmp_path)
    monkeypatch.setattr("taskgraph.config.settings.backend", "sqlite")

    result = runner.invoke(app, ["--backend", "json", "add", "-t", "In JSON"])
    assert result.exit_code == 0
    assert (tmp_path / "graph.json").exists()
    assert not (tmp_path / "graph.sqlite3").exists()


def test_unknown_backend_fails(tmp_path, monkeypatch):
    monkeypatch.setattr("taskgraph.config.settings.workspace_dir", tmp_path)
    monkeypatch.setattr("taskgraph.config.settings.backend", "sqlite")

    result = runner.invoke(app, ["--backend", "postgres", "roots"])
    assert result.exit_code == 1
    assert "Unknown backend" in result.stdout
