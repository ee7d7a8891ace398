"""Pytest fixtures for beadtree tests."""

import json

import pytest


@pytest.fixture
def chain_snapshot():
    """A, B blocked by A, C blocked by B, D blocked by unknown X."""
    from tests.helpers import make_snapshot

    return make_snapshot("A", ("B", ["A"]), ("C", ["B"]), ("D", ["X"]))


@pytest.fixture
def cycle_snapshot():
    """A and B blocking each other."""
    from tests.helpers import make_snapshot

    return make_snapshot(("A", ["B"]), ("B", ["A"]))


@pytest.fixture
def listing_file(tmp_path):
    """JSON listing file in store format."""
    data = [
        {"id": "bd-1", "title": "Set up database", "priority": 1, "status": "open"},
        {"id": "bd-2", "title": "Write migrations", "priority": 2, "blocked_by": ["bd-1"]},
        {"id": "bd-3", "title": "Add connection pool", "priority": 2, "blocked_by": ["bd-1"]},
        {"id": "bd-4", "title": "Seed fixtures", "priority": 3, "blocked_by": ["bd-2"]},
        {"id": "bd-5", "title": "Draft release notes", "priority": 2, "blocked_by": ["ext-9"]},
    ]
    path = tmp_path / "items.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep BEADTREE_* variables and stray config files out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("BEADTREE_"):
            monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    (workdir / ".git").mkdir()
    monkeypatch.chdir(workdir)
    return workdir
