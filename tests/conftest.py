"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from tree_test_helpers import StubFetcher, add_child, make_issue, relate

from linctl.models import Issue


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config, home and credentials at an empty temporary location."""
    config_path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("LINCTL_CONFIG", str(config_path))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("LINEAR_API_KEY", raising=False)
    monkeypatch.delenv("LINEAR_API_URL", raising=False)
    return config_path


@pytest.fixture
def two_cycle() -> tuple[Issue, StubFetcher]:
    """A has sub-issue B; B blocks A."""
    a = make_issue("LIN-1", "Root task")
    b = make_issue("LIN-2", "Child task", state="In Progress", state_type="started")
    add_child(a, b)
    relate(b, "blocks", a)
    return a, StubFetcher(a, b)


@pytest.fixture
def full_graph() -> tuple[Issue, StubFetcher]:
    """An issue with every kind of edge.

    LIN-10 (parent) -> LIN-11 (root) -> sub-issues LIN-12, LIN-13;
    LIN-11 blocks LIN-14, is blocked by LIN-15, relates to LIN-16,
    duplicates LIN-17.
    """
    parent = make_issue("LIN-10", "Epic", state="In Progress", state_type="started")
    root = make_issue("LIN-11", "Feature")
    first = make_issue("LIN-12", "First step", state="Done", state_type="completed")
    second = make_issue("LIN-13", "Second step", state=None)
    blocked = make_issue("LIN-14", "Downstream")
    blocker = make_issue("LIN-15", "Upstream", state="Backlog", state_type="backlog")
    related = make_issue("LIN-16", "Nearby")
    dupe = make_issue("LIN-17", "Same thing", state="Canceled", state_type="canceled")

    add_child(parent, root)
    add_child(root, first)
    add_child(root, second)
    relate(root, "blocks", blocked)
    relate(root, "blocks", None)
    relate(root, "blocked-by", blocker)
    relate(root, "related", related)
    relate(root, "duplicate", dupe)

    fetcher = StubFetcher(parent, root, first, second, blocked, blocker, related, dupe)
    return root, fetcher
