"""
Shared pytest fixtures for the intentgate test suite.

Usage in tests:
    def test_something(workspace):
        engine = workspace.create_engine()
        session = workspace.active_session(engine)
        ...
"""

import pytest

from intentgate.config import ConfigManager
from intentgate.core.session import Session
from tests.factories import WorkspaceFactory


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Keep ~/.intentgate and INTENTGATE_* env out of every test."""
    user_dir = tmp_path / "home" / ".intentgate"
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", user_dir)
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", user_dir / "config.yaml")
    for name in ("INTENTGATE_MODEL", "INTENTGATE_APPROVAL_MODE", "INTENTGATE_PROJECT_PATH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("INTENTGATE_ASCII_ONLY", "1")
    return user_dir


@pytest.fixture
def workspace(tmp_path):
    """Workspace with the default two-intent catalog."""
    return WorkspaceFactory(tmp_path)


@pytest.fixture
def engine(workspace):
    """Engine that approves every mutating call."""
    return workspace.create_engine()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def active_session(workspace, engine):
    """Session with INT-001 selected."""
    return workspace.active_session(engine)
