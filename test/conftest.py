"""Shared fixtures for the pyeverything test suite."""

import pytest

from pyeverything.tools.base import ToolContext
from pyeverything.tools.builtin import build_registry
from pyeverything.tools.dispatcher import Dispatcher


@pytest.fixture
def dispatcher(tmp_path):
    """Dispatcher over the real catalog, rooted at a temporary directory."""
    return Dispatcher(registry=build_registry(), ctx=ToolContext(cwd=str(tmp_path)))


@pytest.fixture
def no_user_config(tmp_path, monkeypatch):
    """Point the global config lookup at an empty directory."""
    cfg_dir = tmp_path / "user-config"
    cfg_dir.mkdir()
    monkeypatch.setattr("pyeverything.config.loader.user_config_dir", lambda app: str(cfg_dir))
    return cfg_dir
