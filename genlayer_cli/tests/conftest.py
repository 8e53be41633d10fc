"""Pytest configuration for genlayer-cli tests."""

from unittest.mock import MagicMock

import pytest

from genlayer_cli.commands.config_store import ConfigFileManager


@pytest.fixture
def config_store(tmp_path):
    """A config store living in a temporary folder."""
    return ConfigFileManager(base_folder=tmp_path / ".genlayer")


@pytest.fixture
def reporter():
    """A reporter that records calls instead of printing."""
    return MagicMock()


@pytest.fixture(autouse=True)
def isolated_config_folder(tmp_path, monkeypatch):
    """Keep commands that build their own config store out of the real home."""
    monkeypatch.setattr(
        "genlayer_cli.commands.config_store.CONFIG_FOLDER", tmp_path / "home-genlayer"
    )
