"""Shared fixtures for kitcraft tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from kitcraft.context import KitcraftContext


@pytest.fixture
def registry_root(tmp_path: Path) -> Path:
    return tmp_path / "home"


@pytest.fixture
def ctx(registry_root: Path) -> KitcraftContext:
    """Context backed entirely by fakes, rooted in a temporary directory."""
    return KitcraftContext.for_test(registry_root)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
