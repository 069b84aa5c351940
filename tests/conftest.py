"""Test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from portreg.registry import Registry


@pytest.fixture
def temp_dir():
    """Temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def registry_path(temp_dir):
    """Path to a registry file that does not exist yet."""
    return temp_dir / "test.json"


@pytest.fixture
def registry(registry_path):
    """Empty registry with no blocked ports."""
    return Registry.load(registry_path)


@pytest.fixture
def initialized_registry(registry_path):
    """Registry initialized with the default blocked ports."""
    reg = Registry(registry_path)
    reg.init()
    return reg
