"""
Shared fixtures.

The extension registry is process-wide; every test starts from a fresh one
with only the built-in config extension attached, as after ``import ignis``.
"""

from typing import Generator
from unittest.mock import Mock

import pytest

from ignis import Ignis
from ignis.application.registry import ExtensionRegistry, reset_registry
from ignis.extensions import config as config_extension


@pytest.fixture(autouse=True)
def registry() -> Generator[ExtensionRegistry, None, None]:
    """Reset the process-wide registry around each test."""
    fresh = reset_registry()
    Ignis.register_extension(config_extension)
    yield fresh
    reset_registry()
    Ignis.register_extension(config_extension)


@pytest.fixture
def app() -> Ignis:
    """Application instance with a stand-in root."""
    return Ignis(root=Mock())
