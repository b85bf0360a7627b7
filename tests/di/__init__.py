"""Mock providers for testing."""

from .config import StaticSettingsProvider
from .container import build_test_container
from .persistence import MockPersistenceProvider

__all__ = [
    "MockPersistenceProvider",
    "StaticSettingsProvider",
    "build_test_container",
]
