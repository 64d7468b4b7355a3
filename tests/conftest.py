"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_sequence = _common.make_sequence

from hashtree.config import set_default_config
from hashtree.crypto import ContentHasher
from hashtree.merkle import MerkleTree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _reset_default_config():
    """Keep tests independent of each other's default config."""
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def hasher():
    """Provide a SHA-256 ContentHasher."""
    return ContentHasher("sha256")


@pytest.fixture
def abc_sequence(hasher):
    """Provide the sequence ["a", "b", "c"]."""
    return make_sequence(["a", "b", "c"], hasher=hasher)


@pytest.fixture
def abc_tree(abc_sequence):
    """Provide the tree over ["a", "b", "c"] (one padding leaf)."""
    return MerkleTree(abc_sequence)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
