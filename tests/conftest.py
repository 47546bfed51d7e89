"""
Pytest configuration and shared fixtures for merkle tests.

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

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from merkle_core.config import set_default_config
from merkle_core.crypto import leaf_hash
from merkle_core.merkle import MerkleTree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def messages():
    """Five ordered messages (odd count, exercises duplicate-last twice)."""
    return [b"a", b"b", b"c", b"d", b"e"]


@pytest.fixture
def leaves(messages):
    """Leaf digests of the default messages."""
    return [leaf_hash(m) for m in messages]


@pytest.fixture
def tree(leaves):
    """A SHA3-256 tree over the default leaves."""
    return MerkleTree.from_leaves(leaves)


@pytest.fixture
def make_leaves():
    """Factory for n distinct leaf digests."""
    def _make(n: int, hasher=None):
        if hasher is None:
            return [leaf_hash(f"leaf{i}".encode()) for i in range(n)]
        return [leaf_hash(f"leaf{i}".encode(), hasher) for i in range(n)]
    return _make


@pytest.fixture
def clean_env(monkeypatch):
    """Remove MERKLE_* variables and reset the cached default config."""
    for name in (
        "MERKLE_HASH_ALGORITHM",
        "MERKLE_LOG_LEVEL",
        "MERKLE_LOG_FILE",
        "MERKLE_BENCH_LEAVES",
        "MERKLE_BENCH_ROUNDS",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield monkeypatch
    set_default_config(None)


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
