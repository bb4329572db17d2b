import os
import sys
from pathlib import Path

import pytest

# Allow `import marktree` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _clean_marktree_env(monkeypatch):
    """Tests must not pick up a developer's MARKTREE_* settings."""
    for name in list(os.environ):
        if name.startswith("MARKTREE_"):
            monkeypatch.delenv(name, raising=False)


class CountingStore:
    """MemoryStore wrapper that records every write."""

    def __init__(self, initial=None):
        from marktree.store import MemoryStore

        self.inner = MemoryStore(initial)
        self.writes = 0

    def get(self, key):
        return self.inner.get(key)

    def set(self, key, value):
        self.writes += 1
        self.inner.set(key, value)


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def manager(store):
    from marktree.manager import BookmarkManager

    return BookmarkManager(store)
