import pytest
from indexstore import IndexStore


@pytest.fixture
def store_path(tmp_path):
    """Path of a log file in a fresh temporary directory."""
    return str(tmp_path / 'storage.db')


@pytest.fixture
def temp_store(store_path):
    """Temporary IndexStore instance backed by its own log file."""
    store = IndexStore(store_path)
    yield store
    store.close()


@pytest.fixture
def reopen(store_path):
    """Close a store and open a new one on the same log, simulating a restart."""
    opened = []

    def _reopen(store):
        store.close()
        new_store = IndexStore(store_path)
        opened.append(new_store)
        return new_store

    yield _reopen
    for store in opened:
        store.close()
