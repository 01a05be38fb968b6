"""
Shared fixtures for the preference store tests.
"""

import pytest

from preferences_kv_store import PreferencesKeyValueStoreManager
from sqlite_store import SQLitePreferenceStore


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "preferences.db")


@pytest.fixture
def sqlite_store(db_path):
    """A fresh SQLite preference store in a temporary directory."""
    return SQLitePreferenceStore(db_path=db_path)


@pytest.fixture
def manager(sqlite_store):
    """A manager on the empty "test.store" namespace."""
    return PreferencesKeyValueStoreManager(sqlite_store, namespace="test.store")
