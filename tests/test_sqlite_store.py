"""
Tests for the SQLite preference store.
"""

import sqlite3
from contextlib import closing

import pytest

from preference_store import Preferences
from sqlite_store import SQLitePreferenceStore


class TestSQLitePreferenceStore:
    """Test the SQLite backend primitives."""

    def test_get_default(self, sqlite_store):
        """Test the default is returned for a missing key."""
        assert sqlite_store.get_string("ns", "k") is None
        assert sqlite_store.get_string("ns", "k", "fallback") == "fallback"

    def test_put_and_get(self, sqlite_store):
        """Test storing and reading a value."""
        sqlite_store.put_string("ns", "k", "v")

        assert sqlite_store.get_string("ns", "k", "fallback") == "v"

    def test_remove(self, sqlite_store):
        """Test removing a value."""
        sqlite_store.put_string("ns", "k", "v")
        sqlite_store.remove("ns", "k")

        assert sqlite_store.get_string("ns", "k") is None

    def test_keys_sorted_per_namespace(self, sqlite_store):
        """Test listing keys of one namespace."""
        sqlite_store.put_string("ns", "b", "2")
        sqlite_store.put_string("ns", "a", "1")
        sqlite_store.put_string("other", "c", "3")

        assert sqlite_store.keys("ns") == ["a", "b"]
        assert sqlite_store.keys("empty") == []

    def test_namespaces(self, sqlite_store):
        """Test listing namespaces with entries."""
        sqlite_store.put_string("beta", "k", "v")
        sqlite_store.put_string("alpha", "k", "v")
        sqlite_store.put_string("gamma", "k", "v")
        sqlite_store.remove("gamma", "k")

        assert sqlite_store.namespaces() == ["alpha", "beta"]

    def test_init_is_idempotent(self, db_path, sqlite_store):
        """Test reopening keeps existing data."""
        sqlite_store.put_string("ns", "k", "v")
        sqlite_store.init_database()

        assert SQLitePreferenceStore(db_path).get_string("ns", "k") == "v"

    def test_unicode_values(self, sqlite_store):
        """Test non-ASCII keys and values."""
        sqlite_store.put_string("ns", "schlüssel", "wert ✓")

        assert sqlite_store.get_string("ns", "schlüssel") == "wert ✓"

    def test_errors_propagate(self, tmp_path):
        """Test an unusable database path raises instead of returning None."""
        with pytest.raises(sqlite3.Error):
            SQLitePreferenceStore(db_path=str(tmp_path / "missing" / "dir" / "db.sqlite"))


class TrackingConnection(sqlite3.Connection):
    closed = []

    def close(self):
        TrackingConnection.closed.append(self)
        super().close()


class TestConnectionCleanup:
    """Test connections are closed when a query fails."""

    @pytest.fixture
    def broken_store(self, sqlite_store, monkeypatch):
        """A store whose table was dropped, using tracked connections."""
        with closing(sqlite3.connect(sqlite_store.db_path)) as conn:
            conn.execute("DROP TABLE preferences")
            conn.commit()

        real_connect = sqlite3.connect
        TrackingConnection.closed = []
        monkeypatch.setattr(
            sqlite3, "connect", lambda path: real_connect(path, factory=TrackingConnection)
        )
        return sqlite_store

    @pytest.mark.parametrize(
        "call",
        [
            lambda store: store.get_string("ns", "k"),
            lambda store: store.put_string("ns", "k", "v"),
            lambda store: store.remove("ns", "k"),
            lambda store: store.keys("ns"),
            lambda store: store.namespaces(),
        ],
    )
    def test_closed_on_error(self, broken_store, call):
        """Test the connection is closed before the error propagates."""
        with pytest.raises(sqlite3.OperationalError):
            call(broken_store)

        assert len(TrackingConnection.closed) == 1


class TestPreferences:
    """Test the namespace handle."""

    def test_open_binds_namespace(self, sqlite_store):
        """Test a handle reads and writes its own namespace."""
        prefs = sqlite_store.open("ns")
        prefs.put_string("k", "v")

        assert isinstance(prefs, Preferences)
        assert prefs.namespace == "ns"
        assert sqlite_store.get_string("ns", "k") == "v"
        assert prefs.get_string("k") == "v"
        assert prefs.keys() == ["k"]

    def test_remove(self, sqlite_store):
        """Test removing through a handle."""
        prefs = sqlite_store.open("ns")
        prefs.put_string("k", "v")
        prefs.remove("k")

        assert prefs.get_string("k", "gone") == "gone"
