"""SQLite implementation of the preference store"""
import logging
import sqlite3
from contextlib import closing

from preference_store import PreferenceStore

logger = logging.getLogger(__name__)


class SQLitePreferenceStore(PreferenceStore):
    """SQLite implementation of the preference store"""

    def __init__(self, db_path: str = "preferences.db"):
        """Initialize SQLite database"""
        self.db_path = db_path
        self.init_database()

    def init_database(self) -> None:
        """Create the preferences table if it doesn't exist"""
        try:
            with closing(sqlite3.connect(self.db_path)) as conn:
                cursor = conn.cursor()

                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS preferences (
                        namespace TEXT NOT NULL,
                        key TEXT NOT NULL,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                        PRIMARY KEY (namespace, key)
                    )
                """
                )

                # Enable write-ahead logging for better concurrency
                conn.execute("PRAGMA journal_mode=WAL")
                conn.commit()
            logger.info(f"SQLite preference store initialized at {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Error initializing SQLite at {self.db_path}: {e}")
            raise

    def get_string(self, namespace: str, key: str, default: str | None = None) -> str | None:
        """Retrieve a value from SQLite"""
        try:
            with closing(sqlite3.connect(self.db_path)) as conn:
                cursor = conn.cursor()

                cursor.execute(
                    """
                    SELECT value FROM preferences WHERE namespace = ? AND key = ?
                """,
                    (namespace, key),
                )

                result = cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Error retrieving {namespace}/{key}: {e}")
            raise

        if result is None:
            return default
        return result[0]

    def put_string(self, namespace: str, key: str, value: str) -> None:
        """Store or update a value in SQLite"""
        try:
            with closing(sqlite3.connect(self.db_path)) as conn:
                cursor = conn.cursor()

                # Use INSERT OR REPLACE to handle updates
                cursor.execute(
                    """
                    INSERT OR REPLACE INTO preferences (namespace, key, value, updated_at)
                    VALUES (?, ?, ?, CURRENT_TIMESTAMP)
                """,
                    (namespace, key, value),
                )

                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error storing {namespace}/{key}: {e}")
            raise

        logger.debug(f"Stored {namespace}/{key}")

    def remove(self, namespace: str, key: str) -> None:
        """Delete a value from SQLite"""
        try:
            with closing(sqlite3.connect(self.db_path)) as conn:
                conn.execute(
                    "DELETE FROM preferences WHERE namespace = ? AND key = ?",
                    (namespace, key),
                )
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error removing {namespace}/{key}: {e}")
            raise

        logger.debug(f"Removed {namespace}/{key}")

    def keys(self, namespace: str) -> list[str]:
        """List the keys of a namespace"""
        try:
            with closing(sqlite3.connect(self.db_path)) as conn:
                cursor = conn.cursor()
                cursor.execute(
                    "SELECT key FROM preferences WHERE namespace = ? ORDER BY key",
                    (namespace,),
                )
                results = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error listing keys of {namespace}: {e}")
            raise

        return [row[0] for row in results]

    def namespaces(self) -> list[str]:
        """List the namespaces that hold entries"""
        try:
            with closing(sqlite3.connect(self.db_path)) as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT DISTINCT namespace FROM preferences ORDER BY namespace")
                results = cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error listing namespaces: {e}")
            raise

        return [row[0] for row in results]
