"""RocksDB implementation of the preference store"""
import logging

import rocksdb

from preference_store import PreferenceStore

logger = logging.getLogger(__name__)

# Namespace and key are joined into one RocksDB key
SEPARATOR = b"\x00"


def _encode_key(namespace: str, key: str) -> bytes:
    return namespace.encode() + SEPARATOR + key.encode()


class RocksDBPreferenceStore(PreferenceStore):
    """RocksDB implementation of the preference store"""

    def __init__(self, db_path: str = "preferences_rocksdb"):
        """Initialize RocksDB database"""
        self.db_path = db_path
        self.db = None
        self.init_database()

    def init_database(self) -> None:
        """Initialize and open the RocksDB database"""
        try:
            opts = rocksdb.Options(create_if_missing=True)
            self.db = rocksdb.DB(self.db_path, opts)
            logger.info(f"RocksDB preference store initialized at {self.db_path}")
        except Exception as e:
            logger.error(f"Error initializing RocksDB: {e}")
            raise

    def get_string(self, namespace: str, key: str, default: str | None = None) -> str | None:
        """Retrieve a value from RocksDB"""
        result = self.db.get(_encode_key(namespace, key))
        if result is None:
            return default
        return result.decode()

    def put_string(self, namespace: str, key: str, value: str) -> None:
        """Store or update a value in RocksDB"""
        try:
            self.db.put(_encode_key(namespace, key), value.encode(), sync=True)
        except Exception as e:
            logger.error(f"Error storing {namespace}/{key}: {e}")
            raise

        logger.debug(f"Stored {namespace}/{key}")

    def remove(self, namespace: str, key: str) -> None:
        """Delete a value from RocksDB"""
        try:
            self.db.delete(_encode_key(namespace, key), sync=True)
        except Exception as e:
            logger.error(f"Error removing {namespace}/{key}: {e}")
            raise

        logger.debug(f"Removed {namespace}/{key}")

    def keys(self, namespace: str) -> list[str]:
        """List the keys of a namespace, in RocksDB byte order"""
        prefix = namespace.encode() + SEPARATOR
        it = self.db.iterkeys()
        it.seek(prefix)

        keys = []
        for raw in it:
            if not raw.startswith(prefix):
                break
            keys.append(raw[len(prefix):].decode())
        return keys

    def namespaces(self) -> list[str]:
        """List the namespaces that hold entries"""
        it = self.db.iterkeys()
        it.seek_to_first()

        names = set()
        for raw in it:
            names.add(raw.split(SEPARATOR, 1)[0].decode())
        return sorted(names)

    def __del__(self):
        """Close the database when the object is destroyed"""
        if self.db is not None:
            try:
                self.db.close()
            except Exception as e:
                logger.error(f"Error closing RocksDB: {e}")
