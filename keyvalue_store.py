"""Abstract base class for key/value store managers"""
from abc import ABC, abstractmethod


class KeyValueStoreManager(ABC):
    """Abstract base class for string key/value store managers"""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None if it is absent"""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store or overwrite the value for key"""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key from the store. Does nothing if key is absent"""
        pass
