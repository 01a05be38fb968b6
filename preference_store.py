"""Abstract base class for namespaced preference stores"""
from abc import ABC, abstractmethod


class PreferenceStore(ABC):
    """Persistent string mapping partitioned into named namespaces.

    Implementations must apply each write atomically and must have it
    committed by the time put_string or remove returns.
    """

    @abstractmethod
    def init_database(self) -> None:
        """Initialize the underlying storage"""
        pass

    @abstractmethod
    def get_string(self, namespace: str, key: str, default: str | None = None) -> str | None:
        """Return the value for key in namespace, or default if absent"""
        pass

    @abstractmethod
    def put_string(self, namespace: str, key: str, value: str) -> None:
        """Store or overwrite the value for key in namespace"""
        pass

    @abstractmethod
    def remove(self, namespace: str, key: str) -> None:
        """Remove key from namespace if present"""
        pass

    @abstractmethod
    def keys(self, namespace: str) -> list[str]:
        """Return all keys stored in namespace, sorted"""
        pass

    @abstractmethod
    def namespaces(self) -> list[str]:
        """Return the names of all namespaces holding at least one entry"""
        pass

    def open(self, namespace: str) -> "Preferences":
        """Return a handle bound to namespace"""
        return Preferences(self, namespace)


class Preferences:
    """Handle on a single namespace of a PreferenceStore"""

    def __init__(self, store: PreferenceStore, namespace: str):
        self.store = store
        self.namespace = namespace

    def get_string(self, key: str, default: str | None = None) -> str | None:
        return self.store.get_string(self.namespace, key, default)

    def put_string(self, key: str, value: str) -> None:
        self.store.put_string(self.namespace, key, value)

    def remove(self, key: str) -> None:
        self.store.remove(self.namespace, key)

    def keys(self) -> list[str]:
        return self.store.keys(self.namespace)

    def __repr__(self) -> str:
        return f"Preferences(namespace={self.namespace!r}, store={type(self.store).__name__})"
