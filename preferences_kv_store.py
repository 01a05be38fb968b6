"""Key/value store manager on top of a namespaced preference store"""
import logging

from keyvalue_store import KeyValueStoreManager
from preference_store import PreferenceStore

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "chip.platform.KeyValueStore"

ISSUER_KEYPAIR_KEY = "AndroidDeviceControllerKey"
ROOT_CERTIFICATE_KEY = "AndroidCARootCert1"
ICAC_KEY = "AndroidICAC1"


class PreferencesKeyValueStoreManager(KeyValueStoreManager):
    """Key/value store manager backed by one namespace of a preference store.

    Writes are forwarded synchronously: set and delete return once the
    backend has committed, so a following get from any thread sees them.
    """

    def __init__(self, store: PreferenceStore, namespace: str = DEFAULT_NAMESPACE):
        self.preferences = store.open(namespace)

    @property
    def namespace(self) -> str:
        return self.preferences.namespace

    def get(self, key: str) -> str | None:
        value = self.preferences.get_string(key, None)
        if value is None:
            logger.debug(f"Key '{key}' not found in {self.namespace}")
        logger.debug(f"Key '{key}' : {value}")
        return value

    def set(self, key: str, value: str) -> None:
        self.preferences.put_string(key, value)

    def delete(self, key: str) -> None:
        self.preferences.remove(key)

    def _exists(self, key: str) -> bool:
        return self.get(key) is not None

    def is_issue_key_exist(self) -> bool:
        """Whether the credential issuer keypair is stored"""
        return self._exists(ISSUER_KEYPAIR_KEY)

    def is_rcac_exist(self) -> bool:
        """Whether the root CA certificate is stored"""
        return self._exists(ROOT_CERTIFICATE_KEY)

    def is_icac_exist(self) -> bool:
        """Whether the intermediate CA certificate is stored"""
        return self._exists(ICAC_KEY)
