from jobscope.config.settings import Settings
from jobscope.storage.base import BaseKeyValueStore
from jobscope.vault.cipher import DeviceCipher
from jobscope.vault.fingerprint import device_fingerprint
from jobscope.vault.vault import SecureVault


class VaultFactory:
    """Creates a vault keyed to this device's fingerprint."""

    @classmethod
    def create(cls, settings: Settings, store: BaseKeyValueStore) -> SecureVault:
        password = device_fingerprint(settings.extension_id, settings.user_agent or None)
        cipher = DeviceCipher(password, iterations=settings.kdf_iterations)
        return SecureVault(
            store,
            cipher,
            max_secret_length=settings.vault_max_secret_length,
        )
