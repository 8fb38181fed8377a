"""Encrypted persistence for sensitive records (API key, parsed résumé).

Records are stored as ``{ciphertext, iv, salt}``. Anything else found under a
vault key is a legacy plaintext record: its plaintext is returned and re-saved
encrypted. A record that fails validation or authentication is deleted and
reported as ``Corrupt``; callers that only need the secret use ``get`` and
see ``None``.

There is no locking. Overlapping saves for the same key: last write wins.
"""

import json
from collections.abc import Mapping

from jobscope.logging.logger import Log
from jobscope.storage.base import BaseKeyValueStore
from jobscope.vault.cipher import DeviceCipher
from jobscope.vault.exceptions import CryptoCorruptError
from jobscope.vault.models import Corrupt, EncryptedBlob, is_blob_shaped

MAX_SECRET_LENGTH = 1_000_000


class SecureVault:
    def __init__(
        self,
        store: BaseKeyValueStore,
        cipher: DeviceCipher,
        *,
        max_secret_length: int = MAX_SECRET_LENGTH,
    ) -> None:
        self._store = store
        self._cipher = cipher
        self._max_secret_length = max_secret_length

    async def save(self, key: str, secret: str) -> EncryptedBlob:
        """Encrypt *secret* and replace the record stored under *key*."""
        if not isinstance(secret, str):
            raise TypeError("secret must be a string")
        if len(secret) > self._max_secret_length:
            raise ValueError(
                f"Secret exceeds maximum length of {self._max_secret_length} characters"
            )
        blob = await self._cipher.encrypt(secret)
        await self._store.set({key: blob.to_dict()})
        Log.info(f"Saved encrypted record '{key}'")
        return blob

    async def load(self, key: str) -> str | Corrupt | None:
        values = await self._store.get([key])
        stored = values.get(key)
        if stored is None or stored == "":
            return None

        if not is_blob_shaped(stored):
            return await self._migrate_legacy(key, stored)

        try:
            return await self._cipher.decrypt(EncryptedBlob.from_dict(stored))
        except CryptoCorruptError as exc:
            Log.error(f"Failed to decrypt record '{key}': {exc}")
            await self._store.remove([key])
            Log.warning(f"Corrupted record '{key}' cleared")
            return Corrupt(reason=str(exc))

    async def get(self, key: str) -> str | None:
        """Like ``load``, but a corrupt record reads as absent."""
        result = await self.load(key)
        if isinstance(result, Corrupt):
            return None
        return result

    async def delete(self, key: str) -> None:
        await self._store.remove([key])

    async def _migrate_legacy(self, key: str, stored: object) -> str:
        secret = _legacy_secret(stored)
        Log.warning(f"Found unencrypted record '{key}', migrating to encrypted storage")
        try:
            await self.save(key, secret)
        except ValueError as exc:
            Log.warning(f"Legacy record '{key}' left unencrypted: {exc}")
        return secret


def _legacy_secret(stored: object) -> str:
    """Plaintext of a legacy record.

    A mapping holding a single string, such as ``{"apiKey": "sk-..."}``,
    yields that string. Any other mapping is kept whole as JSON.
    """
    if isinstance(stored, str):
        return stored
    if isinstance(stored, Mapping) and len(stored) == 1:
        (value,) = stored.values()
        if isinstance(value, str):
            return value
    return json.dumps(stored, ensure_ascii=False)
