import asyncio
import base64
import binascii
import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from jobscope.vault.exceptions import CryptoCorruptError
from jobscope.vault.models import EncryptedBlob

IV_LENGTH = 12
SALT_LENGTH = 16
KEY_LENGTH = 32
KDF_ITERATIONS = 100_000


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _decode(value: str, field: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CryptoCorruptError(f"Field '{field}' is not valid base64") from exc


class DeviceCipher:
    """AES-256-GCM with a PBKDF2-SHA256 key derived from the device fingerprint.

    Every encryption uses a fresh salt and IV. The derived key is never
    stored and lives only for one call.
    """

    def __init__(self, device_password: str, *, iterations: int = KDF_ITERATIONS) -> None:
        if not device_password:
            raise ValueError("device_password must not be empty")
        self._password = device_password.encode("utf-8")
        self._iterations = iterations

    async def encrypt(self, plaintext: str) -> EncryptedBlob:
        return await asyncio.to_thread(self._encrypt, plaintext)

    async def decrypt(self, blob: EncryptedBlob) -> str:
        """Decrypt *blob*.

        Raises:
            CryptoCorruptError: on bad base64, wrong IV/salt length,
                authentication failure or non-UTF-8 plaintext.
        """
        return await asyncio.to_thread(self._decrypt, blob)

    def _derive_key(self, salt: bytes) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=KEY_LENGTH,
            salt=salt,
            iterations=self._iterations,
        )
        return kdf.derive(self._password)

    def _encrypt(self, plaintext: str) -> EncryptedBlob:
        salt = secrets.token_bytes(SALT_LENGTH)
        iv = secrets.token_bytes(IV_LENGTH)
        key = self._derive_key(salt)
        ciphertext = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
        return EncryptedBlob(
            ciphertext=_encode(ciphertext),
            iv=_encode(iv),
            salt=_encode(salt),
        )

    def _decrypt(self, blob: EncryptedBlob) -> str:
        ciphertext = _decode(blob.ciphertext, "ciphertext")
        iv = _decode(blob.iv, "iv")
        salt = _decode(blob.salt, "salt")
        if len(salt) != SALT_LENGTH or len(iv) != IV_LENGTH:
            raise CryptoCorruptError(
                f"Invalid salt ({len(salt)}) or IV ({len(iv)}) length"
            )

        key = self._derive_key(salt)
        try:
            plaintext = AESGCM(key).decrypt(iv, ciphertext, None)
        except InvalidTag as exc:
            raise CryptoCorruptError("Authentication failed") from exc

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CryptoCorruptError("Decrypted data is not valid UTF-8") from exc
