from jobscope.vault.cipher import DeviceCipher
from jobscope.vault.exceptions import CryptoCorruptError
from jobscope.vault.fingerprint import device_fingerprint
from jobscope.vault.models import Corrupt, EncryptedBlob
from jobscope.vault.vault import SecureVault

__all__ = [
    "Corrupt",
    "CryptoCorruptError",
    "DeviceCipher",
    "EncryptedBlob",
    "SecureVault",
    "device_fingerprint",
]
