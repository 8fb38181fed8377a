class VaultError(Exception):
    """Base exception for vault errors."""


class CryptoCorruptError(VaultError):
    """Raised when a stored blob fails shape validation or authentication."""
