from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from jobscope.vault.exceptions import CryptoCorruptError

BLOB_FIELDS = ("ciphertext", "iv", "salt")


@dataclass(frozen=True)
class EncryptedBlob:
    """The only persisted form of a secret. All fields are base64 strings."""

    ciphertext: str
    iv: str
    salt: str

    def to_dict(self) -> dict[str, str]:
        return {"ciphertext": self.ciphertext, "iv": self.iv, "salt": self.salt}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "EncryptedBlob":
        values = [raw.get(name) for name in BLOB_FIELDS]
        if not all(isinstance(value, str) for value in values):
            raise CryptoCorruptError("Encrypted record fields must be strings")
        return cls(*values)


@dataclass(frozen=True)
class Corrupt:
    """Load outcome for a record that failed validation; the record is gone."""

    reason: str


def is_blob_shaped(value: object) -> bool:
    return isinstance(value, Mapping) and all(name in value for name in BLOB_FIELDS)
