from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any


class BaseKeyValueStore(ABC):
    """Contract for the key-value persistence backends.

    Values are JSON-compatible. Sensitive records go through ``SecureVault``;
    everything else may be read and written directly.
    """

    async def open(self) -> None:
        """Acquire backend resources. No-op unless the backend needs it."""

    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def get(self, keys: Sequence[str]) -> dict[str, Any]:
        """Return the stored values for *keys*; missing keys are left out."""

    @abstractmethod
    async def set(self, values: Mapping[str, Any]) -> None:
        """Store every item of *values*, replacing existing records."""

    @abstractmethod
    async def remove(self, keys: Sequence[str]) -> None:
        """Delete *keys*; unknown keys are ignored."""
