import copy
from collections.abc import Mapping, Sequence
from typing import Any

from jobscope.storage.base import BaseKeyValueStore


class InMemoryKeyValueStore(BaseKeyValueStore):
    """Process-local store. Values are copied in and out like a real backend."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(initial or {}))

    async def get(self, keys: Sequence[str]) -> dict[str, Any]:
        return {key: copy.deepcopy(self._data[key]) for key in keys if key in self._data}

    async def set(self, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            self._data[key] = copy.deepcopy(value)

    async def remove(self, keys: Sequence[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)
