import asyncio
import json
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from jobscope.storage.base import BaseKeyValueStore
from jobscope.storage.exceptions import StorageError


class JsonFileKeyValueStore(BaseKeyValueStore):
    """Stores all records in one JSON document, rewritten atomically on change."""

    def __init__(self, path: Path) -> None:
        self._path = path

    async def get(self, keys: Sequence[str]) -> dict[str, Any]:
        data = await asyncio.to_thread(self._read)
        return {key: data[key] for key in keys if key in data}

    async def set(self, values: Mapping[str, Any]) -> None:
        await asyncio.to_thread(self._update, dict(values), [])

    async def remove(self, keys: Sequence[str]) -> None:
        await asyncio.to_thread(self._update, {}, list(keys))

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read storage file {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path} must hold a JSON object")
        return data

    def _update(self, values: dict[str, Any], removed: list[str]) -> None:
        data = self._read()
        data.update(values)
        for key in removed:
            data.pop(key, None)
        self._write(data)

    def _write(self, data: dict[str, Any]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Failed to write storage file {self._path}: {exc}") from exc
