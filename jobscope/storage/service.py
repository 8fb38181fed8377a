import json
from typing import Any

from jobscope.logging.logger import Log
from jobscope.storage.base import BaseKeyValueStore
from jobscope.storage.exceptions import StorageError
from jobscope.vault.vault import SecureVault

STORAGE_KEY_API = "openaiApiKey"
STORAGE_KEY_RESULTS = "pandaJobAnalyzerResults"
STORAGE_KEY_RESUME = "pandaJobAnalyzerResume"


class StorageService:
    """Named records of the application.

    The API key and résumé go through the vault. Job analysis results are not
    sensitive and are cached unencrypted, keyed by listing URL.
    """

    def __init__(self, store: BaseKeyValueStore, vault: SecureVault) -> None:
        self._store = store
        self._vault = vault

    async def get_api_key(self) -> str | None:
        return await self._vault.get(STORAGE_KEY_API)

    async def save_api_key(self, api_key: str) -> None:
        await self._vault.save(STORAGE_KEY_API, api_key)

    async def delete_api_key(self) -> None:
        await self._vault.delete(STORAGE_KEY_API)

    async def get_resume_data(self) -> dict[str, Any] | None:
        raw = await self._vault.get(STORAGE_KEY_RESUME)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Stored resume data is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError("Stored resume data must be a JSON object")
        return data

    async def save_resume_data(self, resume_data: dict[str, Any]) -> None:
        await self._vault.save(STORAGE_KEY_RESUME, json.dumps(resume_data, ensure_ascii=False))

    async def delete_resume_data(self) -> None:
        await self._vault.delete(STORAGE_KEY_RESUME)

    async def get_results(self, url: str) -> dict[str, Any] | None:
        return (await self.get_all_results()).get(url)

    async def save_results(self, url: str, results: dict[str, Any]) -> None:
        saved = await self.get_all_results()
        saved[url] = results
        await self._store.set({STORAGE_KEY_RESULTS: saved})
        Log.debug(f"Cached analysis results for {url}")

    async def get_all_results(self) -> dict[str, dict[str, Any]]:
        values = await self._store.get([STORAGE_KEY_RESULTS])
        saved = values.get(STORAGE_KEY_RESULTS)
        return saved if isinstance(saved, dict) else {}

    async def clear_all_results(self) -> None:
        await self._store.remove([STORAGE_KEY_RESULTS])
